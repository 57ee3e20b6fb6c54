import platform
from datetime import datetime, timezone


def load_status(params=None):
    return {
        "python": platform.python_version(),
        "platform": platform.platform(),
        "checkedAt": datetime.now(timezone.utc).isoformat(),
    }


tool = {
    "id": "system-status",
    "title": "System Status",
    "content": {
        "type": "displayRecord",
        "dataLoader": {"functionName": "loadStatus"},
        "displayConfig": {
            "fields": [
                {"field": "python", "label": "Python"},
                {"field": "platform", "label": "Platform"},
                {"field": "checkedAt", "label": "Checked At", "formatter": "datetime"},
            ]
        },
    },
    "functions": {"loadStatus": load_status},
}
