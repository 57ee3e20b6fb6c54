SETTINGS = {"siteName": "Demo", "maintenance": False}


def load_settings(params=None):
    return dict(SETTINGS)


def save_settings(params):
    SETTINGS.update(params["formData"])
    return dict(SETTINGS)


tool = {
    "id": "settings",
    "title": "Settings",
    "content": {
        "type": "editForm",
        "dataLoader": {"functionName": "loadSettings"},
        "onSubmit": {"functionName": "saveSettings"},
        "formConfig": {
            "fields": [
                {"field": "siteName", "label": "Site name", "editorType": "text", "required": True},
                {"field": "maintenance", "label": "Maintenance mode", "editorType": "checkbox"},
            ]
        },
    },
    "functions": {"loadSettings": load_settings, "saveSettings": save_settings},
}
