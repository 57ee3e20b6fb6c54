"""Library mode: build the UI in code and serve it.

    python app.py               # serves on :8080
    pyunspecd exec app.py       # same instance, picked up by the router
"""
from pyunspecd.server import start_server
from pyunspecd.ui import ToolConfig, UnspecdUI


def ping(params=None):
    return {"pong": True}


app = UnspecdUI(
    tools=[
        ToolConfig(
            spec={
                "id": "ping",
                "title": "Ping",
                "content": {
                    "type": "actionButton",
                    "action": {"functionName": "ping"},
                    "buttonConfig": {"label": "Ping"},
                },
                "functions": {"ping": ping},
            },
            description="Ping the server",
        )
    ],
    title="Library mode demo",
    port=8080,
)

if __name__ == "__main__":
    start_server(app)
