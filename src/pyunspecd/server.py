"""HTTP surface for a tool collection, plus the process launcher.

Routes:

- ``GET  /api/tools``             tool metadata for the browser client
- ``POST /api/execute-function``  run one tool function through the data handler
"""
from __future__ import annotations

import logging
import runpy
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

import uvicorn
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .data_handler import invoke_data_source
from .ui import UnspecdUI, current_app, reset_active_app

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_HOST = "127.0.0.1"

_last_served: Optional[UnspecdUI] = None


class ExecuteFunctionRequest(BaseModel):
    toolId: str
    functionName: str
    params: Any = None


def _tool_payload(ui: UnspecdUI, target_file: Optional[str]) -> Dict[str, Any]:
    tools = []
    for t in ui.tools:
        tools.append(
            {
                "id": t.id,
                "title": t.title,
                "inputs": jsonable_encoder(dict(t.spec.inputs)),
                "content": jsonable_encoder(t.spec.content.to_dict()),
                "functionNames": t.spec.function_names(),
                "filePath": t.file_path or target_file,
            }
        )
    payload: Dict[str, Any] = {
        "tools": tools,
        "toolCount": ui.tool_count,
        "focusMode": ui.focus_mode,
    }
    if ui.title:
        payload["title"] = ui.title
    return payload


def create_api(ui: UnspecdUI, target_file: Optional[str] = None) -> FastAPI:
    api = FastAPI(title=ui.title or "unspecd")

    @api.get("/api/tools")
    async def list_tools() -> Dict[str, Any]:
        return _tool_payload(ui, target_file)

    @api.post("/api/execute-function")
    async def execute_function(req: ExecuteFunctionRequest):
        tool = ui.get_tool(req.toolId)
        if tool is None:
            return JSONResponse(status_code=404, content={"error": f"Tool not found: {req.toolId}"})

        logger.debug("Executing %s.%s", req.toolId, req.functionName)
        result = await invoke_data_source(tool.spec.functions, req.functionName, req.params)
        if not result.ok:
            logger.warning("Function %s.%s failed: %s", req.toolId, req.functionName, result.error)
            return JSONResponse(status_code=500, content={"error": str(result.error)})
        return JSONResponse(content=jsonable_encoder(result.value))

    return api


def start_server(
    ui: UnspecdUI,
    port: Optional[int] = None,
    host: str = DEFAULT_HOST,
    target_file: Optional[str] = None,
) -> None:
    """Serve ``ui`` until interrupted. Port falls back to ``ui.port`` then 3000."""
    global _last_served
    port = port or ui.port or DEFAULT_PORT
    _last_served = ui
    api = create_api(ui, target_file=target_file)
    mode = "focus" if ui.focus_mode else "dashboard"
    logger.info("Serving %d tools (%s mode) at http://%s:%d", ui.tool_count, mode, host, port)
    uvicorn.run(api, host=host, port=port, log_level="info", access_log=False)


def last_served_app() -> Optional[UnspecdUI]:
    return _last_served


def run_entry_point(path: Path, port: Optional[int] = None, host: str = DEFAULT_HOST) -> None:
    """Execute ``path`` as ``__main__``, then serve the app it initialized.

    Nothing more is served when the script started a server itself or never
    called ``UnspecdUI.init()``.
    """
    global _last_served
    path = Path(path).resolve()
    _last_served = None
    reset_active_app()
    logger.info("Running entry point: %s", path)
    runpy.run_path(str(path), run_name="__main__")

    if _last_served is not None:
        return
    app = current_app()
    if app is None:
        logger.warning("%s did not initialize an UnspecdUI; nothing to serve", path)
        return
    start_server(app, port=port, host=host, target_file=str(path))


class Launcher(Protocol):
    def serve_app(self, ui: UnspecdUI, *, target_file: Optional[str] = None) -> None: ...

    def run_entry_point(self, path: Path) -> None: ...


class DevServerLauncher:
    """Launcher bound to one host/port pair."""

    def __init__(self, port: Optional[int] = None, host: str = DEFAULT_HOST) -> None:
        self.port = port
        self.host = host

    def serve_app(self, ui: UnspecdUI, *, target_file: Optional[str] = None) -> None:
        start_server(ui, port=self.port, host=self.host, target_file=target_file)

    def run_entry_point(self, path: Path) -> None:
        run_entry_point(path, port=self.port, host=self.host)
