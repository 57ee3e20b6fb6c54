from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from .errors import ToolValidationError
from .tools.registry import NormalizedTool, ToolRegistry
from .tools.spec import ToolSpec

logger = logging.getLogger(__name__)

_active_app: Optional["UnspecdUI"] = None


@dataclass
class ToolConfig:
    """A spec plus presentation overrides.

    ``description`` replaces the spec title in navigation; ``file_path`` is
    the source file, shown by the UI's copy-command button.
    """

    spec: Any
    description: Optional[str] = None
    file_path: Optional[str] = None


class UnspecdUI:
    """Holds a validated collection of tools and drives the server layer.

    Usage::

        app = UnspecdUI(tools=[user_tool, ToolConfig(spec=report_tool, description="Reports")])
        start_server(app, port=8080)
    """

    def __init__(
        self,
        tools: Sequence[Any] = (),
        *,
        focus_mode: bool = False,
        title: Optional[str] = None,
        port: Optional[int] = None,
    ) -> None:
        if isinstance(tools, (str, bytes)) or not isinstance(tools, Sequence):
            raise ToolValidationError("tools must be a list of tool specs or ToolConfig objects")
        self._registry = ToolRegistry()
        for index, tool in enumerate(tools):
            self._registry.register(self._normalize(tool, index))
        self._focus_mode = bool(focus_mode)
        self._title = title
        self._port = port

        suffix = " (focus mode)" if self._focus_mode else ""
        label = f' "{title}"' if title else ""
        logger.debug("UnspecdUI%s created with %d tools%s", label, len(self._registry), suffix)

    @staticmethod
    def _normalize(tool: Any, index: int) -> NormalizedTool:
        try:
            if isinstance(tool, ToolConfig):
                spec = ToolSpec.from_obj(tool.spec)
                return NormalizedTool(
                    id=spec.id,
                    title=tool.description or spec.title,
                    spec=spec,
                    file_path=tool.file_path,
                )
            spec = ToolSpec.from_obj(tool)
            return NormalizedTool(id=spec.id, title=spec.title, spec=spec)
        except ToolValidationError as e:
            raise ToolValidationError(f"Invalid tool configuration at index {index}: {e}") from e

    def init(self) -> "UnspecdUI":
        """Register this instance as the process's active app."""
        global _active_app
        _active_app = self
        logger.info("Initializing UnspecdUI with %d tools", self.tool_count)
        for i, t in enumerate(self.tools, start=1):
            logger.info("  %d. %s (%s)", i, t.title, t.id)
        return self

    @property
    def tools(self) -> list[NormalizedTool]:
        return self._registry.list_tools()

    @property
    def tool_count(self) -> int:
        return len(self._registry)

    @property
    def tool_summary(self) -> list[dict[str, str]]:
        return [{"id": t.id, "title": t.title} for t in self.tools]

    @property
    def focus_mode(self) -> bool:
        return self._focus_mode

    @property
    def title(self) -> Optional[str]:
        return self._title

    @property
    def port(self) -> Optional[int]:
        return self._port

    def get_tool(self, tool_id: str) -> Optional[NormalizedTool]:
        return self._registry.get_optional(tool_id)


def current_app() -> Optional[UnspecdUI]:
    return _active_app


def reset_active_app() -> None:
    global _active_app
    _active_app = None
