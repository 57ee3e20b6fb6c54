from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

from ..errors import ToolValidationError
from .spec import ToolSpec


@dataclass(frozen=True)
class NormalizedTool:
    id: str
    title: str
    spec: ToolSpec
    file_path: Optional[str] = None


@dataclass
class ToolRegistry:
    _tools: Dict[str, NormalizedTool] = None  # type: ignore

    def __post_init__(self):
        if self._tools is None:
            self._tools = {}

    def register(self, tool: NormalizedTool) -> None:
        if tool.id in self._tools:
            raise ToolValidationError(f"Tool already registered: {tool.id}")
        self._tools[tool.id] = tool

    def get_optional(self, tool_id: str) -> Optional[NormalizedTool]:
        """Return a tool if registered, otherwise None.

        The execute-function endpoint uses this so an unknown id from the
        client becomes a 404 rather than an exception.
        """
        return self._tools.get(tool_id)

    def list_tools(self) -> list[NormalizedTool]:
        # dicts keep registration order
        return list(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)
