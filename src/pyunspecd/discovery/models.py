from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from ..tools.spec import get_field


class ExportKind(str, Enum):
    """What a module-level value looks like to the router and loader."""

    AGGREGATOR = "aggregator"
    TOOL_SPEC = "tool_spec"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class DiscoveredTool:
    spec: Any
    file_path: Path

    @property
    def id(self) -> str:
        return get_field(self.spec, "id")

    @property
    def title(self) -> str:
        return get_field(self.spec, "title")
