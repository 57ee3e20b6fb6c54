from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class DiscoveryConfig:
    """Discovery settings loaded from ``unspecd.config.yaml``.

    ``tools`` is an ordered list of glob patterns, relative to the directory
    the config lives in unless absolute.
    """

    tools: list[str] = field(default_factory=list)
    loaded_from: Path | None = None

    @staticmethod
    def from_obj(obj: Any, loaded_from: Path | None = None) -> "DiscoveryConfig | None":
        if not isinstance(obj, dict):
            return None
        tools = obj.get("tools")
        if not isinstance(tools, (list, tuple)):
            return None
        if not all(isinstance(t, str) for t in tools):
            return None
        return DiscoveryConfig(tools=list(tools), loaded_from=loaded_from)
