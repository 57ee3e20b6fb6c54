from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .models import DiscoveryConfig

logger = logging.getLogger(__name__)

DEFAULT_TOOL_PATTERNS: tuple[str, ...] = ("tools/**/*.tool.py", "*.tool.py")


def config_candidate_paths(cwd: Path) -> list[Path]:
    # first existing file wins
    return [
        cwd / "unspecd.config.yaml",
        cwd / "unspecd.config.yml",
        cwd / "unspecd.config.json",
    ]


def find_config_file(cwd: Path) -> Path | None:
    for p in config_candidate_paths(cwd):
        if p.exists() and p.is_file():
            return p
    return None


def _load_yaml(p: Path) -> Any:
    # JSON is a subset of YAML, so one parser covers all candidates
    return yaml.safe_load(p.read_text(encoding="utf-8"))


def load_discovery_config(cwd: Path) -> DiscoveryConfig | None:
    """Load the discovery config from ``cwd``.

    Returns None when there is no config file, when it cannot be read or
    parsed, or when it has no usable ``tools`` list. None of these abort
    discovery; the caller falls back to the default patterns.
    """
    p = find_config_file(cwd)
    if p is None:
        return None

    logger.info("Loading configuration from %s", p)
    try:
        obj = _load_yaml(p)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config from %s: %s", p, e)
        return None

    cfg = DiscoveryConfig.from_obj(obj, loaded_from=p)
    if cfg is None:
        logger.warning("Config file %s found but no tool patterns defined (expected: tools list of strings)", p)
        return None

    logger.info("Found %d tool pattern(s) in config", len(cfg.tools))
    return cfg


def resolve_tool_patterns(config: DiscoveryConfig | None) -> list[str]:
    if config is not None and config.tools:
        return list(config.tools)
    return list(DEFAULT_TOOL_PATTERNS)
