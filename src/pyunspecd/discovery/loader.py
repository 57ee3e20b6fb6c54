"""Load tool files as isolated modules and pull tool specs out of them.

A tool file is an ordinary Python module. Its *default export* is the
module-level name ``tool``; every other public global (or the names in
``__all__``) is a *named export*.
"""
from __future__ import annotations

import asyncio
import hashlib
import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Iterator, Mapping

from ..config.loader import load_discovery_config, resolve_tool_patterns
from ..tools.spec import get_field
from .models import DiscoveredTool, ExportKind
from .scanner import scan_tool_files

logger = logging.getLogger(__name__)

DEFAULT_EXPORT = "tool"
MODULE_PREFIX = "_unspecd_tool_"


def module_name_for(path: Path) -> str:
    digest = hashlib.sha1(str(path).encode("utf-8")).hexdigest()[:12]
    stem = path.name.split(".", 1)[0].replace("-", "_")
    return f"{MODULE_PREFIX}{stem}_{digest}"


def load_module_from_path(path: Path) -> ModuleType:
    """Execute ``path`` as a fresh module and return it.

    Whatever the module raises at top level propagates to the caller.
    """
    path = Path(path).resolve()
    name = module_name_for(path)
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot create a module spec for {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(name, None)
        raise
    return module


def ensure_importable(directory: Path) -> None:
    d = str(directory)
    if d not in sys.path:
        sys.path.insert(0, d)


def iter_exports(module: ModuleType) -> Iterator[tuple[str, Any]]:
    """Yield (name, value) pairs: the default export first, then named exports in declaration order."""
    ns = vars(module)
    if DEFAULT_EXPORT in ns:
        yield DEFAULT_EXPORT, ns[DEFAULT_EXPORT]

    names = ns.get("__all__")
    if isinstance(names, (list, tuple)):
        ordered = [n for n in names if isinstance(n, str)]
    else:
        ordered = [n for n in ns if not n.startswith("_")]
    for n in ordered:
        if n == DEFAULT_EXPORT or n not in ns:
            continue
        yield n, ns[n]


def _non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and bool(v.strip())


def classify_export(value: Any) -> ExportKind:
    if value is None or isinstance(value, (ModuleType, type, str, bytes)):
        return ExportKind.UNRECOGNIZED
    if inspect.isroutine(value):
        return ExportKind.UNRECOGNIZED
    if not isinstance(value, Mapping) and isinstance(getattr(value, "tools", None), (list, tuple)):
        return ExportKind.AGGREGATOR
    if _non_empty_str(get_field(value, "id")) and _non_empty_str(get_field(value, "title")):
        return ExportKind.TOOL_SPEC
    return ExportKind.UNRECOGNIZED


def find_tool_spec_in_module(module: ModuleType) -> Any | None:
    for _, value in iter_exports(module):
        if classify_export(value) is ExportKind.TOOL_SPEC:
            return value
    return None


def find_aggregator_in_module(module: ModuleType) -> tuple[str, Any] | None:
    for name, value in iter_exports(module):
        if classify_export(value) is ExportKind.AGGREGATOR:
            return name, value
    return None


def find_tool_specs_in_module(module: ModuleType) -> list[tuple[str, Any]]:
    """All exports shaped like a tool spec, each object once."""
    seen: set[int] = set()
    out: list[tuple[str, Any]] = []
    for name, value in iter_exports(module):
        if classify_export(value) is not ExportKind.TOOL_SPEC or id(value) in seen:
            continue
        seen.add(id(value))
        out.append((name, value))
    return out


def load_tool_spec_from_file(path: Path) -> DiscoveredTool | None:
    logger.debug("Importing: %s", path)
    try:
        module = load_module_from_path(path)
    except Exception as e:
        logger.warning("Error importing tool from %s: %s: %s", path, type(e).__name__, e)
        return None

    spec = find_tool_spec_in_module(module)
    if spec is None:
        logger.warning("File %s does not export a valid tool spec", path)
        return None

    logger.info("Loaded: %s (%s)", get_field(spec, "title"), get_field(spec, "id"))
    return DiscoveredTool(spec=spec, file_path=path)


async def import_tool_spec_from_file(path: Path) -> DiscoveredTool | None:
    return await asyncio.to_thread(load_tool_spec_from_file, path)


async def discover_tools(cwd: Path, patterns: list[str] | None = None) -> list[DiscoveredTool]:
    """Run one full discovery pass over ``cwd``.

    1. load ``unspecd.config.yaml`` (if any) and pick the patterns
    2. scan the filesystem for candidate files
    3. load every candidate concurrently; bad files are logged and dropped

    The returned list follows the scanner's order, not completion order.
    """
    cwd = Path(cwd).resolve()
    logger.info("Starting tool discovery in: %s", cwd)

    if patterns is None:
        patterns = resolve_tool_patterns(load_discovery_config(cwd))
    logger.info("Using patterns: %s", ", ".join(patterns))

    candidates = scan_tool_files(cwd, patterns)
    if not candidates:
        logger.info("No tool files found. Add files matching your patterns or set tools in unspecd.config.yaml")
        return []

    ensure_importable(cwd)
    results = await asyncio.gather(*(import_tool_spec_from_file(p) for p in candidates))
    discovered = [r for r in results if r is not None]
    logger.info("Successfully discovered %d tools", len(discovered))
    return discovered


def discover_tools_sync(cwd: Path, patterns: list[str] | None = None) -> list[DiscoveredTool]:
    return asyncio.run(discover_tools(cwd, patterns))
