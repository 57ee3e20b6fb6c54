"""Decide how a discovery result or a single file gets served.

Dashboard: discover -> synthesize entry point -> run it.
Focus: resolve -> load -> {aggregator | specs | fallback} -> launch.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from .discovery.loader import (
    discover_tools_sync,
    ensure_importable,
    find_aggregator_in_module,
    find_tool_specs_in_module,
    load_module_from_path,
)
from .entry.synthesizer import EntryPointDescriptor, write_entry_point
from .errors import NoToolsFoundError, ToolFileNotFoundError
from .server import Launcher
from .ui import ToolConfig, UnspecdUI
from .util.fs import resolve_path

logger = logging.getLogger(__name__)

NO_TOOLS_MESSAGE = (
    "No tool files found. Make sure you have tools matching your patterns "
    "or an unspecd.config.yaml file with custom tool patterns."
)


class FocusOutcome(str, Enum):
    AGGREGATOR_FOUND = "aggregator"
    SPECS_FOUND = "specs"
    FALLBACK = "fallback"


@dataclass
class FocusPlan:
    path: Path
    outcome: FocusOutcome
    app: Optional[UnspecdUI] = None
    export_names: list[str] = field(default_factory=list)
    reason: str = ""
    error: Optional[BaseException] = None


def resolve_focus_file(file: str, cwd: Optional[Path] = None) -> Path:
    base = Path(cwd) if cwd is not None else Path.cwd()
    path = resolve_path(base, file)
    if not path.is_file():
        raise ToolFileNotFoundError(path)
    return path


def plan_focus(path: Path, title: Optional[str] = None) -> FocusPlan:
    """Inspect ``path`` and decide how to serve it. Never raises for user code errors."""
    ensure_importable(path.parent)
    try:
        module = load_module_from_path(path)
    except Exception as e:
        logger.debug("Could not import %s (%s: %s); running it directly", path, type(e).__name__, e)
        return FocusPlan(path=path, outcome=FocusOutcome.FALLBACK, reason=f"{type(e).__name__}: {e}", error=e)

    found = find_aggregator_in_module(module)
    if found is not None:
        name, app = found
        logger.info("Found UnspecdUI instance '%s' in %s", name, path.name)
        return FocusPlan(path=path, outcome=FocusOutcome.AGGREGATOR_FOUND, app=app, export_names=[name])

    specs = find_tool_specs_in_module(module)
    if specs:
        try:
            app = UnspecdUI(
                tools=[ToolConfig(spec=spec, file_path=str(path)) for _, spec in specs],
                focus_mode=True,
                title=title,
            )
        except Exception as e:
            logger.warning("Tool specs in %s are invalid (%s); running it directly", path.name, e)
            return FocusPlan(path=path, outcome=FocusOutcome.FALLBACK, reason=str(e), error=e)
        names = [n for n, _ in specs]
        logger.info("Found %d tool spec(s) in %s: %s", len(names), path.name, ", ".join(names))
        return FocusPlan(path=path, outcome=FocusOutcome.SPECS_FOUND, app=app, export_names=names)

    return FocusPlan(path=path, outcome=FocusOutcome.FALLBACK, reason="no UnspecdUI instance or tool spec exported")


def launch_focus(plan: FocusPlan, launcher: Launcher) -> None:
    if plan.outcome is FocusOutcome.FALLBACK:
        launcher.run_entry_point(plan.path)
        return
    app: Any = plan.app
    if plan.outcome is FocusOutcome.SPECS_FOUND:
        app.init()
    launcher.serve_app(app, target_file=str(plan.path))


def run_focus(file: str, launcher: Launcher, *, title: Optional[str] = None, cwd: Optional[Path] = None) -> FocusPlan:
    path = resolve_focus_file(file, cwd)
    logger.info("Executing: %s", path)
    plan = plan_focus(path, title=title)
    launch_focus(plan, launcher)
    return plan


def prepare_dashboard(cwd: Path, title: Optional[str] = None) -> EntryPointDescriptor:
    """Discover tools under ``cwd`` and write the entry point for them."""
    cwd = Path(cwd).resolve()
    tools = discover_tools_sync(cwd)
    if not tools:
        raise NoToolsFoundError(NO_TOOLS_MESSAGE)
    return write_entry_point(tools, cwd, title=title)


def run_dashboard(cwd: Path, launcher: Launcher, *, title: Optional[str] = None) -> EntryPointDescriptor:
    entry = prepare_dashboard(cwd, title=title)
    launcher.run_entry_point(entry.path)
    return entry
