"""Generate the dashboard entry module from a discovery result."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from ..discovery.models import DiscoveredTool
from ..util.fs import relative_to_dir, write_text

logger = logging.getLogger(__name__)

BUILD_DIR_NAME = ".unspecd"
ENTRY_FILE_NAME = "entry.py"


@dataclass(frozen=True)
class EntryPointDescriptor:
    path: Path
    source: str


_HEADER = '''\
# Generated by pyunspecd. Rewritten on every `pyunspecd dev`; do not edit.
from __future__ import annotations

import logging
from pathlib import Path

from pyunspecd.discovery.loader import ensure_importable, find_tool_spec_in_module, load_module_from_path
from pyunspecd.errors import ToolValidationError
from pyunspecd.tools.spec import ToolSpec
from pyunspecd.ui import ToolConfig, UnspecdUI

logger = logging.getLogger("pyunspecd.entry")

_HERE = Path(__file__).resolve().parent
ensure_importable(_HERE.parent)

TOOL_FILES = [
'''

_BODY = '''\
]

tools = []
seen_ids = set()
for rel in TOOL_FILES:
    path = (_HERE / rel).resolve()
    try:
        module = load_module_from_path(path)
    except Exception as e:
        logger.warning("Failed to load tool from %s: %s: %s", path, type(e).__name__, e)
        continue
    spec = find_tool_spec_in_module(module)
    if spec is None:
        logger.warning("File %s does not export a valid tool spec", path)
        continue
    try:
        spec = ToolSpec.from_obj(spec)
    except ToolValidationError as e:
        logger.warning("Skipping invalid tool in %s: %s", path, e)
        continue
    if spec.id in seen_ids:
        logger.warning("Skipping %s: tool id '%s' is already registered", path, spec.id)
        continue
    seen_ids.add(spec.id)
    tools.append(ToolConfig(spec=spec, file_path=str(path)))

app = UnspecdUI(tools=tools, title={title})
app.init()
'''


def generate_entry_point_source(tools: Sequence[DiscoveredTool], entry_dir: Path, title: Optional[str] = None) -> str:
    """Return the entry module text; identical input yields identical text."""
    lines = [_HEADER]
    for t in tools:
        lines.append(f"    {relative_to_dir(t.file_path, entry_dir)!r},\n")
    lines.append(_BODY.replace("{title}", repr(title)))
    return "".join(lines)


def write_entry_point(
    tools: Sequence[DiscoveredTool],
    cwd: Path,
    title: Optional[str] = None,
    build_dir: Optional[Path] = None,
) -> EntryPointDescriptor:
    cwd = Path(cwd).resolve()
    build = Path(build_dir) if build_dir is not None else cwd / BUILD_DIR_NAME
    path = build / ENTRY_FILE_NAME
    source = generate_entry_point_source(tools, build, title)
    write_text(path, source)
    logger.info("Generated entry point for %d tools: %s", len(tools), path)
    return EntryPointDescriptor(path=path, source=source)
