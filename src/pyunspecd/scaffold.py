from __future__ import annotations

import logging
from pathlib import Path

from .config.loader import config_candidate_paths, find_config_file
from .errors import ProjectExistsError
from .util.fs import write_text

logger = logging.getLogger(__name__)

CONFIG_TEMPLATE = """\
# pyunspecd configuration
#
# Glob patterns (relative to this file) for tool discovery. Leave the list
# empty or delete it to use the defaults: tools/**/*.tool.py and *.tool.py
tools:
  - "tools/**/*.tool.py"
"""

WELCOME_TOOL_TEMPLATE = '''\
"""Welcome tool: a displayRecord example to start from."""


def get_welcome_data(params=None):
    return {
        "message": "Congratulations! Your unspecd project is ready.",
        "description": (
            "unspecd builds admin tools and dashboards from declarative tool specs. "
            "Describe the data sources and the UI; the framework renders it."
        ),
        "nextSteps": "Edit this file or add more *.tool.py files under tools/.",
        "documentation": "Other content types: editableTable, actionButton, editForm.",
    }


tool = {
    "id": "welcome",
    "title": "Welcome to unspecd",
    "content": {
        "type": "displayRecord",
        "dataLoader": {"functionName": "getWelcomeData"},
        "displayConfig": {
            "fields": [
                {"field": "message", "label": "Welcome Message"},
                {"field": "description", "label": "What is unspecd?"},
                {"field": "nextSteps", "label": "Next Steps"},
                {"field": "documentation", "label": "Learn More"},
            ]
        },
    },
    "functions": {"getWelcomeData": get_welcome_data},
}
'''

GITIGNORE_LINES = [
    "# pyunspecd build output",
    ".unspecd/",
    "",
    "__pycache__/",
    "*.py[cod]",
    ".venv/",
    "venv/",
    ".env*",
    "!.env.example",
    "*.log",
]


def _write_gitignore(path: Path) -> bool:
    if not path.exists():
        write_text(path, "\n".join(GITIGNORE_LINES) + "\n")
        return True
    existing = path.read_text(encoding="utf-8")
    if ".unspecd/" in existing.splitlines():
        return False
    sep = "" if existing.endswith("\n") or not existing else "\n"
    write_text(path, existing + sep + ".unspecd/\n")
    return True


def init_project(cwd: Path) -> list[Path]:
    """Create a starter project in ``cwd``. Returns the files written."""
    cwd = Path(cwd).resolve()
    existing = find_config_file(cwd)
    if existing is not None:
        raise ProjectExistsError(f"{existing.name} already exists in {cwd}. Initialization cancelled.")

    written: list[Path] = []
    config_path = config_candidate_paths(cwd)[0]
    written.append(write_text(config_path, CONFIG_TEMPLATE))

    welcome = cwd / "tools" / "welcome.tool.py"
    if welcome.exists():
        logger.info("Keeping existing %s", welcome)
    else:
        written.append(write_text(welcome, WELCOME_TOOL_TEMPLATE))

    gitignore = cwd / ".gitignore"
    if _write_gitignore(gitignore):
        written.append(gitignore)

    for p in written:
        logger.debug("Wrote %s", p)
    return written
