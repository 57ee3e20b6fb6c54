from __future__ import annotations

import sys
import textwrap
from pathlib import Path

import pytest

from pyunspecd.discovery.loader import MODULE_PREFIX
from pyunspecd.ui import reset_active_app

RECORD_TOOL = '''\
def load(params=None):
    return {{"id": {tool_id!r}}}


{var} = {{
    "id": {tool_id!r},
    "title": {title!r},
    "content": {{
        "type": "displayRecord",
        "dataLoader": {{"functionName": "load"}},
        "displayConfig": {{"fields": [{{"field": "id", "label": "ID"}}]}},
    }},
    "functions": {{"load": load}},
}}
'''


@pytest.fixture(autouse=True)
def _isolate_imports(monkeypatch):
    """Tool loading touches sys.path, sys.modules and the active app; undo all three."""
    monkeypatch.setattr(sys, "path", list(sys.path))
    yield
    reset_active_app()
    for name in [n for n in sys.modules if n.startswith(MODULE_PREFIX)]:
        sys.modules.pop(name, None)


@pytest.fixture
def write_file(tmp_path):
    def _write(rel: str, source: str) -> Path:
        p = tmp_path / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(textwrap.dedent(source), encoding="utf-8")
        return p

    return _write


@pytest.fixture
def make_tool(write_file):
    """Write a working displayRecord tool file and return its path."""

    def _make(rel: str, tool_id: str, title: str | None = None, var: str = "tool") -> Path:
        return write_file(rel, RECORD_TOOL.format(tool_id=tool_id, title=title or tool_id.title(), var=var))

    return _make
