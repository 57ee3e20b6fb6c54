"""Smoke-test discovery, entry synthesis and function invocation without a server."""
from __future__ import annotations

import asyncio
import tempfile
import textwrap
from pathlib import Path

from pyunspecd.data_handler import invoke_data_source
from pyunspecd.discovery.loader import discover_tools_sync
from pyunspecd.entry.synthesizer import write_entry_point
from pyunspecd.logging_config import setup_logging
from pyunspecd.scaffold import init_project
from pyunspecd.ui import UnspecdUI


def main():
    setup_logging()
    with tempfile.TemporaryDirectory() as td:
        cwd = Path(td)

        # init
        for p in init_project(cwd):
            print("WROTE:", p.relative_to(cwd))

        # a broken tool next to the welcome tool
        (cwd / "tools" / "broken.tool.py").write_text(
            textwrap.dedent("""\
            tool = undefined_name
            """),
            encoding="utf-8",
        )

        # discover
        found = discover_tools_sync(cwd)
        print("FOUND:", [(t.id, t.file_path.name) for t in found])

        # synthesize
        entry = write_entry_point(found, cwd, title="Selftest")
        print("ENTRY:", entry.path)

        # invoke
        ui = UnspecdUI(tools=[t.spec for t in found])
        tool = ui.get_tool("welcome")
        result = asyncio.run(invoke_data_source(tool.spec.functions, "getWelcomeData", {}))
        print("INVOKE:", result.state.value, result.value["message"])

        missing = asyncio.run(invoke_data_source(tool.spec.functions, "nope", {}))
        print("MISSING:", missing.state.value, missing.error)


if __name__ == "__main__":
    main()
