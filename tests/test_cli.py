"""Tests for the typer CLI."""
from __future__ import annotations

import pytest
from typer.testing import CliRunner

from pyunspecd import main
from pyunspecd.main import app

runner = CliRunner()


class RecordingLauncher:
    instances = []

    def __init__(self, port=None, host="127.0.0.1"):
        self.port = port
        self.host = host
        self.served = []
        self.entries = []
        RecordingLauncher.instances.append(self)

    def serve_app(self, ui, *, target_file=None):
        self.served.append(ui)

    def run_entry_point(self, path):
        self.entries.append(path)


@pytest.fixture
def launcher(monkeypatch):
    RecordingLauncher.instances = []
    monkeypatch.setattr(main, "DevServerLauncher", RecordingLauncher)
    return RecordingLauncher


class TestCLI:
    """Command wiring and exit codes."""

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for cmd in ("init", "dev", "exec", "tools"):
            assert cmd in result.output

    def test_init_then_refuse(self, tmp_path):
        first = runner.invoke(app, ["init", "--cwd", str(tmp_path)])
        assert first.exit_code == 0
        assert (tmp_path / "tools" / "welcome.tool.py").is_file()

        second = runner.invoke(app, ["init", "--cwd", str(tmp_path)])
        assert second.exit_code == 1
        assert "already exists" in second.output

    def test_tools_lists_discovered(self, tmp_path, make_tool):
        make_tool("tools/a.tool.py", "alpha")
        result = runner.invoke(app, ["tools", "--cwd", str(tmp_path)])
        assert result.exit_code == 0
        assert "alpha" in result.output

    def test_tools_none_found(self, tmp_path):
        result = runner.invoke(app, ["tools", "--cwd", str(tmp_path)])
        assert result.exit_code == 1
        assert "No tools found" in result.output

    def test_dev_without_tools(self, tmp_path, launcher):
        result = runner.invoke(app, ["dev", "--cwd", str(tmp_path)])
        assert result.exit_code == 1
        assert "No tool files found" in result.output
        assert launcher.instances[0].entries == []

    def test_dev_runs_entry_point(self, tmp_path, make_tool, launcher):
        make_tool("tools/a.tool.py", "a")
        result = runner.invoke(app, ["-v", "dev", "--cwd", str(tmp_path), "--port", "4100", "--title", "Ops"])
        assert result.exit_code == 0, result.output
        (inst,) = launcher.instances
        assert inst.port == 4100
        assert inst.entries == [tmp_path.resolve() / ".unspecd" / "entry.py"]

    def test_exec_missing_file(self, tmp_path, launcher):
        result = runner.invoke(app, ["exec", str(tmp_path / "missing.tool.py")])
        assert result.exit_code == 1
        assert "Tool file not found" in result.output

    def test_exec_focus(self, make_tool, launcher):
        p = make_tool("x.tool.py", "x")
        result = runner.invoke(app, ["exec", str(p), "--host", "0.0.0.0"])
        assert result.exit_code == 0, result.output
        (inst,) = launcher.instances
        assert inst.host == "0.0.0.0"
        (ui,) = inst.served
        assert ui.focus_mode is True
        assert "specs" in result.output
