"""Tests for glob expansion over the project tree."""
from __future__ import annotations

import logging

from pyunspecd.discovery import scanner
from pyunspecd.discovery.scanner import expand_pattern, scan_tool_files


class TestScanToolFiles:
    """Candidate file collection."""

    def test_default_style_patterns(self, tmp_path, write_file):
        a = write_file("tools/a.tool.py", "")
        b = write_file("tools/nested/b.tool.py", "")
        root = write_file("root.tool.py", "")
        write_file("tools/helper.py", "")

        found = scan_tool_files(tmp_path, ["tools/**/*.tool.py", "*.tool.py"])
        assert found == [a.resolve(), b.resolve(), root.resolve()]

    def test_excluded_directories(self, tmp_path, write_file):
        keep = write_file("tools/keep.tool.py", "")
        for d in (".unspecd", "node_modules", "dist", "build", "__pycache__", ".venv"):
            write_file(f"{d}/x.tool.py", "")
            write_file(f"tools/{d}/y.tool.py", "")

        found = scan_tool_files(tmp_path, ["**/*.tool.py"])
        assert found == [keep.resolve()]

    def test_overlapping_patterns_deduplicated(self, tmp_path, write_file):
        a = write_file("tools/a.tool.py", "")
        b = write_file("tools/b.tool.py", "")

        found = scan_tool_files(tmp_path, ["tools/b.tool.py", "tools/*.tool.py", "**/*.tool.py"])
        assert found == [b.resolve(), a.resolve()]

    def test_directories_are_not_candidates(self, tmp_path, write_file):
        (tmp_path / "odd.tool.py").mkdir()
        f = write_file("real.tool.py", "")
        assert scan_tool_files(tmp_path, ["*.tool.py"]) == [f.resolve()]

    def test_no_matches(self, tmp_path, caplog):
        with caplog.at_level(logging.INFO, logger="pyunspecd"):
            assert scan_tool_files(tmp_path, ["tools/**/*.tool.py"]) == []
        assert any('Found 0 files matching "tools/**/*.tool.py"' in r.getMessage() for r in caplog.records)

    def test_failing_pattern_is_skipped(self, tmp_path, write_file, monkeypatch, caplog):
        good = write_file("good.tool.py", "")
        real = scanner.expand_pattern

        def flaky(cwd, pattern):
            if pattern == "bad":
                raise OSError("permission denied")
            return real(cwd, pattern)

        monkeypatch.setattr(scanner, "expand_pattern", flaky)
        with caplog.at_level(logging.WARNING, logger="pyunspecd"):
            found = scan_tool_files(tmp_path, ["bad", "*.tool.py"])

        assert found == [good.resolve()]
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "bad" in warnings[0].getMessage()


class TestExpandPattern:
    def test_absolute_pattern(self, tmp_path, write_file):
        f = write_file("abs/x.tool.py", "")
        assert expand_pattern(tmp_path, str(tmp_path / "abs" / "*.tool.py")) == [f.resolve()]

    def test_symlinked_dir_outside_cwd_judged_by_matched_path(self, tmp_path, write_file):
        target = write_file("build/shared/x.tool.py", "")
        project = tmp_path / "proj"
        project.mkdir()
        (project / "tools").symlink_to(target.parent, target_is_directory=True)

        assert expand_pattern(project, "tools/*.tool.py") == [target.resolve()]

    def test_excluded_before_resolving(self, tmp_path, write_file):
        real = write_file("tools/real.tool.py", "")
        (tmp_path / "dist").mkdir()
        (tmp_path / "dist" / "copy.tool.py").symlink_to(real)

        assert expand_pattern(tmp_path, "**/*.tool.py") == [real.resolve()]
