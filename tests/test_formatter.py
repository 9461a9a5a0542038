"""Tests for the clang-format wrapper."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from cnote.formatter import ClangFormatter, FormatterError


def test_formatter_builds_in_place_command(tmp_path: Path) -> None:
    calls = []
    formatter = ClangFormatter(runner=calls.append)
    target = tmp_path / "a.c"

    formatter.format(target)
    formatter.format(target, "file:/repo/.clang-format")

    assert calls[0] == ["clang-format", "-i", str(target)]
    assert calls[1] == ["clang-format", "-i", "--style=file:/repo/.clang-format", str(target)]


def test_formatter_uses_configured_executable(tmp_path: Path) -> None:
    calls = []
    ClangFormatter("clang-format-18", runner=calls.append).format(tmp_path / "a.c")
    assert calls[0][0] == "clang-format-18"


def test_formatter_reports_missing_executable(tmp_path: Path) -> None:
    def runner(args):  # type: ignore[no-untyped-def]
        raise FileNotFoundError(args[0])

    with pytest.raises(FormatterError, match="is it installed"):
        ClangFormatter(runner=runner).format(tmp_path / "a.c")


def test_formatter_reports_non_zero_exit(tmp_path: Path) -> None:
    def runner(args):  # type: ignore[no-untyped-def]
        raise subprocess.CalledProcessError(2, args, stderr="bad style\n")

    with pytest.raises(FormatterError) as excinfo:
        ClangFormatter(runner=runner).format(tmp_path / "a.c")

    assert "exited with code 2" in str(excinfo.value)
    assert "bad style" in str(excinfo.value)
