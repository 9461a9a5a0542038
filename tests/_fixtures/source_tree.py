"""Helper utilities for constructing temporary C source trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping


class SourceTreeBuilder:
    """Utility for writing C files into a throwaway directory."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries below the root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_bytes(normalised.encode("utf-8"))

    def read(self, relative: str) -> str:
        return (self.root / relative).read_bytes().decode("utf-8")

    def path(self, relative: str = "") -> Path:
        """Return a path below the root (the root itself by default)."""
        return self.root / relative if relative else self.root


__all__ = ["SourceTreeBuilder"]
