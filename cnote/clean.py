"""Removal of ``//`` comments from C sources."""

from __future__ import annotations

from pathlib import Path

from .formatter import Formatter, FormatterError
from .lexer import LexState, iter_regions
from .logging import get_logger


def clean(buffer: bytes) -> bytes:
    """Return ``buffer`` with every ``//`` comment removed.

    The newline that ends a line comment is kept so line numbers do not move.
    Block comments, string literals and character literals are copied
    byte for byte, including any ``//`` they contain.
    """
    return b"".join(
        buffer[region.start : region.end]
        for region in iter_regions(buffer)
        if region.kind is not LexState.LINE_COMMENT
    )


class CleanTransformer:
    """Applies :func:`clean` to files on disk and hands them to a formatter."""

    def __init__(self, formatter: Formatter | None = None, *, style: str | None = None) -> None:
        self.formatter = formatter
        self.style = style
        self.logger = get_logger("clean")

    def clean_file(self, path: Path) -> bool:
        """Clean ``path`` in place and return True when its content changed.

        I/O failures propagate as OSError. A formatter failure is logged as a
        warning and does not undo the write.
        """
        original = path.read_bytes()
        cleaned = clean(original)
        changed = cleaned != original
        if changed:
            path.write_bytes(cleaned)
            self.logger.debug("Removed line comments from %s", path)
        if self.formatter is not None:
            try:
                self.formatter.format(path, self.style)
            except FormatterError as exc:
                self.logger.warning("Formatter failed for %s: %s", path, exc)
        return changed


__all__ = ["CleanTransformer", "clean"]
