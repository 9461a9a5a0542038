"""Lexical cursor behind the clean pipeline.

The cursor splits a C/C++ byte buffer into contiguous regions of code,
comments and literals. It is not a parser: preprocessor lines, raw string
literals and trigraphs are treated as ordinary code bytes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List

_SLASH = 0x2F
_STAR = 0x2A
_BACKSLASH = 0x5C
_DOUBLE_QUOTE = 0x22
_SINGLE_QUOTE = 0x27


class LexState(str, Enum):
    """Lexical context a byte belongs to."""

    CODE = "code"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    STRING = "string"
    CHAR = "char"


@dataclass(frozen=True)
class Region:
    """Half-open byte span ``[start, end)`` of a single lexical construct.

    ``terminated`` is False only for the last region of a buffer that ends in
    the middle of a comment or literal.
    """

    kind: LexState
    start: int
    end: int
    terminated: bool = True

    def slice(self, buffer: bytes) -> bytes:
        return buffer[self.start : self.end]

    def __len__(self) -> int:
        return self.end - self.start


class Cursor:
    """Walks a buffer once and yields its regions in order.

    Every byte of the buffer belongs to exactly one region, so concatenating
    the slices of all regions reproduces the input.
    """

    def __init__(self, buffer: bytes) -> None:
        self._buffer = bytes(buffer)
        self._length = len(self._buffer)

    def regions(self) -> Iterator[Region]:
        buffer = self._buffer
        length = self._length
        code_start = 0
        index = 0
        while index < length:
            byte = buffer[index]
            following = buffer[index + 1] if index + 1 < length else -1

            if byte == _SLASH and following == _SLASH:
                opener = LexState.LINE_COMMENT
            elif byte == _SLASH and following == _STAR:
                opener = LexState.BLOCK_COMMENT
            elif byte == _DOUBLE_QUOTE:
                opener = LexState.STRING
            elif byte == _SINGLE_QUOTE:
                opener = LexState.CHAR
            else:
                index += 1
                continue

            if index > code_start:
                yield Region(LexState.CODE, code_start, index)
            region = self._scan(opener, index)
            yield region
            index = code_start = region.end

        if code_start < length:
            yield Region(LexState.CODE, code_start, length)

    def _scan(self, kind: LexState, start: int) -> Region:
        if kind is LexState.LINE_COMMENT:
            return self._scan_line_comment(start)
        if kind is LexState.BLOCK_COMMENT:
            return self._scan_block_comment(start)
        quote = _DOUBLE_QUOTE if kind is LexState.STRING else _SINGLE_QUOTE
        return self._scan_literal(kind, start, quote)

    def _scan_line_comment(self, start: int) -> Region:
        newline = self._buffer.find(b"\n", start + 2)
        if newline == -1:
            # A comment on the last line without a trailing newline is complete.
            return Region(LexState.LINE_COMMENT, start, self._length)
        return Region(LexState.LINE_COMMENT, start, newline)

    def _scan_block_comment(self, start: int) -> Region:
        # The opener's '*' can never be reused as the closer's, so "/*/" stays open.
        close = self._buffer.find(b"*/", start + 2)
        if close == -1:
            return Region(LexState.BLOCK_COMMENT, start, self._length, terminated=False)
        return Region(LexState.BLOCK_COMMENT, start, close + 2)

    def _scan_literal(self, kind: LexState, start: int, quote: int) -> Region:
        buffer = self._buffer
        length = self._length
        index = start + 1
        while index < length:
            byte = buffer[index]
            if byte == _BACKSLASH:
                index += 2
                continue
            index += 1
            if byte == quote:
                return Region(kind, start, index)
        return Region(kind, start, length, terminated=False)


def iter_regions(buffer: bytes) -> Iterator[Region]:
    """Yield the lexical regions of ``buffer`` in order."""
    return Cursor(buffer).regions()


def tokenize(buffer: bytes) -> List[Region]:
    """Return every lexical region of ``buffer`` as a list."""
    return list(Cursor(buffer).regions())


__all__ = ["Cursor", "LexState", "Region", "iter_regions", "tokenize"]
