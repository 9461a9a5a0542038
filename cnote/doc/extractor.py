"""Extraction of ``/** ... */`` documentation comments and their declarations."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from ..models import DocEntry, Span

_DOC_OPENER = b"/**"
_COMMENT_CLOSER = b"*/"
_TERMINATORS = (b"{", b";")
_SIGNATURE_SKIP = b" \t\n\r"


class _State(Enum):
    CODE = "code"
    IN_COMMENT = "in_comment"
    IN_SIGNATURE = "in_signature"


class DocScanner:
    """Byte scanner pairing each doc comment with the declaration after it.

    The scan only knows about ``/**``, ``*/``, ``{`` and ``;``. Quotes and
    ordinary comments are plain bytes, so a stray apostrophe in a
    preprocessor line or a digit separator cannot hide later entries.
    """

    def __init__(self, buffer: bytes, path: Optional[str] = None) -> None:
        self.buffer = buffer
        self.path = path

    def scan(self) -> List[DocEntry]:
        buffer = self.buffer
        length = len(buffer)
        entries: List[DocEntry] = []
        state = _State.CODE
        index = 0
        comment_start = comment_end = signature_start = 0

        while index < length:
            if state is _State.CODE:
                opener = buffer.find(_DOC_OPENER, index)
                if opener == -1:
                    break
                comment_start = opener + len(_DOC_OPENER)
                index = comment_start
                state = _State.IN_COMMENT

            elif state is _State.IN_COMMENT:
                # Searching from after the opener keeps "/**/" open.
                closer = buffer.find(_COMMENT_CLOSER, index)
                if closer == -1:
                    break
                comment_end = closer
                index = closer + len(_COMMENT_CLOSER)
                signature_start = _skip_blanks(buffer, index)
                state = _State.IN_SIGNATURE

            else:
                opener = buffer.find(_DOC_OPENER, index)
                limit = length if opener == -1 else opener
                terminator = _find_terminator(buffer, index, limit)
                if terminator != -1:
                    entries.append(
                        DocEntry(
                            buffer=buffer,
                            comment=Span(comment_start, comment_end),
                            signature=Span(signature_start, terminator + 1),
                            path=self.path,
                        )
                    )
                    index = terminator + 1
                    state = _State.CODE
                elif opener != -1:
                    # The pending comment had no declaration; the new one replaces it.
                    index = opener
                    state = _State.CODE
                else:
                    break

        return entries


def extract_entries(buffer: bytes, path: Optional[str] = None) -> List[DocEntry]:
    """Return the documented declarations of ``buffer`` in source order.

    A doc comment is paired with the text that follows it up to and including
    the first ``{`` or ``;``. When another ``/**`` shows up before that
    terminator, the earlier comment is dropped without an entry. Constructs
    left open at the end of the buffer produce nothing.
    """
    return DocScanner(buffer, path).scan()


def _skip_blanks(buffer: bytes, index: int) -> int:
    length = len(buffer)
    while index < length and buffer[index] in _SIGNATURE_SKIP:
        index += 1
    return index


def _find_terminator(buffer: bytes, start: int, end: int) -> int:
    positions = [
        position
        for position in (buffer.find(token, start, end) for token in _TERMINATORS)
        if position != -1
    ]
    return min(positions) if positions else -1


__all__ = ["DocScanner", "extract_entries"]
