"""Markdown rendering for extracted documentation entries."""

from __future__ import annotations

import re
from enum import Enum
from typing import Callable, Iterable, List, Optional, Pattern, Sequence, Tuple

from ..models import DocEntry

_WHITESPACE_RUN = re.compile(r"\s+")
_FENCE_OPEN = "```c"
_FENCE_CLOSE = "```"
GENERATED_BY = "Generated by `cnote`."


class _Mode(Enum):
    NONE = "none"
    LIST = "list"
    EXAMPLE = "example"


def compact_signature(signature: str) -> str:
    """Collapse every whitespace run in ``signature`` to a single space."""
    return _WHITESPACE_RUN.sub(" ", signature).strip()


def strip_decoration(line: str) -> str:
    """Drop the leading ``*`` of a comment line and the space after it."""
    text = line.lstrip(" \t")
    if text.startswith("*"):
        text = text[1:]
        if text.startswith(" "):
            text = text[1:]
    return text


class CommentRenderer:
    """Turns the body of one doc comment into Markdown lines.

    Tags are prefixes tried in a fixed order; a line that matches none of
    them is plain text. Line breaks are kept one to one, nothing is reflowed.
    """

    def __init__(self) -> None:
        self._handlers: Sequence[Tuple[Pattern[str], Callable[[str], None]]] = (
            (re.compile(r"@brief"), self._brief),
            (re.compile(r"@param(?:\[[^\]]*\])?"), self._param),
            (re.compile(r"@returns(?=\s|$)|@return"), self._return),
            (re.compile(r"@note"), self._note),
            (re.compile(r"@example"), self._example),
        )
        self._lines: List[str] = []
        self._mode = _Mode.NONE

    def render(self, comment: str) -> List[str]:
        self._lines = []
        self._mode = _Mode.NONE
        for raw_line in _trim_blank_edges(comment.split("\n")):
            self._feed(strip_decoration(raw_line))
        if self._mode is _Mode.EXAMPLE:
            self._lines.append(_FENCE_CLOSE)
        self._mode = _Mode.NONE
        return self._lines

    def _feed(self, text: str) -> None:
        if self._mode is _Mode.EXAMPLE:
            if not text.lstrip(" \t").startswith("@"):
                self._lines.append(text.rstrip("\r"))
                return
            self._lines.append(_FENCE_CLOSE)
            self._mode = _Mode.NONE

        line = text.lstrip(" \t").rstrip()
        for pattern, handler in self._handlers:
            match = pattern.match(line)
            if match:
                handler(line[match.end() :].strip())
                return
        self._mode = _Mode.NONE
        self._lines.append(line)

    def _enter_list(self) -> None:
        if self._mode is not _Mode.LIST:
            self._lines.append("")
        self._mode = _Mode.LIST

    def _brief(self, remainder: str) -> None:
        self._mode = _Mode.NONE
        self._lines.append(remainder)

    def _param(self, remainder: str) -> None:
        self._enter_list()
        parts = remainder.split(None, 1)
        name = parts[0] if parts else ""
        description = parts[1].strip() if len(parts) > 1 else ""
        self._lines.append(f"- **`{name}`**: {description}")

    def _return(self, remainder: str) -> None:
        self._enter_list()
        self._lines.append(f"- **Returns**: {remainder}")

    def _note(self, remainder: str) -> None:
        self._mode = _Mode.NONE
        self._lines.append("")
        self._lines.append(f"> **Note:** {remainder}")

    def _example(self, remainder: str) -> None:
        self._mode = _Mode.EXAMPLE
        self._lines.append("")
        self._lines.append(_FENCE_OPEN)
        if remainder:
            self._lines.append(remainder)


def render_comment(comment: str) -> str:
    """Render a raw doc comment body to Markdown, one output line per input line."""
    return "".join(f"{line}\n" for line in CommentRenderer().render(comment))


def render_entry(entry: DocEntry, *, show_source: bool = False) -> str:
    """Render one entry as a ``##`` section closed by a horizontal rule."""
    parts = [f"## `{compact_signature(entry.signature_text)}`\n\n"]
    if show_source and entry.path:
        parts.append(f"*Source: {entry.path}*\n\n")
    parts.append(render_comment(entry.comment_text))
    parts.append("\n---\n\n")
    return "".join(parts)


def render(
    entries: Iterable[DocEntry],
    title: str,
    *,
    preamble: Optional[str] = None,
    show_source: bool = False,
) -> str:
    """Render a complete Markdown document for ``entries``."""
    parts = [f"# {title}\n\n"]
    if preamble:
        parts.append(f"{preamble}\n\n")
    parts.extend(render_entry(entry, show_source=show_source) for entry in entries)
    return "".join(parts)


def _trim_blank_edges(lines: List[str]) -> List[str]:
    start = 0
    end = len(lines)
    while start < end and not strip_decoration(lines[start]).strip():
        start += 1
    while end > start and not strip_decoration(lines[end - 1]).strip():
        end -= 1
    return lines[start:end]


__all__ = [
    "CommentRenderer",
    "GENERATED_BY",
    "compact_signature",
    "render",
    "render_comment",
    "render_entry",
    "strip_decoration",
]
