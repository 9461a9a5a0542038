"""Core data models shared across cnote components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class Span:
    """Half-open byte range ``[start, end)`` into a source buffer."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class DocEntry:
    """One documentation comment and the declaration that follows it.

    Both spans index into ``buffer``; nothing is copied until a text
    accessor is used.
    """

    buffer: bytes = field(repr=False)
    comment: Span
    signature: Span
    path: Optional[str] = None

    @property
    def raw_comment(self) -> bytes:
        return self.buffer[self.comment.start : self.comment.end]

    @property
    def raw_signature(self) -> bytes:
        return self.buffer[self.signature.start : self.signature.end]

    @property
    def comment_text(self) -> str:
        return _decode(self.raw_comment).strip()

    @property
    def signature_text(self) -> str:
        return _decode(self.raw_signature)


@dataclass(frozen=True)
class SourceFile:
    """A file selected for processing, with its path relative to the scan root."""

    path: Path
    relative: str


FAILURE_STATUSES = frozenset({"error", "malformed"})


@dataclass
class FileResult:
    """Outcome of processing a single file."""

    path: str
    status: str
    message: Optional[str] = None
    entries: int = 0

    @property
    def failed(self) -> bool:
        return self.status in FAILURE_STATUSES


@dataclass
class RunReport:
    """Ordered per-file outcomes for one command run."""

    command: str
    results: List[FileResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not any(result.failed for result in self.results)


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")
