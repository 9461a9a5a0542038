"""License header normalisation for C sources."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

_BLOCK_OPEN = b"/*"
_BLOCK_CLOSE = b"*/"
_LEADING_BLANKS = b" \t\n\r"


class LicenseStatus(str, Enum):
    """What :func:`apply` decided for one file."""

    OK = "ok"
    UPDATED = "updated"
    ADDED = "added"
    MALFORMED_HEADER = "malformed"


@dataclass(frozen=True)
class LicenseResult:
    status: LicenseStatus
    content: bytes

    @property
    def needs_write(self) -> bool:
        return self.status in (LicenseStatus.UPDATED, LicenseStatus.ADDED)


def build_golden_header(raw_license: bytes) -> bytes:
    """Wrap raw license text in the canonical block comment.

    Each line becomes `` * <line>``; a trailing newline in the raw text does
    not add an empty line. The header ends with one blank line.
    """
    lines = raw_license.split(b"\n")
    if lines and lines[-1] == b"":
        lines.pop()
    body = b"".join(b" * " + line + b"\n" for line in lines)
    return b"/*\n" + body + b" */\n\n"


def apply(golden: bytes, content: bytes) -> LicenseResult:
    """Return ``content`` with its leading license header set to ``golden``.

    A file already starting with ``golden`` is left alone. A leading block
    comment is replaced; a file with a ``/*`` opener but no ``*/`` anywhere is
    reported as malformed and left untouched. Anything else gets the header
    prepended. Applying the result again always yields ``OK``.
    """
    if content.startswith(golden):
        return LicenseResult(LicenseStatus.OK, content)

    if content.startswith(_BLOCK_OPEN):
        close = content.find(_BLOCK_CLOSE)
        if close == -1:
            return LicenseResult(LicenseStatus.MALFORMED_HEADER, content)
        body = content[close + len(_BLOCK_CLOSE) :].lstrip(_LEADING_BLANKS)
        return LicenseResult(LicenseStatus.UPDATED, golden + body)

    return LicenseResult(LicenseStatus.ADDED, golden + content)


__all__ = ["LicenseResult", "LicenseStatus", "apply", "build_golden_header"]
