"""Target traversal and exclusion matching."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from .logging import get_logger
from .models import SourceFile

SOURCE_SUFFIXES = (".c", ".h")
_GLOB_CHARS = frozenset("*?[")


def is_source_file(name: str) -> bool:
    """Return True for ``.c`` and ``.h`` names (case-sensitive)."""
    return name.endswith(SOURCE_SUFFIXES)


@dataclass(frozen=True)
class ExclusionRule:
    """A single exclusion pattern.

    Plain patterns exclude any path containing them. Patterns with glob
    characters are matched against the whole path and against each segment.
    """

    pattern: str
    is_glob: bool

    @classmethod
    def parse(cls, pattern: str) -> ExclusionRule | None:
        pattern = pattern.strip()
        if not pattern:
            return None
        return cls(pattern=pattern, is_glob=any(char in _GLOB_CHARS for char in pattern))

    def matches(self, path: str, is_dir: bool = False) -> bool:
        candidates = [path, f"{path}/"] if is_dir else [path]
        if not self.is_glob:
            return any(self.pattern in candidate for candidate in candidates)
        pattern = self.pattern.rstrip("/")
        if fnmatchcase(path, pattern):
            return True
        return any(fnmatchcase(part, pattern) for part in path.split("/") if part)


class ExclusionMatcher:
    """Answers whether a path falls under any configured exclusion."""

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        self.rules: List[ExclusionRule] = []
        for pattern in patterns:
            rule = ExclusionRule.parse(pattern)
            if rule is not None:
                self.rules.append(rule)

    def match(self, path: str, is_dir: bool = False) -> ExclusionRule | None:
        for rule in self.rules:
            if rule.matches(path, is_dir):
                return rule
        return None

    def matches(self, path: str, is_dir: bool = False) -> bool:
        return self.match(path, is_dir) is not None


@dataclass
class ScanResult:
    """Files selected for processing plus targets that could not be read."""

    files: List[SourceFile] = field(default_factory=list)
    errors: List[Tuple[str, str]] = field(default_factory=list)


class SourceScanner:
    """Expands file and directory targets into an ordered list of C sources."""

    def __init__(self, matcher: ExclusionMatcher | None = None) -> None:
        self.matcher = matcher or ExclusionMatcher()
        self.logger = get_logger("scanner")

    def collect(self, targets: Sequence[str | Path]) -> ScanResult:
        """Return sources under ``targets`` in traversal order.

        Directory entries are visited in sorted order so repeated runs list
        files identically.
        """
        result = ScanResult()
        for target in targets:
            path = Path(target)
            if self._excluded(path, path.is_dir()):
                continue
            if path.is_dir():
                self._walk(path, path, result)
            elif path.is_file():
                if is_source_file(path.name):
                    result.files.append(SourceFile(path=path, relative=path.as_posix()))
                else:
                    self.logger.debug("Skipping non-C target %s", path)
            else:
                message = f"Could not stat target '{path}'"
                self.logger.warning(message)
                result.errors.append((str(path), message))
        return result

    def _walk(self, directory: Path, root: Path, result: ScanResult) -> None:
        try:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
        except OSError as exc:
            message = f"Could not open directory '{directory}': {exc.strerror or exc}"
            self.logger.warning(message)
            result.errors.append((str(directory), message))
            return

        for entry in entries:
            child = directory / entry.name
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            if self._excluded(child, is_dir):
                continue
            if is_dir:
                self._walk(child, root, result)
            elif is_source_file(entry.name):
                relative = child.relative_to(root).as_posix()
                result.files.append(SourceFile(path=child, relative=relative))

    def _excluded(self, path: Path, is_dir: bool) -> bool:
        rule = self.matcher.match(path.as_posix(), is_dir)
        if rule is None:
            return False
        self.logger.info("Excluding: %s (matches '%s')", path, rule.pattern)
        return True


__all__ = [
    "ExclusionMatcher",
    "ExclusionRule",
    "ScanResult",
    "SourceScanner",
    "SOURCE_SUFFIXES",
    "is_source_file",
]
