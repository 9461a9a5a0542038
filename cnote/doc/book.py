"""Book-mode layout: one Markdown page per source file plus an mdBook summary."""

from __future__ import annotations

from typing import Iterable

API_DIR = "api"
SUMMARY_FILENAME = "SUMMARY.md"
INTRO_FILENAME = "README.md"


def sanitize_name(relative_path: str) -> str:
    """Map ``src/core/list.h`` to ``src_core_list_h.md``."""
    return relative_path.replace("/", "_").replace(".", "_") + ".md"


def summary_line(relative_path: str) -> str:
    return f"  - [{relative_path}]({API_DIR}/{sanitize_name(relative_path)})\n"


def build_summary(relative_paths: Iterable[str], title: str) -> str:
    """Return the ``SUMMARY.md`` index listing pages in the given order."""
    lines = ["# Summary\n", "\n", f"- [{title}]({INTRO_FILENAME})\n"]
    lines.extend(summary_line(path) for path in relative_paths)
    return "".join(lines)


def build_intro(title: str, preamble: str) -> str:
    return f"# {title}\n\n{preamble}\n"


__all__ = [
    "API_DIR",
    "INTRO_FILENAME",
    "SUMMARY_FILENAME",
    "build_intro",
    "build_summary",
    "sanitize_name",
    "summary_line",
]
