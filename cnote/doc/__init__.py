"""API documentation extraction and Markdown rendering."""

from __future__ import annotations

from .book import build_summary, sanitize_name, summary_line
from .extractor import DocScanner, extract_entries
from .renderer import compact_signature, render, render_comment, render_entry

__all__ = [
    "DocScanner",
    "build_summary",
    "compact_signature",
    "extract_entries",
    "render",
    "render_comment",
    "render_entry",
    "sanitize_name",
    "summary_line",
]
