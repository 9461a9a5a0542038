"""Pipeline orchestration for the clean, doc and license commands."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TypeVar

from .clean import CleanTransformer
from .config import DOC_MODES, CnoteConfig, ConfigError
from .doc import book
from .doc.extractor import extract_entries
from .doc.renderer import GENERATED_BY, render
from .formatter import ClangFormatter, Formatter
from .license import LicenseStatus, apply, build_golden_header
from .logging import get_logger
from .models import DocEntry, FileResult, RunReport, SourceFile
from .scanner import ExclusionMatcher, ScanResult, SourceScanner

_T = TypeVar("_T")
_R = TypeVar("_R")


@dataclass
class _DocFile:
    """Extraction outcome for one file, kept in traversal order."""

    source: SourceFile
    entries: List[DocEntry] = field(default_factory=list)
    error: Optional[str] = None


class Orchestrator:
    """Runs a command over every selected file and collects ordered results."""

    def __init__(
        self,
        config: CnoteConfig | None = None,
        *,
        scanner: SourceScanner | None = None,
        formatter: Formatter | None = None,
    ) -> None:
        self.config = config or CnoteConfig(root=Path.cwd())
        self.scanner = scanner or SourceScanner(ExclusionMatcher(self.config.exclude_paths))
        self._formatter = formatter
        self.logger = get_logger("orchestrator")

    # ------------------------------------------------------------------
    # clean

    def run_clean(self, targets: Sequence[str | Path]) -> RunReport:
        """Strip line comments from every target file, then format it."""
        report = RunReport(command="clean")
        scan = self._scan(targets, report)
        transformer = CleanTransformer(self._resolve_formatter(), style=self.config.clean.style)

        def _clean(source: SourceFile) -> FileResult:
            self.logger.info("Processing: %s", source.path)
            try:
                changed = transformer.clean_file(source.path)
            except OSError as exc:
                return self._io_failure(source.path, "clean", exc)
            return FileResult(path=str(source.path), status="cleaned" if changed else "unchanged")

        report.results.extend(self._map(_clean, scan.files))
        self._log_summary(report)
        return report

    def _resolve_formatter(self) -> Formatter | None:
        if not self.config.clean.format:
            return None
        if self._formatter is None:
            self._formatter = ClangFormatter(self.config.clean.executable)
        return self._formatter

    # ------------------------------------------------------------------
    # doc

    def run_doc(
        self,
        source_dir: str | Path,
        output: str | Path,
        *,
        mode: str | None = None,
        title: str | None = None,
        show_source: bool | None = None,
    ) -> RunReport:
        """Extract doc comments below ``source_dir`` and write Markdown to ``output``.

        ``single`` mode writes one document at ``output``; ``book`` mode
        treats ``output`` as a directory and writes one page per file plus
        a ``SUMMARY.md`` index.
        """
        source_root = Path(source_dir)
        if not source_root.is_dir():
            raise NotADirectoryError(f"Source directory not found: {source_dir}")
        mode = mode or self.config.doc.mode
        if mode not in DOC_MODES:
            raise ConfigError(f"Unknown doc mode '{mode}'")
        title = title or self.config.doc.title
        if show_source is None:
            show_source = self.config.doc.show_source

        report = RunReport(command="doc")
        self.logger.info("Scanning `%s`...", source_root)
        scan = self._scan([source_root], report)
        documents = self._map(self._extract, scan.files)
        total = sum(len(document.entries) for document in documents)
        self.logger.info("Found %d documentation entries.", total)

        if mode == "book":
            self._write_book(documents, Path(output), title, show_source, report)
        else:
            self._write_single(documents, Path(output), title, show_source, report)
        self._log_summary(report)
        return report

    def _extract(self, source: SourceFile) -> _DocFile:
        try:
            buffer = source.path.read_bytes()
        except OSError as exc:
            message = f"Could not read file '{source.path}': {exc.strerror or exc}"
            self.logger.warning(message)
            return _DocFile(source=source, error=message)
        return _DocFile(source=source, entries=extract_entries(buffer, path=source.relative))

    def _write_single(
        self,
        documents: Sequence[_DocFile],
        output: Path,
        title: str,
        show_source: bool,
        report: RunReport,
    ) -> None:
        entries: List[DocEntry] = []
        for document in documents:
            report.results.append(self._doc_result(document))
            entries.extend(document.entries)

        if not entries:
            self.logger.info("No entries found, skipping markdown generation.")
            return

        markdown = render(entries, title, preamble=GENERATED_BY, show_source=show_source)
        self.logger.info("Generating markdown to `%s`...", output)
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(markdown, encoding="utf-8")
        except OSError as exc:
            report.results.append(self._io_failure(output, "write", exc))

    def _write_book(
        self,
        documents: Sequence[_DocFile],
        output: Path,
        title: str,
        show_source: bool,
        report: RunReport,
    ) -> None:
        api_dir = output / book.API_DIR
        api_dir.mkdir(parents=True, exist_ok=True)

        def _write_page(document: _DocFile) -> FileResult:
            if document.error is not None:
                return self._doc_result(document)
            relative = document.source.relative
            page = render(document.entries, relative, show_source=show_source)
            target = api_dir / book.sanitize_name(relative)
            try:
                target.write_text(page, encoding="utf-8")
            except OSError as exc:
                return self._io_failure(target, "write", exc)
            return self._doc_result(document)

        results = self._map(_write_page, documents)
        report.results.extend(results)

        written = [
            document.source.relative
            for document, result in zip(documents, results)
            if not result.failed
        ]
        try:
            (output / book.SUMMARY_FILENAME).write_text(
                book.build_summary(written, title), encoding="utf-8"
            )
            (output / book.INTRO_FILENAME).write_text(
                book.build_intro(title, GENERATED_BY), encoding="utf-8"
            )
        except OSError as exc:
            report.results.append(self._io_failure(output / book.SUMMARY_FILENAME, "write", exc))
        self.logger.info("Wrote %d pages under `%s`", len(written), output)

    @staticmethod
    def _doc_result(document: _DocFile) -> FileResult:
        if document.error is not None:
            return FileResult(path=str(document.source.path), status="error", message=document.error)
        return FileResult(
            path=str(document.source.path),
            status="documented",
            entries=len(document.entries),
        )

    # ------------------------------------------------------------------
    # license

    def run_license(
        self, targets: Sequence[str | Path], license_file: str | Path | None = None
    ) -> RunReport:
        """Bring the license header of every target file in line with ``license_file``.

        The license file is a run precondition: failing to read it raises and
        no file is touched.
        """
        license_path = Path(license_file) if license_file else self.config.license.file
        if license_path is None:
            raise ConfigError("A license file is required (--license-file or license.file)")
        golden = build_golden_header(license_path.read_bytes())

        report = RunReport(command="license")
        scan = self._scan(targets, report)

        def _license(source: SourceFile) -> FileResult:
            path = source.path
            try:
                result = apply(golden, path.read_bytes())
                if result.needs_write:
                    path.write_bytes(result.content)
            except OSError as exc:
                return self._io_failure(path, "license", exc)
            self._log_license(path, result.status)
            message = None
            if result.status is LicenseStatus.MALFORMED_HEADER:
                message = "malformed block comment at start"
            return FileResult(path=str(path), status=result.status.value, message=message)

        report.results.extend(self._map(_license, scan.files))
        self._log_summary(report)
        return report

    def _log_license(self, path: Path, status: LicenseStatus) -> None:
        if status is LicenseStatus.OK:
            self.logger.debug("License OK: %s", path)
        elif status is LicenseStatus.UPDATED:
            self.logger.info("Updating license: %s", path)
        elif status is LicenseStatus.ADDED:
            self.logger.info("Adding license: %s", path)
        else:
            self.logger.warning("Skipping '%s' (malformed block comment at start)", path)

    # ------------------------------------------------------------------
    # Helpers

    def _scan(self, targets: Sequence[str | Path], report: RunReport) -> ScanResult:
        scan = self.scanner.collect(targets)
        for path, message in scan.errors:
            report.results.append(FileResult(path=path, status="error", message=message))
        self.logger.debug("Selected %d files", len(scan.files))
        return scan

    def _map(self, func: Callable[[_T], _R], items: Sequence[_T]) -> List[_R]:
        """Apply ``func`` to ``items`` and return results in input order."""
        jobs = max(1, self.config.jobs)
        if jobs == 1 or len(items) < 2:
            return [func(item) for item in items]
        with ThreadPoolExecutor(max_workers=jobs) as pool:
            return list(pool.map(func, items))

    def _io_failure(self, path: Path, action: str, exc: OSError) -> FileResult:
        message = f"Failed to {action} '{path}': {exc.strerror or exc}"
        self.logger.error(message)
        return FileResult(path=str(path), status="error", message=message)

    def _log_summary(self, report: RunReport) -> None:
        failed = sum(1 for result in report.results if result.failed)
        self.logger.info(
            "%s: processed %d files (%d failed)",
            report.command,
            len(report.results),
            failed,
        )


__all__ = ["Orchestrator"]
