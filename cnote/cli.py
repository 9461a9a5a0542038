"""CLI entrypoints for cnote commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import CONFIG_FILENAME, DOC_MODES, CnoteConfig, ConfigError, load_config
from .logging import configure_logging
from .models import RunReport
from .orchestrator import Orchestrator


def _add_common_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    def _default(value: object) -> object:
        return argparse.SUPPRESS if suppress_default else value

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=_default(False),
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=_default(False),
        help="Only report warnings and errors.",
    )
    parser.add_argument(
        "-j",
        "--jobs",
        type=int,
        default=_default(None),
        help="Number of files to process in parallel (default: from config, else 1).",
    )
    parser.add_argument(
        "--config",
        default=_default(None),
        help=f"Path to a config file or its directory (default: ./{CONFIG_FILENAME}).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=_default(None),
        help="Also write a detailed (debug level) log to this file.",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        # Patterns given after the command are merged in _exclusions().
        dest="command_exclude" if suppress_default else "exclude",
        default=_default([]),
        metavar="PATTERN",
        help="Skip paths containing PATTERN (glob patterns allowed). Repeatable.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cnote",
        description="Clean comments, generate API docs and maintain license headers in C sources.",
    )
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    clean_parser = subparsers.add_parser(
        "clean",
        help="Remove '//' comments and run clang-format.",
    )
    _add_common_options(clean_parser, suppress_default=True)
    clean_parser.add_argument(
        "targets",
        nargs="+",
        help="C files or directories to clean in place.",
    )
    clean_parser.add_argument(
        "--no-format",
        action="store_true",
        help="Skip running clang-format after cleaning.",
    )
    clean_parser.add_argument(
        "--style",
        default=None,
        help="Style passed to clang-format as --style=STYLE.",
    )

    doc_parser = subparsers.add_parser(
        "doc",
        help="Generate Markdown API documentation from /** */ comments.",
    )
    _add_common_options(doc_parser, suppress_default=True)
    doc_parser.add_argument("source_dir", help="Directory to scan for .c and .h files.")
    doc_parser.add_argument(
        "output",
        help="Markdown file (single mode) or output directory (book mode).",
    )
    doc_parser.add_argument(
        "--mode",
        choices=DOC_MODES,
        default=None,
        help="Write one document or an mdBook-style directory (default: single).",
    )
    doc_parser.add_argument("--title", default=None, help="Document title.")
    doc_parser.add_argument(
        "--show-source",
        action="store_true",
        default=None,
        help="Add the source file path under each entry.",
    )

    license_parser = subparsers.add_parser(
        "license",
        help="Add or refresh the license header of C files.",
    )
    _add_common_options(license_parser, suppress_default=True)
    license_parser.add_argument(
        "targets",
        nargs="+",
        help="C files or directories to update in place.",
    )
    license_parser.add_argument(
        "--license-file",
        default=None,
        help="Text file holding the raw license (default: license.file from config).",
    )

    return parser


def _exclusions(args: argparse.Namespace) -> list[str]:
    """Return --exclude patterns given before and after the command, in order."""
    return list(getattr(args, "exclude", None) or []) + list(
        getattr(args, "command_exclude", None) or []
    )


def _load_config(args: argparse.Namespace) -> CnoteConfig:
    config_arg = getattr(args, "config", None)
    if config_arg:
        config_path = Path(config_arg)
        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_arg}")
    else:
        config_path = Path.cwd()
    config = load_config(config_path)

    config.exclude_paths.extend(_exclusions(args))
    jobs = getattr(args, "jobs", None)
    if jobs is not None:
        if jobs < 1:
            raise ConfigError("--jobs must be a positive integer")
        config.jobs = jobs
    if getattr(args, "no_format", False):
        config.clean.format = False
    if getattr(args, "style", None):
        config.clean.style = args.style
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for cnote commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    logger = configure_logging(
        verbose=bool(getattr(args, "verbose", False)),
        quiet=bool(getattr(args, "quiet", False)),
        log_file=getattr(args, "log_file", None),
    )

    try:
        config = _load_config(args)
    except ConfigError as exc:
        parser.exit(1, f"cnote: {exc}\n")

    orchestrator = Orchestrator(config)

    try:
        if args.command == "clean":
            logger.info("--- cnote: Cleaning ---")
            report = orchestrator.run_clean(args.targets)
        elif args.command == "doc":
            logger.info("--- cnote: Generating Docs ---")
            report = orchestrator.run_doc(
                args.source_dir,
                args.output,
                mode=args.mode,
                title=args.title,
                show_source=args.show_source,
            )
        elif args.command == "license":
            logger.info("--- cnote: License ---")
            report = orchestrator.run_license(args.targets, args.license_file)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except ConfigError as exc:
        parser.exit(1, f"cnote {args.command} failed: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"cnote {args.command} failed: {exc}\nRun with --verbose for more details.\n")

    _exit_for_report(parser, report)


def _exit_for_report(parser: argparse.ArgumentParser, report: RunReport) -> None:
    if report.ok:
        return
    failed = [result for result in report.results if result.failed]
    parser.exit(1, f"cnote {report.command}: {len(failed)} file(s) failed\n")


if __name__ == "__main__":
    main(sys.argv[1:])
