"""Configuration loading for cnote (.cnote.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".cnote.yml"
DEFAULT_TITLE = "API Documentation"
DOC_MODES = ("single", "book")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class CleanConfig:
    """Settings for the ``clean`` command."""

    format: bool = True
    style: Optional[str] = None
    executable: str = "clang-format"


@dataclass
class DocConfig:
    """Settings for the ``doc`` command."""

    title: str = DEFAULT_TITLE
    mode: str = "single"
    show_source: bool = False


@dataclass
class LicenseConfig:
    """Settings for the ``license`` command."""

    file: Optional[Path] = None


@dataclass
class CnoteConfig:
    """Represents the settings defined in .cnote.yml."""

    root: Path
    exclude_paths: List[str] = field(default_factory=list)
    jobs: int = 1
    clean: CleanConfig = field(default_factory=CleanConfig)
    doc: DocConfig = field(default_factory=DocConfig)
    license: LicenseConfig = field(default_factory=LicenseConfig)


def load_config(config_path: Path) -> CnoteConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return CnoteConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    jobs = _as_int(data.get("jobs"))
    if jobs is None:
        jobs = 1
    if jobs < 1:
        raise ConfigError("jobs must be a positive integer")

    clean = CleanConfig()
    clean_data = _as_dict(data.get("clean"))
    if clean_data:
        format_flag = _as_bool(clean_data.get("format"))
        if format_flag is not None:
            clean.format = format_flag
        clean.style = _as_str(clean_data.get("style"))
        clean.executable = _as_str(clean_data.get("executable")) or clean.executable

    doc = DocConfig()
    doc_data = _as_dict(data.get("doc"))
    if doc_data:
        doc.title = _as_str(doc_data.get("title")) or doc.title
        mode = _as_str(doc_data.get("mode"))
        if mode is not None:
            doc.mode = _validate_mode(mode)
        doc.show_source = _as_bool(doc_data.get("show_source")) or False

    license_config = LicenseConfig()
    license_data = _as_dict(data.get("license"))
    license_file = _as_str(license_data.get("file")) if license_data else None
    if license_file:
        license_config.file = root / license_file

    return CnoteConfig(
        root=root,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        jobs=jobs,
        clean=clean,
        doc=doc,
        license=license_config,
    )


def _validate_mode(mode: str) -> str:
    normalised = mode.strip().lower()
    if normalised not in DOC_MODES:
        choices = ", ".join(DOC_MODES)
        raise ConfigError(f"doc.mode must be one of {choices}, got '{mode}'")
    return normalised


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "CleanConfig",
    "CnoteConfig",
    "ConfigError",
    "DocConfig",
    "LicenseConfig",
    "load_config",
]
