"""External code formatter integration."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Protocol, Sequence

from .logging import get_logger


class FormatterError(RuntimeError):
    """Raised when the external formatter cannot be run or exits non-zero."""


class Formatter(Protocol):
    """Anything that can reformat a source file in place."""

    def format(self, path: Path, style: str | None = None) -> None:
        ...


class ClangFormatter:
    """Runs ``clang-format -i`` on cleaned files."""

    def __init__(
        self,
        executable: str = "clang-format",
        runner: Callable[[Sequence[str]], None] | None = None,
    ) -> None:
        self.executable = executable
        self._runner = runner or self._default_runner
        self.logger = get_logger("formatter")

    def command(self, path: Path, style: str | None = None) -> list[str]:
        args = [self.executable, "-i"]
        if style:
            args.append(f"--style={style}")
        args.append(str(path))
        return args

    def format(self, path: Path, style: str | None = None) -> None:
        """Reformat ``path`` in place, raising FormatterError on failure."""
        args = self.command(path, style)
        self.logger.debug("Running: %s", " ".join(args))
        try:
            self._runner(args)
        except FileNotFoundError as exc:
            raise FormatterError(
                f"Unable to locate '{self.executable}' (is it installed?)"
            ) from exc
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            detail = f": {stderr}" if stderr else ""
            raise FormatterError(
                f"{self.executable} exited with code {exc.returncode} for {path}{detail}"
            ) from exc

    @staticmethod
    def _default_runner(args: Sequence[str]) -> None:
        subprocess.run(
            list(args),
            check=True,
            text=True,
            capture_output=True,
        )


__all__ = ["ClangFormatter", "Formatter", "FormatterError"]
