# topmark:header:start
#
#   project      : APISurface
#   file         : errors.py
#   file_relpath : src/apisurface/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the APISurface CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. Library exceptions (`ApiParseError`,
    `SymbolFileError`, `ConfigError`) are translated into these at the command
    boundary.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no
    console is present in the Click context, they fall back to Click's default
    styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from apisurface.cli_shared.exit_codes import ExitCode


class ApiSurfaceError(click.ClickException):
    """Base class for all APISurface CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorization happens in `show()`)."""
        return str(self.message)

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx: click.Context | None = click.get_current_context(silent=True)
        obj: object = ctx.obj if ctx is not None else None
        console = obj.get("console") if isinstance(obj, dict) else None
        if console is None:
            super().show(file)
            return
        console.error(console.styled(self.format_message(), fg="bright_red"))


class ApiSurfaceUsageError(ApiSurfaceError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class ApiSurfaceMalformedInputError(ApiSurfaceError):
    """Error for malformed API XML documents or symbol files."""

    exit_code = ExitCode.MALFORMED_INPUT


class ApiSurfaceFileNotFoundError(ApiSurfaceError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class ApiSurfaceIOError(ApiSurfaceError):
    """Error for I/O errors reading or writing files."""

    exit_code = ExitCode.IO_ERROR


class ApiSurfaceConfigError(ApiSurfaceError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR
