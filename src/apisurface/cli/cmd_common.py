# topmark:header:start
#
#   project      : APISurface
#   file         : cmd_common.py
#   file_relpath : src/apisurface/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds small, focused helpers used by several CLI commands:
configuration resolution, input reading with exit-code mapping, and
diagnostic emission in the human and machine formats.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from apisurface.apicheck.errors import ApiParseError
from apisurface.apicheck.xml_reader import read_api_xml
from apisurface.builder.builder import build_snapshot
from apisurface.builder.loaders import SymbolFileError, load_symbol_table
from apisurface.cli.errors import (
    ApiSurfaceConfigError,
    ApiSurfaceFileNotFoundError,
    ApiSurfaceIOError,
    ApiSurfaceMalformedInputError,
)
from apisurface.cli_shared.exit_codes import ExitCode
from apisurface.cli_shared.utils import OutputFormat
from apisurface.config import ConfigError, MutableConfig
from apisurface.config.logging import get_logger
from apisurface.core.machine import (
    MachineKey,
    MachineKind,
    build_ndjson_record,
    iter_ndjson_strings,
    serialize_json_envelope,
)
from apisurface.diagnostic.machine import (
    MachineDiagnosticCounts,
    build_diagnostic_entries,
    iter_diagnostic_ndjson_records,
)
from apisurface.diagnostic.model import DiagnosticRegistry

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from apisurface.cli_shared.console_api import ConsoleLike
    from apisurface.config import Config
    from apisurface.config.logging import ApiSurfaceLogger
    from apisurface.core.machine import MetaPayload
    from apisurface.diagnostic.model import DiagnosticStats
    from apisurface.model.snapshot import Snapshot

logger: ApiSurfaceLogger = get_logger(__name__)


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity (negative when quiet, 0 when terse)."""
    ctx.ensure_object(dict)
    return int(ctx.obj.get("verbosity_level", 0))


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console installed by the group callback."""
    ctx.ensure_object(dict)
    return ctx.obj["console"]


def build_config(
    *,
    no_config: bool,
    config_paths: Iterable[str],
    cli_args: Mapping[str, Any],
) -> Config:
    """Load layered configuration, apply CLI overrides and freeze the result.

    Raises:
        ApiSurfaceConfigError: If a config file is missing or invalid, or a CLI
            code token is unknown.
    """
    try:
        draft: MutableConfig = MutableConfig.load_merged(
            extra_config_files=list(config_paths),
            no_config=no_config,
        )
        config: Config = draft.apply_cli_args(cli_args).freeze()
    except ConfigError as exc:
        raise ApiSurfaceConfigError(str(exc)) from exc
    logger.debug("Effective config: %s", config)
    return config


def build_registry(config: Config) -> DiagnosticRegistry:
    """Create the per-run diagnostic registry from the effective configuration."""
    return DiagnosticRegistry(
        config.severity_overrides,
        warnings_as_errors=config.warnings_as_errors,
    )


def _require_file(path: Path) -> None:
    if not path.exists():
        raise ApiSurfaceFileNotFoundError(f"No such file: {path}")
    if not path.is_file():
        raise ApiSurfaceFileNotFoundError(f"Not a file: {path}")


def load_api_snapshot(path: Path) -> Snapshot:
    """Read an API XML document, mapping failures to CLI errors.

    Raises:
        ApiSurfaceFileNotFoundError: If ``path`` is not an existing file.
        ApiSurfaceMalformedInputError: If the document is malformed.
        ApiSurfaceIOError: If the file cannot be read.
    """
    _require_file(path)
    try:
        return read_api_xml(path)
    except ApiParseError as exc:
        raise ApiSurfaceMalformedInputError(str(exc)) from exc
    except OSError as exc:
        raise ApiSurfaceIOError(f"Cannot read {path}: {exc}") from exc


def load_symbol_snapshot(path: Path) -> Snapshot:
    """Read a TOML symbol file and build its snapshot, mapping failures to CLI errors.

    Raises:
        ApiSurfaceFileNotFoundError: If ``path`` is not an existing file.
        ApiSurfaceMalformedInputError: If the symbol file is malformed.
    """
    _require_file(path)
    try:
        return build_snapshot(load_symbol_table(path), label=str(path))
    except SymbolFileError as exc:
        raise ApiSurfaceMalformedInputError(str(exc)) from exc


def format_summary(stats: DiagnosticStats) -> str:
    """Return the one-line human summary of a run."""
    return f"{stats.n_error} error(s), {stats.n_warning} warning(s), {stats.n_hidden} suppressed"


def emit_human_diagnostics(
    console: ConsoleLike,
    registry: DiagnosticRegistry,
    *,
    verbosity: int,
) -> None:
    """Print warnings, then errors, to stderr.

    Warnings are skipped when quiet; the summary line is printed when verbose.
    """
    if verbosity >= 0:
        for d in registry.warnings():
            console.warn(d.render())
    for d in registry.errors():
        console.error(d.render())
    if verbosity > 0:
        console.print(console.styled(format_summary(registry.stats()), bold=True))


def diagnostic_payloads(registry: DiagnosticRegistry) -> dict[str, object]:
    """Return the JSON envelope payloads describing the registry."""
    return {
        MachineKey.DIAGNOSTICS: build_diagnostic_entries(registry),
        MachineKey.DIAGNOSTIC_COUNTS: MachineDiagnosticCounts.from_stats(registry.stats()),
    }


def iter_diagnostic_records(
    meta: MetaPayload,
    registry: DiagnosticRegistry,
    summary: Mapping[str, object],
) -> Iterator[dict[str, object]]:
    """Yield one NDJSON record per diagnostic, then a closing summary record."""
    yield from iter_diagnostic_ndjson_records(meta=meta, diagnostics=registry)
    payload: dict[str, object] = dict(summary)
    payload[MachineKey.DIAGNOSTIC_COUNTS] = MachineDiagnosticCounts.from_stats(registry.stats())
    yield build_ndjson_record(kind=MachineKind.SUMMARY, meta=meta, payload=payload)


def emit_machine_output(
    console: ConsoleLike,
    fmt: OutputFormat,
    *,
    meta: MetaPayload,
    payloads: Mapping[str, object],
    records: Iterable[dict[str, object]],
) -> None:
    """Print a JSON envelope or NDJSON records to stdout."""
    if fmt is OutputFormat.JSON:
        console.print(serialize_json_envelope(meta, **payloads))
    else:
        for line in iter_ndjson_strings(records):
            console.print(line)


def exit_on_error(ctx: click.Context, registry: DiagnosticRegistry) -> None:
    """Exit with `ExitCode.FAILURE` once any error-severity diagnostic was recorded."""
    if registry.had_error:
        logger.debug("Run recorded errors; exiting with %s", ExitCode.FAILURE)
        ctx.exit(ExitCode.FAILURE)
