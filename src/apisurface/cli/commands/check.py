# topmark:header:start
#
#   project      : APISurface
#   file         : check.py
#   file_relpath : src/apisurface/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""APISurface `check` command.

Compares a previous API XML snapshot against the current one and reports every
compatibility break as a diagnostic.

Output:
    - default: warnings, then errors, on stderr (sorted by position, then message);
      a summary line on stdout with ``-v``.
    - json: one envelope with ``diagnostics``, ``diagnostic_counts`` and ``consistent``.
    - ndjson: one ``diagnostic`` record per finding, then a ``summary`` record.

Exit codes:
    0 when no error-severity diagnostic was recorded, 1 otherwise, 65 for a
    malformed document, 66 for a missing one and 78 for a configuration error.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from apisurface.apicheck.checker import ApiChecker
from apisurface.cli.cmd_common import (
    build_config,
    build_registry,
    diagnostic_payloads,
    emit_human_diagnostics,
    emit_machine_output,
    exit_on_error,
    get_console,
    get_effective_verbosity,
    iter_diagnostic_records,
    load_api_snapshot,
)
from apisurface.cli.options import (
    common_config_options,
    common_severity_options,
    output_format_option,
)
from apisurface.cli_shared.utils import OutputFormat
from apisurface.config.logging import get_logger
from apisurface.core.machine import MachineKey, build_meta_payload

if TYPE_CHECKING:
    from apisurface.config.logging import ApiSurfaceLogger

logger: ApiSurfaceLogger = get_logger(__name__)


@click.command(
    name="check",
    help="Compare two API XML snapshots and report compatibility breaks.",
)
@click.argument("old_api", metavar="OLD.xml", type=click.Path(path_type=Path))
@click.argument("new_api", metavar="NEW.xml", type=click.Path(path_type=Path))
@common_config_options
@common_severity_options
@output_format_option
@click.pass_context
def check_command(
    ctx: click.Context,
    *,
    old_api: Path,
    new_api: Path,
    no_config: bool,
    config_paths: tuple[str, ...],
    warnings_as_errors: bool | None,
    error_codes: tuple[str, ...],
    warning_codes: tuple[str, ...],
    hidden_codes: tuple[str, ...],
    output_format: OutputFormat | None,
) -> None:
    """Diff ``OLD.xml`` against ``NEW.xml``."""
    console = get_console(ctx)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    config = build_config(
        no_config=no_config,
        config_paths=config_paths,
        cli_args={
            "warnings_as_errors": warnings_as_errors,
            "error_codes": error_codes,
            "warning_codes": warning_codes,
            "hidden_codes": hidden_codes,
        },
    )
    registry = build_registry(config)

    old = load_api_snapshot(old_api)
    new = load_api_snapshot(new_api)
    consistent: bool = ApiChecker(registry).check_snapshots(old, new)
    logger.info("Compared %s with %s: consistent=%s", old_api, new_api, consistent)

    if fmt.is_machine:
        meta = build_meta_payload()
        summary: dict[str, object] = {MachineKey.CONSISTENT: consistent}
        emit_machine_output(
            console,
            fmt,
            meta=meta,
            payloads={**diagnostic_payloads(registry), **summary},
            records=iter_diagnostic_records(meta, registry, summary),
        )
    else:
        emit_human_diagnostics(console, registry, verbosity=get_effective_verbosity(ctx))

    exit_on_error(ctx, registry)
