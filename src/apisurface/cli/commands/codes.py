# topmark:header:start
#
#   project      : APISurface
#   file         : codes.py
#   file_relpath : src/apisurface/cli/commands/codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""APISurface `codes` command.

Lists every diagnostic code with its number, name and default severity.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from apisurface.cli.cmd_common import emit_machine_output, get_console, get_effective_verbosity
from apisurface.cli.options import output_format_option
from apisurface.cli_shared.utils import OutputFormat
from apisurface.core.machine import MachineKey, MachineKind, build_meta_payload, build_ndjson_record
from apisurface.diagnostic.codes import ALL_ERROR_CODES

if TYPE_CHECKING:
    from apisurface.diagnostic.codes import ErrorCode


def code_entry(code: ErrorCode) -> dict[str, object]:
    """Return the machine-readable description of a code."""
    return {
        "code": code.number,
        "name": code.name,
        "default_severity": code.default_severity.key,
    }


@click.command(
    name="codes",
    help="List every diagnostic code with its default severity.",
)
@output_format_option
@click.pass_context
def codes_command(ctx: click.Context, *, output_format: OutputFormat | None) -> None:
    """List the diagnostic codes, ordered by number."""
    console = get_console(ctx)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    codes: list[ErrorCode] = sorted(ALL_ERROR_CODES, key=lambda c: c.number)

    if fmt.is_machine:
        meta = build_meta_payload()
        emit_machine_output(
            console,
            fmt,
            meta=meta,
            payloads={MachineKey.CODES: [code_entry(c) for c in codes]},
            records=(
                build_ndjson_record(kind=MachineKind.CODE, meta=meta, payload=code_entry(c))
                for c in codes
            ),
        )
        return

    if get_effective_verbosity(ctx) > 0:
        console.print(console.styled("Diagnostic codes:\n", bold=True, underline=True))
    width: int = max(len(c.name) for c in codes)
    for c in codes:
        severity: str = c.default_severity.key
        console.print(f"{c.number:>3}  {c.name:<{width}}  {severity}")
