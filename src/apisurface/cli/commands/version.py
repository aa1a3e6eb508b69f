# topmark:header:start
#
#   project      : APISurface
#   file         : version.py
#   file_relpath : src/apisurface/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""APISurface `version` command.

Prints the current APISurface version as installed in the active Python environment.
"""

from __future__ import annotations

import click

from apisurface.cli.cmd_common import emit_machine_output, get_console, get_effective_verbosity
from apisurface.cli.options import output_format_option
from apisurface.cli_shared.utils import OutputFormat
from apisurface.constants import APISURFACE_VERSION
from apisurface.core.machine import MachineKey, MachineKind, build_meta_payload, build_ndjson_record


@click.command(
    name="version",
    help="Show the current version of APISurface.",
)
@output_format_option
@click.pass_context
def version_command(ctx: click.Context, *, output_format: OutputFormat | None) -> None:
    """Show the current version of APISurface.

    Args:
        ctx (click.Context): The Click context.
        output_format (OutputFormat | None): Optional output format.
    """
    console = get_console(ctx)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    if fmt.is_machine:
        meta = build_meta_payload()
        emit_machine_output(
            console,
            fmt,
            meta=meta,
            payloads={MachineKey.VERSION: APISURFACE_VERSION},
            records=[
                build_ndjson_record(kind=MachineKind.VERSION, meta=meta, payload=APISURFACE_VERSION)
            ],
        )
    elif get_effective_verbosity(ctx) > 0:
        console.print(console.styled("APISurface version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(APISURFACE_VERSION, bold=True)}")
    else:
        console.print(console.styled(APISURFACE_VERSION, bold=True))
