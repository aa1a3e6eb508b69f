# topmark:header:start
#
#   project      : APISurface
#   file         : main.py
#   file_relpath : src/apisurface/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""APISurface command-line entry point.

Key ideas:
- Group-level options (verbosity, color) are initialized once and placed
  into ``ctx.obj`` together with the program-output console.
- Subcommands read the console and verbosity from ``ctx.obj`` and translate
  library errors into `ApiSurfaceError` subclasses carrying sysexits codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from apisurface.cli.commands.check import check_command
from apisurface.cli.commands.closure import closure_command
from apisurface.cli.commands.codes import codes_command
from apisurface.cli.commands.version import version_command
from apisurface.cli.console import ClickConsole
from apisurface.cli.options import (
    common_color_options,
    common_verbose_options,
    resolve_verbosity,
)
from apisurface.cli_shared.utils import ColorMode, resolve_color_mode
from apisurface.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from apisurface.cli_shared.console_api import ConsoleLike
    from apisurface.config.logging import ApiSurfaceLogger

logger: ApiSurfaceLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity & color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.ensure_object(dict)

    # Program-output verbosity
    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging via env
    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_color_mode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color = resolve_color_mode(cli_mode=effective_color_mode, output_format=None)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="APISurface: API surface closure and compatibility checks.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the APISurface CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'apisurface check OLD.xml NEW.xml' to compare two APIs.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(codes_command)

cli.add_command(check_command)

cli.add_command(closure_command)

if __name__ == "__main__":
    cli()
