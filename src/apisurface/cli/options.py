# topmark:header:start
#
#   project      : APISurface
#   file         : options.py
#   file_relpath : src/apisurface/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities for the Click-based APISurface CLI.

This module centralizes reusable options (verbosity, color, configuration,
severity overrides, output format) and their resolution logic, so commands
and groups can stay thin. The helpers here are Click-aware.
"""

from __future__ import annotations

from typing import Callable, ParamSpec, TypeVar

import click

from apisurface.cli.cli_types import EnumChoiceParam
from apisurface.cli.errors import ApiSurfaceUsageError
from apisurface.cli_shared.utils import ColorMode, OutputFormat

P = ParamSpec("P")
R = TypeVar("R")


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from the ``-v``/``-q`` counts.

    Args:
        verbose_count: Number of times the verbose flag (-v) is passed.
        quiet_count: Number of times the quiet flag (-q) is passed.

    Returns:
        ``verbose_count`` when verbose, ``-quiet_count`` when quiet, else 0.

    Raises:
        ApiSurfaceUsageError: If both verbose and quiet flags are used simultaneously.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise ApiSurfaceUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count > 0:
        return verbose_count
    return -quiet_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function with verbosity options added.
    """
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress output. Specify up to twice for even less.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --color and --no-color options to a command.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function with color options added.
    """
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Apply common configuration options to a Click command.

    Adds ``--no-config`` and ``--config``. Existence of ``--config`` files is
    checked by the config loader so a missing file maps to a configuration error.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function.
    """
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore pyproject.toml and apisurface.toml in the working directory.",
    )(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(dir_okay=False),
        help="Additional config file(s) to load and merge.",
    )(f)
    return f


def common_severity_options(f: Callable[P, R]) -> Callable[P, R]:
    """Apply the diagnostic severity options to a Click command.

    Adds ``--werror/--no-werror`` and the repeatable ``--error``, ``--warning``
    and ``--hide`` options, each taking a code name or number.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function.
    """
    f = click.option(
        "--werror/--no-werror",
        "warnings_as_errors",
        default=None,
        help="Treat every warning as an error.",
    )(f)
    f = click.option(
        "--error",
        "error_codes",
        multiple=True,
        metavar="CODE",
        help="Report this code as an error (name or number; repeatable).",
    )(f)
    f = click.option(
        "--warning",
        "warning_codes",
        multiple=True,
        metavar="CODE",
        help="Report this code as a warning (name or number; repeatable).",
    )(f)
    f = click.option(
        "--hide",
        "hidden_codes",
        multiple=True,
        metavar="CODE",
        help="Suppress this code (name or number; repeatable).",
    )(f)
    return f


def output_format_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add the ``--format`` option (default, json, ndjson)."""
    return click.option(
        "--format",
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=None,
        help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
    )(f)
