# topmark:header:start
#
#   project      : APISurface
#   file         : closure.py
#   file_relpath : src/apisurface/cli/commands/closure.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""APISurface `closure` command.

Builds a snapshot from a TOML symbol file, computes its visibility closure and
either lists the closed classes or writes the closure as an API XML document.
Visibility diagnostics are printed the same way as for `check`.
"""

from __future__ import annotations

from itertools import chain
from pathlib import Path
from typing import TYPE_CHECKING

import click

from apisurface.apicheck.xml_writer import write_api_xml
from apisurface.cli.cli_types import SHOW_LEVEL_CHOICES, ScopeParam
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
    load_symbol_snapshot,
)
from apisurface.cli.errors import ApiSurfaceIOError, ApiSurfaceUsageError
from apisurface.cli.options import (
    common_config_options,
    common_severity_options,
    output_format_option,
)
from apisurface.cli_shared.utils import OutputFormat
from apisurface.closure.engine import compute_closure
from apisurface.closure.visibility import VisibilityPolicy
from apisurface.config.logging import get_logger
from apisurface.core.machine import MachineKey, MachineKind, build_meta_payload, build_ndjson_record

if TYPE_CHECKING:
    from collections.abc import Iterator

    from apisurface.cli_shared.console_api import ConsoleLike
    from apisurface.closure.engine import ClosureResult
    from apisurface.config.logging import ApiSurfaceLogger
    from apisurface.core.machine import MetaPayload
    from apisurface.model.classes import ClassInfo
    from apisurface.model.modifiers import Scope
    from apisurface.model.snapshot import Snapshot

logger: ApiSurfaceLogger = get_logger(__name__)


def closure_class_entry(closure: ClosureResult, cls: ClassInfo) -> dict[str, object]:
    """Return the machine-readable description of one closed class."""
    stripped: ClassInfo | None = closure.stripped_superclasses.get(cls.qualified_name)
    return {
        "name": cls.qualified_name,
        "kind": cls.kind.value,
        "defined_locally": cls.defined_locally,
        "hidden": cls.is_hidden,
        "stripped_superclass": stripped.qualified_name if stripped is not None else None,
    }


def _describe(closure: ClosureResult, cls: ClassInfo) -> str:
    notes: list[str] = []
    if not cls.defined_locally:
        notes.append("external")
    if cls.is_hidden:
        notes.append("hidden")
    stripped: ClassInfo | None = closure.stripped_superclasses.get(cls.qualified_name)
    if stripped is not None:
        notes.append(f"superclass {stripped.qualified_name} stripped")
    return f"{cls.qualified_name} ({', '.join(notes)})" if notes else cls.qualified_name


def _list_classes(console: ConsoleLike, closure: ClosureResult, *, verbosity: int) -> None:
    for cls in closure.sorted_classes():
        console.print(_describe(closure, cls) if verbosity > 0 else cls.qualified_name)


def _write_api_xml(snapshot: Snapshot, closure: ClosureResult, target: str) -> int:
    if target == "-":
        stdout = click.get_text_stream("stdout")
        written: int = write_api_xml(snapshot, stdout, closure=closure)
        stdout.flush()
    else:
        try:
            with Path(target).open("w", encoding="utf-8") as stream:
                written = write_api_xml(snapshot, stream, closure=closure)
        except OSError as exc:
            raise ApiSurfaceIOError(f"Cannot write {target}: {exc}") from exc
    logger.info("Wrote %d classes as API XML to %s", written, target)
    return written


def _iter_class_records(meta: MetaPayload, closure: ClosureResult) -> Iterator[dict[str, object]]:
    for cls in closure.sorted_classes():
        yield build_ndjson_record(
            kind=MachineKind.CLASS,
            meta=meta,
            payload=closure_class_entry(closure, cls),
        )


@click.command(
    name="closure",
    help="Compute the visibility closure of a TOML symbol file.",
)
@click.argument("symbols", metavar="SYMBOLS.toml", type=click.Path(path_type=Path))
@click.option(
    "--show-level",
    "show_level",
    type=ScopeParam(),
    default=None,
    help=f"Least visible scope treated as API ({', '.join(SHOW_LEVEL_CHOICES)}).",
)
@click.option(
    "--stub-package",
    "stub_packages",
    multiple=True,
    metavar="PKG",
    help="Keep only classes of this package in the result (repeatable).",
)
@click.option(
    "--api-xml",
    "api_xml",
    metavar="PATH",
    default=None,
    help="Write the closure as an API XML document ('-' for stdout).",
)
@common_config_options
@common_severity_options
@output_format_option
@click.pass_context
def closure_command(
    ctx: click.Context,
    *,
    symbols: Path,
    show_level: Scope | None,
    stub_packages: tuple[str, ...],
    api_xml: str | None,
    no_config: bool,
    config_paths: tuple[str, ...],
    warnings_as_errors: bool | None,
    error_codes: tuple[str, ...],
    warning_codes: tuple[str, ...],
    hidden_codes: tuple[str, ...],
    output_format: OutputFormat | None,
) -> None:
    """Compute and print the closure of ``SYMBOLS.toml``."""
    console = get_console(ctx)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if api_xml == "-" and fmt.is_machine:
        raise ApiSurfaceUsageError("'--api-xml -' cannot be combined with a machine output format.")

    config = build_config(
        no_config=no_config,
        config_paths=config_paths,
        cli_args={
            "show_level": show_level,
            "stub_packages": stub_packages,
            "warnings_as_errors": warnings_as_errors,
            "error_codes": error_codes,
            "warning_codes": warning_codes,
            "hidden_codes": hidden_codes,
        },
    )
    registry = build_registry(config)

    snapshot = load_symbol_snapshot(symbols)
    closure = compute_closure(
        snapshot,
        registry,
        policy=VisibilityPolicy(show_level=config.show_level),
        stub_packages=config.stub_packages or None,
    )

    written: int | None = None
    if api_xml is not None:
        written = _write_api_xml(snapshot, closure, api_xml)

    if fmt.is_machine:
        meta = build_meta_payload()
        classes = [closure_class_entry(closure, c) for c in closure.sorted_classes()]
        summary: dict[str, object] = {"class_count": len(classes)}
        emit_machine_output(
            console,
            fmt,
            meta=meta,
            payloads={MachineKey.CLASSES: classes, **diagnostic_payloads(registry)},
            records=chain(
                _iter_class_records(meta, closure),
                iter_diagnostic_records(meta, registry, summary),
            ),
        )
    else:
        if api_xml is None:
            _list_classes(console, closure, verbosity=get_effective_verbosity(ctx))
        elif api_xml != "-":
            console.print(f"Wrote {written} classes to {api_xml}")
        emit_human_diagnostics(console, registry, verbosity=get_effective_verbosity(ctx))

    exit_on_error(ctx, registry)
