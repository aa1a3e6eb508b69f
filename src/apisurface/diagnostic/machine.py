# topmark:header:start
#
#   project      : APISurface
#   file         : machine.py
#   file_relpath : src/apisurface/diagnostic/machine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Machine-readable shapes for diagnostics.

- `MachineDiagnosticEntry` and `MachineDiagnosticCounts` are the payloads of
  the JSON envelope.
- `iter_diagnostic_ndjson_records` yields one NDJSON record per diagnostic.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from apisurface.core.machine import MachineKind, build_ndjson_record

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from apisurface.core.machine import MetaPayload
    from apisurface.diagnostic.model import Diagnostic, DiagnosticStats


@dataclass(slots=True)
class MachineDiagnosticEntry:
    """Machine-readable diagnostic entry.

    Attributes:
        code: Numeric error code.
        name: Symbolic code name.
        severity: ``"warning"`` or ``"error"``.
        file: Position file.
        line: Position line (0 when unknown).
        column: Position column (0 when unknown).
        message: Message text.
    """

    code: int
    name: str
    severity: str
    file: str
    line: int
    column: int
    message: str

    @classmethod
    def from_diagnostic(cls, d: Diagnostic) -> MachineDiagnosticEntry:
        return cls(
            code=d.code.number,
            name=d.code.name,
            severity=d.severity.key,
            file=d.position.file,
            line=d.position.line,
            column=d.position.column,
            message=d.message,
        )

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly dict of this entry."""
        return {
            "code": self.code,
            "name": self.name,
            "severity": self.severity,
            "position": {"file": self.file, "line": self.line, "column": self.column},
            "message": self.message,
        }


@dataclass(slots=True)
class MachineDiagnosticCounts:
    """Per-severity counts; ``hidden`` counts suppressed submissions."""

    warning: int
    error: int
    hidden: int

    @classmethod
    def from_stats(cls, stats: DiagnosticStats) -> MachineDiagnosticCounts:
        return cls(warning=stats.n_warning, error=stats.n_error, hidden=stats.n_hidden)

    def to_dict(self) -> dict[str, int]:
        return {"warning": self.warning, "error": self.error, "hidden": self.hidden}


def build_diagnostic_entries(diagnostics: Iterable[Diagnostic]) -> list[MachineDiagnosticEntry]:
    """Convert diagnostics, in the given order, to machine entries."""
    return [MachineDiagnosticEntry.from_diagnostic(d) for d in diagnostics]


def iter_diagnostic_ndjson_records(
    *,
    meta: MetaPayload,
    diagnostics: Iterable[Diagnostic],
) -> Iterator[dict[str, object]]:
    """Yield one NDJSON record (``kind="diagnostic"``) per diagnostic."""
    for d in diagnostics:
        yield build_ndjson_record(
            kind=MachineKind.DIAGNOSTIC,
            meta=meta,
            payload=MachineDiagnosticEntry.from_diagnostic(d),
        )
