# topmark:header:start
#
#   project      : APISurface
#   file         : model.py
#   file_relpath : src/apisurface/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core diagnostic types and the per-run diagnostic registry.

Sections:
    * SourcePosition: file/line/column anchor of a diagnostic (or "unknown").
    * Diagnostic: immutable value object (code, severity, position, message).
    * DiagnosticStats: aggregated per-severity counts.
    * DiagnosticRegistry: ordered, deduplicated collection with configurable
      per-code severity, a warnings-as-errors switch and a ``had_error`` flag.

Diagnostics are deduplicated and ordered by ``(position, message)``. The code is
deliberately not part of that key: two codes that render the same text at the
same position collapse into one entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from apisurface.config.logging import get_logger
from apisurface.constants import UNKNOWN_POSITION_FILE
from apisurface.diagnostic.codes import Severity

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from apisurface.config.logging import ApiSurfaceLogger
    from apisurface.diagnostic.codes import ErrorCode


logger: ApiSurfaceLogger = get_logger(__name__)


@dataclass(frozen=True, order=True, slots=True)
class SourcePosition:
    """Location of a declaration in its source document.

    A line of ``0`` means the line is not known; such positions render as the
    bare file name.
    """

    file: str
    line: int = 0
    column: int = 0

    @classmethod
    def unknown(cls) -> SourcePosition:
        """Return the position used when a diagnostic has no anchor."""
        return cls(UNKNOWN_POSITION_FILE, 0, 0)

    def __str__(self) -> str:
        if self.line <= 0:
            return self.file
        return f"{self.file}:{self.line}"


@dataclass(frozen=True, order=True)
class Diagnostic:
    """A single reported finding.

    Equality, hashing and ordering use ``(position, message)`` only.

    Attributes:
        position: Where the finding is anchored.
        message: Human-readable text, without the severity/code prefix.
        code: The stable error code.
        severity: The severity the code resolved to when reported.
    """

    position: SourcePosition
    message: str
    code: ErrorCode = field(compare=False)
    severity: Severity = field(compare=False)

    def render(self) -> str:
        """Return the flattened one-line text form used by the CLI."""
        return f"{self.position}: {self.severity.value} {self.code.number}: {self.message}"

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class DiagnosticStats:
    """Aggregated counts for diagnostics by severity."""

    n_warning: int
    n_error: int
    n_hidden: int = 0

    @property
    def total(self) -> int:
        """Return the count of listed (warning + error) diagnostics."""
        return self.n_warning + self.n_error


class DiagnosticRegistry:
    """Ordered, deduplicated collection of diagnostics for one run.

    The registry is an explicit object handed to every analysis call; there is
    no process-wide instance.

    Args:
        severity_overrides: Per-code severities replacing the code defaults.
        warnings_as_errors: If True, every diagnostic resolving to
            ``WARNING`` is recorded as ``ERROR``.

    Attributes:
        warnings_as_errors (bool): Global warning escalation switch.
        had_error (bool): Set as soon as any submission resolves to ``ERROR``.
        suppressed_count (int): Number of submissions dropped as ``HIDDEN``.
    """

    def __init__(
        self,
        severity_overrides: Mapping[ErrorCode, Severity] | None = None,
        *,
        warnings_as_errors: bool = False,
    ) -> None:
        self._overrides: dict[ErrorCode, Severity] = dict(severity_overrides or {})
        self._entries: dict[Diagnostic, Diagnostic] = {}
        self.warnings_as_errors: bool = warnings_as_errors
        self.had_error: bool = False
        self.suppressed_count: int = 0

    def set_severity(self, code: ErrorCode, severity: Severity) -> None:
        """Override the severity of a single code for subsequent reports."""
        self._overrides[code] = severity

    def severity_of(self, code: ErrorCode) -> Severity:
        """Return the configured severity of ``code`` before warning escalation."""
        return self._overrides.get(code, code.default_severity)

    def report(
        self,
        code: ErrorCode,
        position: SourcePosition | None,
        text: str,
    ) -> Diagnostic | None:
        """Submit a finding.

        Args:
            code: The error code of the finding.
            position: Anchor position; ``None`` is recorded as "unknown".
            text: Message text.

        Returns:
            The recorded (or already present, equal) diagnostic, or ``None`` when
            the code is suppressed.
        """
        severity: Severity = self.severity_of(code)
        if severity is Severity.HIDDEN:
            self.suppressed_count += 1
            logger.trace("Suppressed %s: %s", code.name, text)
            return None
        if severity is Severity.WARNING and self.warnings_as_errors:
            severity = Severity.ERROR
        if severity is Severity.ERROR:
            self.had_error = True

        diagnostic = Diagnostic(
            position=position or SourcePosition.unknown(),
            message=text,
            code=code,
            severity=severity,
        )
        existing: Diagnostic | None = self._entries.get(diagnostic)
        if existing is not None:
            logger.trace("Duplicate diagnostic dropped: %s", diagnostic.render())
            return existing
        self._entries[diagnostic] = diagnostic
        logger.debug("Recorded %s", diagnostic.render())
        return diagnostic

    def warnings(self) -> list[Diagnostic]:
        """Return warning diagnostics sorted by position then message."""
        return sorted(d for d in self._entries if d.severity is Severity.WARNING)

    def errors(self) -> list[Diagnostic]:
        """Return error diagnostics sorted by position then message."""
        return sorted(d for d in self._entries if d.severity is Severity.ERROR)

    def codes(self) -> list[ErrorCode]:
        """Return the codes of all listed diagnostics, in print order."""
        return [d.code for d in self]

    def render_lines(self) -> list[str]:
        """Return the flattened text lines: the warnings block, then the errors block."""
        return [d.render() for d in self]

    def stats(self) -> DiagnosticStats:
        """Return per-severity counts for this registry."""
        return compute_diagnostic_stats(self._entries, n_hidden=self.suppressed_count)

    def __iter__(self) -> Iterator[Diagnostic]:
        """Iterate warnings first, then errors, each block in sorted order."""
        yield from self.warnings()
        yield from self.errors()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        # A registry is always truthy, even when empty.
        return True


def compute_diagnostic_stats(
    diagnostics: Iterable[Diagnostic],
    *,
    n_hidden: int = 0,
) -> DiagnosticStats:
    """Return per-severity counts for a sequence of diagnostics.

    Args:
        diagnostics: The diagnostics to count.
        n_hidden: Number of suppressed submissions to carry along.

    Returns:
        Per-severity counts.
    """
    items: list[Diagnostic] = list(diagnostics)
    n_warn: int = sum(1 for d in items if d.severity is Severity.WARNING)
    n_err: int = sum(1 for d in items if d.severity is Severity.ERROR)
    return DiagnosticStats(n_warning=n_warn, n_error=n_err, n_hidden=n_hidden)
