# topmark:header:start
#
#   project      : APISurface
#   file         : codes.py
#   file_relpath : src/apisurface/diagnostic/codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Stable diagnostic codes and severity levels.

Every diagnostic carries an `ErrorCode`: a stable number (used in rendered
output and configuration), a symbolic name and a default `Severity`. The
numbers are part of the output contract and must never be reassigned.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

from apisurface.core.enum_mixins import EnumIntrospectionMixin, KeyedStrEnum

if TYPE_CHECKING:
    from collections.abc import Callable


class Severity(EnumIntrospectionMixin, KeyedStrEnum):
    """Severity a diagnostic code resolves to.

    `HIDDEN` diagnostics are counted but never listed or printed.
    """

    HIDDEN = ("hidden", "Suppressed", ("suppressed", "off", "none"))
    WARNING = ("warning", "Warning", ("warn",))
    ERROR = ("error", "Error", ("err",))

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity.

        Intended for human-readable output only; machine formats should not use colors.
        """
        return cast(
            "Callable[[str], str]",
            {
                Severity.HIDDEN: chalk.gray,
                Severity.WARNING: chalk.yellow,
                Severity.ERROR: chalk.red_bright,
            }[self],
        )


@dataclass(frozen=True, slots=True)
class ErrorCode:
    """A stable diagnostic code.

    Attributes:
        number: Stable numeric identity, rendered in every message.
        name: Symbolic name (e.g. ``"CHANGED_TYPE"``).
        default_severity: Severity used unless overridden by configuration.
    """

    number: int
    name: str
    default_severity: Severity

    def __str__(self) -> str:
        return self.name


_W: Final = Severity.WARNING
_E: Final = Severity.ERROR
_H: Final = Severity.HIDDEN

# Documentation checks
UNRESOLVED_LINK: Final = ErrorCode(1, "UNRESOLVED_LINK", _W)
BAD_INCLUDE_TAG: Final = ErrorCode(2, "BAD_INCLUDE_TAG", _W)
UNKNOWN_TAG: Final = ErrorCode(3, "UNKNOWN_TAG", _W)
UNKNOWN_PARAM_TAG_NAME: Final = ErrorCode(4, "UNKNOWN_PARAM_TAG_NAME", _W)
UNDOCUMENTED_PARAMETER: Final = ErrorCode(5, "UNDOCUMENTED_PARAMETER", _H)
BAD_ATTR_TAG: Final = ErrorCode(6, "BAD_ATTR_TAG", _E)
BAD_INHERITDOC: Final = ErrorCode(7, "BAD_INHERITDOC", _H)
HIDDEN_LINK: Final = ErrorCode(8, "HIDDEN_LINK", _W)

# Visibility closure
HIDDEN_CONSTRUCTOR: Final = ErrorCode(9, "HIDDEN_CONSTRUCTOR", _W)
UNAVAILABLE_SYMBOL: Final = ErrorCode(10, "UNAVAILABLE_SYMBOL", _E)
HIDDEN_SUPERCLASS: Final = ErrorCode(11, "HIDDEN_SUPERCLASS", _W)
DEPRECATED: Final = ErrorCode(12, "DEPRECATED", _H)
DEPRECATION_MISMATCH: Final = ErrorCode(13, "DEPRECATION_MISMATCH", _W)
MISSING_COMMENT: Final = ErrorCode(14, "MISSING_COMMENT", _W)

# Input and metadata
IO_ERROR: Final = ErrorCode(15, "IO_ERROR", _H)
NO_SINCE_DATA: Final = ErrorCode(16, "NO_SINCE_DATA", _H)
NO_FEDERATION_DATA: Final = ErrorCode(17, "NO_FEDERATION_DATA", _W)
PARSE_ERROR: Final = ErrorCode(18, "PARSE_ERROR", _E)

# Compatibility: additions and removals
ADDED_PACKAGE: Final = ErrorCode(19, "ADDED_PACKAGE", _W)
ADDED_CLASS: Final = ErrorCode(20, "ADDED_CLASS", _W)
ADDED_METHOD: Final = ErrorCode(21, "ADDED_METHOD", _W)
ADDED_FIELD: Final = ErrorCode(22, "ADDED_FIELD", _W)
ADDED_INTERFACE: Final = ErrorCode(23, "ADDED_INTERFACE", _W)
REMOVED_PACKAGE: Final = ErrorCode(24, "REMOVED_PACKAGE", _W)
REMOVED_CLASS: Final = ErrorCode(25, "REMOVED_CLASS", _W)
REMOVED_METHOD: Final = ErrorCode(26, "REMOVED_METHOD", _W)
REMOVED_FIELD: Final = ErrorCode(27, "REMOVED_FIELD", _W)
REMOVED_INTERFACE: Final = ErrorCode(28, "REMOVED_INTERFACE", _W)

# Compatibility: changed declarations
CHANGED_STATIC: Final = ErrorCode(29, "CHANGED_STATIC", _W)
CHANGED_FINAL: Final = ErrorCode(30, "CHANGED_FINAL", _W)
CHANGED_TRANSIENT: Final = ErrorCode(31, "CHANGED_TRANSIENT", _W)
CHANGED_VOLATILE: Final = ErrorCode(32, "CHANGED_VOLATILE", _W)
CHANGED_TYPE: Final = ErrorCode(33, "CHANGED_TYPE", _W)
CHANGED_VALUE: Final = ErrorCode(34, "CHANGED_VALUE", _W)
CHANGED_SUPERCLASS: Final = ErrorCode(35, "CHANGED_SUPERCLASS", _W)
CHANGED_SCOPE: Final = ErrorCode(36, "CHANGED_SCOPE", _W)
CHANGED_ABSTRACT: Final = ErrorCode(37, "CHANGED_ABSTRACT", _W)
CHANGED_THROWS: Final = ErrorCode(38, "CHANGED_THROWS", _W)
CHANGED_NATIVE: Final = ErrorCode(39, "CHANGED_NATIVE", _H)
CHANGED_CLASS: Final = ErrorCode(40, "CHANGED_CLASS", _W)
CHANGED_DEPRECATED: Final = ErrorCode(41, "CHANGED_DEPRECATED", _W)
CHANGED_SYNCHRONIZED: Final = ErrorCode(42, "CHANGED_SYNCHRONIZED", _E)

ALL_ERROR_CODES: Final[tuple[ErrorCode, ...]] = (
    UNRESOLVED_LINK,
    BAD_INCLUDE_TAG,
    UNKNOWN_TAG,
    UNKNOWN_PARAM_TAG_NAME,
    UNDOCUMENTED_PARAMETER,
    BAD_ATTR_TAG,
    BAD_INHERITDOC,
    HIDDEN_LINK,
    HIDDEN_CONSTRUCTOR,
    UNAVAILABLE_SYMBOL,
    HIDDEN_SUPERCLASS,
    DEPRECATED,
    DEPRECATION_MISMATCH,
    MISSING_COMMENT,
    IO_ERROR,
    NO_SINCE_DATA,
    NO_FEDERATION_DATA,
    PARSE_ERROR,
    ADDED_PACKAGE,
    ADDED_CLASS,
    ADDED_METHOD,
    ADDED_FIELD,
    ADDED_INTERFACE,
    REMOVED_PACKAGE,
    REMOVED_CLASS,
    REMOVED_METHOD,
    REMOVED_FIELD,
    REMOVED_INTERFACE,
    CHANGED_STATIC,
    CHANGED_FINAL,
    CHANGED_TRANSIENT,
    CHANGED_VOLATILE,
    CHANGED_TYPE,
    CHANGED_VALUE,
    CHANGED_SUPERCLASS,
    CHANGED_SCOPE,
    CHANGED_ABSTRACT,
    CHANGED_THROWS,
    CHANGED_NATIVE,
    CHANGED_CLASS,
    CHANGED_DEPRECATED,
    CHANGED_SYNCHRONIZED,
)

_BY_NUMBER: Final[dict[int, ErrorCode]] = {c.number: c for c in ALL_ERROR_CODES}
_BY_NAME: Final[dict[str, ErrorCode]] = {c.name: c for c in ALL_ERROR_CODES}


def error_code(token: str | int) -> ErrorCode | None:
    """Look up an error code by number or by (case-insensitive) name.

    Args:
        token: A numeric code (``33`` or ``"33"``) or a symbolic name
            (``"CHANGED_TYPE"``, ``"changed-type"``).

    Returns:
        The matching `ErrorCode`, or ``None`` when the token is unknown.
    """
    if isinstance(token, int):
        return _BY_NUMBER.get(token)
    text: str = token.strip()
    if text.isdigit():
        return _BY_NUMBER.get(int(text))
    return _BY_NAME.get(text.upper().replace("-", "_"))
