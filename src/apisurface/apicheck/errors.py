# topmark:header:start
#
#   project      : APISurface
#   file         : errors.py
#   file_relpath : src/apisurface/apicheck/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Errors raised while reading API XML documents."""

from __future__ import annotations


class ApiParseError(ValueError):
    """Malformed API XML document.

    Attributes:
        file: Document path or label.
        line: 1-based line of the offending construct, 0 when unknown.
    """

    def __init__(self, message: str, *, file: str, line: int = 0) -> None:
        self.file: str = file
        self.line: int = line
        self.reason: str = message
        location: str = f"{file}:{line}" if line > 0 else file
        super().__init__(f"{location}: {message}")
