# topmark:header:start
#
#   project      : APISurface
#   file         : console_api.py
#   file_relpath : src/apisurface/cli_shared/console_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console surface through which commands report to the user.

Closure listings, machine output and the run summary are written to stdout.
Rendered diagnostics go to stderr, split by severity so that ``-q`` can drop
the warnings block while errors are always shown.
"""

from __future__ import annotations

from typing import Protocol


class ConsoleLike(Protocol):
    """What `apisurface.cli.cmd_common` needs to emit diagnostics and listings.

    Logging never goes through the console; see `apisurface.config.logging`.
    """

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write listings, JSON/NDJSON and the summary line to stdout."""
        ...

    def warn(self, text: str, *, nl: bool = True) -> None:
        """Write one rendered warning-severity diagnostic to stderr."""
        ...

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error-severity diagnostic or a CLI failure to stderr."""
        ...

    def styled(self, text: str, **style_kwargs: object) -> str:
        """Return ``text`` with click styling, or unchanged when color is off."""
        ...
