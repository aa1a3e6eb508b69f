# topmark:header:start
#
#   project      : APISurface
#   file         : exit_codes.py
#   file_relpath : src/apisurface/cli_shared/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the APISurface CLI.

APISurface aligns with the BSD `sysexits` convention so that other tooling can
interpret failures consistently. A compatibility run that records at least one
error-severity diagnostic exits with `FAILURE`.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the APISurface CLI.

    Attributes:
        SUCCESS: No error-severity diagnostic was recorded.
        FAILURE: At least one error-severity diagnostic was recorded.
        USAGE_ERROR: Command-line invocation error (invalid flags/args). Mirrors
            BSD ``EX_USAGE (64)``.
        MALFORMED_INPUT: An API XML document or symbol file is malformed.
            Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        IO_ERROR: I/O error reading/writing a file. Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Configuration error (missing/invalid/malformed config).
            Mirrors BSD ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1

    # sysexits-aligned values
    USAGE_ERROR = 64  # EX_USAGE
    MALFORMED_INPUT = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
