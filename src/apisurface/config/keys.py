# topmark:header:start
#
#   project      : APISurface
#   file         : keys.py
#   file_relpath : src/apisurface/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for APISurface configuration.

These strings are the external configuration schema as it appears in
``apisurface.toml`` and in ``[tool.apisurface]`` inside ``pyproject.toml``.
Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by APISurface configuration."""

    # [tool.apisurface] in pyproject.toml
    SECTION_TOOL: Final[str] = "tool"
    SECTION_APISURFACE: Final[str] = "apisurface"

    # Top-level keys
    KEY_WARNINGS_AS_ERRORS: Final[str] = "warnings_as_errors"
    KEY_SHOW_LEVEL: Final[str] = "show_level"
    KEY_STUB_PACKAGES: Final[str] = "stub_packages"

    # [severity]: maps a code name or number to "hidden" | "warning" | "error"
    SECTION_SEVERITY: Final[str] = "severity"
