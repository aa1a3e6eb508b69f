# topmark:header:start
#
#   project      : APISurface
#   file         : loaders.py
#   file_relpath : src/apisurface/config/io/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

Parsing is done with `tomlkit` and returned as plain `dict` structures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from apisurface.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from apisurface.config.io.getters import TomlTable
    from apisurface.config.logging import ApiSurfaceLogger

logger: ApiSurfaceLogger = get_logger(__name__)


class TomlLoadError(ValueError):
    """Raised when a TOML document cannot be read or decoded."""


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (e.g., ``apisurface.toml`` or ``pyproject.toml``).

    Returns:
        The parsed TOML content.

    Raises:
        TomlLoadError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise TomlLoadError(f"Cannot read {path}: {e}") from e
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        raise TomlLoadError(f"Invalid TOML in {path}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
