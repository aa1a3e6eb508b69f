# topmark:header:start
#
#   project      : APISurface
#   file         : getters.py
#   file_relpath : src/apisurface/config/io/getters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typed accessors for values in parsed TOML tables.

The helpers coerce where it is unambiguous (numbers and booleans to strings,
integers to booleans) and return ``None`` or a default otherwise, logging
the rejected value at DEBUG level.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from apisurface.config.logging import get_logger

if TYPE_CHECKING:
    from apisurface.config.logging import ApiSurfaceLogger

TomlTable = dict[str, Any]

logger: ApiSurfaceLogger = get_logger(__name__)


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string value from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        str | None: The extracted or coerced string value, or ``None`` when absent or not coercible.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    logger.debug("Cannot coerce %r to string for key '%s'", value, key)
    return None


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Extract an optional boolean value from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        bool | None: The extracted or coerced boolean value, or ``None``
            when absent or not coercible.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    logger.debug("Cannot coerce %r to bool for key '%s'", value, key)
    return None


def get_list_value(
    table: TomlTable,
    key: str,
    default: list[Any] | None = None,
) -> list[Any]:
    """Extract a list value from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.
        default (list[Any] | None): Default list when the key is missing or not a list.

    Returns:
        list[Any]: The list value (shallow copy), ``default``, or an empty list.
    """
    value: Any | None = table.get(key)
    if isinstance(value, list):
        return list(cast("list[Any]", value))
    return list(default) if default is not None else []


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key of the sub-table.

    Returns:
        TomlTable: The sub-table, or an empty dict when missing or not a table.
    """
    value: Any | None = table.get(key)
    if isinstance(value, dict):
        return cast("TomlTable", value)
    return {}
