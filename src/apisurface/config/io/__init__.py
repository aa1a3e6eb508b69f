# topmark:header:start
#
#   project      : APISurface
#   file         : __init__.py
#   file_relpath : src/apisurface/config/io/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O helpers for the configuration layer.

- **loaders**: read TOML documents from disk with `tomlkit`.
- **getters**: typed, coercing accessors over parsed TOML tables.
"""

from __future__ import annotations

from apisurface.config.io.getters import (
    TomlTable,
    get_bool_value_or_none,
    get_list_value,
    get_string_value_or_none,
    get_table_value,
)
from apisurface.config.io.loaders import load_toml_dict

__all__ = [
    "TomlTable",
    "get_bool_value_or_none",
    "get_list_value",
    "get_string_value_or_none",
    "get_table_value",
    "load_toml_dict",
]
