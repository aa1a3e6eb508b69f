# topmark:header:start
#
#   project      : APISurface
#   file         : test_toml_io.py
#   file_relpath : tests/config/test_toml_io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the TOML loader and the typed table getters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from apisurface.config.io.getters import (
    get_bool_value_or_none,
    get_list_value,
    get_string_value_or_none,
    get_table_value,
)
from apisurface.config.io.loaders import TomlLoadError, load_toml_dict
from tests.conftest import parametrize

if TYPE_CHECKING:
    from pathlib import Path

TABLE: dict[str, Any] = {
    "name": "p.C",
    "count": 3,
    "flag": True,
    "items": ["a", "b"],
    "sub": {"k": "v"},
}


@parametrize(
    "key, expected",
    [("name", "p.C"), ("count", "3"), ("flag", "True"), ("items", None), ("missing", None)],
)
def test_get_string_value_or_none(key: str, expected: str | None) -> None:
    """Scalars coerce to strings; containers and missing keys give None."""
    assert get_string_value_or_none(TABLE, key) == expected


@parametrize(
    "key, expected",
    [("flag", True), ("count", True), ("name", None), ("missing", None)],
)
def test_get_bool_value_or_none(key: str, expected: bool | None) -> None:
    """Booleans pass through, integers coerce, strings are rejected."""
    assert get_bool_value_or_none(TABLE, key) is expected


def test_get_list_and_table_values() -> None:
    """Lists are copied; wrong shapes fall back to the default."""
    items = get_list_value(TABLE, "items")
    assert items == ["a", "b"]
    items.append("c")
    assert TABLE["items"] == ["a", "b"]
    assert get_list_value(TABLE, "name", default=["x"]) == ["x"]
    assert get_list_value(TABLE, "missing") == []
    assert get_table_value(TABLE, "sub") == {"k": "v"}
    assert get_table_value(TABLE, "items") == {}


def test_load_toml_dict_unwraps_to_plain_types(tmp_path: Path) -> None:
    """Loaded documents are plain dicts and lists, not tomlkit containers."""
    path = tmp_path / "a.toml"
    path.write_text('[[class]]\nname = "p.C"\n\n[[class.method]]\nname = "m"\n', encoding="utf-8")
    data = load_toml_dict(path)
    assert data == {"class": [{"name": "p.C", "method": [{"name": "m"}]}]}
    assert type(data["class"][0]["name"]) is str


def test_load_toml_dict_errors(tmp_path: Path) -> None:
    """Unreadable and undecodable files raise `TomlLoadError`."""
    with pytest.raises(TomlLoadError, match="Cannot read"):
        load_toml_dict(tmp_path / "missing.toml")
    bad = tmp_path / "bad.toml"
    bad.write_text("key = = 1\n", encoding="utf-8")
    with pytest.raises(TomlLoadError, match="Invalid TOML"):
        load_toml_dict(bad)
