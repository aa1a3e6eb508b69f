# topmark:header:start
#
#   project      : APISurface
#   file         : machine.py
#   file_relpath : src/apisurface/core/machine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared machine-output primitives: keys, envelopes, normalization and serialization.

JSON output is a single envelope ``{"meta": {...}, <name>: <payload>, ...}``;
NDJSON output is one record per line, each shaped
``{"kind": <kind>, "meta": {...}, <kind>: <payload>}``.

Nothing here performs I/O; the CLI writes the serialized strings.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, TypedDict, cast

from apisurface.constants import APISURFACE_VERSION

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class MachineKey:
    """Canonical keys used in machine-readable JSON/NDJSON envelopes."""

    KIND: Final[str] = "kind"
    META: Final[str] = "meta"

    DIAGNOSTIC: Final[str] = "diagnostic"
    DIAGNOSTICS: Final[str] = "diagnostics"
    DIAGNOSTIC_COUNTS: Final[str] = "diagnostic_counts"
    SUMMARY: Final[str] = "summary"
    CLASSES: Final[str] = "classes"
    CODES: Final[str] = "codes"

    VERSION: Final[str] = "version"
    CONSISTENT: Final[str] = "consistent"


class MachineKind:
    """Canonical ``kind`` values for NDJSON records."""

    DIAGNOSTIC: Final[str] = "diagnostic"
    SUMMARY: Final[str] = "summary"
    CLASS: Final[str] = "class"
    CODE: Final[str] = "code"
    VERSION: Final[str] = "version"


class MetaPayload(TypedDict):
    """Metadata describing the tool for machine output."""

    tool: str
    version: str


def build_meta_payload() -> MetaPayload:
    """Return the tool name and installed version."""
    return {"tool": "apisurface", "version": APISURFACE_VERSION}


def normalize_payload(obj: object) -> object:
    """Normalize a payload into JSON-serializable structures.

    Conversions:
      - `Path` -> `str`
      - `Enum` -> its value
      - object with callable `.to_dict()` -> normalize(`.to_dict()`)
      - `Mapping` -> `dict[str, normalized value]`
      - `list/tuple/set/frozenset` -> `list[normalized item]`
    """
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value
    to_dict: Any | None = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return normalize_payload(to_dict())
    if isinstance(obj, Mapping):
        mapping: Mapping[object, Any] = cast("Mapping[object, Any]", obj)
        return {str(k): normalize_payload(v) for k, v in mapping.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        seq: Iterable[object] = cast("Iterable[object]", obj)
        return [normalize_payload(v) for v in seq]
    return obj


def build_json_envelope(*, meta: MetaPayload, **payloads: object) -> dict[str, object]:
    """Build a JSON envelope with ``meta`` plus one or more named payloads."""
    out: dict[str, object] = {MachineKey.META: dict(meta)}
    for name, payload in payloads.items():
        out[name] = normalize_payload(payload)
    return out


def build_ndjson_record(
    *,
    kind: str,
    meta: MetaPayload,
    payload: object,
    container_key: str | None = None,
) -> dict[str, object]:
    """Build one NDJSON record ``{"kind": kind, "meta": meta, <container_key>: payload}``.

    ``container_key`` defaults to ``kind``.
    """
    return {
        MachineKey.KIND: kind,
        MachineKey.META: dict(meta),
        container_key or kind: normalize_payload(payload),
    }


def serialize_json_envelope(meta: MetaPayload, **payloads: object) -> str:
    """Serialize a JSON envelope (pretty-printed, no trailing newline)."""
    return json.dumps(build_json_envelope(meta=meta, **payloads), indent=2)


def iter_ndjson_strings(records: Iterable[Mapping[str, object]]) -> Iterator[str]:
    """Serialize shaped NDJSON records into per-line JSON strings."""
    for record in records:
        yield json.dumps(record)
