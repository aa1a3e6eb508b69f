# topmark:header:start
#
#   project      : APISurface
#   file         : __init__.py
#   file_relpath : src/apisurface/builder/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Snapshot construction from symbol declarations.

Front-ends (the TOML symbol-file loader, the API XML reader, or tests) produce
`apisurface.builder.declarations` records; `SnapshotBuilder` turns them into a
frozen `apisurface.model.snapshot.Snapshot`.
"""

from __future__ import annotations

from apisurface.builder.builder import SnapshotBuilder, build_snapshot, type_key

__all__ = ["SnapshotBuilder", "build_snapshot", "type_key"]
