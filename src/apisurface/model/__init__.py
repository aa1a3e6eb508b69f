# topmark:header:start
#
#   project      : APISurface
#   file         : __init__.py
#   file_relpath : src/apisurface/model/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Symbol model: snapshots, packages, classes, members and type references.

Entities are created by `apisurface.builder.SnapshotBuilder` and are
read-only once the owning `Snapshot` is frozen. Classes compare equal by
qualified name, so entities from two snapshots can be matched by name.
"""

from __future__ import annotations
