# topmark:header:start
#
#   project      : APISurface
#   file         : __init__.py
#   file_relpath : src/apisurface/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""APISurface package.

APISurface builds an in-memory model of a library's public API surface,
computes the set of classes that must stay visible for that surface to be
self-consistent, and compares two surface snapshots to report compatibility
breaks as typed diagnostics.
"""

from __future__ import annotations
