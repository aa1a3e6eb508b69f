# topmark:header:start
#
#   project      : APISurface
#   file         : __init__.py
#   file_relpath : src/apisurface/closure/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Visibility closure over a built snapshot."""

from __future__ import annotations

from apisurface.closure.engine import ClosureResult, compute_closure
from apisurface.closure.visibility import ClosurePolicy, VisibilityPolicy

__all__ = ["ClosurePolicy", "ClosureResult", "VisibilityPolicy", "compute_closure"]
