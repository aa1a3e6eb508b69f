# topmark:header:start
#
#   project      : APISurface
#   file         : __init__.py
#   file_relpath : src/apisurface/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command-line interface for APISurface."""

from __future__ import annotations
