# topmark:header:start
#
#   project      : APISurface
#   file         : __init__.py
#   file_relpath : src/apisurface/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click subcommands of the `apisurface` group."""

from __future__ import annotations
