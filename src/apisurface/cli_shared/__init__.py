# topmark:header:start
#
#   project      : APISurface
#   file         : __init__.py
#   file_relpath : src/apisurface/cli_shared/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Framework-agnostic CLI helpers shared by the APISurface commands.

Nothing in this package imports Click; the Click-aware layer lives in
`apisurface.cli`.
"""

from __future__ import annotations
