# topmark:header:start
#
#   project      : APISurface
#   file         : __main__.py
#   file_relpath : src/apisurface/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running APISurface via ``python -m apisurface``.

It delegates directly to :func:`apisurface.cli.main.cli`, ensuring a single,
authoritative CLI entry point regardless of how APISurface is launched.

Examples:
    Compare two API snapshots using the module interface::

        python -m apisurface check old.xml new.xml
"""

from __future__ import annotations

from apisurface.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
