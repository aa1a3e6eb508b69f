# topmark:header:start
#
#   project      : APISurface
#   file         : __init__.py
#   file_relpath : src/apisurface/diagnostic/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic codes, severities and the per-run diagnostic registry.

Layers:

- **codes**: the stable numeric error-code table and the `Severity` levels.
- **model**: `SourcePosition`, the `Diagnostic` value object and the
  `DiagnosticRegistry` that collects, deduplicates and orders diagnostics.
- **machine**: JSON-friendly shapes for machine-readable output.
"""

from __future__ import annotations
