# topmark:header:start
#
#   project      : APISurface
#   file         : __init__.py
#   file_relpath : src/apisurface/apicheck/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""API XML documents and the compatibility diff engine."""

from __future__ import annotations

from apisurface.apicheck.checker import ApiChecker, check_api
from apisurface.apicheck.errors import ApiParseError
from apisurface.apicheck.xml_reader import parse_api_xml, read_api_xml, read_api_xml_text
from apisurface.apicheck.xml_writer import write_api_xml

__all__ = [
    "ApiChecker",
    "ApiParseError",
    "check_api",
    "parse_api_xml",
    "read_api_xml",
    "read_api_xml_text",
    "write_api_xml",
]
