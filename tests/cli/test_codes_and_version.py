# topmark:header:start
#
#   project      : APISurface
#   file         : test_codes_and_version.py
#   file_relpath : tests/cli/test_codes_and_version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests: `version` and `codes` output in every format."""

from __future__ import annotations

from apisurface.constants import APISURFACE_VERSION
from apisurface.diagnostic.codes import ALL_ERROR_CODES
from tests.cli.conftest import assert_SUCCESS, parse_json_output, parse_ndjson_output, run_cli


def test_version_outputs_the_version() -> None:
    """Default output is the bare version string."""
    result = run_cli(["--no-color", "version"])
    assert_SUCCESS(result)
    assert result.output.strip() == APISURFACE_VERSION


def test_version_verbose_has_a_heading() -> None:
    """``-v`` prints a heading above the version."""
    result = run_cli(["--no-color", "-v", "version"])
    assert_SUCCESS(result)
    assert result.output.splitlines()[0] == "APISurface version:"
    assert APISURFACE_VERSION in result.output


def test_version_json_and_ndjson() -> None:
    """Machine formats carry the version alongside the meta block."""
    payload = parse_json_output(run_cli(["version", "--format", "json"]))
    assert payload["version"] == APISURFACE_VERSION
    assert payload["meta"] == {"tool": "apisurface", "version": APISURFACE_VERSION}

    (record,) = parse_ndjson_output(run_cli(["version", "--format", "ndjson"]))
    assert record["kind"] == "version"
    assert record["version"] == APISURFACE_VERSION


def test_codes_lists_every_code() -> None:
    """One aligned line per code: number, name and default severity."""
    result = run_cli(["--no-color", "codes"])
    assert_SUCCESS(result)
    lines: list[str] = result.output.splitlines()
    assert len(lines) == len(ALL_ERROR_CODES)
    assert lines[0].split() == ["1", "UNRESOLVED_LINK", "warning"]
    assert lines[-1].split() == ["42", "CHANGED_SYNCHRONIZED", "error"]
    assert len({line.index(line.split()[2]) for line in lines}) == 1


def test_codes_json() -> None:
    """``--format json`` lists codes ordered by number."""
    result = run_cli(["codes", "--format", "json"])
    assert_SUCCESS(result)
    entries = parse_json_output(result)["codes"]
    assert [e["code"] for e in entries] == list(range(1, 43))
    assert entries[11] == {"code": 12, "name": "DEPRECATED", "default_severity": "hidden"}


def test_codes_ndjson() -> None:
    """``--format ndjson`` emits one ``code`` record per code."""
    records = parse_ndjson_output(run_cli(["codes", "--format", "ndjson"]))
    assert {r["kind"] for r in records} == {"code"}
    assert records[9]["code"]["name"] == "UNAVAILABLE_SYMBOL"
