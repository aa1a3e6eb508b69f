# topmark:header:start
#
#   project      : APISurface
#   file         : test_checker_properties.py
#   file_relpath : tests/apicheck/test_checker_properties.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Property tests for the compatibility checker on generated APIs.

Asserts that:
1) an API compared with itself is consistent and silent,
2) dropping one class is reported as exactly one removal (and one addition
   the other way round),
3) a document written by `write_api_xml` compares equal to its source,
4) the consistency verdict does not depend on the comparison direction, and
5) declaration order does not matter.
"""

from __future__ import annotations

import io

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from apisurface.apicheck.checker import ApiChecker
from apisurface.apicheck.xml_writer import write_api_xml
from apisurface.diagnostic.model import DiagnosticRegistry
from tests.conftest import check_xml, code_names, messages, snapshot_from_xml
from tests.strategies_apisurface import ApiShape, s_api_shape

# Mark the entire test module
pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow

PROPERTY_SETTINGS = settings(
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
    max_examples=30,
)


@PROPERTY_SETTINGS
@given(shape=s_api_shape())
def test_api_is_consistent_with_itself(shape: ApiShape) -> None:
    """Self-comparison reports no finding, not even a suppressed one."""
    doc: str = shape.render()
    consistent, registry = check_xml(doc, doc)
    assert consistent
    assert len(registry) == 0
    assert registry.suppressed_count == 0


@PROPERTY_SETTINGS
@given(shape=s_api_shape(), data=st.data())
def test_dropped_class_is_one_removal_and_one_addition(
    shape: ApiShape, data: st.DataObject
) -> None:
    """Removing a class is mirrored by adding it when the direction is swapped."""
    pkg, cls = data.draw(st.sampled_from(shape.class_names()))
    full: str = shape.render()
    reduced: str = shape.render(drop=(pkg, cls))

    consistent, registry = check_xml(full, reduced)
    assert not consistent
    assert messages(registry) == [f"Removed public class {pkg}.{cls}"]
    assert code_names(registry) == ["REMOVED_CLASS"]

    consistent, registry = check_xml(reduced, full)
    assert not consistent
    assert messages(registry) == [f"Added class {cls} to package {pkg}"]
    assert code_names(registry) == ["ADDED_CLASS"]


@PROPERTY_SETTINGS
@given(shape=s_api_shape())
def test_written_api_matches_its_source(shape: ApiShape) -> None:
    """Serializing a snapshot and reading it back loses no API detail."""
    source = snapshot_from_xml(shape.render(), label="source.xml")
    buf = io.StringIO()
    write_api_xml(source, buf)
    written = snapshot_from_xml(buf.getvalue(), label="written.xml")

    registry = DiagnosticRegistry()
    assert ApiChecker(registry).check_snapshots(source, written)
    assert registry.suppressed_count == 0


@PROPERTY_SETTINGS
@given(old=s_api_shape(max_packages=1), new=s_api_shape(max_packages=1))
def test_verdict_is_symmetric(old: ApiShape, new: ApiShape) -> None:
    """If A is consistent with B then B is consistent with A."""
    forward, _ = check_xml(old.render(), new.render())
    backward, _ = check_xml(new.render(), old.render())
    assert forward == backward


@PROPERTY_SETTINGS
@given(shape=s_api_shape())
def test_declaration_order_is_irrelevant(shape: ApiShape) -> None:
    """Packages and classes are matched by name, not by document position."""
    consistent, registry = check_xml(shape.render(), shape.render(reverse=True))
    assert consistent
    assert len(registry) == 0
