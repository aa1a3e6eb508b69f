# topmark:header:start
#
#   project      : APISurface
#   file         : strategies_apisurface.py
#   file_relpath : tests/strategies_apisurface.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for generating API XML documents.

The generated APIs are self-contained: member types come from a fixed set of
primitives and platform classes, so removing one generated class never leaves
a dangling reference in another.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from hypothesis import strategies as st

from tests.conftest import api_xml, class_xml, ctor_xml, field_xml, method_xml, package_xml

Draw = Callable[[st.SearchStrategy[Any]], Any]

MEMBER_TYPES: tuple[str, ...] = (
    "int",
    "long",
    "boolean",
    "double[]",
    "java.lang.String",
    "java.lang.Object",
    "java.util.List<java.lang.String>",
    "java.util.Map<java.lang.String, java.lang.Integer>",
)
RETURN_TYPES: tuple[str, ...] = ("void", *MEMBER_TYPES)
EXCEPTIONS: tuple[str, ...] = (
    "java.io.IOException",
    "java.lang.IllegalStateException",
    "java.util.concurrent.TimeoutException",
)
VISIBILITIES: tuple[str, ...] = ("public", "protected")

s_member_name: st.SearchStrategy[str] = st.from_regex(r"[a-z][a-zA-Z0-9]{0,6}", fullmatch=True)
s_class_name: st.SearchStrategy[str] = st.from_regex(r"[A-Z][a-zA-Z0-9]{0,6}", fullmatch=True)
s_package_name: st.SearchStrategy[str] = st.from_regex(
    r"com\.[a-z]{1,6}(\.[a-z]{1,6})?", fullmatch=True
)


@dataclass
class ApiShape:
    """Rendered classes grouped by package, ready to assemble into a document."""

    packages: dict[str, dict[str, str]] = field(default_factory=lambda: {})

    def class_names(self) -> list[tuple[str, str]]:
        """Return every ``(package, simple name)`` pair, sorted."""
        return sorted((pkg, cls) for pkg, classes in self.packages.items() for cls in classes)

    def render(self, *, drop: tuple[str, str] | None = None, reverse: bool = False) -> str:
        """Return the API XML document, optionally without one class or in reverse order."""
        packages: list[str] = []
        for pkg, classes in sorted(self.packages.items(), reverse=reverse):
            kept: list[str] = [xml for name, xml in classes.items() if (pkg, name) != drop]
            if reverse:
                kept.reverse()
            packages.append(package_xml(pkg, *kept))
        return api_xml(*packages)


@st.composite
def s_method_xml(draw: Draw, name: str) -> str:
    """A ``<method>`` element named ``name`` with random signature and qualifiers."""
    params: list[str] = draw(st.lists(st.sampled_from(MEMBER_TYPES), max_size=3))
    return method_xml(
        name,
        *params,
        ret=draw(st.sampled_from(RETURN_TYPES)),
        throws=draw(st.lists(st.sampled_from(EXCEPTIONS), max_size=2, unique=True)),
        static=draw(st.booleans()),
        final=draw(st.booleans()),
        synchronized=draw(st.booleans()),
        deprecated=draw(st.booleans()),
        visibility=draw(st.sampled_from(VISIBILITIES)),
    )


@st.composite
def s_field_xml(draw: Draw, name: str) -> str:
    """A ``<field>`` element named ``name``; about half carry a constant value."""
    value: str | None = draw(st.none() | st.from_regex(r"-?[0-9]{1,4}", fullmatch=True))
    return field_xml(
        name,
        draw(st.sampled_from(MEMBER_TYPES)),
        value=value,
        static=draw(st.booleans()),
        final=draw(st.booleans()),
        transient=draw(st.booleans()),
        volatile=draw(st.booleans()),
        deprecated=draw(st.booleans()),
        visibility=draw(st.sampled_from(VISIBILITIES)),
    )


@st.composite
def s_class_xml(draw: Draw, name: str) -> str:
    """A ``<class>`` element with unique method, constructor and field signatures."""
    method_names: list[str] = draw(st.lists(s_member_name, max_size=4, unique=True))
    field_names: list[str] = draw(st.lists(s_member_name, max_size=3, unique=True))
    ctor_params: list[tuple[str, ...]] = draw(
        st.lists(
            st.lists(st.sampled_from(("int", "long", "java.lang.String")), max_size=2).map(tuple),
            max_size=2,
            unique=True,
        )
    )
    members: list[str] = [draw(s_method_xml(n)) for n in method_names]
    members += [ctor_xml(name, *params) for params in ctor_params]
    members += [draw(s_field_xml(n)) for n in field_names]
    return class_xml(
        name,
        *members,
        abstract=draw(st.booleans()),
        final=draw(st.booleans()),
        deprecated=draw(st.booleans()),
        visibility=draw(st.sampled_from(VISIBILITIES)),
    )


@st.composite
def s_api_shape(draw: Draw, max_packages: int = 3, max_classes: int = 3) -> ApiShape:
    """An API of up to ``max_packages`` packages with at least one class each."""
    shape = ApiShape()
    names: list[str] = draw(
        st.lists(s_package_name, min_size=1, max_size=max_packages, unique=True)
    )
    for pkg in names:
        classes: list[str] = draw(
            st.lists(s_class_name, min_size=1, max_size=max_classes, unique=True)
        )
        shape.packages[pkg] = {cls: draw(s_class_xml(cls)) for cls in classes}
    return shape
