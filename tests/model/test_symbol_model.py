# topmark:header:start
#
#   project      : APISurface
#   file         : test_symbol_model.py
#   file_relpath : tests/model/test_symbol_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the symbol model: scopes, doc-comment tags, types, classes and snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from apisurface.builder.declarations import (
    AnnotationDecl,
    ClassDecl,
    FieldDecl,
    MethodDecl,
    ParameterDecl,
    TypeDecl,
)
from apisurface.builder.typenames import parse_type_decl
from apisurface.model.classes import ClassInfo, ClassKind
from apisurface.model.comments import DocComment
from apisurface.model.modifiers import Scope
from apisurface.model.types import erase_type_name
from tests.conftest import (
    api_xml,
    class_xml,
    ctor_xml,
    method_xml,
    package_xml,
    parametrize,
    snapshot_from_decls,
    snapshot_from_xml,
)

if TYPE_CHECKING:
    from apisurface.model.members import MethodInfo
    from apisurface.model.snapshot import Snapshot


@parametrize(
    "token, expected",
    [
        ("public", Scope.PUBLIC),
        ("Protected", Scope.PROTECTED),
        ("", Scope.PACKAGE_PRIVATE),
        ("package", Scope.PACKAGE_PRIVATE),
        ("package-private", Scope.PACKAGE_PRIVATE),
        ("default", Scope.PACKAGE_PRIVATE),
        ("private", Scope.PRIVATE),
        ("friend", None),
    ],
)
def test_scope_parse(token: str, expected: Scope | None) -> None:
    """Scopes parse from their XML spelling, member names and aliases."""
    assert Scope.parse(token) is expected


def test_scope_ordering() -> None:
    """Scopes order from public down to private."""
    assert Scope.PUBLIC.at_least(Scope.PROTECTED)
    assert Scope.PROTECTED.at_least(Scope.PROTECTED)
    assert not Scope.PACKAGE_PRIVATE.at_least(Scope.PROTECTED)
    assert Scope.PACKAGE_PRIVATE.at_least(Scope.PRIVATE)
    assert not Scope.PRIVATE.at_least(Scope.PACKAGE_PRIVATE)


@parametrize(
    "raw, hidden, deprecated",
    [
        ("", False, False),
        ("Plain text.", False, False),
        ("Internal.\n@hide", True, False),
        ("@pending until the next release", True, False),
        ("@deprecated use {@link Other}", False, True),
        ("See {@hide} inline", False, False),
        ("mail me at someone@hide.example", False, False),
        ("@deprecated\n@hide", True, True),
    ],
)
def test_doc_comment_tags(raw: str, hidden: bool, deprecated: bool) -> None:
    """Only block tags drive hiding and deprecation; inline tags do not."""
    comment = DocComment(raw)
    assert comment.is_hidden is hidden
    assert comment.is_deprecated is deprecated


@parametrize(
    "text, erased",
    [
        ("int", "int"),
        ("java.util.List<T>", "java.util.List"),
        ("java.util.Map<K, java.util.List<V>>[]", "java.util.Map[]"),
    ],
)
def test_erase_type_name(text: str, erased: str) -> None:
    """Generic argument lists are stripped at every depth."""
    assert erase_type_name(text) == erased


def _method(snapshot: Snapshot, cls: str, name: str) -> MethodInfo:
    owner: ClassInfo | None = snapshot.get_class(cls)
    assert owner is not None
    for m in owner.methods:
        if m.name == name:
            return m
    raise AssertionError(f"{cls}.{name} not found")


def test_hashable_name_uses_erased_qualified_types() -> None:
    """The matching key spells parameters as erased qualified names; varargs is an array."""
    snapshot = snapshot_from_xml(
        api_xml(
            package_xml(
                "p",
                class_xml(
                    "C",
                    method_xml(
                        "m", "java.util.List<java.lang.String>", "int[]", "java.lang.Object..."
                    ),
                ),
            )
        )
    )
    m: MethodInfo = _method(snapshot, "p.C", "m")
    assert m.hashable_name == "m:java.util.List:int[]:java.lang.Object[]"
    assert m.is_varargs
    assert m.pretty_signature == "m(List,int[],Object...)"
    assert m.signature == "(java.util.List, int[], java.lang.Object[])"


def test_constructor_pretty_signature() -> None:
    """Constructors render with the class name and simple parameter types."""
    snapshot = snapshot_from_xml(
        api_xml(package_xml("p", class_xml("C", ctor_xml("C", "int", "java.lang.String"))))
    )
    cls: ClassInfo | None = snapshot.get_class("p.C")
    assert cls is not None
    (ctor,) = cls.constructors
    assert ctor.is_constructor
    assert ctor.pretty_signature == "C(int,String)"


def test_type_nodes_are_shared_per_structure() -> None:
    """Structurally identical type usages are the same node within a snapshot."""
    list_of_string: TypeDecl = parse_type_decl("java.util.List<java.lang.String>").decl
    snapshot = snapshot_from_decls(
        ClassDecl(
            "p.C",
            package="p",
            fields=(FieldDecl("a", list_of_string), FieldDecl("b", list_of_string)),
        ),
        packages=["p"],
    )
    cls: ClassInfo | None = snapshot.get_class("p.C")
    assert cls is not None
    a, b = cls.fields
    assert a.type is b.type
    assert a.type.full_name == "java.util.List<java.lang.String>"
    assert a.type.erased_name == "java.util.List"
    assert [c.qualified_name for c in a.type.argument_classes()] == ["java.lang.String"]


def test_wildcard_full_name() -> None:
    """Wildcards render with their bounds."""
    decl: TypeDecl = parse_type_decl("java.util.List<? extends java.lang.Number>").decl
    snapshot = snapshot_from_decls(
        ClassDecl("p.C", package="p", fields=(FieldDecl("f", decl),)),
    )
    cls: ClassInfo | None = snapshot.get_class("p.C")
    assert cls is not None
    assert cls.fields[0].type.full_name == "java.util.List<? extends java.lang.Number>"


def test_ancestors_visit_diamond_once() -> None:
    """Overlapping interface lists are walked once per supertype."""
    snapshot = snapshot_from_decls(
        ClassDecl("p.I1", package="p", kind=ClassKind.INTERFACE),
        ClassDecl("p.I2", package="p", kind=ClassKind.INTERFACE, interfaces=("p.I1",)),
        ClassDecl("p.I3", package="p", kind=ClassKind.INTERFACE, interfaces=("p.I1",)),
        ClassDecl("p.C", package="p", interfaces=("p.I2", "p.I3")),
    )
    cls: ClassInfo | None = snapshot.get_class("p.C")
    assert cls is not None
    names: list[str] = [a.qualified_name for a in cls.ancestors()]
    assert sorted(names) == ["java.lang.Object", "p.I1", "p.I2", "p.I3"]
    assert cls.implements_interface("p.I1")
    assert not cls.implements_interface("p.Other")


def test_cyclic_superclasses_terminate() -> None:
    """A cyclic superclass chain is walked once."""
    snapshot = snapshot_from_decls(
        ClassDecl("p.A", package="p", superclass="p.B"),
        ClassDecl("p.B", package="p", superclass="p.A"),
    )
    a: ClassInfo | None = snapshot.get_class("p.A")
    assert a is not None
    assert [c.qualified_name for c in a.superclass_chain()] == ["p.B"]
    assert [c.qualified_name for c in a.ancestors()] == ["p.B"]


def test_inherits_method_searches_ancestors() -> None:
    """A method declared on any ancestor is found by its hashable name."""
    run = MethodDecl("run", parameters=(ParameterDecl("x", TypeDecl.of("int")),))
    snapshot = snapshot_from_decls(
        ClassDecl("p.Base", package="p", methods=(run,)),
        ClassDecl("p.Mid", package="p", superclass="p.Base"),
        ClassDecl("p.Leaf", package="p", superclass="p.Mid"),
    )
    leaf: ClassInfo | None = snapshot.get_class("p.Leaf")
    assert leaf is not None
    found: MethodInfo | None = leaf.inherits_method("run:int")
    assert found is not None
    assert found.containing_class.qualified_name == "p.Base"
    assert leaf.inherits_method("run:long") is None


def test_hidden_propagates_from_package_and_container() -> None:
    """A class is hidden by its own comment, an enclosing class or its package."""
    snapshot = snapshot_from_decls(
        ClassDecl("p.Outer", package="p", comment="@hide"),
        ClassDecl("p.Outer.Inner", package="p", containing_class="p.Outer"),
        ClassDecl("p.Visible", package="p"),
    )
    outer = snapshot.get_class("p.Outer")
    inner = snapshot.get_class("p.Outer.Inner")
    visible = snapshot.get_class("p.Visible")
    assert outer is not None and inner is not None and visible is not None
    assert inner.simple_name == "Outer.Inner"
    assert inner.containing_class is outer
    assert inner in outer.inner_classes
    assert outer.is_hidden and inner.is_hidden
    assert not visible.is_hidden


def test_deprecation_sources_and_mismatch() -> None:
    """Deprecation comes from the doc tag or the annotation; disagreement is a mismatch."""
    snapshot = snapshot_from_decls(
        ClassDecl("p.Tagged", package="p", comment="@deprecated"),
        ClassDecl(
            "p.Annotated",
            package="p",
            annotations=(AnnotationDecl("java.lang.Deprecated"),),
        ),
        ClassDecl(
            "p.Both",
            package="p",
            comment="@deprecated",
            annotations=(AnnotationDecl("java.lang.Deprecated"),),
        ),
    )
    tagged = snapshot.get_class("p.Tagged")
    annotated = snapshot.get_class("p.Annotated")
    both = snapshot.get_class("p.Both")
    assert tagged is not None and annotated is not None and both is not None
    assert tagged.is_deprecated and tagged.deprecation_mismatch
    assert annotated.is_deprecated and annotated.deprecation_mismatch
    assert both.is_deprecated and not both.deprecation_mismatch


def test_snapshot_is_frozen_after_build() -> None:
    """Registration on a built snapshot raises; the mappings are read-only."""
    snapshot = snapshot_from_decls(ClassDecl("p.C", package="p"))
    assert snapshot.is_frozen
    with pytest.raises(RuntimeError):
        snapshot.add_class(ClassInfo(qualified_name="p.D", simple_name="D"))
    with pytest.raises(TypeError):
        stub = ClassInfo(qualified_name="p.D", simple_name="D")
        snapshot.classes["p.D"] = stub  # type: ignore[index]


def test_all_classes_sorted_and_stubs_separate() -> None:
    """Declared classes are sorted; referenced undeclared classes become external stubs."""
    snapshot = snapshot_from_decls(
        ClassDecl("p.Zeta", package="p", superclass="q.Missing"),
        ClassDecl("p.Alpha", package="p"),
    )
    assert [c.qualified_name for c in snapshot.all_classes()] == ["p.Alpha", "p.Zeta"]
    assert set(snapshot.external_classes) == {"q.Missing", "java.lang.Object"}
    stub = snapshot.external_classes["q.Missing"]
    assert not stub.defined_locally
    assert stub.containing_package is None
    assert stub.package_name is None


def test_classes_compare_by_qualified_name() -> None:
    """Entities from different snapshots match by name."""
    first = snapshot_from_decls(ClassDecl("p.C", package="p"))
    second = snapshot_from_decls(ClassDecl("p.C", package="p", comment="changed"))
    assert first.get_class("p.C") == second.get_class("p.C")
    assert hash(first.get_class("p.C")) == hash(second.get_class("p.C"))
