# topmark:header:start
#
#   project      : APISurface
#   file         : test_api_checker.py
#   file_relpath : tests/apicheck/test_api_checker.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `ApiChecker` and `check_api`.

Each test builds an old and a new API XML document that differ in one
respect and asserts the exact findings reported.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from apisurface.apicheck.checker import check_api
from apisurface.diagnostic import codes
from apisurface.diagnostic.codes import Severity
from apisurface.diagnostic.model import DiagnosticRegistry
from tests.conftest import (
    api_xml,
    check_xml,
    class_xml,
    code_names,
    ctor_xml,
    field_xml,
    messages,
    method_xml,
    package_xml,
    parametrize,
)

if TYPE_CHECKING:
    from pathlib import Path


def _one_class(*members: str, name: str = "C", **attrs: Any) -> str:
    return api_xml(package_xml("p", class_xml(name, *members, **attrs)))


def test_identical_documents_are_consistent() -> None:
    """Comparing a document with itself reports nothing."""
    doc: str = _one_class(
        method_xml("m", "int", ret="java.lang.String", throws=("java.io.IOException",)),
        field_xml("F", "int", static=True, final=True, value="3"),
        ctor_xml("C"),
    )
    consistent, registry = check_xml(doc, doc)
    assert consistent
    assert len(registry) == 0
    assert registry.suppressed_count == 0


def test_added_and_removed_packages() -> None:
    """Package removal and addition are reported with the package name."""
    old: str = api_xml(package_xml("a", class_xml("X")))
    new: str = api_xml(package_xml("b", class_xml("X")))
    consistent, registry = check_xml(old, new)
    assert not consistent
    assert sorted(messages(registry)) == ["Added package b", "Removed package a"]
    assert sorted(code_names(registry)) == ["ADDED_PACKAGE", "REMOVED_PACKAGE"]


def test_added_and_removed_classes() -> None:
    """Classes are matched by name within their package."""
    old: str = api_xml(package_xml("p", class_xml("Old"), class_xml("Kept")))
    new: str = api_xml(package_xml("p", class_xml("Kept"), class_xml("Fresh")))
    consistent, registry = check_xml(old, new)
    assert not consistent
    assert sorted(messages(registry)) == [
        "Added class Fresh to package p",
        "Removed public class p.Old",
    ]


def test_class_interface_declaration_change() -> None:
    """Turning a class into an interface is a class change."""
    old: str = api_xml(package_xml("p", class_xml("T")))
    new: str = api_xml(package_xml("p", class_xml("T", tag="interface")))
    _, registry = check_xml(old, new)
    assert "Class p.T changed class/interface declaration" in messages(registry)
    assert "CHANGED_CLASS" in code_names(registry)


def test_interfaces_added_and_removed() -> None:
    """Declared interfaces are compared through the ancestor chain of the other side."""
    old: str = api_xml(
        package_xml("p", class_xml("C", interfaces=("p.A",)), class_xml("A", tag="interface"))
    )
    new: str = api_xml(
        package_xml("p", class_xml("C", interfaces=("p.B",)), class_xml("B", tag="interface"))
    )
    consistent, registry = check_xml(old, new)
    assert not consistent
    found: list[str] = messages(registry)
    assert "Class p.C no longer implements p.A" in found
    assert "Added interface p.B to class p.C" in found


def test_interface_moved_to_superclass_is_still_implemented() -> None:
    """An interface now provided by a superclass is not reported as removed."""
    old: str = api_xml(
        package_xml(
            "p",
            class_xml("C", interfaces=("p.I",), extends="p.Base"),
            class_xml("Base"),
            class_xml("I", tag="interface"),
        )
    )
    new: str = api_xml(
        package_xml(
            "p",
            class_xml("C", extends="p.Base"),
            class_xml("Base", interfaces=("p.I",)),
            class_xml("I", tag="interface"),
        )
    )
    _, registry = check_xml(old, new)
    assert messages(registry) == ["Added interface p.I to class p.Base"]


def test_methods_added_and_removed() -> None:
    """Methods are matched by name and erased parameter types."""
    old: str = _one_class(method_xml("go", "int"))
    new: str = _one_class(method_xml("go", "long"))
    consistent, registry = check_xml(old, new)
    assert not consistent
    assert sorted(messages(registry)) == [
        "Added public method p.C.go",
        "Removed public method p.C.go",
    ]


def test_generic_arguments_do_not_affect_matching() -> None:
    """Parameters are matched on erased types."""
    old: str = _one_class(method_xml("put", "java.util.List<java.lang.String>"))
    new: str = _one_class(method_xml("put", "java.util.List<java.lang.Integer>"))
    consistent, registry = check_xml(old, new)
    assert consistent
    assert len(registry) == 0


def test_method_moved_to_superclass_is_not_removed() -> None:
    """A method removed from a class but inherited in the new version is still available."""
    old: str = api_xml(
        package_xml(
            "p",
            class_xml("Base"),
            class_xml("Child", method_xml("run"), extends="p.Base"),
        )
    )
    new: str = api_xml(
        package_xml(
            "p",
            class_xml("Base", method_xml("run")),
            class_xml("Child", extends="p.Base"),
        )
    )
    _, registry = check_xml(old, new)
    assert messages(registry) == ["Added public method p.Base.run"]


def test_method_pulled_down_from_superclass_is_not_added() -> None:
    """A method newly declared on a class that already inherited it is not an addition."""
    old: str = api_xml(
        package_xml(
            "p",
            class_xml("Base", method_xml("run")),
            class_xml("Child", extends="p.Base"),
        )
    )
    new: str = api_xml(
        package_xml(
            "p",
            class_xml("Base", method_xml("run")),
            class_xml("Child", method_xml("run"), extends="p.Base"),
        )
    )
    consistent, registry = check_xml(old, new)
    assert consistent
    assert len(registry) == 0


def test_constructors_added_and_removed() -> None:
    """Constructors use their short signature in messages."""
    old: str = _one_class(ctor_xml("C", "int", "java.lang.String"))
    new: str = _one_class(ctor_xml("C", "java.lang.Object..."))
    _, registry = check_xml(old, new)
    assert sorted(messages(registry)) == [
        "Added public constructor C(Object...)",
        "Removed public constructor C(int,String)",
    ]
    assert sorted(code_names(registry)) == ["ADDED_METHOD", "REMOVED_METHOD"]


def test_fields_added_and_removed() -> None:
    """Fields are matched by name."""
    old: str = _one_class(field_xml("a", "int"))
    new: str = _one_class(field_xml("b", "int"))
    _, registry = check_xml(old, new)
    assert sorted(messages(registry)) == ["Added public field p.C.b", "Removed field p.C.a"]


@parametrize(
    "old_attrs, new_attrs, message, code",
    [
        (
            {"abstract": False},
            {"abstract": True},
            "Class p.C changed abstract qualifier",
            "CHANGED_ABSTRACT",
        ),
        ({"final": False}, {"final": True}, "Class p.C changed final qualifier", "CHANGED_FINAL"),
        (
            {"static": True},
            {"static": False},
            "Class p.C changed static qualifier",
            "CHANGED_STATIC",
        ),
        (
            {"visibility": "public"},
            {"visibility": "protected"},
            "Class p.C scope changed from public to protected",
            "CHANGED_SCOPE",
        ),
        (
            {"deprecated": False},
            {"deprecated": True},
            "Class p.C has changed deprecation state",
            "CHANGED_DEPRECATED",
        ),
        (
            {},
            {"extends": "java.lang.Exception"},
            "Class p.C superclass changed from java.lang.Object to java.lang.Exception",
            "CHANGED_SUPERCLASS",
        ),
    ],
)
def test_class_level_changes(
    old_attrs: dict[str, Any], new_attrs: dict[str, Any], message: str, code: str
) -> None:
    """Each class qualifier change produces exactly one finding."""
    consistent, registry = check_xml(_one_class(**old_attrs), _one_class(**new_attrs))
    assert not consistent
    assert messages(registry) == [message]
    assert code_names(registry) == [code]


@parametrize(
    "old_attrs, new_attrs, message, code",
    [
        (
            {"ret": "int"},
            {"ret": "long"},
            "Method p.C.m has changed return type from int to long",
            "CHANGED_TYPE",
        ),
        (
            {"abstract": False},
            {"abstract": True},
            "Method p.C.m has changed 'abstract' qualifier",
            "CHANGED_ABSTRACT",
        ),
        (
            {"final": False},
            {"final": True},
            "Method p.C.m has changed 'final' qualifier",
            "CHANGED_FINAL",
        ),
        (
            {"static": False},
            {"static": True},
            "Method p.C.m has changed 'static' qualifier",
            "CHANGED_STATIC",
        ),
        (
            {"visibility": "protected"},
            {"visibility": "public"},
            "Method p.C.m changed scope from protected to public",
            "CHANGED_SCOPE",
        ),
        (
            {"deprecated": False},
            {"deprecated": True},
            "Method p.C.m has changed deprecation state",
            "CHANGED_DEPRECATED",
        ),
        (
            {"throws": ("java.io.IOException",)},
            {},
            "Method p.C.m no longer throws exception java.io.IOException",
            "CHANGED_THROWS",
        ),
        (
            {},
            {"throws": ("java.io.IOException",)},
            "Method p.C.m added thrown exception java.io.IOException",
            "CHANGED_THROWS",
        ),
    ],
)
def test_method_level_changes(
    old_attrs: dict[str, Any], new_attrs: dict[str, Any], message: str, code: str
) -> None:
    """Each method qualifier change produces exactly one finding."""
    consistent, registry = check_xml(
        _one_class(method_xml("m", **old_attrs)), _one_class(method_xml("m", **new_attrs))
    )
    assert not consistent
    assert messages(registry) == [message]
    assert code_names(registry) == [code]


def test_synchronized_change_is_an_error() -> None:
    """Changing ``synchronized`` is reported at error severity by default."""
    _, registry = check_xml(
        _one_class(method_xml("m")), _one_class(method_xml("m", synchronized=True))
    )
    (diag,) = list(registry)
    assert diag.severity is Severity.ERROR
    assert diag.message == "Method p.C.m has changed 'synchronized' qualifier from false to true"
    assert registry.had_error


def test_native_change_is_hidden_but_inconsistent() -> None:
    """A suppressed finding is not listed yet still makes the APIs inconsistent."""
    consistent, registry = check_xml(
        _one_class(method_xml("m")), _one_class(method_xml("m", native=True))
    )
    assert not consistent
    assert len(registry) == 0
    assert registry.suppressed_count == 1


def test_native_change_listed_when_enabled() -> None:
    """Severity overrides make hidden codes visible."""
    registry = DiagnosticRegistry({codes.CHANGED_NATIVE: Severity.WARNING})
    _, registry = check_xml(
        _one_class(method_xml("m")), _one_class(method_xml("m", native=True)), registry
    )
    assert messages(registry) == ["Method p.C.m has changed 'native' qualifier"]


def test_final_change_ignored_for_static_methods_and_final_classes() -> None:
    """Finality of static methods, or of methods in a final class, is not part of the API."""
    consistent, registry = check_xml(
        _one_class(method_xml("s", static=True)),
        _one_class(method_xml("s", static=True, final=True)),
    )
    assert consistent and len(registry) == 0

    consistent, registry = check_xml(
        _one_class(method_xml("m"), final=True),
        _one_class(method_xml("m", final=True), final=True),
    )
    assert consistent and len(registry) == 0


def test_finalize_throws_are_ignored() -> None:
    """The thrown exceptions of ``finalize()`` are not compared."""
    consistent, registry = check_xml(
        _one_class(method_xml("finalize", throws=("java.lang.Throwable",), visibility="protected")),
        _one_class(method_xml("finalize", visibility="protected")),
    )
    assert consistent
    assert len(registry) == 0


def test_finalize_with_parameters_throws_are_compared() -> None:
    """Only the parameterless ``finalize()`` is exempt from throws checks."""
    _, registry = check_xml(
        _one_class(method_xml("finalize", "int", throws=("java.lang.Throwable",))),
        _one_class(method_xml("finalize", "int")),
    )
    assert code_names(registry) == ["CHANGED_THROWS"]


def test_constructor_throws_are_compared() -> None:
    """Constructors are checked like methods, except for the return type."""
    _, registry = check_xml(
        _one_class(ctor_xml("C", "int")),
        _one_class(ctor_xml("C", "int", throws=("java.io.IOException",))),
    )
    assert messages(registry) == ["Method p.C.C added thrown exception java.io.IOException"]


@parametrize(
    "old_attrs, new_attrs, message, code",
    [
        (
            {"type_name": "int"},
            {"type_name": "long"},
            "Field p.C.f has changed type",
            "CHANGED_TYPE",
        ),
        (
            {"value": "1"},
            {"value": "2"},
            "Field p.C.f has changed value from 1 to 2",
            "CHANGED_VALUE",
        ),
        (
            {},
            {"value": "2"},
            "Field p.C.f has changed value from None to 2",
            "CHANGED_VALUE",
        ),
        (
            {"visibility": "public"},
            {"visibility": "protected"},
            "Field p.C.f changed scope from public to protected",
            "CHANGED_SCOPE",
        ),
        (
            {"static": False},
            {"static": True},
            "Field p.C.f has changed 'static' qualifier",
            "CHANGED_STATIC",
        ),
        (
            {"final": False},
            {"final": True},
            "Field p.C.f has changed 'final' qualifier",
            "CHANGED_FINAL",
        ),
        (
            {"transient": False},
            {"transient": True},
            "Field p.C.f has changed 'transient' qualifier",
            "CHANGED_TRANSIENT",
        ),
        (
            {"volatile": True},
            {"volatile": False},
            "Field p.C.f has changed 'volatile' qualifier",
            "CHANGED_VOLATILE",
        ),
        (
            {"deprecated": False},
            {"deprecated": True},
            "Field p.C.f has changed deprecation state",
            "CHANGED_DEPRECATED",
        ),
    ],
)
def test_field_level_changes(
    old_attrs: dict[str, Any], new_attrs: dict[str, Any], message: str, code: str
) -> None:
    """Each field change produces exactly one finding."""
    old: dict[str, Any] = dict(old_attrs)
    new: dict[str, Any] = dict(new_attrs)
    old_type: str = old.pop("type_name", "int")
    new_type: str = new.pop("type_name", "int")
    consistent, registry = check_xml(
        _one_class(field_xml("f", old_type, **old)),
        _one_class(field_xml("f", new_type, **new)),
    )
    assert not consistent
    assert messages(registry) == [message]
    assert code_names(registry) == [code]


def test_findings_are_positioned_in_the_new_document() -> None:
    """Changes are anchored at the new declaration, removals at the old one."""
    old: str = "<api>\n" + package_xml("p", class_xml("C", method_xml("gone"))) + "\n</api>"
    new: str = "<api>\n" + package_xml("p", class_xml("C", abstract=True)) + "\n</api>"
    _, registry = check_xml(old, new)
    rendered: list[str] = [d.render() for d in registry]
    assert rendered == [
        "new.xml:3: warning 37: Class p.C changed abstract qualifier",
        "old.xml:4: warning 26: Removed public method p.C.gone",
    ]


def test_check_api_reads_files(tmp_path: Path) -> None:
    """`check_api` reads both documents from disk."""
    old_path: Path = tmp_path / "old.xml"
    new_path: Path = tmp_path / "new.xml"
    old_path.write_text(_one_class(field_xml("f", "int")), encoding="utf-8")
    new_path.write_text(_one_class(), encoding="utf-8")
    registry = DiagnosticRegistry(warnings_as_errors=True)
    assert not check_api(old_path, new_path, registry)
    (diag,) = list(registry)
    assert diag.severity is Severity.ERROR
    assert diag.position.file == str(old_path)
    assert diag.message == "Removed field p.C.f"
