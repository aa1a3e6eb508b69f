# topmark:header:start
#
#   project      : APISurface
#   file         : checker.py
#   file_relpath : src/apisurface/apicheck/checker.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Compatibility diff between two snapshots.

`ApiChecker` walks an old and a new snapshot in parallel, matching packages
and classes by name, methods and constructors by hashable name, and fields by
name. Every difference is reported to the registry; the walk never stops
early. Each ``check_*`` method returns True when nothing was found at its
level or below.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from apisurface.apicheck.xml_reader import read_api_xml
from apisurface.config.logging import get_logger
from apisurface.diagnostic import codes as c

if TYPE_CHECKING:
    from apisurface.config.logging import ApiSurfaceLogger
    from apisurface.diagnostic.codes import ErrorCode
    from apisurface.diagnostic.model import DiagnosticRegistry, SourcePosition
    from apisurface.model.classes import ClassInfo
    from apisurface.model.members import FieldInfo, MethodInfo
    from apisurface.model.packages import PackageInfo
    from apisurface.model.snapshot import Snapshot

logger: ApiSurfaceLogger = get_logger(__name__)


def _type_name(method: MethodInfo) -> str | None:
    return method.return_type.full_name if method.return_type is not None else None


class ApiChecker:
    """Report API differences between snapshots into a registry.

    Args:
        registry: Receives the findings.
    """

    def __init__(self, registry: DiagnosticRegistry) -> None:
        self.registry: DiagnosticRegistry = registry

    def _report(self, code: ErrorCode, position: SourcePosition | None, text: str) -> None:
        self.registry.report(code, position, text)

    # ------------------------------ snapshot ------------------------------
    def check_snapshots(self, old: Snapshot, new: Snapshot) -> bool:
        """Compare two snapshots package by package.

        Returns:
            True if no difference was found.
        """
        consistent: bool = True
        for name in sorted(old.packages):
            old_pkg: PackageInfo = old.packages[name]
            new_pkg: PackageInfo | None = new.get_package(name)
            if new_pkg is None:
                self._report(c.REMOVED_PACKAGE, old_pkg.position, f"Removed package {name}")
                consistent = False
            elif not self.check_package(old_pkg, new_pkg):
                consistent = False
        for name in sorted(new.packages):
            if old.get_package(name) is None:
                new_pkg = new.packages[name]
                self._report(c.ADDED_PACKAGE, new_pkg.position, f"Added package {name}")
                consistent = False
        logger.debug("Checked %s against %s: consistent=%s", old.label, new.label, consistent)
        return consistent

    def check_package(self, old_pkg: PackageInfo, new_pkg: PackageInfo) -> bool:
        consistent: bool = True
        for simple in sorted(old_pkg.classes):
            old_cls: ClassInfo = old_pkg.classes[simple]
            new_cls: ClassInfo | None = new_pkg.classes.get(simple)
            if new_cls is None:
                self._report(
                    c.REMOVED_CLASS,
                    old_cls.position,
                    f"Removed public class {old_cls.qualified_name}",
                )
                consistent = False
            elif not self.check_class(old_cls, new_cls):
                consistent = False
        for simple in sorted(new_pkg.classes):
            if simple not in old_pkg.classes:
                self._report(
                    c.ADDED_CLASS,
                    new_pkg.classes[simple].position,
                    f"Added class {simple} to package {new_pkg.name}",
                )
                consistent = False
        return consistent

    # -------------------------------- class --------------------------------
    def check_class(self, old_cls: ClassInfo, new_cls: ClassInfo) -> bool:
        consistent: bool = True
        qn: str = new_cls.qualified_name
        pos: SourcePosition | None = new_cls.position

        if old_cls.is_interface != new_cls.is_interface:
            self._report(c.CHANGED_CLASS, pos, f"Class {qn} changed class/interface declaration")
            consistent = False

        for iface in old_cls.real_interfaces:
            if not new_cls.implements_interface(iface.qualified_name):
                self._report(
                    c.REMOVED_INTERFACE,
                    pos,
                    f"Class {old_cls.qualified_name} no longer implements {iface.qualified_name}",
                )
                consistent = False
        for iface in new_cls.real_interfaces:
            if not old_cls.implements_interface(iface.qualified_name):
                self._report(
                    c.ADDED_INTERFACE,
                    pos,
                    f"Added interface {iface.qualified_name} to class {old_cls.qualified_name}",
                )
                consistent = False

        if not self._check_methods(old_cls, new_cls):
            consistent = False
        if not self._check_constructors(old_cls, new_cls):
            consistent = False
        if not self._check_fields(old_cls, new_cls):
            consistent = False

        for flag, label, code in (
            ("is_abstract", "abstract", c.CHANGED_ABSTRACT),
            ("is_final", "final", c.CHANGED_FINAL),
            ("is_static", "static", c.CHANGED_STATIC),
        ):
            if getattr(old_cls, flag) != getattr(new_cls, flag):
                self._report(code, pos, f"Class {qn} changed {label} qualifier")
                consistent = False

        if old_cls.scope is not new_cls.scope:
            self._report(
                c.CHANGED_SCOPE,
                pos,
                f"Class {qn} scope changed from {old_cls.scope.key} to {new_cls.scope.key}",
            )
            consistent = False

        if old_cls.is_deprecated != new_cls.is_deprecated:
            self._report(c.CHANGED_DEPRECATED, pos, f"Class {qn} has changed deprecation state")
            consistent = False

        old_super: str | None = old_cls.superclass_name
        new_super: str | None = new_cls.superclass_name
        if old_super != new_super:
            self._report(
                c.CHANGED_SUPERCLASS,
                pos,
                f"Class {old_cls.qualified_name} superclass changed from "
                f"{old_super if old_super is not None else 'null'} to "
                f"{new_super if new_super is not None else 'null'}",
            )
            consistent = False
        return consistent

    def _check_methods(self, old_cls: ClassInfo, new_cls: ClassInfo) -> bool:
        consistent: bool = True
        old_methods: dict[str, MethodInfo] = old_cls.methods_by_hashable_name()
        new_methods: dict[str, MethodInfo] = new_cls.methods_by_hashable_name()
        for key in sorted(old_methods):
            old_m: MethodInfo = old_methods[key]
            new_m: MethodInfo | None = new_methods.get(key)
            if new_m is not None:
                if not self.check_method(old_m, new_m):
                    consistent = False
            elif new_cls.inherits_method(key) is None:
                # Still satisfied if an ancestor of the new class provides it.
                self._report(
                    c.REMOVED_METHOD,
                    old_m.position,
                    f"Removed public method {old_m.qualified_name}",
                )
                consistent = False
        for key in sorted(new_methods):
            if key in old_methods:
                continue
            if old_cls.inherits_method(key) is None:
                new_m = new_methods[key]
                self._report(
                    c.ADDED_METHOD,
                    new_m.position,
                    f"Added public method {new_m.qualified_name}",
                )
                consistent = False
        return consistent

    def _check_constructors(self, old_cls: ClassInfo, new_cls: ClassInfo) -> bool:
        consistent: bool = True
        old_ctors: dict[str, MethodInfo] = old_cls.constructors_by_hashable_name()
        new_ctors: dict[str, MethodInfo] = new_cls.constructors_by_hashable_name()
        for key in sorted(old_ctors):
            old_c: MethodInfo = old_ctors[key]
            new_c: MethodInfo | None = new_ctors.get(key)
            if new_c is None:
                self._report(
                    c.REMOVED_METHOD,
                    old_c.position,
                    f"Removed public constructor {old_c.pretty_signature}",
                )
                consistent = False
            elif not self.check_constructor(old_c, new_c):
                consistent = False
        for key in sorted(new_ctors):
            if key not in old_ctors:
                new_c = new_ctors[key]
                self._report(
                    c.ADDED_METHOD,
                    new_c.position,
                    f"Added public constructor {new_c.pretty_signature}",
                )
                consistent = False
        return consistent

    def _check_fields(self, old_cls: ClassInfo, new_cls: ClassInfo) -> bool:
        consistent: bool = True
        old_fields: dict[str, FieldInfo] = old_cls.fields_by_name()
        new_fields: dict[str, FieldInfo] = new_cls.fields_by_name()
        for name in sorted(old_fields):
            old_f: FieldInfo = old_fields[name]
            new_f: FieldInfo | None = new_fields.get(name)
            if new_f is None:
                self._report(
                    c.REMOVED_FIELD,
                    old_f.position,
                    f"Removed field {old_f.qualified_name}",
                )
                consistent = False
            elif not self.check_field(old_f, new_f):
                consistent = False
        for name in sorted(new_fields):
            if name not in old_fields:
                new_f = new_fields[name]
                self._report(
                    c.ADDED_FIELD,
                    new_f.position,
                    f"Added public field {new_f.qualified_name}",
                )
                consistent = False
        return consistent

    # ------------------------------- members -------------------------------
    def check_method(self, old_m: MethodInfo, new_m: MethodInfo) -> bool:
        return self._check_invocable(old_m, new_m, compare_return=True)

    def check_constructor(self, old_c: MethodInfo, new_c: MethodInfo) -> bool:
        return self._check_invocable(old_c, new_c, compare_return=False)

    def _check_invocable(
        self, old_m: MethodInfo, new_m: MethodInfo, *, compare_return: bool
    ) -> bool:
        consistent: bool = True
        qn: str = new_m.qualified_name
        pos: SourcePosition | None = new_m.position

        if compare_return and _type_name(old_m) != _type_name(new_m):
            self._report(
                c.CHANGED_TYPE,
                pos,
                f"Method {qn} has changed return type from {_type_name(old_m)} "
                f"to {_type_name(new_m)}",
            )
            consistent = False
        if old_m.is_abstract != new_m.is_abstract:
            self._report(c.CHANGED_ABSTRACT, pos, f"Method {qn} has changed 'abstract' qualifier")
            consistent = False
        if old_m.is_native != new_m.is_native:
            self._report(c.CHANGED_NATIVE, pos, f"Method {qn} has changed 'native' qualifier")
            consistent = False
        # Only relevant for instance methods of non-final classes.
        if (
            old_m.is_final != new_m.is_final
            and not old_m.is_static
            and not old_m.containing_class.is_final
        ):
            self._report(c.CHANGED_FINAL, pos, f"Method {qn} has changed 'final' qualifier")
            consistent = False
        if old_m.is_static != new_m.is_static:
            self._report(c.CHANGED_STATIC, pos, f"Method {qn} has changed 'static' qualifier")
            consistent = False
        if old_m.scope is not new_m.scope:
            self._report(
                c.CHANGED_SCOPE,
                pos,
                f"Method {qn} changed scope from {old_m.scope.key} to {new_m.scope.key}",
            )
            consistent = False
        if old_m.is_deprecated != new_m.is_deprecated:
            self._report(c.CHANGED_DEPRECATED, pos, f"Method {qn} has changed deprecation state")
            consistent = False
        if old_m.is_synchronized != new_m.is_synchronized:
            self._report(
                c.CHANGED_SYNCHRONIZED,
                pos,
                f"Method {qn} has changed 'synchronized' qualifier from "
                f"{_java_bool(old_m.is_synchronized)} to {_java_bool(new_m.is_synchronized)}",
            )
            consistent = False

        if old_m.name == "finalize" and not old_m.parameters:
            return consistent
        for exc in old_m.thrown_exceptions:
            if not new_m.throws_exception(exc.qualified_name):
                self._report(
                    c.CHANGED_THROWS,
                    pos,
                    f"Method {qn} no longer throws exception {exc.qualified_name}",
                )
                consistent = False
        for exc in new_m.thrown_exceptions:
            if not old_m.throws_exception(exc.qualified_name):
                self._report(
                    c.CHANGED_THROWS,
                    pos,
                    f"Method {qn} added thrown exception {exc.qualified_name}",
                )
                consistent = False
        return consistent

    def check_field(self, old_f: FieldInfo, new_f: FieldInfo) -> bool:
        consistent: bool = True
        qn: str = new_f.qualified_name
        pos: SourcePosition | None = new_f.position

        if old_f.type.full_name != new_f.type.full_name:
            self._report(c.CHANGED_TYPE, pos, f"Field {qn} has changed type")
            consistent = False
        if (old_f.constant_value is not None or new_f.constant_value is not None) and (
            old_f.constant_value != new_f.constant_value
        ):
            self._report(
                c.CHANGED_VALUE,
                pos,
                f"Field {qn} has changed value from {old_f.constant_value} "
                f"to {new_f.constant_value}",
            )
            consistent = False
        if old_f.scope is not new_f.scope:
            self._report(
                c.CHANGED_SCOPE,
                pos,
                f"Field {qn} changed scope from {old_f.scope.key} to {new_f.scope.key}",
            )
            consistent = False
        for flag, label, code in (
            ("is_static", "static", c.CHANGED_STATIC),
            ("is_final", "final", c.CHANGED_FINAL),
            ("is_transient", "transient", c.CHANGED_TRANSIENT),
            ("is_volatile", "volatile", c.CHANGED_VOLATILE),
        ):
            if getattr(old_f, flag) != getattr(new_f, flag):
                self._report(code, pos, f"Field {qn} has changed '{label}' qualifier")
                consistent = False
        if old_f.is_deprecated != new_f.is_deprecated:
            self._report(c.CHANGED_DEPRECATED, pos, f"Field {qn} has changed deprecation state")
            consistent = False
        return consistent


def _java_bool(value: bool) -> str:
    return "true" if value else "false"


def check_api(old_path: Path | str, new_path: Path | str, registry: DiagnosticRegistry) -> bool:
    """Read two API XML documents and report their differences.

    Args:
        old_path: The previous API.
        new_path: The current API.
        registry: Receives the findings.

    Returns:
        True if the APIs are consistent.

    Raises:
        ApiParseError: If either document is malformed.
    """
    old: Snapshot = read_api_xml(Path(old_path))
    new: Snapshot = read_api_xml(Path(new_path))
    return ApiChecker(registry).check_snapshots(old, new)
