# topmark:header:start
#
#   project      : APISurface
#   file         : builder.py
#   file_relpath : src/apisurface/builder/builder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Two-phase snapshot construction.

Phase 1 creates a *shell* per requested class (name, kind, modifiers,
containment) and registers it in the identity map before queueing it. Phase 2
drains the queue in a loop, filling relations and members. A reference to a
class that is already registered, including one still being built, resolves
to the registered node, so cyclic hierarchies and self-referential generics
need no recursion.

Type usages are memoized by `type_key`; a `TypeInfo` is registered before its
arguments and bounds are resolved.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING

from apisurface.builder.declarations import TypeKind
from apisurface.config.logging import get_logger
from apisurface.constants import DEFAULT_PACKAGE_NAME, ROOT_OBJECT_TYPE
from apisurface.model.classes import ClassInfo
from apisurface.model.comments import EMPTY_COMMENT, DocComment
from apisurface.model.members import (
    AnnotationInstance,
    FieldInfo,
    MemberKind,
    MethodInfo,
    ParameterInfo,
)
from apisurface.model.packages import PackageInfo
from apisurface.model.snapshot import Snapshot
from apisurface.model.types import TypeInfo, simple_type_name

if TYPE_CHECKING:
    from apisurface.builder.declarations import (
        AnnotationDecl,
        ClassDecl,
        FieldDecl,
        MethodDecl,
        SymbolSource,
        TypeDecl,
    )
    from apisurface.config.logging import ApiSurfaceLogger
    from apisurface.model.modifiers import Modifiers

logger: ApiSurfaceLogger = get_logger(__name__)


def type_key(decl: TypeDecl) -> str:
    """Return the structural memoization key of a type usage.

    The key covers the descriptor kind, qualified name and dimension, the keys
    of the type arguments (or a marker for "not parameterized"), and the keys
    of the extends and super bounds.
    """
    parts: list[str] = [f"{decl.kind.value}:{decl.qualified_name}{decl.dimension}"]
    if decl.type_arguments is None:
        parts.append("-")
    else:
        parts.append("<" + ",".join(type_key(a) for a in decl.type_arguments) + ">")
    if decl.extends_bounds:
        parts.append("+(" + "&".join(type_key(b) for b in decl.extends_bounds) + ")")
    if decl.super_bounds:
        parts.append("^(" + "&".join(type_key(b) for b in decl.super_bounds) + ")")
    return "".join(parts)


def _comment(raw: str) -> DocComment:
    return DocComment(raw) if raw else EMPTY_COMMENT


class SnapshotBuilder:
    """Build a `Snapshot` from a `SymbolSource`.

    Args:
        source: Front-end providing class and package declarations.
        label: Label of the resulting snapshot.
    """

    def __init__(self, source: SymbolSource, *, label: str = "<snapshot>") -> None:
        self.source: SymbolSource = source
        self.snapshot: Snapshot = Snapshot(label)
        self._classes: dict[str, ClassInfo] = {}
        self._types: dict[str, TypeInfo] = {}
        self._pending: list[tuple[ClassInfo, ClassDecl]] = []
        self._built: bool = False

    @property
    def type_cache_size(self) -> int:
        """Number of distinct `TypeInfo` nodes created so far."""
        return len(self._types)

    def build(self) -> Snapshot:
        """Create shells for every declared class, fill them, and freeze the snapshot.

        Returns:
            The frozen snapshot. Calling `build` again returns the same object.
        """
        if self._built:
            return self.snapshot

        for pkg_decl in self.source.package_declarations():
            self._obtain_package(pkg_decl.name)
        for decl in self.source.class_declarations():
            self.obtain_class(decl.qualified_name)

        filled: int = 0
        while self._pending:
            cls, decl = self._pending.pop()
            self._fill(cls, decl)
            filled += 1

        self._built = True
        self.snapshot.freeze()
        logger.debug(
            "Built snapshot %s: %d classes, %d external, %d type nodes (%d filled)",
            self.snapshot.label,
            len(self.snapshot.classes),
            len(self.snapshot.external_classes),
            len(self._types),
            filled,
        )
        return self.snapshot

    # -------------------------------- classes --------------------------------
    def obtain_class(self, qualified_name: str | None) -> ClassInfo | None:
        """Return the node for ``qualified_name``, creating a shell on first request.

        Args:
            qualified_name: Class name; empty or None yields None.

        Returns:
            The registered node, a new shell queued for filling, a new external
            stub for an undeclared name, or None for an empty name or for an
            unknown name requested after the build completed.
        """
        if not qualified_name:
            return None
        existing: ClassInfo | None = self._classes.get(qualified_name)
        if existing is not None:
            return existing
        if self._built:
            logger.trace("Late request for unknown class %s", qualified_name)
            return None

        decl: ClassDecl | None = self.source.lookup_class(qualified_name)
        if decl is None:
            return self._external_stub(qualified_name)

        package: PackageInfo = self._obtain_package(decl.package or DEFAULT_PACKAGE_NAME)
        shell = ClassInfo(
            qualified_name=decl.qualified_name,
            simple_name=decl.name_in_package,
            kind=decl.kind,
            modifiers=decl.modifiers,
            comment=_comment(decl.comment),
            position=decl.position,
            containing_package=package,
            defined_locally=decl.defined_locally,
            deprecated_override=decl.deprecated,
        )
        self._classes[qualified_name] = shell
        self.snapshot.add_class(shell)
        package.add_class(shell)
        self._pending.append((shell, decl))
        logger.trace("Created shell for %s", qualified_name)

        if decl.containing_class:
            container: ClassInfo | None = self.obtain_class(decl.containing_class)
            shell.containing_class = container
            if container is not None and shell not in container.inner_classes:
                container.inner_classes.append(shell)
        return shell

    def _external_stub(self, qualified_name: str) -> ClassInfo:
        stub = ClassInfo(
            qualified_name=qualified_name,
            simple_name=simple_type_name(qualified_name),
            defined_locally=False,
            is_initialized=True,
        )
        self._classes[qualified_name] = stub
        self.snapshot.add_external_class(stub)
        logger.trace("Created external stub for %s", qualified_name)
        return stub

    def _obtain_package(self, name: str) -> PackageInfo:
        existing: PackageInfo | None = self.snapshot.get_package(name)
        if existing is not None:
            return existing
        decl = self.source.lookup_package(name)
        package = PackageInfo(
            name,
            comment=_comment(decl.comment) if decl is not None else EMPTY_COMMENT,
            position=decl.position if decl is not None else None,
        )
        return self.snapshot.add_package(package)

    # --------------------------------- types ---------------------------------
    def obtain_type(self, decl: TypeDecl) -> TypeInfo:
        """Return the shared `TypeInfo` for ``decl``, creating it on first request."""
        key: str = type_key(decl)
        existing: TypeInfo | None = self._types.get(key)
        if existing is not None:
            return existing

        info = TypeInfo(
            qualified_name=decl.qualified_name,
            simple_name=decl.simple_name,
            is_primitive=decl.kind is TypeKind.PRIMITIVE,
            dimension=decl.dimension,
            is_type_variable=decl.kind is TypeKind.TYPE_VARIABLE,
            is_wildcard=decl.kind is TypeKind.WILDCARD,
        )
        self._types[key] = info

        if decl.kind is TypeKind.CLASS:
            info.class_info = self.obtain_class(decl.qualified_name)
        if decl.type_arguments is not None:
            info.type_arguments = [self.obtain_type(a) for a in decl.type_arguments]
        info.extends_bounds = [self.obtain_type(b) for b in decl.extends_bounds]
        info.super_bounds = [self.obtain_type(b) for b in decl.super_bounds]
        return info

    # ---------------------------------- fill ----------------------------------
    def _fill(self, cls: ClassInfo, decl: ClassDecl) -> None:
        if cls.is_initialized:
            return
        if not cls.is_interface:
            superclass: str | None = decl.superclass
            if superclass is None and cls.qualified_name != ROOT_OBJECT_TYPE:
                superclass = ROOT_OBJECT_TYPE
            cls.superclass = self.obtain_class(superclass)
        for name in decl.interfaces:
            iface: ClassInfo | None = self.obtain_class(name)
            if iface is not None and iface not in cls.interfaces:
                cls.interfaces.append(iface)
        for name in decl.inner_classes:
            inner: ClassInfo | None = self.obtain_class(name)
            if inner is not None and inner not in cls.inner_classes:
                cls.inner_classes.append(inner)

        cls.type_parameters = [self.obtain_type(t) for t in decl.type_parameters]
        cls.annotations = self._annotations(decl.annotations)
        cls.constructors = [self._method(cls, m, MemberKind.CONSTRUCTOR) for m in decl.constructors]
        cls.methods = [self._method(cls, m, MemberKind.METHOD) for m in decl.methods]
        cls.annotation_elements = [
            self._method(cls, m, MemberKind.ANNOTATION_ELEMENT) for m in decl.annotation_elements
        ]
        cls.fields = [self._field(cls, f) for f in decl.fields]
        cls.enum_constants = [self._field(cls, f, enum_constant=True) for f in decl.enum_constants]
        cls.is_initialized = True

    def _annotations(self, decls: tuple[AnnotationDecl, ...]) -> tuple[AnnotationInstance, ...]:
        return tuple(
            AnnotationInstance(
                type_name=a.type_name,
                type_class=self.obtain_class(a.type_name),
                elements=a.elements,
            )
            for a in decls
        )

    def _method(self, cls: ClassInfo, decl: MethodDecl, kind: MemberKind) -> MethodInfo:
        modifiers: Modifiers = decl.modifiers
        if kind is MemberKind.METHOD and cls.is_interface and not modifiers.is_static:
            modifiers = dataclasses.replace(modifiers, is_abstract=True)
        if cls.is_enum and decl.name == "values" and not decl.parameters:
            modifiers = dataclasses.replace(modifiers, is_final=True)

        name: str = decl.name
        if kind is MemberKind.CONSTRUCTOR and not name:
            name = simple_type_name(cls.qualified_name)

        method = MethodInfo(
            name=name,
            containing_class=cls,
            modifiers=modifiers,
            comment=_comment(decl.comment),
            position=decl.position,
            annotations=self._annotations(decl.annotations),
            deprecated_override=decl.deprecated,
            kind=kind,
            is_varargs=decl.is_varargs,
            default_value=decl.default_value,
        )
        method.type_parameters = [self.obtain_type(t) for t in decl.type_parameters]
        if decl.return_type is not None and kind is not MemberKind.CONSTRUCTOR:
            method.return_type = self.obtain_type(decl.return_type)
        method.parameters = [
            ParameterInfo(p.name, self.obtain_type(p.type), index, p.position)
            for index, p in enumerate(decl.parameters)
        ]
        for name_of_thrown in decl.thrown:
            thrown: ClassInfo | None = self.obtain_class(name_of_thrown)
            if thrown is not None:
                method.thrown_exceptions.append(thrown)
        return method

    def _field(self, cls: ClassInfo, decl: FieldDecl, *, enum_constant: bool = False) -> FieldInfo:
        return FieldInfo(
            name=decl.name,
            containing_class=cls,
            modifiers=decl.modifiers,
            comment=_comment(decl.comment),
            position=decl.position,
            annotations=self._annotations(decl.annotations),
            deprecated_override=decl.deprecated,
            type=self.obtain_type(decl.type),
            constant_value=decl.constant_value,
            is_enum_constant=enum_constant or decl.is_enum_constant,
        )


def build_snapshot(source: SymbolSource, *, label: str = "<snapshot>") -> Snapshot:
    """Build and freeze a snapshot from ``source``."""
    return SnapshotBuilder(source, label=label).build()
