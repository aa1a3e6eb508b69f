# topmark:header:start
#
#   project      : APISurface
#   file         : declarations.py
#   file_relpath : src/apisurface/builder/declarations.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Symbol declarations consumed by the snapshot builder.

These immutable records are what a symbol-resolution front-end hands to
`apisurface.builder.SnapshotBuilder`. Class references are plain qualified
names; the builder resolves them, so declarations may refer to classes that
are declared later, or never (those become external stubs).

`SymbolTable` is the in-memory `SymbolSource` used by the TOML symbol-file
loader and the API XML reader.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Protocol

from apisurface.constants import DEFAULT_PACKAGE_NAME
from apisurface.model.classes import ClassKind
from apisurface.model.members import MemberKind
from apisurface.model.modifiers import Modifiers
from apisurface.model.types import PRIMITIVE_TYPES, simple_type_name

if TYPE_CHECKING:
    from collections.abc import Iterable

    from apisurface.diagnostic.model import SourcePosition


class TypeKind(str, Enum):
    """Descriptor kind of a type usage."""

    PRIMITIVE = "primitive"
    CLASS = "class"
    TYPE_VARIABLE = "typevar"
    WILDCARD = "wildcard"


@dataclass(frozen=True)
class TypeDecl:
    """A type usage as written by the front-end.

    Attributes:
        qualified_name: Class name (erased), primitive keyword, type variable
            name, or ``"?"`` for a wildcard.
        kind: Descriptor kind.
        dimension: Array suffix.
        type_arguments: Generic arguments; None when the type is not parameterized.
        extends_bounds: Bounds of a type variable, or a wildcard's ``extends`` bounds.
        super_bounds: A wildcard's ``super`` bounds.
    """

    qualified_name: str
    kind: TypeKind = TypeKind.CLASS
    dimension: str = ""
    type_arguments: tuple[TypeDecl, ...] | None = None
    extends_bounds: tuple[TypeDecl, ...] = ()
    super_bounds: tuple[TypeDecl, ...] = ()

    @classmethod
    def of(cls, name: str, dimension: str = "") -> TypeDecl:
        """Return a primitive or class type for a plain (non-generic) name."""
        kind: TypeKind = TypeKind.PRIMITIVE if name in PRIMITIVE_TYPES else TypeKind.CLASS
        return cls(name, kind, dimension)

    @property
    def simple_name(self) -> str:
        if self.kind is TypeKind.CLASS:
            return simple_type_name(self.qualified_name)
        return self.qualified_name


@dataclass(frozen=True)
class ParameterDecl:
    """A declared parameter."""

    name: str
    type: TypeDecl
    position: SourcePosition | None = None


@dataclass(frozen=True)
class AnnotationDecl:
    """An applied annotation: its type name and ``(element, value)`` pairs."""

    type_name: str
    elements: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class MethodDecl:
    """A declared method, constructor or annotation element.

    Attributes:
        deprecated: Deprecation state already derived by the producer (API XML);
            None to derive it from the comment and annotations.
    """

    name: str
    kind: MemberKind = MemberKind.METHOD
    modifiers: Modifiers = field(default_factory=Modifiers)
    return_type: TypeDecl | None = None
    parameters: tuple[ParameterDecl, ...] = ()
    thrown: tuple[str, ...] = ()
    type_parameters: tuple[TypeDecl, ...] = ()
    is_varargs: bool = False
    comment: str = ""
    annotations: tuple[AnnotationDecl, ...] = ()
    position: SourcePosition | None = None
    deprecated: bool | None = None
    default_value: str | None = None


@dataclass(frozen=True)
class FieldDecl:
    """A declared field or enum constant."""

    name: str
    type: TypeDecl
    modifiers: Modifiers = field(default_factory=Modifiers)
    constant_value: str | None = None
    is_enum_constant: bool = False
    comment: str = ""
    annotations: tuple[AnnotationDecl, ...] = ()
    position: SourcePosition | None = None
    deprecated: bool | None = None


@dataclass(frozen=True)
class ClassDecl:
    """A declared class, interface, enum or annotation type.

    Attributes:
        qualified_name: Fully qualified name, e.g. ``pkg.Outer.Inner``.
        package: Owning package name; the default package sentinel when empty.
        simple_name: Name within the package; derived from the qualified name
            when omitted.
        superclass: Qualified name of the superclass, if any.
        interfaces: Qualified names of the declared interfaces.
        containing_class: Qualified name of the enclosing class, if nested.
        inner_classes: Qualified names of nested classes.
        defined_locally: False for declarations that only describe a
            dependency (they are never part of the closure seed).
    """

    qualified_name: str
    package: str = DEFAULT_PACKAGE_NAME
    simple_name: str | None = None
    kind: ClassKind = ClassKind.CLASS
    modifiers: Modifiers = field(default_factory=Modifiers)
    superclass: str | None = None
    interfaces: tuple[str, ...] = ()
    containing_class: str | None = None
    inner_classes: tuple[str, ...] = ()
    constructors: tuple[MethodDecl, ...] = ()
    methods: tuple[MethodDecl, ...] = ()
    fields: tuple[FieldDecl, ...] = ()
    enum_constants: tuple[FieldDecl, ...] = ()
    annotation_elements: tuple[MethodDecl, ...] = ()
    annotations: tuple[AnnotationDecl, ...] = ()
    type_parameters: tuple[TypeDecl, ...] = ()
    comment: str = ""
    position: SourcePosition | None = None
    deprecated: bool | None = None
    defined_locally: bool = True

    @property
    def name_in_package(self) -> str:
        """Explicit simple name, or the qualified name minus the package prefix."""
        if self.simple_name:
            return self.simple_name
        prefix: str = f"{self.package}."
        if self.package != DEFAULT_PACKAGE_NAME and self.qualified_name.startswith(prefix):
            return self.qualified_name[len(prefix) :]
        return self.qualified_name


@dataclass(frozen=True)
class PackageDecl:
    """A declared package."""

    name: str
    comment: str = ""
    position: SourcePosition | None = None


class SymbolSource(Protocol):
    """What the builder needs from a symbol-resolution front-end."""

    def class_declarations(self) -> Iterable[ClassDecl]:
        """Return every class declared by this source."""
        ...

    def package_declarations(self) -> Iterable[PackageDecl]:
        """Return every package declared by this source."""
        ...

    def lookup_class(self, qualified_name: str) -> ClassDecl | None:
        """Return the declaration of ``qualified_name``, or None if it is not declared."""
        ...

    def lookup_package(self, name: str) -> PackageDecl | None:
        """Return the declaration of package ``name``, or None."""
        ...


class DuplicateSymbolError(ValueError):
    """Raised when a class or package is declared twice in one source."""


class SymbolTable:
    """Dict-backed `SymbolSource` preserving declaration order."""

    def __init__(
        self,
        classes: Iterable[ClassDecl] = (),
        packages: Iterable[PackageDecl] = (),
    ) -> None:
        self._classes: dict[str, ClassDecl] = {}
        self._packages: dict[str, PackageDecl] = {}
        for pkg in packages:
            self.add_package(pkg)
        for decl in classes:
            self.add_class(decl)

    def add_class(self, decl: ClassDecl) -> None:
        if decl.qualified_name in self._classes:
            raise DuplicateSymbolError(f"Class {decl.qualified_name} is declared twice")
        self._classes[decl.qualified_name] = decl

    def add_package(self, decl: PackageDecl) -> None:
        if decl.name in self._packages:
            raise DuplicateSymbolError(f"Package {decl.name} is declared twice")
        self._packages[decl.name] = decl

    def class_declarations(self) -> Iterable[ClassDecl]:
        return list(self._classes.values())

    def package_declarations(self) -> Iterable[PackageDecl]:
        return list(self._packages.values())

    def lookup_class(self, qualified_name: str) -> ClassDecl | None:
        return self._classes.get(qualified_name)

    def lookup_package(self, name: str) -> PackageDecl | None:
        return self._packages.get(name)

    def __len__(self) -> int:
        return len(self._classes)
