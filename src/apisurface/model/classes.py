# topmark:header:start
#
#   project      : APISurface
#   file         : classes.py
#   file_relpath : src/apisurface/model/classes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Class nodes of the symbol model.

A `ClassInfo` is created as a *shell* (names, kind, modifiers, containment)
and later filled with its relations (superclass, interfaces, members) by the
builder. Equality and hashing use the qualified name only.

Hierarchy walks (`ClassInfo.ancestors`) are iterative and carry a visited
set: interface lists may overlap (diamonds) and must be revisited safely.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from apisurface.model.comments import EMPTY_COMMENT, DocComment
from apisurface.model.members import has_deprecated_annotation
from apisurface.model.modifiers import Modifiers, Scope

if TYPE_CHECKING:
    from collections.abc import Iterator

    from apisurface.diagnostic.model import SourcePosition
    from apisurface.model.members import AnnotationInstance, FieldInfo, MethodInfo
    from apisurface.model.packages import PackageInfo
    from apisurface.model.types import TypeInfo


class ClassKind(str, Enum):
    """Declaration kind of a class."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    ANNOTATION = "annotation"


@dataclass(eq=False, kw_only=True)
class ClassInfo:
    """A class, interface, enum or annotation type.

    Attributes:
        qualified_name: Globally unique key within a snapshot.
        simple_name: Name within the package (``Outer.Inner`` for nested classes).
        kind: Declaration kind.
        modifiers: Scope and modifier flags.
        comment: Raw documentation comment.
        position: Declaration position.
        containing_package: Owning package; None only for external stubs.
        containing_class: Enclosing class of a nested class.
        defined_locally: False for stubs standing in for undeclared classes.
        deprecated_override: Deprecation state fixed by a reader, or None.
        superclass: Direct superclass; None for the root type or interfaces.
        interfaces: Declared interfaces, in declaration order.
        inner_classes: Directly nested classes.
        constructors: Declared constructors.
        methods: Declared methods.
        fields: Declared fields (enum constants excluded).
        enum_constants: Enum constants (enums only).
        annotation_elements: Elements (annotation types only).
        annotations: Applied annotations.
        type_parameters: Generic type parameters.
        is_initialized: True once the relations have been filled in.
    """

    qualified_name: str
    simple_name: str
    kind: ClassKind = ClassKind.CLASS
    modifiers: Modifiers = field(default_factory=Modifiers)
    comment: DocComment = EMPTY_COMMENT
    position: SourcePosition | None = None
    containing_package: PackageInfo | None = None
    containing_class: ClassInfo | None = None
    defined_locally: bool = True
    deprecated_override: bool | None = None

    superclass: ClassInfo | None = None
    interfaces: list[ClassInfo] = field(default_factory=lambda: [])
    inner_classes: list[ClassInfo] = field(default_factory=lambda: [])
    constructors: list[MethodInfo] = field(default_factory=lambda: [])
    methods: list[MethodInfo] = field(default_factory=lambda: [])
    fields: list[FieldInfo] = field(default_factory=lambda: [])
    enum_constants: list[FieldInfo] = field(default_factory=lambda: [])
    annotation_elements: list[MethodInfo] = field(default_factory=lambda: [])
    annotations: tuple[AnnotationInstance, ...] = ()
    type_parameters: list[TypeInfo] = field(default_factory=lambda: [])
    is_initialized: bool = False

    # ------------------------------ identity ------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClassInfo):
            return NotImplemented
        return self.qualified_name == other.qualified_name

    def __hash__(self) -> int:
        return hash(self.qualified_name)

    def __repr__(self) -> str:
        return f"ClassInfo({self.qualified_name!r})"

    # ----------------------------- attributes -----------------------------
    @property
    def scope(self) -> Scope:
        return self.modifiers.scope

    @property
    def is_interface(self) -> bool:
        """True for interfaces and annotation types."""
        return self.kind in (ClassKind.INTERFACE, ClassKind.ANNOTATION)

    @property
    def is_enum(self) -> bool:
        return self.kind is ClassKind.ENUM

    @property
    def is_abstract(self) -> bool:
        return self.modifiers.is_abstract

    @property
    def is_final(self) -> bool:
        return self.modifiers.is_final

    @property
    def is_static(self) -> bool:
        return self.modifiers.is_static

    @property
    def package_name(self) -> str | None:
        return self.containing_package.name if self.containing_package else None

    @property
    def superclass_name(self) -> str | None:
        """Qualified name of the superclass, None for the root type and interfaces."""
        return self.superclass.qualified_name if self.superclass is not None else None

    @property
    def is_hidden(self) -> bool:
        """True if this class, an enclosing class or its package is marked hidden."""
        current: ClassInfo | None = self
        while current is not None:
            if current.comment.is_hidden:
                return True
            current = current.containing_class
        return self.containing_package is not None and self.containing_package.is_hidden

    @property
    def annotation_deprecated(self) -> bool:
        return has_deprecated_annotation(self.annotations)

    @property
    def is_deprecated(self) -> bool:
        if self.deprecated_override is not None:
            return self.deprecated_override
        return self.comment.is_deprecated or self.annotation_deprecated

    @property
    def deprecation_mismatch(self) -> bool:
        if self.deprecated_override is not None:
            return False
        return self.comment.is_deprecated != self.annotation_deprecated

    # ------------------------------ hierarchy ------------------------------
    def ancestors(self) -> Iterator[ClassInfo]:
        """Yield every supertype once: superclass chain and all interfaces, transitively."""
        seen: set[str] = {self.qualified_name}
        queue: deque[ClassInfo] = deque(self._direct_supertypes())
        while queue:
            current: ClassInfo = queue.popleft()
            if current.qualified_name in seen:
                continue
            seen.add(current.qualified_name)
            yield current
            queue.extend(current._direct_supertypes())

    def superclass_chain(self) -> Iterator[ClassInfo]:
        """Yield the superclass, its superclass, and so on."""
        seen: set[str] = {self.qualified_name}
        current: ClassInfo | None = self.superclass
        while current is not None and current.qualified_name not in seen:
            seen.add(current.qualified_name)
            yield current
            current = current.superclass

    @property
    def real_interfaces(self) -> list[ClassInfo]:
        """Declared interfaces that are not hidden."""
        return [i for i in self.interfaces if not i.is_hidden]

    def _direct_supertypes(self) -> list[ClassInfo]:
        supers: list[ClassInfo] = [self.superclass] if self.superclass is not None else []
        return supers + self.interfaces

    def implements_interface(self, qualified_name: str) -> bool:
        """Return True if this class is, or transitively extends/implements, ``qualified_name``."""
        if self.qualified_name == qualified_name:
            return True
        return any(a.qualified_name == qualified_name for a in self.ancestors())

    # ------------------------------- members -------------------------------
    def methods_by_hashable_name(self) -> dict[str, MethodInfo]:
        return {m.hashable_name: m for m in self.methods}

    def constructors_by_hashable_name(self) -> dict[str, MethodInfo]:
        return {c.hashable_name: c for c in self.constructors}

    def fields_by_name(self) -> dict[str, FieldInfo]:
        """Fields and enum constants, keyed by name."""
        return {f.name: f for f in (*self.fields, *self.enum_constants)}

    def find_method(self, hashable_name: str) -> MethodInfo | None:
        for m in self.methods:
            if m.hashable_name == hashable_name:
                return m
        return None

    def find_constructor(self, hashable_name: str) -> MethodInfo | None:
        for c in self.constructors:
            if c.hashable_name == hashable_name:
                return c
        return None

    def find_field(self, name: str) -> FieldInfo | None:
        return self.fields_by_name().get(name)

    def inherits_method(self, hashable_name: str) -> MethodInfo | None:
        """Return a method with ``hashable_name`` declared on any ancestor, if one exists."""
        for ancestor in self.ancestors():
            found: MethodInfo | None = ancestor.find_method(hashable_name)
            if found is not None:
                return found
        return None

    def all_invocables(self) -> Iterator[MethodInfo]:
        """Yield constructors, methods and annotation elements."""
        yield from self.constructors
        yield from self.methods
        yield from self.annotation_elements
