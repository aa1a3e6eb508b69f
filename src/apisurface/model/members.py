# topmark:header:start
#
#   project      : APISurface
#   file         : members.py
#   file_relpath : src/apisurface/model/members.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Class members: methods, constructors, annotation elements and fields.

Methods and constructors share `MethodInfo`; they are matched across
snapshots by `MethodInfo.hashable_name`, which is built from erased,
fully-qualified parameter types so that the spelling used at the declaration
site (imports, generic arguments) does not matter. A varargs parameter is an
array in that key.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from apisurface.constants import DEPRECATED_ANNOTATION
from apisurface.model.comments import EMPTY_COMMENT, DocComment
from apisurface.model.modifiers import Modifiers, Scope

if TYPE_CHECKING:
    from apisurface.diagnostic.model import SourcePosition
    from apisurface.model.classes import ClassInfo
    from apisurface.model.types import TypeInfo


class MemberKind(str, Enum):
    """Kind of an invocable member."""

    METHOD = "method"
    CONSTRUCTOR = "constructor"
    ANNOTATION_ELEMENT = "annotation element"


@dataclass(frozen=True, slots=True)
class AnnotationInstance:
    """An annotation applied to a declaration.

    Attributes:
        type_name: Qualified name of the annotation type.
        type_class: Resolved annotation type, when known.
        elements: ``(name, value)`` pairs as written.
    """

    type_name: str
    type_class: ClassInfo | None = None
    elements: tuple[tuple[str, str], ...] = ()


def has_deprecated_annotation(annotations: tuple[AnnotationInstance, ...]) -> bool:
    """Return True if any annotation is ``@Deprecated``."""
    return any(a.type_name == DEPRECATED_ANNOTATION for a in annotations)


@dataclass(eq=False)
class ParameterInfo:
    """A method or constructor parameter."""

    name: str
    type: TypeInfo
    index: int
    position: SourcePosition | None = None


@dataclass(eq=False, kw_only=True)
class MemberInfo:
    """State shared by every member kind.

    Attributes:
        name: Declared name (the class simple name for constructors).
        containing_class: Declaring class.
        modifiers: Scope and modifier flags.
        comment: Raw documentation comment.
        position: Declaration position.
        annotations: Applied annotations.
        deprecated_override: Deprecation state already derived by a reader
            (API XML documents carry it directly); None to derive it.
    """

    name: str
    containing_class: ClassInfo
    modifiers: Modifiers = field(default_factory=Modifiers)
    comment: DocComment = EMPTY_COMMENT
    position: SourcePosition | None = None
    annotations: tuple[AnnotationInstance, ...] = ()
    deprecated_override: bool | None = None

    @property
    def qualified_name(self) -> str:
        return f"{self.containing_class.qualified_name}.{self.name}"

    @property
    def scope(self) -> Scope:
        return self.modifiers.scope

    @property
    def is_static(self) -> bool:
        return self.modifiers.is_static

    @property
    def is_final(self) -> bool:
        return self.modifiers.is_final

    @property
    def is_hidden(self) -> bool:
        return self.comment.is_hidden

    @property
    def annotation_deprecated(self) -> bool:
        return has_deprecated_annotation(self.annotations)

    @property
    def comment_deprecated(self) -> bool:
        return self.comment.is_deprecated

    @property
    def is_deprecated(self) -> bool:
        """Doc-comment deprecation OR ``@Deprecated``, unless a reader fixed the state."""
        if self.deprecated_override is not None:
            return self.deprecated_override
        return self.comment_deprecated or self.annotation_deprecated

    @property
    def deprecation_mismatch(self) -> bool:
        """True when the annotation and the doc comment disagree on deprecation."""
        if self.deprecated_override is not None:
            return False
        return self.comment_deprecated != self.annotation_deprecated


@dataclass(eq=False, kw_only=True)
class MethodInfo(MemberInfo):
    """A method, constructor or annotation element.

    Attributes:
        kind: Member kind.
        return_type: Return type; None for constructors.
        parameters: Parameters in declaration order.
        thrown_exceptions: Declared exception classes.
        type_parameters: Generic type parameters.
        is_varargs: True if the last parameter is variadic.
        overridden_method: Method this one overrides, if resolved.
        default_value: Default of an annotation element, as written.
    """

    kind: MemberKind = MemberKind.METHOD
    return_type: TypeInfo | None = None
    parameters: list[ParameterInfo] = field(default_factory=lambda: [])
    thrown_exceptions: list[ClassInfo] = field(default_factory=lambda: [])
    type_parameters: list[TypeInfo] = field(default_factory=lambda: [])
    is_varargs: bool = False
    overridden_method: MethodInfo | None = None
    default_value: str | None = None

    @property
    def is_constructor(self) -> bool:
        return self.kind is MemberKind.CONSTRUCTOR

    @property
    def is_abstract(self) -> bool:
        return self.modifiers.is_abstract

    @property
    def is_native(self) -> bool:
        return self.modifiers.is_native

    @property
    def is_synchronized(self) -> bool:
        return self.modifiers.is_synchronized

    @property
    def hashable_name(self) -> str:
        """Matching key across snapshots: ``name:type1:type2`` with erased qualified types."""
        return self.name + "".join(":" + p.type.erased_name for p in self.parameters)

    @property
    def signature(self) -> str:
        return "(" + ", ".join(p.type.erased_name for p in self.parameters) + ")"

    @property
    def pretty_signature(self) -> str:
        """Short human form, e.g. ``Foo(int,String...)``."""
        names: list[str] = [p.type.simple_type_name for p in self.parameters]
        if self.is_varargs and names and names[-1].endswith("[]"):
            names[-1] = names[-1][:-2] + "..."
        return f"{self.name}({','.join(names)})"

    def throws_exception(self, qualified_name: str) -> bool:
        return any(e.qualified_name == qualified_name for e in self.thrown_exceptions)

    def __repr__(self) -> str:
        return f"MethodInfo({self.containing_class.qualified_name}.{self.pretty_signature})"


@dataclass(eq=False, kw_only=True)
class FieldInfo(MemberInfo):
    """A field or enum constant.

    Attributes:
        type: Declared type.
        constant_value: Literal value when the field is a compile-time constant.
        is_enum_constant: True for enum constants.
    """

    type: TypeInfo
    constant_value: str | None = None
    is_enum_constant: bool = False

    @property
    def is_transient(self) -> bool:
        return self.modifiers.is_transient

    @property
    def is_volatile(self) -> bool:
        return self.modifiers.is_volatile

    def __repr__(self) -> str:
        return f"FieldInfo({self.qualified_name})"
