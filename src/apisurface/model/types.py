# topmark:header:start
#
#   project      : APISurface
#   file         : types.py
#   file_relpath : src/apisurface/model/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type references (`TypeInfo`).

A `TypeInfo` describes one type usage: a primitive, a (possibly parameterized)
class type, a type variable or a wildcard, with an optional array dimension.
Within a snapshot, structurally identical usages are the same object; the
builder memoizes them (see `apisurface.builder.builder.type_key`).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterator

    from apisurface.model.classes import ClassInfo

PRIMITIVE_TYPES: Final[frozenset[str]] = frozenset(
    {"boolean", "byte", "char", "short", "int", "long", "float", "double", "void"}
)


def erase_type_name(type_name: str) -> str:
    """Strip generic argument lists from a rendered type name.

    ``java.util.Map<K, java.util.List<V>>[]`` becomes ``java.util.Map[]``.
    """
    out: list[str] = []
    depth: int = 0
    for ch in type_name:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        elif depth == 0:
            out.append(ch)
    return "".join(out)


def simple_type_name(qualified_name: str) -> str:
    """Return the last dotted segment of ``qualified_name``."""
    return qualified_name.rsplit(".", 1)[-1]


@dataclass(eq=False)
class TypeInfo:
    """A reference to a type at a usage site.

    Equality is identity: the builder shares one node per structural key.

    Attributes:
        qualified_name: Qualified name (primitive keyword or type variable name
            for those kinds, ``"?"`` for wildcards).
        simple_name: Unqualified name.
        is_primitive: True for primitive keywords and ``void``.
        dimension: Array suffix, e.g. ``""`` or ``"[][]"``.
        class_info: Class the type resolves to; None for primitives, type
            variables and wildcards.
        type_arguments: Generic arguments, or None when not parameterized.
        extends_bounds: Upper bounds of a type variable or wildcard.
        super_bounds: Lower bounds of a wildcard.
        is_type_variable: True for a type variable usage.
        is_wildcard: True for a ``?`` argument.
    """

    qualified_name: str
    simple_name: str
    is_primitive: bool = False
    dimension: str = ""
    class_info: ClassInfo | None = None
    type_arguments: list[TypeInfo] | None = None
    extends_bounds: list[TypeInfo] = field(default_factory=lambda: [])
    super_bounds: list[TypeInfo] = field(default_factory=lambda: [])
    is_type_variable: bool = False
    is_wildcard: bool = False

    @property
    def is_parameterized(self) -> bool:
        return bool(self.type_arguments)

    @property
    def full_name(self) -> str:
        """Qualified name with generic arguments and dimension, e.g. ``java.util.List<T>[]``."""
        if self.is_wildcard:
            if self.super_bounds:
                return "? super " + " & ".join(b.full_name for b in self.super_bounds)
            if self.extends_bounds:
                return "? extends " + " & ".join(b.full_name for b in self.extends_bounds)
            return "?"
        args: str = ""
        if self.type_arguments:
            args = "<" + ", ".join(a.full_name for a in self.type_arguments) + ">"
        return f"{self.qualified_name}{args}{self.dimension}"

    @property
    def erased_name(self) -> str:
        """Qualified name plus dimension, without generic arguments."""
        return f"{self.qualified_name}{self.dimension}"

    @property
    def simple_type_name(self) -> str:
        return f"{self.simple_name}{self.dimension}"

    def referenced_classes(self) -> Iterator[ClassInfo]:
        """Yield every class reachable from this type: itself, its arguments and bounds.

        The walk is iterative and keeps a visited set, so recursive generics such as
        ``E extends Enum<E>`` terminate.
        """
        seen: set[int] = set()
        stack: list[TypeInfo] = [self]
        while stack:
            current: TypeInfo = stack.pop()
            if id(current) in seen:
                continue
            seen.add(id(current))
            if current.class_info is not None:
                yield current.class_info
            stack.extend(current.super_bounds)
            stack.extend(current.extends_bounds)
            if current.type_arguments:
                stack.extend(current.type_arguments)

    def argument_classes(self) -> Iterator[ClassInfo]:
        """Yield the classes referenced from this type's generic arguments only."""
        for arg in self.type_arguments or ():
            yield from arg.referenced_classes()

    def __repr__(self) -> str:
        return f"TypeInfo({self.full_name!r})"
