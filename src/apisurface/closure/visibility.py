# topmark:header:start
#
#   project      : APISurface
#   file         : visibility.py
#   file_relpath : src/apisurface/closure/visibility.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Visibility predicates used by the closure engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from apisurface.model.modifiers import Scope

if TYPE_CHECKING:
    from apisurface.model.classes import ClassInfo
    from apisurface.model.members import FieldInfo, MethodInfo


class ClosurePolicy(Protocol):
    """Structural type accepted by `apisurface.closure.compute_closure`."""

    def class_visible(self, cls: ClassInfo) -> bool: ...

    def method_visible(self, method: MethodInfo) -> bool: ...

    def field_visible(self, fld: FieldInfo) -> bool: ...

    def is_hidden(self, cls: ClassInfo) -> bool: ...


@dataclass(frozen=True)
class VisibilityPolicy:
    """Default policy: declared scope against a show level, plus hide tags.

    Attributes:
        show_level: Least visible scope that is part of the API surface.
    """

    show_level: Scope = Scope.PROTECTED

    def is_hidden(self, cls: ClassInfo) -> bool:
        return cls.is_hidden

    def class_visible(self, cls: ClassInfo) -> bool:
        """A locally defined, non-hidden class whose scope meets the show level."""
        return (
            cls.defined_locally
            and cls.scope.at_least(self.show_level)
            and not self.is_hidden(cls)
        )

    def method_visible(self, method: MethodInfo) -> bool:
        return not method.is_hidden and method.scope.at_least(self.show_level)

    def field_visible(self, fld: FieldInfo) -> bool:
        return not fld.is_hidden and fld.scope.at_least(self.show_level)
