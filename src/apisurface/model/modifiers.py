# topmark:header:start
#
#   project      : APISurface
#   file         : modifiers.py
#   file_relpath : src/apisurface/model/modifiers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Access scopes and modifier flags shared by classes and members."""

from __future__ import annotations

from dataclasses import dataclass

from apisurface.core.enum_mixins import KeyedStrEnum


class Scope(KeyedStrEnum):
    """Declared access scope.

    The key is the spelling used in API XML documents; package-private is the
    empty string. Members are ordered from most to least visible.
    """

    PUBLIC = ("public", "public")
    PROTECTED = ("protected", "protected")
    PACKAGE_PRIVATE = ("", "package-private", ("package", "package_private", "default"))
    PRIVATE = ("private", "private")

    @property
    def rank(self) -> int:
        """Visibility rank: 3 for public down to 0 for private."""
        return {
            Scope.PUBLIC: 3,
            Scope.PROTECTED: 2,
            Scope.PACKAGE_PRIVATE: 1,
            Scope.PRIVATE: 0,
        }[self]

    def at_least(self, level: Scope) -> bool:
        """Return True if this scope is at least as visible as ``level``."""
        return self.rank >= level.rank


@dataclass(frozen=True, slots=True)
class Modifiers:
    """Modifier flags of a class or member.

    Flags that do not apply to an entity kind (e.g. ``transient`` on a method)
    stay False.
    """

    scope: Scope = Scope.PUBLIC
    is_static: bool = False
    is_final: bool = False
    is_abstract: bool = False
    is_native: bool = False
    is_synchronized: bool = False
    is_transient: bool = False
    is_volatile: bool = False

    @property
    def is_public(self) -> bool:
        return self.scope is Scope.PUBLIC

    @property
    def is_protected(self) -> bool:
        return self.scope is Scope.PROTECTED

    @property
    def is_package_private(self) -> bool:
        return self.scope is Scope.PACKAGE_PRIVATE

    @property
    def is_private(self) -> bool:
        return self.scope is Scope.PRIVATE
