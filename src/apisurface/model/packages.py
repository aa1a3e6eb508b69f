# topmark:header:start
#
#   project      : APISurface
#   file         : packages.py
#   file_relpath : src/apisurface/model/packages.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Package nodes of the symbol model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from apisurface.constants import DEFAULT_PACKAGE_NAME
from apisurface.model.comments import EMPTY_COMMENT, DocComment

if TYPE_CHECKING:
    from apisurface.diagnostic.model import SourcePosition
    from apisurface.model.classes import ClassInfo


@dataclass(eq=False)
class PackageInfo:
    """A package and the classes it contains, keyed by simple name.

    Equality and hashing use the package name.
    """

    name: str
    comment: DocComment = EMPTY_COMMENT
    position: SourcePosition | None = None
    classes: dict[str, ClassInfo] = field(default_factory=lambda: {})

    @property
    def is_default(self) -> bool:
        return self.name == DEFAULT_PACKAGE_NAME

    @property
    def is_hidden(self) -> bool:
        return self.comment.is_hidden

    def add_class(self, cls: ClassInfo) -> None:
        self.classes[cls.simple_name] = cls

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageInfo):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"PackageInfo({self.name!r}, classes={len(self.classes)})"
