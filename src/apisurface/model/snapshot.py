# topmark:header:start
#
#   project      : APISurface
#   file         : snapshot.py
#   file_relpath : src/apisurface/model/snapshot.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Snapshot: the root owner of one version's symbol graph.

A snapshot is populated by the builder and then frozen. After `freeze`, the
registration methods raise `RuntimeError` and the public mappings are
read-only views.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from apisurface.model.classes import ClassInfo
    from apisurface.model.packages import PackageInfo


class Snapshot:
    """One fully built symbol graph.

    Args:
        label: Human-readable origin (file name, version tag) used in logs.
    """

    def __init__(self, label: str = "<snapshot>") -> None:
        self.label: str = label
        self._packages: dict[str, PackageInfo] = {}
        self._classes: dict[str, ClassInfo] = {}
        self._external: dict[str, ClassInfo] = {}
        self._frozen: bool = False

    # ----------------------------- registration -----------------------------
    def _check_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError(f"Snapshot {self.label} is frozen")

    def add_package(self, package: PackageInfo) -> PackageInfo:
        """Register ``package`` unless one with that name exists; return the registered one."""
        self._check_mutable()
        return self._packages.setdefault(package.name, package)

    def add_class(self, cls: ClassInfo) -> None:
        self._check_mutable()
        self._classes[cls.qualified_name] = cls

    def add_external_class(self, cls: ClassInfo) -> None:
        self._check_mutable()
        self._external[cls.qualified_name] = cls

    def freeze(self) -> None:
        self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    # -------------------------------- queries --------------------------------
    @property
    def packages(self) -> Mapping[str, PackageInfo]:
        return MappingProxyType(self._packages)

    @property
    def classes(self) -> Mapping[str, ClassInfo]:
        """Classes declared by the source, keyed by qualified name."""
        return MappingProxyType(self._classes)

    @property
    def external_classes(self) -> Mapping[str, ClassInfo]:
        """Stub classes referenced but not declared by the source."""
        return MappingProxyType(self._external)

    def get_class(self, qualified_name: str) -> ClassInfo | None:
        return self._classes.get(qualified_name)

    def get_package(self, name: str) -> PackageInfo | None:
        return self._packages.get(name)

    def all_classes(self) -> list[ClassInfo]:
        """Declared classes sorted by qualified name."""
        return [self._classes[k] for k in sorted(self._classes)]

    def __len__(self) -> int:
        return len(self._classes)

    def __repr__(self) -> str:
        return (
            f"Snapshot({self.label!r}, packages={len(self._packages)}, "
            f"classes={len(self._classes)})"
        )
