# topmark:header:start
#
#   project      : APISurface
#   file         : engine.py
#   file_relpath : src/apisurface/closure/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Visibility closure: the set of classes an API surface cannot do without.

Starting from every visible class, the engine follows the references a
caller can observe (field and parameter types, return types, thrown
exceptions, type parameters, enclosing classes, interfaces and superclasses)
until no new class appears. A hidden superclass is not followed; the
superclass link is stripped in the result instead and reported.

The traversal uses an explicit stack; the result dict doubles as the visited
set, so cyclic hierarchies terminate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from apisurface.closure.visibility import VisibilityPolicy
from apisurface.config.logging import get_logger
from apisurface.diagnostic.codes import (
    DEPRECATED,
    DEPRECATION_MISMATCH,
    HIDDEN_SUPERCLASS,
    UNAVAILABLE_SYMBOL,
)

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Iterator

    from apisurface.closure.visibility import ClosurePolicy
    from apisurface.config.logging import ApiSurfaceLogger
    from apisurface.diagnostic.model import DiagnosticRegistry
    from apisurface.model.classes import ClassInfo
    from apisurface.model.members import MethodInfo
    from apisurface.model.snapshot import Snapshot
    from apisurface.model.types import TypeInfo

logger: ApiSurfaceLogger = get_logger(__name__)


class ClosureResult:
    """Classes in the closure, in discovery order, plus superclass rewrites.

    Args:
        classes: Closed classes keyed by qualified name.
        stripped_superclasses: Class name mapped to the hidden superclass that
            was cut off.
        policy: The visibility policy the closure was computed with.
    """

    def __init__(
        self,
        classes: dict[str, ClassInfo],
        stripped_superclasses: dict[str, ClassInfo],
        policy: ClosurePolicy | None = None,
    ) -> None:
        self._classes: dict[str, ClassInfo] = classes
        self.stripped_superclasses: dict[str, ClassInfo] = stripped_superclasses
        self.policy: ClosurePolicy = policy if policy is not None else VisibilityPolicy()

    @property
    def classes(self) -> list[ClassInfo]:
        return list(self._classes.values())

    def __contains__(self, item: object) -> bool:
        name: object = getattr(item, "qualified_name", item)
        return isinstance(name, str) and name in self._classes

    def __iter__(self) -> Iterator[ClassInfo]:
        return iter(list(self._classes.values()))

    def __len__(self) -> int:
        return len(self._classes)

    def effective_superclass(self, cls: ClassInfo) -> ClassInfo | None:
        """Superclass as seen through the closure; None once a hidden superclass was stripped."""
        if cls.qualified_name in self.stripped_superclasses:
            return None
        return cls.superclass

    def sorted_classes(self) -> list[ClassInfo]:
        return [self._classes[k] for k in sorted(self._classes)]

    def __repr__(self) -> str:
        return (
            f"ClosureResult(classes={len(self._classes)}, "
            f"stripped={len(self.stripped_superclasses)})"
        )


def _type_classes(t: TypeInfo | None) -> Iterator[ClassInfo]:
    """The type's own class followed by the classes of its direct generic arguments."""
    if t is None:
        return
    if t.class_info is not None:
        yield t.class_info
    for arg in t.type_arguments or ():
        if arg.class_info is not None:
            yield arg.class_info


def _bound_classes(params: Iterable[TypeInfo]) -> Iterator[ClassInfo]:
    for param in params:
        if param.class_info is not None:
            yield param.class_info
        for bound in param.extends_bounds:
            yield from bound.referenced_classes()


class _ClosureWalk:
    def __init__(
        self,
        registry: DiagnosticRegistry,
        policy: ClosurePolicy,
    ) -> None:
        self.registry = registry
        self.policy = policy
        self.result: dict[str, ClassInfo] = {}
        self.stripped: dict[str, ClassInfo] = {}
        self.stack: list[ClassInfo] = []

    def run(self, seeds: list[ClassInfo]) -> None:
        self.stack.extend(reversed(seeds))
        while self.stack:
            cls: ClassInfo = self.stack.pop()
            if cls.qualified_name in self.result:
                continue
            self.result[cls.qualified_name] = cls
            logger.trace("Closure expands %s", cls.qualified_name)
            self._expand(cls)

    def _push(self, classes: Iterable[ClassInfo]) -> None:
        for c in classes:
            if c.qualified_name not in self.result:
                self.stack.append(c)

    def _expand(self, cls: ClassInfo) -> None:
        for fld in (*cls.fields, *cls.enum_constants):
            if self.policy.field_visible(fld):
                self._push(_type_classes(fld.type))
        self._push(_bound_classes(cls.type_parameters))
        for method in (*cls.methods, *cls.constructors):
            if self.policy.method_visible(method):
                self._expand_method(cls, method)
        if cls.containing_class is not None:
            self._push([cls.containing_class])
        self._push(cls.interfaces)

        supr: ClassInfo | None = cls.superclass
        if supr is None:
            return
        if self.policy.is_hidden(supr):
            self.stripped[cls.qualified_name] = supr
            self.registry.report(
                HIDDEN_SUPERCLASS,
                cls.position,
                f"Public class {cls.qualified_name} stripped of unavailable superclass "
                f"{supr.qualified_name}",
            )
        else:
            self._push([supr])

    def _expand_method(self, cls: ClassInfo, method: MethodInfo) -> None:
        self._push(_bound_classes(method.type_parameters))
        for param in method.parameters:
            if param.type.class_info is None:
                continue
            self._push([param.type.class_info])
            for arg in param.type.type_arguments or ():
                arg_cls: ClassInfo | None = arg.class_info
                if arg_cls is None:
                    continue
                if self.policy.is_hidden(arg_cls):
                    self.registry.report(
                        UNAVAILABLE_SYMBOL,
                        method.position,
                        f"Parameter of hidden type {arg.full_name} in "
                        f"{cls.qualified_name}.{method.name}()",
                    )
                else:
                    self._push([arg_cls])
        self._push(method.thrown_exceptions)
        self._push(_type_classes(method.return_type))

    # ------------------------------ post checks ------------------------------
    def _unavailable(self, cls: ClassInfo | None) -> bool:
        if cls is None:
            return False
        return self.policy.is_hidden(cls) or cls.qualified_name not in self.result

    def _check_signature(self, cls: ClassInfo, method: MethodInfo) -> None:
        ret_cls: ClassInfo | None = method.return_type.class_info if method.return_type else None
        if ret_cls is not None and self._unavailable(ret_cls):
            self.registry.report(
                UNAVAILABLE_SYMBOL,
                method.position,
                f"Method {cls.qualified_name}.{method.name} returns unavailable type "
                f"{ret_cls.simple_name}",
            )
        for param in method.parameters:
            if param.type.is_primitive:
                continue
            if self._unavailable(param.type.class_info):
                self.registry.report(
                    UNAVAILABLE_SYMBOL,
                    method.position,
                    f"Parameter of unavailable type {param.type.full_name} in "
                    f"{cls.qualified_name}.{method.name}()",
                )

    def check(self) -> None:
        for cls in list(self.result.values()):
            if self.policy.is_hidden(cls):
                continue
            for method in cls.methods:
                if not self.policy.method_visible(method):
                    continue
                if method.is_deprecated:
                    self.registry.report(
                        DEPRECATED,
                        method.position,
                        f"Method {cls.qualified_name}.{method.name} is deprecated",
                    )
                if method.deprecation_mismatch:
                    self.registry.report(
                        DEPRECATION_MISMATCH,
                        method.position,
                        f"Method {cls.qualified_name}.{method.name}: @Deprecated annotation "
                        f"and @deprecated doc tag do not match",
                    )
                self._check_signature(cls, method)
            for element in cls.annotation_elements:
                if self.policy.method_visible(element):
                    self._check_signature(cls, element)
            if cls.is_deprecated:
                self.registry.report(
                    DEPRECATED,
                    cls.position,
                    f"Class {cls.qualified_name} is deprecated",
                )
            if cls.deprecation_mismatch:
                self.registry.report(
                    DEPRECATION_MISMATCH,
                    cls.position,
                    f"Class {cls.qualified_name}: @Deprecated annotation and @deprecated "
                    f"comment do not match",
                )


def compute_closure(
    snapshot: Snapshot,
    registry: DiagnosticRegistry,
    *,
    policy: ClosurePolicy | None = None,
    stub_packages: Collection[str] | None = None,
) -> ClosureResult:
    """Compute the visibility closure of ``snapshot``.

    Args:
        snapshot: A built snapshot.
        registry: Receives visibility diagnostics.
        policy: Visibility predicates; defaults to `VisibilityPolicy()`.
        stub_packages: When given, only classes in these packages are kept in
            the result (after all checks have run).

    Returns:
        The closure.
    """
    pol: ClosurePolicy = policy if policy is not None else VisibilityPolicy()
    seeds: list[ClassInfo] = [c for c in snapshot.all_classes() if pol.class_visible(c)]
    logger.debug("Closure of %s: %d seed classes", snapshot.label, len(seeds))

    walk = _ClosureWalk(registry, pol)
    walk.run(seeds)
    walk.check()

    classes: dict[str, ClassInfo] = walk.result
    if stub_packages is not None:
        wanted: set[str] = set(stub_packages)
        classes = {k: c for k, c in classes.items() if c.package_name in wanted}
    logger.debug(
        "Closure of %s: %d classes, %d stripped superclasses",
        snapshot.label,
        len(classes),
        len(walk.stripped),
    )
    return ClosureResult(classes, walk.stripped, pol)
