# topmark:header:start
#
#   project      : APISurface
#   file         : xml_writer.py
#   file_relpath : src/apisurface/apicheck/xml_writer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Write snapshots as API XML documents.

The output is the format read by `apisurface.apicheck.xml_reader`. Packages
and classes are written sorted by name, the default package is skipped, and
thrown exceptions are sorted by qualified name. When a closure is supplied,
only locally defined classes in the closure are written, members are filtered
with the closure's policy, stripped superclasses are replaced by the root type
and ``implements`` lists only interfaces in the closure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final
from xml.sax.saxutils import escape

from apisurface.config.logging import get_logger
from apisurface.constants import ROOT_OBJECT_TYPE

if TYPE_CHECKING:
    from typing import TextIO

    from apisurface.closure.engine import ClosureResult
    from apisurface.config.logging import ApiSurfaceLogger
    from apisurface.model.classes import ClassInfo
    from apisurface.model.members import FieldInfo, MethodInfo
    from apisurface.model.packages import PackageInfo
    from apisurface.model.snapshot import Snapshot

logger: ApiSurfaceLogger = get_logger(__name__)

_ATTR_ENTITIES: Final[dict[str, str]] = {'"': "&quot;", "'": "&apos;"}


def xml_attr(text: str) -> str:
    """Escape ``& < > " '`` for use inside a double-quoted attribute."""
    return escape(text, _ATTR_ENTITIES)


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _deprecated(value: bool) -> str:
    return "deprecated" if value else "not deprecated"


def _parameter_type(method: MethodInfo, index: int) -> str:
    full: str = method.parameters[index].type.full_name
    if method.is_varargs and index == len(method.parameters) - 1 and full.endswith("[]"):
        return full[:-2] + "..."
    return full


class _ApiXmlWriter:
    def __init__(self, stream: TextIO, closure: ClosureResult | None) -> None:
        self.out = stream
        self.closure = closure

    def line(self, text: str) -> None:
        self.out.write(text + "\n")

    def attrs(self, pairs: list[tuple[str, str]]) -> str:
        return "\n".join(f' {key}="{xml_attr(value)}"' for key, value in pairs)

    # ------------------------------ selection ------------------------------
    def class_included(self, cls: ClassInfo) -> bool:
        if not cls.defined_locally:
            return False
        if self.closure is None:
            return True
        return cls in self.closure and not self.closure.policy.is_hidden(cls)

    def method_included(self, method: MethodInfo) -> bool:
        return self.closure is None or self.closure.policy.method_visible(method)

    def field_included(self, fld: FieldInfo) -> bool:
        return self.closure is None or self.closure.policy.field_visible(fld)

    # ------------------------------- writing -------------------------------
    def write(self, snapshot: Snapshot) -> int:
        written: int = 0
        self.line("<api>")
        for name in sorted(snapshot.packages):
            pkg: PackageInfo = snapshot.packages[name]
            if pkg.is_default:
                continue
            classes: list[ClassInfo] = [c for c in pkg.classes.values() if self.class_included(c)]
            if self.closure is not None and not classes:
                continue
            self.line(f'<package name="{xml_attr(pkg.name)}"\n>')
            for cls in sorted(classes, key=lambda c: c.simple_name):
                self.write_class(cls)
                written += 1
            self.line("</package>")
        self.line("</api>")
        return written

    def write_class(self, cls: ClassInfo) -> None:
        tag: str = "interface" if cls.is_interface else "class"
        pairs: list[tuple[str, str]] = [("name", cls.simple_name)]
        if not cls.is_interface and cls.qualified_name != ROOT_OBJECT_TYPE:
            supr: ClassInfo | None = cls.superclass
            if self.closure is not None:
                supr = self.closure.effective_superclass(cls)
            pairs.append(("extends", supr.qualified_name if supr is not None else ROOT_OBJECT_TYPE))
        pairs += [
            ("abstract", _bool(cls.is_abstract)),
            ("static", _bool(cls.is_static)),
            ("final", _bool(cls.is_final)),
            ("deprecated", _deprecated(cls.is_deprecated)),
            ("visibility", cls.scope.key),
        ]
        self.line(f"<{tag} {self.attrs(pairs)[1:]}\n>")

        for iface in sorted(cls.real_interfaces, key=lambda i: i.qualified_name):
            if self.closure is None or iface in self.closure:
                self.line(f'<implements name="{xml_attr(iface.qualified_name)}">')
                self.line("</implements>")
        for ctor in cls.constructors:
            if self.method_included(ctor):
                self.write_invocable(ctor, "constructor")
        for method in sorted(cls.methods, key=lambda m: m.hashable_name):
            if self.method_included(method):
                self.write_invocable(method, "method")
        for fld in sorted((*cls.fields, *cls.enum_constants), key=lambda f: f.name):
            if self.field_included(fld):
                self.write_field(fld)
        self.line(f"</{tag}>")

    def write_invocable(self, method: MethodInfo, tag: str) -> None:
        pairs: list[tuple[str, str]] = [("name", method.name)]
        if tag == "constructor":
            pairs.append(("type", method.containing_class.qualified_name))
        else:
            ret: str = method.return_type.full_name if method.return_type is not None else "void"
            pairs += [
                ("return", ret),
                ("abstract", _bool(method.is_abstract)),
                ("native", _bool(method.is_native)),
                ("synchronized", _bool(method.is_synchronized)),
            ]
        pairs += [
            ("static", _bool(method.is_static)),
            ("final", _bool(method.is_final)),
            ("deprecated", _deprecated(method.is_deprecated)),
            ("visibility", method.scope.key),
        ]
        self.line(f"<{tag} {self.attrs(pairs)[1:]}\n>")
        for index, param in enumerate(method.parameters):
            self.line(
                f'<parameter name="{xml_attr(param.name)}" '
                f'type="{xml_attr(_parameter_type(method, index))}">'
            )
            self.line("</parameter>")
        for exc in sorted(method.thrown_exceptions, key=lambda e: e.qualified_name):
            self.line(
                f'<exception name="{xml_attr(exc.simple_name)}"'
                f' type="{xml_attr(exc.qualified_name)}">'
            )
            self.line("</exception>")
        self.line(f"</{tag}>")

    def write_field(self, fld: FieldInfo) -> None:
        pairs: list[tuple[str, str]] = [
            ("name", fld.name),
            ("type", fld.type.full_name),
            ("transient", _bool(fld.is_transient)),
            ("volatile", _bool(fld.is_volatile)),
        ]
        if fld.constant_value is not None:
            pairs.append(("value", fld.constant_value))
        pairs += [
            ("static", _bool(fld.is_static)),
            ("final", _bool(fld.is_final)),
            ("deprecated", _deprecated(fld.is_deprecated)),
            ("visibility", fld.scope.key),
        ]
        self.line(f"<field {self.attrs(pairs)[1:]}\n>")
        self.line("</field>")


def write_api_xml(
    snapshot: Snapshot,
    stream: TextIO,
    *,
    closure: ClosureResult | None = None,
) -> int:
    """Write ``snapshot`` as an API XML document.

    Args:
        snapshot: The snapshot to serialize.
        stream: Text stream receiving the document.
        closure: Restrict output to this closure and its policy.

    Returns:
        The number of classes written.
    """
    written: int = _ApiXmlWriter(stream, closure).write(snapshot)
    logger.debug("Wrote %d classes of %s as API XML", written, snapshot.label)
    return written
