# topmark:header:start
#
#   project      : APISurface
#   file         : xml_reader.py
#   file_relpath : src/apisurface/apicheck/xml_reader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Read API XML documents into snapshots.

The document layout is::

    <api>
      <package name="p">
        <class name="C" extends="p.Base" abstract="false" static="false"
               final="false" deprecated="not deprecated" visibility="public">
          <implements name="p.I"/>
          <constructor name="C" type="p.C" ...><parameter name="x" type="int"/></constructor>
          <method name="m" return="void" abstract="false" native="false"
                  synchronized="false" ...>
            <parameter name="args" type="java.lang.String..."/>
            <exception name="IOException" type="java.io.IOException"/>
          </method>
          <field name="F" type="int" transient="false" volatile="false"
                 value="1" .../>
        </class>
        <interface ...>...</interface>
      </package>
    </api>

Parsing is event driven (`xml.sax`); the document locator supplies the line
of every declaration. The declarations go through a `SymbolTable` into the
regular `SnapshotBuilder`, so readers and source front-ends share one
construction path.
"""

from __future__ import annotations

import io
import xml.sax
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, TYPE_CHECKING, Final
from xml.sax.handler import ContentHandler

from apisurface.apicheck.errors import ApiParseError
from apisurface.builder.builder import SnapshotBuilder
from apisurface.builder.declarations import (
    ClassDecl,
    DuplicateSymbolError,
    FieldDecl,
    MethodDecl,
    PackageDecl,
    ParameterDecl,
    SymbolTable,
    TypeDecl,
)
from apisurface.builder.typenames import ParsedType, TypeNameError, parse_type_decl
from apisurface.config.logging import get_logger
from apisurface.diagnostic.model import SourcePosition
from apisurface.model.classes import ClassKind
from apisurface.model.members import MemberKind
from apisurface.model.modifiers import Modifiers, Scope

if TYPE_CHECKING:
    from xml.sax.xmlreader import AttributesImpl, Locator

    from apisurface.config.logging import ApiSurfaceLogger
    from apisurface.model.snapshot import Snapshot

logger: ApiSurfaceLogger = get_logger(__name__)

_CLASS_TAGS: Final[frozenset[str]] = frozenset({"class", "interface"})
_INVOCABLE_TAGS: Final[frozenset[str]] = frozenset({"constructor", "method"})

# element -> permitted parents (None: document root)
_PARENTS: Final[dict[str, frozenset[str | None]]] = {
    "api": frozenset({None}),
    "package": frozenset({"api"}),
    "class": frozenset({"package"}),
    "interface": frozenset({"package"}),
    "implements": _CLASS_TAGS,
    "constructor": _CLASS_TAGS,
    "method": _CLASS_TAGS,
    "field": _CLASS_TAGS,
    "parameter": _INVOCABLE_TAGS,
    "exception": _INVOCABLE_TAGS,
}


@dataclass
class _PendingInvocable:
    tag: str
    name: str
    modifiers: Modifiers
    return_type: TypeDecl | None
    position: SourcePosition
    deprecated: bool
    parameters: list[tuple[ParameterDecl, bool]] = field(default_factory=lambda: [])
    thrown: list[str] = field(default_factory=lambda: [])


@dataclass
class _PendingClass:
    qualified_name: str
    package: str
    simple_name: str
    kind: ClassKind
    modifiers: Modifiers
    superclass: str | None
    containing_class: str | None
    position: SourcePosition
    deprecated: bool
    interfaces: list[str] = field(default_factory=lambda: [])
    constructors: list[MethodDecl] = field(default_factory=lambda: [])
    methods: list[MethodDecl] = field(default_factory=lambda: [])
    fields: list[FieldDecl] = field(default_factory=lambda: [])


class _ApiXmlHandler(ContentHandler):
    """SAX handler collecting declarations into a `SymbolTable`."""

    def __init__(self, label: str) -> None:
        super().__init__()
        self.label: str = label
        self.table: SymbolTable = SymbolTable()
        self._locator: Locator | None = None
        self._stack: list[str] = []
        self._package: str | None = None
        self._class: _PendingClass | None = None
        self._invocable: _PendingInvocable | None = None

    # ------------------------------ plumbing ------------------------------
    def setDocumentLocator(self, locator: Locator) -> None:  # noqa: N802 - SAX API
        self._locator = locator

    @property
    def line(self) -> int:
        if self._locator is None:
            return 0
        return self._locator.getLineNumber() or 0

    def position(self) -> SourcePosition:
        return SourcePosition(self.label, self.line)

    def fail(self, message: str) -> ApiParseError:
        return ApiParseError(message, file=self.label, line=self.line)

    def required(self, attrs: AttributesImpl, tag: str, key: str) -> str:
        value: str | None = attrs.get(key)
        if value is None:
            raise self.fail(f"<{tag}> is missing required attribute '{key}'")
        return value

    def flag(self, attrs: AttributesImpl, tag: str, key: str) -> bool:
        raw: str | None = attrs.get(key)
        if raw is None or raw == "false":
            return False
        if raw == "true":
            return True
        raise self.fail(f"<{tag}> attribute '{key}' must be 'true' or 'false', got '{raw}'")

    def deprecated(self, attrs: AttributesImpl, tag: str) -> bool:
        raw: str | None = attrs.get("deprecated")
        if raw is None or raw == "not deprecated":
            return False
        if raw == "deprecated":
            return True
        raise self.fail(f"<{tag}> attribute 'deprecated' has invalid value '{raw}'")

    def modifiers(self, attrs: AttributesImpl, tag: str) -> Modifiers:
        raw: str = attrs.get("visibility", Scope.PUBLIC.key)
        scope: Scope | None = Scope.parse(raw)
        if scope is None:
            raise self.fail(f"<{tag}> has invalid visibility '{raw}'")
        return Modifiers(
            scope=scope,
            is_static=self.flag(attrs, tag, "static"),
            is_final=self.flag(attrs, tag, "final"),
            is_abstract=self.flag(attrs, tag, "abstract"),
            is_native=self.flag(attrs, tag, "native"),
            is_synchronized=self.flag(attrs, tag, "synchronized"),
            is_transient=self.flag(attrs, tag, "transient"),
            is_volatile=self.flag(attrs, tag, "volatile"),
        )

    def parse_type(self, text: str) -> ParsedType:
        try:
            return parse_type_decl(text)
        except TypeNameError as e:
            raise self.fail(str(e)) from e

    # ------------------------------- events -------------------------------
    def startElement(self, name: str, attrs: AttributesImpl) -> None:  # noqa: N802 - SAX API
        parents: frozenset[str | None] | None = _PARENTS.get(name)
        if parents is None:
            raise self.fail(f"Unknown element <{name}>")
        parent: str | None = self._stack[-1] if self._stack else None
        if parent not in parents:
            where: str = f"inside <{parent}>" if parent else "at document level"
            raise self.fail(f"Element <{name}> is not allowed {where}")
        self._stack.append(name)

        if name == "package":
            self._start_package(attrs)
        elif name in _CLASS_TAGS:
            self._start_class(name, attrs)
        elif name == "implements":
            assert self._class is not None
            self._class.interfaces.append(self.required(attrs, name, "name"))
        elif name in _INVOCABLE_TAGS:
            self._start_invocable(name, attrs)
        elif name == "field":
            self._field(attrs)
        elif name == "parameter":
            self._parameter(attrs)
        elif name == "exception":
            assert self._invocable is not None
            thrown: str | None = attrs.get("type") or attrs.get("name")
            if not thrown:
                raise self.fail("<exception> is missing required attribute 'type'")
            self._invocable.thrown.append(thrown)

    def endElement(self, name: str) -> None:  # noqa: N802 - SAX API
        self._stack.pop()
        if name in _INVOCABLE_TAGS:
            self._end_invocable()
        elif name in _CLASS_TAGS:
            self._end_class()
        elif name == "package":
            self._package = None

    # ------------------------------ elements ------------------------------
    def _start_package(self, attrs: AttributesImpl) -> None:
        pkg: str = self.required(attrs, "package", "name")
        self._package = pkg
        if self.table.lookup_package(pkg) is None:
            self.table.add_package(PackageDecl(pkg, position=self.position()))

    def _start_class(self, tag: str, attrs: AttributesImpl) -> None:
        assert self._package is not None
        simple: str = self.required(attrs, tag, "name")
        qualified: str = f"{self._package}.{simple}"
        container: str | None = None
        if "." in simple:
            container = f"{self._package}.{simple.rsplit('.', 1)[0]}"
        self._class = _PendingClass(
            qualified_name=qualified,
            package=self._package,
            simple_name=simple,
            kind=ClassKind.INTERFACE if tag == "interface" else ClassKind.CLASS,
            modifiers=self.modifiers(attrs, tag),
            superclass=attrs.get("extends") if tag == "class" else None,
            containing_class=container,
            position=self.position(),
            deprecated=self.deprecated(attrs, tag),
        )

    def _end_class(self) -> None:
        pending: _PendingClass | None = self._class
        assert pending is not None
        self._class = None
        decl = ClassDecl(
            qualified_name=pending.qualified_name,
            package=pending.package,
            simple_name=pending.simple_name,
            kind=pending.kind,
            modifiers=pending.modifiers,
            superclass=pending.superclass,
            interfaces=tuple(pending.interfaces),
            containing_class=pending.containing_class,
            constructors=tuple(pending.constructors),
            methods=tuple(pending.methods),
            fields=tuple(pending.fields),
            position=pending.position,
            deprecated=pending.deprecated,
        )
        try:
            self.table.add_class(decl)
        except DuplicateSymbolError as e:
            raise ApiParseError(str(e), file=self.label, line=pending.position.line) from e

    def _start_invocable(self, tag: str, attrs: AttributesImpl) -> None:
        name: str = self.required(attrs, tag, "name")
        return_type: TypeDecl | None = None
        if tag == "method":
            return_type = self.parse_type(self.required(attrs, tag, "return")).decl
        self._invocable = _PendingInvocable(
            tag=tag,
            name=name,
            modifiers=self.modifiers(attrs, tag),
            return_type=return_type,
            position=self.position(),
            deprecated=self.deprecated(attrs, tag),
        )

    def _parameter(self, attrs: AttributesImpl) -> None:
        assert self._invocable is not None
        parsed: ParsedType = self.parse_type(self.required(attrs, "parameter", "type"))
        param = ParameterDecl(attrs.get("name", ""), parsed.decl, self.position())
        self._invocable.parameters.append((param, parsed.is_varargs))

    def _end_invocable(self) -> None:
        pending: _PendingInvocable | None = self._invocable
        assert pending is not None and self._class is not None
        self._invocable = None

        params: list[tuple[ParameterDecl, bool]] = pending.parameters
        for param, is_varargs in params[:-1]:
            if is_varargs:
                raise ApiParseError(
                    f"Only the last parameter of {pending.name} may be varargs ('{param.name}')",
                    file=self.label,
                    line=pending.position.line,
                )
        decl = MethodDecl(
            name=pending.name,
            kind=MemberKind.CONSTRUCTOR if pending.tag == "constructor" else MemberKind.METHOD,
            modifiers=pending.modifiers,
            return_type=pending.return_type,
            parameters=tuple(p for p, _ in params),
            thrown=tuple(pending.thrown),
            is_varargs=bool(params) and params[-1][1],
            position=pending.position,
            deprecated=pending.deprecated,
        )
        if pending.tag == "constructor":
            self._class.constructors.append(decl)
        else:
            self._class.methods.append(decl)

    def _field(self, attrs: AttributesImpl) -> None:
        assert self._class is not None
        self._class.fields.append(
            FieldDecl(
                name=self.required(attrs, "field", "name"),
                type=self.parse_type(self.required(attrs, "field", "type")).decl,
                modifiers=self.modifiers(attrs, "field"),
                constant_value=attrs.get("value"),
                position=self.position(),
                deprecated=self.deprecated(attrs, "field"),
            )
        )


def parse_api_xml(stream: IO[bytes] | IO[str], *, label: str = "<api>") -> SymbolTable:
    """Parse an API XML document into declarations.

    Args:
        stream: The document.
        label: File name used in positions and error messages.

    Returns:
        The declared packages and classes.

    Raises:
        ApiParseError: If the document is malformed.
    """
    handler = _ApiXmlHandler(label)
    parser = xml.sax.make_parser()
    parser.setContentHandler(handler)
    try:
        parser.parse(stream)
    except xml.sax.SAXParseException as e:
        raise ApiParseError(e.getMessage(), file=label, line=e.getLineNumber() or 0) from e
    return handler.table


def read_api_xml(path: Path | str) -> Snapshot:
    """Read an API XML file and build its snapshot.

    Args:
        path: The document.

    Returns:
        The frozen snapshot, labelled with ``path``.

    Raises:
        ApiParseError: If the document is malformed.
        OSError: If the file cannot be opened.
    """
    path = Path(path)
    with path.open("rb") as fh:
        table: SymbolTable = parse_api_xml(fh, label=str(path))
    logger.debug("Read %d classes from %s", len(table), path)
    return SnapshotBuilder(table, label=str(path)).build()


def read_api_xml_text(text: str, *, label: str = "<api>") -> Snapshot:
    """Build a snapshot from an in-memory API XML document."""
    table: SymbolTable = parse_api_xml(io.BytesIO(text.encode("utf-8")), label=label)
    return SnapshotBuilder(table, label=label).build()
