# topmark:header:start
#
#   project      : APISurface
#   file         : loaders.py
#   file_relpath : src/apisurface/builder/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load symbol declarations from a TOML symbol file.

A symbol file stands in for a source-level front-end. Its layout:

```toml
[[package]]
name = "com.example"
comment = "Example package."

[[class]]
name = "com.example.Widget"          # qualified name
package = "com.example"              # optional; inferred from declared packages
kind = "class"                       # class | interface | enum | annotation
visibility = "public"                # public | protected | package | private
abstract = false
final = false
static = false
extends = "com.example.Base"
implements = ["java.lang.Runnable"]
containing_class = "com.example.Outer"
type_parameters = ["T extends java.lang.Comparable<T>"]
annotations = ["java.lang.Deprecated"]
comment = "@deprecated use Gadget"
defined_locally = true

[[class.constructor]]
visibility = "public"
parameters = [{ name = "size", type = "int" }]
throws = ["java.io.IOException"]

[[class.method]]
name = "run"
return = "void"
parameters = [{ name = "args", type = "java.lang.String..." }]

[[class.field]]
name = "MAX"
type = "int"
static = true
final = true
value = "10"

[[class.enum_constant]]
name = "RED"

[[class.element]]                    # annotation elements
name = "value"
type = "java.lang.String"
default = "\\"\\""
```

Symbol-file entries have no line information; positions carry the file name
and diagnostics render it without a line.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from apisurface.builder.declarations import (
    AnnotationDecl,
    ClassDecl,
    DuplicateSymbolError,
    FieldDecl,
    MethodDecl,
    PackageDecl,
    ParameterDecl,
    SymbolTable,
    TypeDecl,
)
from apisurface.builder.typenames import (
    ParsedType,
    TypeNameError,
    parse_type_decl,
    parse_type_parameter,
    type_parameter_name,
)
from apisurface.config.io.getters import (
    get_bool_value_or_none,
    get_list_value,
    get_string_value_or_none,
)
from apisurface.config.io.loaders import TomlLoadError, load_toml_dict
from apisurface.config.logging import get_logger
from apisurface.constants import DEFAULT_PACKAGE_NAME
from apisurface.diagnostic.model import SourcePosition
from apisurface.model.classes import ClassKind
from apisurface.model.members import MemberKind
from apisurface.model.modifiers import Modifiers, Scope

if TYPE_CHECKING:
    from apisurface.config.io.getters import TomlTable
    from apisurface.config.logging import ApiSurfaceLogger

logger: ApiSurfaceLogger = get_logger(__name__)


class SymbolFileError(ValueError):
    """Raised for a symbol file that cannot be read or does not describe valid symbols.

    Attributes:
        path: The symbol file.
        where: Location of the offending entry, e.g. ``class[2].method[0]``.
    """

    def __init__(self, message: str, *, path: Path | str, where: str | None = None) -> None:
        self.path: str = str(path)
        self.where: str | None = where
        location: str = f"{self.path} ({where})" if where else self.path
        super().__init__(f"{location}: {message}")


class _SymbolFileReader:
    def __init__(self, path: Path, data: TomlTable) -> None:
        self.path = path
        self.data = data
        self.position = SourcePosition(str(path))
        self.class_tables: list[TomlTable] = self._tables(data, "class", "class")
        self.package_names: set[str] = set()
        # Type parameter names per class, for resolving names in nested scopes.
        self.type_params: dict[str, tuple[str, ...]] = {}
        self.containers: dict[str, str] = {}

    def fail(self, message: str, where: str | None = None) -> SymbolFileError:
        return SymbolFileError(message, path=self.path, where=where)

    def _tables(self, table: TomlTable, key: str, where: str) -> list[TomlTable]:
        value: Any = table.get(key, [])
        if isinstance(value, dict):
            value = [value]
        if not isinstance(value, list):
            raise self.fail(f"'{key}' must be an array of tables", where)
        for idx, item in enumerate(value):
            if not isinstance(item, dict):
                raise self.fail(f"'{key}' entry is not a table", f"{where}[{idx}]")
        return list(value)

    def _require(self, table: TomlTable, key: str, where: str) -> str:
        value: str | None = get_string_value_or_none(table, key)
        if not value:
            raise self.fail(f"missing required key '{key}'", where)
        return value

    def _strings(self, table: TomlTable, key: str, where: str) -> tuple[str, ...]:
        values: list[Any] = get_list_value(table, key)
        if not all(isinstance(v, str) for v in values):
            raise self.fail(f"'{key}' must be a list of strings", where)
        return tuple(values)

    def _flag(self, table: TomlTable, key: str) -> bool:
        return bool(get_bool_value_or_none(table, key))

    def _modifiers(self, table: TomlTable, where: str) -> Modifiers:
        raw: str | None = get_string_value_or_none(table, "visibility")
        scope: Scope | None = Scope.PUBLIC if raw is None else Scope.parse(raw)
        if scope is None:
            raise self.fail(f"unknown visibility '{raw}'", where)
        return Modifiers(
            scope=scope,
            is_static=self._flag(table, "static"),
            is_final=self._flag(table, "final"),
            is_abstract=self._flag(table, "abstract"),
            is_native=self._flag(table, "native"),
            is_synchronized=self._flag(table, "synchronized"),
            is_transient=self._flag(table, "transient"),
            is_volatile=self._flag(table, "volatile"),
        )

    def _type(self, text: str, scope: frozenset[str], where: str) -> ParsedType:
        try:
            return parse_type_decl(text, scope)
        except TypeNameError as e:
            raise self.fail(str(e), where) from e

    def _type_params(
        self, texts: tuple[str, ...], scope: frozenset[str], where: str
    ) -> tuple[TypeDecl, ...]:
        names: frozenset[str] = scope | {type_parameter_name(t) for t in texts}
        try:
            return tuple(parse_type_parameter(t, names) for t in texts)
        except TypeNameError as e:
            raise self.fail(str(e), where) from e

    def _annotations(self, table: TomlTable, where: str) -> tuple[AnnotationDecl, ...]:
        return tuple(AnnotationDecl(name) for name in self._strings(table, "annotations", where))

    def _deprecated(self, table: TomlTable) -> bool | None:
        return get_bool_value_or_none(table, "deprecated")

    def _class_scope(self, qualified_name: str) -> frozenset[str]:
        names: set[str] = set()
        current: str | None = qualified_name
        seen: set[str] = set()
        while current and current not in seen:
            seen.add(current)
            names.update(self.type_params.get(current, ()))
            current = self.containers.get(current)
        return frozenset(names)

    def _package_of(self, table: TomlTable, qualified_name: str, where: str) -> str:
        explicit: str | None = get_string_value_or_none(table, "package")
        if explicit is not None:
            return explicit or DEFAULT_PACKAGE_NAME
        candidates: list[str] = [
            p for p in self.package_names if qualified_name.startswith(p + ".")
        ]
        if candidates:
            return max(candidates, key=len)
        if "." in qualified_name:
            logger.debug("%s: inferring package of %s from its name", where, qualified_name)
            return qualified_name.rsplit(".", 1)[0]
        return DEFAULT_PACKAGE_NAME

    # ------------------------------------------------------------------------
    def read(self) -> SymbolTable:
        table = SymbolTable()
        try:
            for idx, pkg in enumerate(self._tables(self.data, "package", "package")):
                where: str = f"package[{idx}]"
                name: str = self._require(pkg, "name", where)
                self.package_names.add(name)
                table.add_package(
                    PackageDecl(
                        name,
                        comment=get_string_value_or_none(pkg, "comment") or "",
                        position=self.position,
                    )
                )

            for idx, cls in enumerate(self.class_tables):
                where = f"class[{idx}]"
                qn: str = self._require(cls, "name", where)
                params: tuple[str, ...] = self._strings(cls, "type_parameters", where)
                self.type_params[qn] = tuple(type_parameter_name(p) for p in params)
                container: str | None = get_string_value_or_none(cls, "containing_class")
                if container:
                    self.containers[qn] = container

            inner: dict[str, list[str]] = {}
            for qn, container in self.containers.items():
                inner.setdefault(container, []).append(qn)

            for idx, cls in enumerate(self.class_tables):
                table.add_class(self._class(cls, f"class[{idx}]", inner))
        except DuplicateSymbolError as e:
            raise self.fail(str(e)) from e
        logger.debug("Loaded %d classes from %s", len(table), self.path)
        return table

    def _class(self, cls: TomlTable, where: str, inner: dict[str, list[str]]) -> ClassDecl:
        qn: str = self._require(cls, "name", where)
        raw_kind: str = get_string_value_or_none(cls, "kind") or ClassKind.CLASS.value
        try:
            kind = ClassKind(raw_kind)
        except ValueError as e:
            raise self.fail(f"unknown class kind '{raw_kind}'", where) from e
        scope: frozenset[str] = self._class_scope(qn)
        package: str = self._package_of(cls, qn, where)
        container: str | None = self.containers.get(qn)

        simple: str | None = None
        if container and package != DEFAULT_PACKAGE_NAME and not qn.startswith(package + "."):
            simple = qn.rsplit(".", 1)[-1]

        return ClassDecl(
            qualified_name=qn,
            package=package,
            simple_name=simple,
            kind=kind,
            modifiers=self._modifiers(cls, where),
            superclass=get_string_value_or_none(cls, "extends"),
            interfaces=self._strings(cls, "implements", where),
            containing_class=container,
            inner_classes=tuple(inner.get(qn, ())),
            constructors=tuple(
                self._method(m, MemberKind.CONSTRUCTOR, scope, f"{where}.constructor[{i}]", qn)
                for i, m in enumerate(self._tables(cls, "constructor", where))
            ),
            methods=tuple(
                self._method(m, MemberKind.METHOD, scope, f"{where}.method[{i}]", qn)
                for i, m in enumerate(self._tables(cls, "method", where))
            ),
            fields=tuple(
                self._field(f, scope, f"{where}.field[{i}]")
                for i, f in enumerate(self._tables(cls, "field", where))
            ),
            enum_constants=tuple(
                self._enum_constant(f, qn, f"{where}.enum_constant[{i}]")
                for i, f in enumerate(self._tables(cls, "enum_constant", where))
            ),
            annotation_elements=tuple(
                self._method(m, MemberKind.ANNOTATION_ELEMENT, scope, f"{where}.element[{i}]", qn)
                for i, m in enumerate(self._tables(cls, "element", where))
            ),
            annotations=self._annotations(cls, where),
            type_parameters=self._type_params(
                self._strings(cls, "type_parameters", where), scope, where
            ),
            comment=get_string_value_or_none(cls, "comment") or "",
            position=self.position,
            deprecated=self._deprecated(cls),
            defined_locally=get_bool_value_or_none(cls, "defined_locally") is not False,
        )

    def _method(
        self,
        table: TomlTable,
        kind: MemberKind,
        class_scope: frozenset[str],
        where: str,
        owner: str,
    ) -> MethodDecl:
        if kind is MemberKind.CONSTRUCTOR:
            name: str = get_string_value_or_none(table, "name") or owner.rsplit(".", 1)[-1]
        else:
            name = self._require(table, "name", where)
        type_param_texts: tuple[str, ...] = self._strings(table, "type_parameters", where)
        scope: frozenset[str] = class_scope | {type_parameter_name(t) for t in type_param_texts}

        return_type: TypeDecl | None = None
        if kind is not MemberKind.CONSTRUCTOR:
            key: str = "type" if kind is MemberKind.ANNOTATION_ELEMENT else "return"
            return_text: str = get_string_value_or_none(table, key) or "void"
            return_type = self._type(return_text, scope, where).decl

        parameters: list[ParameterDecl] = []
        is_varargs: bool = False
        raw_params: list[Any] = get_list_value(table, "parameters")
        for idx, raw in enumerate(raw_params):
            p_where: str = f"{where}.parameters[{idx}]"
            if not isinstance(raw, dict):
                raise self.fail("parameter must be an inline table", p_where)
            type_text: str = self._require(raw, "type", p_where)
            parsed: ParsedType = self._type(type_text, scope, p_where)
            if parsed.is_varargs:
                if idx != len(raw_params) - 1:
                    raise self.fail("only the last parameter may be varargs", p_where)
                is_varargs = True
            parameters.append(
                ParameterDecl(
                    get_string_value_or_none(raw, "name") or f"arg{idx}",
                    parsed.decl,
                    self.position,
                )
            )

        return MethodDecl(
            name=name,
            kind=kind,
            modifiers=self._modifiers(table, where),
            return_type=return_type,
            parameters=tuple(parameters),
            thrown=self._strings(table, "throws", where),
            type_parameters=self._type_params(type_param_texts, class_scope, where),
            is_varargs=is_varargs,
            comment=get_string_value_or_none(table, "comment") or "",
            annotations=self._annotations(table, where),
            position=self.position,
            deprecated=self._deprecated(table),
            default_value=get_string_value_or_none(table, "default"),
        )

    def _field(self, table: TomlTable, scope: frozenset[str], where: str) -> FieldDecl:
        return FieldDecl(
            name=self._require(table, "name", where),
            type=self._type(self._require(table, "type", where), scope, where).decl,
            modifiers=self._modifiers(table, where),
            constant_value=get_string_value_or_none(table, "value"),
            comment=get_string_value_or_none(table, "comment") or "",
            annotations=self._annotations(table, where),
            position=self.position,
            deprecated=self._deprecated(table),
        )

    def _enum_constant(self, table: TomlTable, owner: str, where: str) -> FieldDecl:
        return FieldDecl(
            name=self._require(table, "name", where),
            type=TypeDecl(owner),
            modifiers=Modifiers(scope=Scope.PUBLIC, is_static=True, is_final=True),
            is_enum_constant=True,
            comment=get_string_value_or_none(table, "comment") or "",
            annotations=self._annotations(table, where),
            position=self.position,
            deprecated=self._deprecated(table),
        )


def load_symbol_table(path: Path | str) -> SymbolTable:
    """Read a TOML symbol file into a `SymbolTable`.

    Args:
        path: The symbol file.

    Returns:
        The declarations, ready for `apisurface.builder.SnapshotBuilder`.

    Raises:
        SymbolFileError: If the file cannot be read, is not valid TOML, or
            describes malformed symbols.
    """
    path = Path(path)
    try:
        data: TomlTable = load_toml_dict(path)
    except TomlLoadError as e:
        raise SymbolFileError(str(e), path=path) from e
    return _SymbolFileReader(path, data).read()
