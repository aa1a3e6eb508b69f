# topmark:header:start
#
#   project      : APISurface
#   file         : typenames.py
#   file_relpath : src/apisurface/builder/typenames.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Parse Java-style type strings into `TypeDecl` records.

Accepted forms include ``int``, ``java.lang.String[]``,
``java.util.Map<K, java.util.List<? extends V>>``, a trailing ``...`` for
varargs, and type-parameter declarations such as ``E extends java.lang.Enum<E>``.

Names listed in ``type_variables`` parse as type variables; every other
non-primitive name parses as a class reference.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from apisurface.builder.declarations import TypeDecl, TypeKind
from apisurface.model.types import PRIMITIVE_TYPES

_TOKEN_RE: Final[re.Pattern[str]] = re.compile(
    r"\s*(?:(?P<dots>\.\.\.)|(?P<dims>(?:\[\s*\])+)"
    r"|(?P<name>[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*)|(?P<punct>[<>,?&]))"
)


class TypeNameError(ValueError):
    """Raised for a type string that does not parse."""


@dataclass(frozen=True)
class ParsedType:
    """Result of `parse_type_decl`: the type and whether it was written as varargs."""

    decl: TypeDecl
    is_varargs: bool = False


class _Parser:
    def __init__(self, text: str, type_variables: frozenset[str]) -> None:
        self.text = text
        self.type_variables = type_variables
        self.tokens: list[str] = self._tokenize(text)
        self.pos = 0

    def _tokenize(self, text: str) -> list[str]:
        tokens: list[str] = []
        idx: int = 0
        stripped: str = text.rstrip()
        while idx < len(stripped):
            m = _TOKEN_RE.match(stripped, idx)
            if m is None or m.end() == idx:
                raise TypeNameError(f"Unexpected character in type '{text}' at offset {idx}")
            token: str = m.group(m.lastgroup or "")
            if m.lastgroup == "dims":
                token = "[]" * token.count("[")
            tokens.append(token)
            idx = m.end()
        return tokens

    def peek(self) -> str | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def take(self) -> str:
        token: str | None = self.peek()
        if token is None:
            raise TypeNameError(f"Unexpected end of type '{self.text}'")
        self.pos += 1
        return token

    def expect(self, token: str) -> None:
        got: str = self.take()
        if got != token:
            raise TypeNameError(f"Expected '{token}' in type '{self.text}', got '{got}'")

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def parse_type(self) -> TypeDecl:
        token: str = self.take()
        if token == "?":
            return self._wildcard()
        if not re.match(r"[A-Za-z_$]", token):
            raise TypeNameError(f"Expected a type name in '{self.text}', got '{token}'")

        args: tuple[TypeDecl, ...] | None = None
        if self.peek() == "<":
            self.take()
            collected: list[TypeDecl] = [self.parse_type()]
            while self.peek() == ",":
                self.take()
                collected.append(self.parse_type())
            self.expect(">")
            args = tuple(collected)

        dimension: str = ""
        if self.peek() is not None and self.peek() not in ("<", ">", ",", "&", "?", "..."):
            nxt: str = self.peek() or ""
            if nxt.startswith("[]"):
                dimension = self.take()

        if token in PRIMITIVE_TYPES:
            if args is not None:
                raise TypeNameError(f"Primitive type cannot be parameterized in '{self.text}'")
            return TypeDecl(token, TypeKind.PRIMITIVE, dimension)
        if token in self.type_variables and args is None:
            return TypeDecl(token, TypeKind.TYPE_VARIABLE, dimension)
        return TypeDecl(token, TypeKind.CLASS, dimension, type_arguments=args)

    def _wildcard(self) -> TypeDecl:
        nxt: str | None = self.peek()
        if nxt in ("extends", "super"):
            self.take()
            bounds: list[TypeDecl] = [self.parse_type()]
            while self.peek() == "&":
                self.take()
                bounds.append(self.parse_type())
            if nxt == "extends":
                return TypeDecl("?", TypeKind.WILDCARD, extends_bounds=tuple(bounds))
            return TypeDecl("?", TypeKind.WILDCARD, super_bounds=tuple(bounds))
        return TypeDecl("?", TypeKind.WILDCARD)


def parse_type_decl(text: str, type_variables: frozenset[str] = frozenset()) -> ParsedType:
    """Parse a type usage.

    Args:
        text: The type string; a trailing ``...`` marks a varargs parameter and
            is returned as one extra array dimension.
        type_variables: Names in scope that denote type variables.

    Returns:
        The parsed type and its varargs flag.

    Raises:
        TypeNameError: If ``text`` is not a well-formed type.
    """
    parser = _Parser(text, type_variables)
    decl: TypeDecl = parser.parse_type()
    is_varargs: bool = False
    if parser.peek() == "...":
        parser.take()
        is_varargs = True
        decl = TypeDecl(
            decl.qualified_name,
            decl.kind,
            decl.dimension + "[]",
            decl.type_arguments,
            decl.extends_bounds,
            decl.super_bounds,
        )
    if not parser.at_end():
        raise TypeNameError(f"Trailing input in type '{text}': '{parser.peek()}'")
    return ParsedType(decl, is_varargs)


def parse_type_parameter(text: str, type_variables: frozenset[str] = frozenset()) -> TypeDecl:
    """Parse a type-parameter declaration such as ``T`` or ``E extends Comparable<E>``.

    The declared name is always in scope for its own bounds.
    """
    parser = _Parser(text, type_variables)
    name: str = parser.take()
    if not re.match(r"[A-Za-z_$]", name) or "." in name:
        raise TypeNameError(f"Invalid type parameter name in '{text}'")
    scope: frozenset[str] = type_variables | {name}
    parser.type_variables = scope
    bounds: list[TypeDecl] = []
    if parser.peek() == "extends":
        parser.take()
        bounds.append(parser.parse_type())
        while parser.peek() == "&":
            parser.take()
            bounds.append(parser.parse_type())
    if not parser.at_end():
        raise TypeNameError(f"Trailing input in type parameter '{text}'")
    return TypeDecl(name, TypeKind.TYPE_VARIABLE, extends_bounds=tuple(bounds))


def type_parameter_name(text: str) -> str:
    """Return the declared name of a type-parameter declaration string."""
    return text.strip().split(None, 1)[0] if text.strip() else ""
