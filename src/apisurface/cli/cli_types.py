# topmark:header:start
#
#   project      : APISurface
#   file         : cli_types.py
#   file_relpath : src/apisurface/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Custom Click parameter types for APISurface.

- `EnumChoiceParam` converts a token to a member of a plain string Enum.
- `ScopeParam` converts a show level (``public``, ``protected``, ``package``,
  ``private``) to a `Scope`.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Generic, Iterable, NoReturn, Protocol, TypeVar, cast

import click

from apisurface.model.modifiers import Scope

if TYPE_CHECKING:
    from click.shell_completion import CompletionItem as ClickCompletionItem

    class ParamTypeBase(Protocol):
        """Typed base to avoid subclassing Any when Click lacks stubs."""

        name: str

else:
    # At runtime, subclass the real Click type
    ParamTypeBase = click.ParamType  # type: ignore[assignment]

# Type variable bounded to Enum for generic EnumChoiceParam
E = TypeVar("E", bound=Enum)


class EnumChoiceParam(ParamTypeBase, Generic[E]):
    """A Click parameter type that converts a string to a member of a given Enum."""

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = self.enum_cls.__name__.lower()
        self.choices = [cast("str", getattr(e, "value", str(e))) for e in self.enum_cls]

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        """Raise a BadParameter with a NoReturn signature (clear to type checkers)."""
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: str | E | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Converts a string to a member of the Enum (case-insensitive on the value)."""
        if value is None or isinstance(value, self.enum_cls):
            return value

        lookup: dict[str, E] = {
            cast("str", getattr(choice, "value", str(choice))).lower(): choice
            for choice in cast("Iterable[E]", self.enum_cls)
        }
        key = str(value).lower()
        if key in lookup:
            return lookup[key]

        self._fail_noreturn(
            f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
            param,
            ctx,
        )

    def shell_complete(
        self,
        ctx: click.Context,  # pylint: disable=unused-argument
        param: click.Parameter,  # pylint: disable=unused-argument
        incomplete: str,
    ) -> list[ClickCompletionItem]:
        """Tab completion for Click.

        Bash: `eval "$(_APISURFACE_COMPLETE=bash_source apisurface)"`
        """
        from click.shell_completion import CompletionItem as RuntimeCompletionItem

        prefix = (incomplete or "").lower()
        return [RuntimeCompletionItem(c) for c in self.choices if c.lower().startswith(prefix)]

    def __repr__(self) -> str:
        """Return a string representation."""
        return f"EnumChoiceParam({self.enum_cls.__name__})"


SHOW_LEVEL_CHOICES: tuple[str, ...] = ("public", "protected", "package", "private")


class ScopeParam(ParamTypeBase):
    """A Click parameter type for show levels, resolved through `Scope.parse`."""

    name = "show_level"

    def convert(
        self,
        value: str | Scope | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> Scope | None:
        """Convert a show-level token to a `Scope`."""
        if value is None or isinstance(value, Scope):
            return value
        scope: Scope | None = Scope.parse(value) if value.strip() else None
        if scope is None:
            raise click.BadParameter(
                f"Invalid show level '{value}'. Must be one of: {', '.join(SHOW_LEVEL_CHOICES)}",
                param=param,
                ctx=ctx,
            )
        return scope

    def __repr__(self) -> str:
        """Return a string representation."""
        return "ScopeParam()"
