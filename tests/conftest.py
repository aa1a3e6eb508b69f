# topmark:header:start
#
#   project      : APISurface
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the APISurface test suite.

This file sets up global fixtures, typed mark wrappers and the logging
configuration for test runs, plus small builders for API XML documents and
snapshots shared by the model, closure and checker tests.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs using `apisurface.config.MutableConfig` (mutable), then
      `freeze()` into a `apisurface.config.Config`.
    - Do **not** mutate a frozen `Config`. If you need to tweak one,
      call `Config.thaw()`, edit the returned `MutableConfig`,
      then `freeze()` again.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast
from xml.sax.saxutils import quoteattr

import pytest

from apisurface.apicheck.checker import ApiChecker
from apisurface.apicheck.xml_reader import read_api_xml_text
from apisurface.builder.builder import build_snapshot
from apisurface.builder.declarations import ClassDecl, PackageDecl, SymbolTable
from apisurface.config import MutableConfig, logging
from apisurface.diagnostic.model import DiagnosticRegistry

if TYPE_CHECKING:
    from collections.abc import Iterable

    from apisurface.config import Config
    from apisurface.model.snapshot import Snapshot

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`."""
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_apisurface_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure APISurface's runtime log level is not forced via env during tests.

    This avoids accidental DEBUG/TRACE noise when the developer has exported
    APISURFACE_LOG_LEVEL in their shell.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("APISURFACE_LOG_LEVEL", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure pytest settings and customize logging for the test suite.

    This function sets the logging level to TRACE for all tests, so the trace
    calls along the builder, closure and checker paths are exercised.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and overrides.

    Args:
        **overrides (Any): Attribute overrides applied to the mutable builder.

    Returns:
        Config: An immutable configuration snapshot for use in tests.
    """
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()


# ------------------ API XML document builders ------------------
def _render_attrs(values: dict[str, Any]) -> str:
    parts: list[str] = []
    for key, value in values.items():
        if value is None:
            continue
        if key == "deprecated" and isinstance(value, bool):
            value = "deprecated" if value else "not deprecated"
        elif isinstance(value, bool):
            value = "true" if value else "false"
        parts.append(f"{key}={quoteattr(str(value))}")
    return " ".join(parts)


def _params_xml(params: Iterable[str | tuple[str, str]]) -> list[str]:
    out: list[str] = []
    for idx, param in enumerate(params):
        name, type_name = param if isinstance(param, tuple) else (f"p{idx}", param)
        out.append(f"<parameter name={quoteattr(name)} type={quoteattr(type_name)}/>")
    return out


def _throws_xml(throws: Iterable[str]) -> list[str]:
    return [
        f"<exception name={quoteattr(t.rsplit('.', 1)[-1])} type={quoteattr(t)}/>" for t in throws
    ]


def api_xml(*packages: str) -> str:
    """Wrap package elements into an ``<api>`` document."""
    return "<api>\n" + "\n".join(packages) + "\n</api>\n"


def package_xml(name: str, *classes: str) -> str:
    """Return a ``<package>`` element holding ``classes``."""
    return "\n".join([f'<package name="{name}">', *classes, "</package>"])


def class_xml(
    name: str,
    *members: str,
    tag: str = "class",
    interfaces: Iterable[str] = (),
    **attrs: Any,
) -> str:
    """Return a ``<class>`` (or ``<interface>``) element.

    Keyword arguments become attributes; booleans render as ``true``/``false``
    except ``deprecated``, which renders as ``deprecated``/``not deprecated``.
    """
    head: str = _render_attrs({"name": name, **attrs})
    implements: list[str] = [f"<implements name={quoteattr(i)}/>" for i in interfaces]
    return "\n".join([f"<{tag} {head}>", *implements, *members, f"</{tag}>"])


def method_xml(
    name: str,
    *params: str | tuple[str, str],
    ret: str = "void",
    throws: Iterable[str] = (),
    **attrs: Any,
) -> str:
    """Return a ``<method>`` element; positional params are type strings or ``(name, type)``."""
    head: str = _render_attrs({"name": name, "return": ret, **attrs})
    return "\n".join(
        ["<method " + head + ">", *_params_xml(params), *_throws_xml(throws), "</method>"]
    )


def ctor_xml(
    name: str,
    *params: str | tuple[str, str],
    throws: Iterable[str] = (),
    **attrs: Any,
) -> str:
    """Return a ``<constructor>`` element."""
    head: str = _render_attrs({"name": name, **attrs})
    return "\n".join(
        ["<constructor " + head + ">", *_params_xml(params), *_throws_xml(throws), "</constructor>"]
    )


def field_xml(name: str, type_name: str, **attrs: Any) -> str:
    """Return a ``<field>`` element."""
    return f"<field {_render_attrs({'name': name, 'type': type_name, **attrs})}/>"


# ------------------ Snapshot helpers ------------------
def snapshot_from_xml(text: str, label: str = "api.xml") -> Snapshot:
    """Build a snapshot from an in-memory API XML document."""
    return read_api_xml_text(text, label=label)


def snapshot_from_decls(
    *classes: ClassDecl,
    packages: Iterable[str] = (),
    label: str = "symbols",
) -> Snapshot:
    """Build a snapshot from class declarations (and optional package names)."""
    table = SymbolTable(classes, [PackageDecl(p) for p in packages])
    return build_snapshot(table, label=label)


def check_xml(
    old_text: str,
    new_text: str,
    registry: DiagnosticRegistry | None = None,
) -> tuple[bool, DiagnosticRegistry]:
    """Compare two API XML documents and return the verdict and the registry."""
    reg: DiagnosticRegistry = registry if registry is not None else DiagnosticRegistry()
    consistent: bool = ApiChecker(reg).check_snapshots(
        snapshot_from_xml(old_text, "old.xml"),
        snapshot_from_xml(new_text, "new.xml"),
    )
    return consistent, reg


def messages(registry: DiagnosticRegistry) -> list[str]:
    """Return the message texts of all listed diagnostics, in print order."""
    return [d.message for d in registry]


def code_names(registry: DiagnosticRegistry) -> list[str]:
    """Return the code names of all listed diagnostics, in print order."""
    return [c.name for c in registry.codes()]
