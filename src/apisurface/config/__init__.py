# topmark:header:start
#
#   project      : APISurface
#   file         : __init__.py
#   file_relpath : src/apisurface/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for APISurface.

This module defines the immutable `Config` snapshot and its mutable builder
`MutableConfig`, plus the logic to load them from TOML sources
(``apisurface.toml`` or ``[tool.apisurface]`` in ``pyproject.toml``) and to
apply CLI overrides.

Precedence (lowest → highest):
    1. Built-in defaults
    2. ``pyproject.toml`` (``[tool.apisurface]``) in the working directory
    3. ``apisurface.toml`` in the working directory
    4. Extra config files passed explicitly (in order)
    5. CLI overrides via `MutableConfig.apply_cli_args`
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from apisurface.config.io import (
    TomlTable,
    get_bool_value_or_none,
    get_list_value,
    get_string_value_or_none,
    get_table_value,
    load_toml_dict,
)
from apisurface.config.io.loaders import TomlLoadError
from apisurface.config.keys import Toml
from apisurface.config.logging import ApiSurfaceLogger, get_logger
from apisurface.constants import APISURFACE_TOML_NAME, PYPROJECT_TOML_NAME
from apisurface.diagnostic.codes import ErrorCode, Severity, error_code
from apisurface.model.modifiers import Scope

# ArgsLike: generic mapping accepted by config loaders (works for CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

logger: ApiSurfaceLogger = get_logger(__name__)

CLI_OVERRIDE_STR = "<CLI overrides>"


class ConfigError(ValueError):
    """Raised for missing, unreadable or invalid configuration values."""


def parse_code(token: str | int, *, source: str) -> ErrorCode:
    """Resolve a code token from configuration or CLI input.

    Args:
        token: Code name or number.
        source: Human-readable origin used in the error message.

    Returns:
        The matching `ErrorCode`.

    Raises:
        ConfigError: If the token names no known code.
    """
    code: ErrorCode | None = error_code(token)
    if code is None:
        raise ConfigError(f"{source}: unknown diagnostic code '{token}'")
    return code


# ------------------ Immutable runtime config ------------------
@dataclass(frozen=True)
class Config:
    """Immutable runtime configuration.

    Attributes:
        config_files (tuple[Path | str, ...]): Config sources that contributed.
        warnings_as_errors (bool): Escalate every warning to an error.
        severity_overrides (Mapping[ErrorCode, Severity]): Per-code severities.
        show_level (Scope): Least visible scope treated as part of the API.
        stub_packages (tuple[str, ...]): Packages kept by the closure export;
            empty means all packages.
    """

    config_files: tuple[Path | str, ...]
    warnings_as_errors: bool
    severity_overrides: Mapping[ErrorCode, Severity]
    show_level: Scope
    stub_packages: tuple[str, ...]

    def to_toml_dict(self) -> dict[str, Any]:
        """Convert this Config into a TOML-serializable dict."""
        return {
            Toml.KEY_WARNINGS_AS_ERRORS: self.warnings_as_errors,
            Toml.KEY_SHOW_LEVEL: self.show_level.label,
            Toml.KEY_STUB_PACKAGES: list(self.stub_packages),
            Toml.SECTION_SEVERITY: {
                code.name: severity.value
                for code, severity in sorted(
                    self.severity_overrides.items(), key=lambda kv: kv[0].number
                )
            },
        }

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            config_files=list(self.config_files),
            warnings_as_errors=self.warnings_as_errors,
            severity_overrides=dict(self.severity_overrides),
            show_level=self.show_level,
            stub_packages=list(self.stub_packages),
        )


# ------------------ Mutable builder ------------------
@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Tri-state fields (``None`` = not set by this layer) let `merge_with` tell
    an explicit ``false`` apart from an absent key.

    Attributes:
        config_files (list[Path | str]): Config sources that contributed.
        warnings_as_errors (bool | None): Escalate every warning to an error.
        severity_overrides (dict[ErrorCode, Severity]): Per-code severities.
        show_level (Scope | None): Least visible scope treated as API.
        stub_packages (list[str]): Packages kept by the closure export.
    """

    config_files: list[Path | str] = field(default_factory=lambda: [])
    warnings_as_errors: bool | None = None
    severity_overrides: dict[ErrorCode, Severity] = field(default_factory=lambda: {})
    show_level: Scope | None = None
    stub_packages: list[str] = field(default_factory=lambda: [])

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Freeze the draft into an immutable `Config` snapshot."""
        return Config(
            config_files=tuple(self.config_files),
            warnings_as_errors=bool(self.warnings_as_errors),
            severity_overrides=dict(self.severity_overrides),
            show_level=self.show_level or Scope.PROTECTED,
            stub_packages=tuple(self.stub_packages),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return the built-in defaults."""
        return cls(warnings_as_errors=False, show_level=Scope.PROTECTED)

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Supports both ``apisurface.toml`` and ``pyproject.toml``; for the latter
        only the ``[tool.apisurface]`` table is read.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableConfig | None: The loaded draft, or None when a
                ``pyproject.toml`` has no ``[tool.apisurface]`` table.

        Raises:
            ConfigError: If the file cannot be read or holds invalid values.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        try:
            toml_data: TomlTable = load_toml_dict(path)
        except TomlLoadError as exc:
            raise ConfigError(str(exc)) from exc

        if path.name == PYPROJECT_TOML_NAME:
            tool_section: TomlTable = get_table_value(
                get_table_value(toml_data, Toml.SECTION_TOOL), Toml.SECTION_APISURFACE
            )
            if not tool_section:
                logger.debug("No [tool.apisurface] section in %s", path)
                return None
            toml_data = tool_section

        draft: MutableConfig = cls.from_toml_dict(toml_data, source=str(path))
        draft.config_files = [path]
        logger.debug("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def from_toml_dict(cls, data: TomlTable, *, source: str = "<dict>") -> MutableConfig:
        """Create a draft config from a parsed TOML dict.

        Args:
            data (TomlTable): The parsed ``[tool.apisurface]``-level table.
            source (str): Origin used in error messages.

        Returns:
            MutableConfig: The resulting draft.

        Raises:
            ConfigError: On an unknown code, severity or show level.
        """
        draft = cls()
        draft.warnings_as_errors = get_bool_value_or_none(data, Toml.KEY_WARNINGS_AS_ERRORS)

        raw_level: str | None = get_string_value_or_none(data, Toml.KEY_SHOW_LEVEL)
        if raw_level is not None:
            level: Scope | None = Scope.parse(raw_level)
            if level is None:
                raise ConfigError(f"{source}: invalid {Toml.KEY_SHOW_LEVEL} '{raw_level}'")
            draft.show_level = level

        draft.stub_packages = [str(p) for p in get_list_value(data, Toml.KEY_STUB_PACKAGES)]

        severity_tbl: TomlTable = get_table_value(data, Toml.SECTION_SEVERITY)
        logger.trace("TOML [severity]: %s", severity_tbl)
        for key, raw in severity_tbl.items():
            code: ErrorCode = parse_code(key, source=source)
            severity: Severity | None = Severity.parse(str(raw))
            if severity is None:
                raise ConfigError(f"{source}: invalid severity '{raw}' for {code.name}")
            draft.severity_overrides[code] = severity
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files in ``start``: ``pyproject.toml`` first, then ``apisurface.toml``."""
        found: list[Path] = []
        for name in (PYPROJECT_TOML_NAME, APISURFACE_TOML_NAME):
            candidate: Path = start / name
            if candidate.is_file():
                found.append(candidate)
        return found

    @classmethod
    def load_merged(
        cls,
        *,
        extra_config_files: Iterable[str | Path] | None = None,
        no_config: bool = False,
        anchor: Path | None = None,
    ) -> MutableConfig:
        """Load a layered configuration with clear precedence.

        Args:
            extra_config_files (Iterable[str | Path] | None): Explicit config files
                merged after discovery.
            no_config (bool): If True, skip discovery in the working directory.
            anchor (Path | None): Directory to discover config files in; defaults to CWD.

        Returns:
            MutableConfig: A merged draft that callers can further override then freeze.

        Raises:
            ConfigError: If an explicit config file does not exist or fails to load.
        """
        draft: MutableConfig = cls.from_defaults()

        if not no_config:
            for cfg_path in cls.discover_local_config_files(anchor or Path.cwd()):
                maybe: MutableConfig | None = cls.from_toml_file(cfg_path)
                if maybe is not None:
                    draft = draft.merge_with(maybe)

        for entry in extra_config_files or ():
            p: Path = entry if isinstance(entry, Path) else Path(entry)
            if not p.is_file():
                raise ConfigError(f"Config file not found: {p}")
            maybe = cls.from_toml_file(p)
            if maybe is not None:
                draft = draft.merge_with(maybe)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values from ``other`` override this draft."""
        overrides: dict[ErrorCode, Severity] = dict(self.severity_overrides)
        overrides.update(other.severity_overrides)
        return MutableConfig(
            config_files=self.config_files + other.config_files,
            warnings_as_errors=other.warnings_as_errors
            if other.warnings_as_errors is not None
            else self.warnings_as_errors,
            severity_overrides=overrides,
            show_level=other.show_level if other.show_level is not None else self.show_level,
            stub_packages=other.stub_packages or self.stub_packages,
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Update fields from a parsed arguments mapping (CLI or API).

        Recognized keys: ``warnings_as_errors``, ``show_level``, ``stub_packages``,
        ``hidden_codes``, ``warning_codes`` and ``error_codes``. Severity flags are
        applied hidden → warning → error, so ``--error`` wins on conflicts.

        Args:
            args (ArgsLike): Parsed arguments mapping.

        Returns:
            MutableConfig: This instance, updated in place.

        Raises:
            ConfigError: On an unknown code token.
        """
        logger.debug("Applying CLI arguments to MutableConfig: %s", args)
        self.config_files.append(CLI_OVERRIDE_STR)

        if args.get("warnings_as_errors") is not None:
            self.warnings_as_errors = bool(args["warnings_as_errors"])
        if args.get("show_level") is not None:
            self.show_level = args["show_level"]
        if args.get("stub_packages"):
            self.stub_packages = list(args["stub_packages"])

        for key, severity in (
            ("hidden_codes", Severity.HIDDEN),
            ("warning_codes", Severity.WARNING),
            ("error_codes", Severity.ERROR),
        ):
            for token in args.get(key) or ():
                self.severity_overrides[parse_code(token, source="command line")] = severity
        return self
