# topmark:header:start
#
#   project      : APISurface
#   file         : constants.py
#   file_relpath : src/apisurface/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""APISurface Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

APISURFACE_VERSION: str = get_version("apisurface")

# Local configuration files discovered in the working directory:
PYPROJECT_TOML_NAME: str = "pyproject.toml"
APISURFACE_TOML_NAME: str = "apisurface.toml"

# Environment variable that sets the internal log level:
LOG_LEVEL_ENV_VAR: str = "APISURFACE_LOG_LEVEL"

# Sentinel name of the unnamed package:
DEFAULT_PACKAGE_NAME: str = "default package"

# Root of every class hierarchy; the only class without a superclass.
ROOT_OBJECT_TYPE: str = "java.lang.Object"

DEPRECATED_ANNOTATION: str = "java.lang.Deprecated"

UNKNOWN_POSITION_FILE: str = "unknown"
