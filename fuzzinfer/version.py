"""
Version management for fuzzinfer.

The version is read from pyproject.toml, which is the single source of truth.
When the package runs from an installed wheel without the project file, the
installed distribution metadata is used instead.
"""

from importlib import metadata
from pathlib import Path

import tomli

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PYPROJECT_PATH = PROJECT_ROOT / "pyproject.toml"

_FALLBACK_VERSION = "0.0.0"


def get_version_from_pyproject() -> str:
    """
    Read the version string from pyproject.toml.

    Returns:
        str: Version string, or the installed distribution version when the
        project file is not available
    """
    try:
        with open(PYPROJECT_PATH, "rb") as f:
            pyproject_data = tomli.load(f)
        return pyproject_data["project"]["version"]
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        try:
            return metadata.version("fuzzinfer")
        except metadata.PackageNotFoundError:
            return _FALLBACK_VERSION


# The package version, loaded from pyproject.toml
__version__ = get_version_from_pyproject()


def get_version() -> str:
    """Get the current version of the fuzzinfer package."""
    return __version__
