"""Application version for the RBAC Admin API.

Read from installed package metadata, or from pyproject.toml when running
from a source checkout.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "rbac-admin-api"


def get_version() -> str:
    """Return the application version, e.g. ``"0.1.0"``."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        # Source checkout: src/api/infrastructure -> repository root
        pyproject_path = Path(__file__).parents[3] / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            return tomllib.load(f)["project"]["version"]


__version__ = get_version()
