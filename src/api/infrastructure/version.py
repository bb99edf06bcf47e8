"""Version of the Workout Social API.

Installed distributions report their metadata version. A source checkout
reads the version from the repository's pyproject.toml instead.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "workout-social-api"

# src/api/infrastructure/version.py -> repository root
PYPROJECT_PATH = Path(__file__).parents[3] / "pyproject.toml"


def get_version(pyproject_path: Path = PYPROJECT_PATH) -> str:
    """Return the service version, e.g. "0.1.0"."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        with open(pyproject_path, "rb") as f:
            return tomllib.load(f)["project"]["version"]


__version__ = get_version()
