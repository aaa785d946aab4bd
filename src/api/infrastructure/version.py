"""Version of the Brandhouse API.

Read from the installed distribution's metadata. A source checkout that was
never installed falls back to the ``pyproject.toml`` at the repository root.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "brandhouse-api"


def get_version() -> str:
    """Return the application version, e.g. ``"0.1.0"``."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        pyproject_path = Path(__file__).resolve().parents[3] / "pyproject.toml"
        with pyproject_path.open("rb") as f:
            return tomllib.load(f)["project"]["version"]


__version__ = get_version()
