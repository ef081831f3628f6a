"""
Project metadata stamped on log lines (service name, version).

Lookup order: the installed `blogapp` distribution, then the `[project]` table
of the nearest pyproject.toml above this package (source checkout), then the
caller's default.
"""

import tomllib
from functools import lru_cache
from importlib import metadata as importlib_metadata
from pathlib import Path

DISTRIBUTION_NAME = "blogapp"
_SEARCH_DEPTH = 5


def find_pyproject(start: Path, max_up: int = _SEARCH_DEPTH) -> Path | None:
    for folder in [start, *start.parents][:max_up]:
        candidate = folder / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


@lru_cache(maxsize=1)
def _project_table() -> dict:
    pyproject = find_pyproject(Path(__file__).resolve().parent)
    if pyproject is None:
        return {}
    try:
        with pyproject.open("rb") as f:
            return tomllib.load(f).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return {}


def get_project_name(default: str | None = None) -> str | None:
    return _project_table().get("name", default)


def get_project_version(default: str = "unknown") -> str:
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        return _project_table().get("version", default)


__all__ = ["find_pyproject", "get_project_name", "get_project_version", "DISTRIBUTION_NAME"]
