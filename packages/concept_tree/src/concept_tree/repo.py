from __future__ import annotations

import os
from pathlib import Path

_REPO_ROOT_ERROR_PREFIX = "repo_root resolution failed"
_ENV_VAR_NAME = "CONCEPT_TREE_REPO_ROOT"
_REQUIRED_STRUCTURAL_MARKERS: tuple[str, str] = ("pyproject.toml", "packages/concept_tree")


def _fail(message: str) -> RuntimeError:
    return RuntimeError(f"{_REPO_ROOT_ERROR_PREFIX}: {message}")


def _resolve_strict(path: Path, *, label: str) -> Path:
    try:
        return path.expanduser().resolve(strict=True)
    except FileNotFoundError as exc:
        raise _fail(f"{label} does not exist: {path}") from exc


def _is_repo_root(candidate: Path) -> bool:
    pyproject, package_dir = _REQUIRED_STRUCTURAL_MARKERS
    return (candidate / pyproject).is_file() and (candidate / package_dir).is_dir()


def repo_root(*, anchor: Path | None = None) -> Path:
    """Locate the checkout holding the concept_tree package and its fixtures."""
    env_root = os.environ.get(_ENV_VAR_NAME)
    if env_root:
        resolved = _resolve_strict(Path(env_root), label=_ENV_VAR_NAME)
        if not _is_repo_root(resolved):
            raise _fail(f"{_ENV_VAR_NAME} is not a concept_tree checkout: {env_root!r}")
        return resolved

    start = _resolve_strict(Path(anchor) if anchor is not None else Path.cwd(), label="anchor")
    for candidate in (start, *start.parents):
        if _is_repo_root(candidate):
            return candidate
    raise _fail(f"could not locate repository root from anchor {start}")
