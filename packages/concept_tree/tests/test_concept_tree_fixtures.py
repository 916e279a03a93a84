from __future__ import annotations

import json
from pathlib import Path

from concept_tree import run_concept_tree_transform
from concept_tree.repo import repo_root


def _repo_root_path() -> Path:
    return repo_root(anchor=Path(__file__))


def _load_json(path: Path) -> object:
    return json.loads(path.read_text(encoding="utf-8"))


def test_concept_tree_fixtures() -> None:
    root = _repo_root_path()
    fixtures_root = root / "examples" / "concept_tree" / "fixtures"

    fixture_dirs = sorted(path for path in fixtures_root.iterdir() if path.is_dir())
    assert fixture_dirs, f"No concept tree fixtures found under {fixtures_root}"

    for fixture_dir in fixture_dirs:
        source_path = fixture_dir / "source.ttl"
        options_path = fixture_dir / "options.json"
        expected_path = fixture_dir / "expected" / "outcome.json"
        assert source_path.is_file(), f"Missing source: {source_path}"
        assert expected_path.is_file(), f"Missing expected outcome: {expected_path}"

        options = _load_json(options_path)
        assert isinstance(options, dict), f"Options must be an object: {options_path}"
        outcome = run_concept_tree_transform(
            [source_path],
            language=options["language"],
            browse_flags=options.get("browse_flags", []),
        )

        actual = outcome.model_dump(mode="json", by_alias=True, exclude_none=True)
        assert actual == _load_json(expected_path), f"Mismatch for {fixture_dir.name}"
