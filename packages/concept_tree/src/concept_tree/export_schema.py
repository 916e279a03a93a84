from __future__ import annotations

import json
from pathlib import Path

from .models import ConceptTreeDocument
from .repo import repo_root


def _write_schema(path: Path, schema: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(schema, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def main() -> None:
    root = repo_root(anchor=Path(__file__))
    schema_dir = root / "packages" / "concept_tree" / "schema"
    _write_schema(
        schema_dir / "concept_tree.v3.json",
        ConceptTreeDocument.model_json_schema(by_alias=True),
    )


if __name__ == "__main__":
    main()
