from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .browse_flags import BROWSE_FLAGS
from .config import ConceptTreeConfig
from .errors import ConceptTreeWriteError
from .result import canonical_json, write_document
from .transform import RESULT_ERROR, run_concept_tree_transform


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="concept-tree",
        description="Build the SKOS concept browse tree of one vocabulary version.",
    )
    parser.add_argument("sources", nargs="+", type=Path, help="RDF files of the version.")
    parser.add_argument("--language", required=True, help="Primary language of the vocabulary.")
    parser.add_argument(
        "--flag",
        dest="browse_flags",
        action="append",
        default=[],
        help=f"Browse flag, repeatable ({', '.join(BROWSE_FLAGS)}).",
    )
    parser.add_argument("--version-label", dest="version_label", required=False)
    parser.add_argument("--out", dest="out_path", type=Path, required=False)
    parser.add_argument("--log-level", dest="log_level", default="WARNING")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = ConceptTreeConfig.from_env()
    except RuntimeError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    outcome = run_concept_tree_transform(
        args.sources,
        language=args.language,
        browse_flags=args.browse_flags,
        config=config,
        version_label=args.version_label,
    )
    if outcome.document is not None and args.out_path is None:
        print(canonical_json(outcome.document.to_payload()))
        print(canonical_json(outcome.summary()), file=sys.stderr)
        return 0 if outcome.status == "SUCCESS" else 1

    if outcome.document is not None:
        try:
            write_document(outcome.document, args.out_path)
        except ConceptTreeWriteError as exc:
            results = dict(outcome.results)
            results[RESULT_ERROR] = exc.message
            outcome = outcome.model_copy(update={"status": "ERROR", "results": results})
    print(canonical_json(outcome.summary()))
    return 0 if outcome.status == "SUCCESS" else 1


if __name__ == "__main__":
    raise SystemExit(main())
