from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from xml.sax import SAXException

from rdflib import Graph
from rdflib.exceptions import ParserError
from rdflib.plugin import PluginException
from rdflib.util import guess_format

from .collector import StatementCollector
from .errors import ConceptTreeError

logger = logging.getLogger(__name__)

PARSE_ERROR_MESSAGE = "Exception in concept tree transform while parsing RDF"

# Syntax problems raised by rdflib's parsers (BadSyntax subclasses SyntaxError).
_PARSE_FAILURES: tuple[type[Exception], ...] = (
    ParserError,
    PluginException,
    SAXException,
    SyntaxError,
    ValueError,
)


def parse_result_key(path: Path) -> str:
    return f"parse-{path.name}"


def parse_file(path: Path, collector: StatementCollector) -> int:
    """Parse one RDF file and feed its statements to the collector."""
    graph = Graph()
    graph.parse(str(path), format=guess_format(str(path)))
    collector.observe_all(graph)
    return len(graph)


def parse_files(paths: Iterable[Path], collector: StatementCollector) -> dict[str, str]:
    """Parse every file; returns parse diagnostics keyed by ``parse-<file name>``.

    A file with a syntax error contributes no statements. A missing file is
    not a data problem and raises ``ConceptTreeError``.
    """
    failures: dict[str, str] = {}
    for path in paths:
        if not path.is_file():
            raise ConceptTreeError(
                code="CONCEPT_TREE_SOURCE_MISSING",
                message=f"vocabulary file not found: {path}",
                context={"path": str(path)},
            )
        try:
            count = parse_file(path, collector)
        except _PARSE_FAILURES as exc:
            logger.warning("Failed to parse %s: %s", path, exc)
            failures[parse_result_key(path)] = PARSE_ERROR_MESSAGE
            continue
        logger.info("Parsed %s statements from %s", count, path)
    return failures
