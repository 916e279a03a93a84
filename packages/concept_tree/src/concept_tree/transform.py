from __future__ import annotations

import html
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .browse_flags import BrowseConfiguration
from .collector import Statement, StatementCollector
from .config import ConceptTreeConfig
from .errors import ConceptTreeError, NotationError
from .forest import build_forest
from .labels import LabelOrder, LanguageFallback
from .models import ConceptTreeDocument
from .ordering import assign_sort_orders
from .relations import normalize_relations, resolve_member_lists, validate_groupings
from .result import assemble_document
from .sources import parse_files

logger = logging.getLogger(__name__)

ConceptTreeStatus = Literal["SUCCESS", "PARTIAL", "ERROR"]

RESULT_NOT_PROVIDED = "concepts-tree-not-provided"
RESULT_NO_NOTATIONS = "concepts-tree-no-notations"
RESULT_ERROR = "error"

NOT_PROVIDED_PARSE = "No concepts tree provided, because the vocabulary data could not be parsed."
NOT_PROVIDED_CYCLE = "No concepts tree provided, because there is a cycle."
NOT_PROVIDED_RDF_ERRORS = (
    "No concepts tree provided, because there are errors in the vocabulary data."
)
NO_NOTATIONS_PARSE = "No notation information because of a parse error."


class ConceptTreeOutcome(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: ConceptTreeStatus
    document: ConceptTreeDocument | None = None
    clear_existing: bool = False
    results: dict[str, str] = Field(default_factory=dict)
    alert_html: str | None = None
    rdf_errors: list[str] = Field(default_factory=list)
    cycle_detected: bool = False
    only_tree_edges: bool = True

    def summary(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude={"document"}, exclude_none=True)


def _tree_hidden_alert(reason: str, version_label: str | None) -> str:
    target = f"version {version_label}" if version_label else "this version"
    return (
        f"Alert: {html.escape(reason)}<br />"
        f"The concept browse tree will not be visible for {html.escape(target)}."
    )


def _rdf_errors_alert(rdf_errors: Sequence[str], version_label: str | None) -> str:
    items = "".join(f"<li>{error}</li>" for error in rdf_errors)
    alert = _tree_hidden_alert("There are errors in the vocabulary data.", version_label)
    return f"{alert}<ul>{items}</ul>"


def _cap_errors(rdf_errors: list[str], limit: int) -> list[str]:
    if len(rdf_errors) <= limit:
        return rdf_errors
    logger.warning("Reporting %s of %s RDF structural errors", limit, len(rdf_errors))
    return rdf_errors[:limit]


def _as_browse_configuration(
    browse_flags: BrowseConfiguration | Iterable[str] | None,
) -> BrowseConfiguration:
    if isinstance(browse_flags, BrowseConfiguration):
        return browse_flags
    return BrowseConfiguration.from_flags(browse_flags)


def _outcome_from_collector(
    collector: StatementCollector,
    *,
    language: str,
    config: ConceptTreeConfig,
    parse_failures: dict[str, str],
    version_label: str | None,
) -> ConceptTreeOutcome:
    browse = collector.browse
    resources = collector.finish()
    normalize_relations(resources)
    rdf_errors = list(collector.rdf_errors)
    if browse.include_collections:
        rdf_errors.extend(resolve_member_lists(resources, collector.list_cells))
    rdf_errors.extend(validate_groupings(resources, browse))

    fallback = LanguageFallback.from_tokens(config.label_languages, primary_language=language)
    labels = LabelOrder(fallback)
    build = build_forest(resources, browse, labels)
    rdf_errors.extend(build.back_edges)
    rdf_errors = _cap_errors(rdf_errors, config.max_rdf_errors)
    traversal = {
        "rdf_errors": rdf_errors,
        "cycle_detected": build.cycle_detected,
        "only_tree_edges": build.only_tree_edges,
    }

    if parse_failures:
        results = dict(parse_failures)
        results[RESULT_NOT_PROVIDED] = NOT_PROVIDED_PARSE
        return ConceptTreeOutcome(
            status="PARTIAL",
            clear_existing=True,
            results=results,
            alert_html=_tree_hidden_alert(
                "The vocabulary data could not be parsed.", version_label
            ),
            **traversal,
        )
    if build.cycle_detected:
        logger.info("Concept tree not provided: cycle detected")
        return ConceptTreeOutcome(
            status="PARTIAL",
            clear_existing=True,
            results={RESULT_NOT_PROVIDED: NOT_PROVIDED_CYCLE},
            alert_html=_tree_hidden_alert(
                "A cycle was detected in the vocabulary data.", version_label
            ),
            **traversal,
        )
    if rdf_errors:
        logger.info("Concept tree not provided: %s RDF structural errors", len(rdf_errors))
        return ConceptTreeOutcome(
            status="PARTIAL",
            clear_existing=True,
            results={RESULT_NOT_PROVIDED: NOT_PROVIDED_RDF_ERRORS},
            alert_html=_rdf_errors_alert(rdf_errors, version_label),
            **traversal,
        )
    if not build.roots:
        return ConceptTreeOutcome(status="SUCCESS", clear_existing=True, **traversal)

    results: dict[str, str] = {}
    alert_html: str | None = None
    notation_failed = False
    if browse.notation_sort_enabled:
        try:
            assign_sort_orders(
                build.roots,
                browse.notation_format,
                default_sort_by_notation=browse.default_sort_by_notation,
            )
        except NotationError as exc:
            logger.warning("Notation ordering disabled: %s (%s)", exc.message, exc.context)
            notation_failed = True
            results[RESULT_NO_NOTATIONS] = NO_NOTATIONS_PARSE
            alert_html = exc.alert_html

    try:
        document = assemble_document(
            build.roots,
            language=language,
            browse=browse,
            labels=labels,
            notation_failed=notation_failed,
        )
    except ConceptTreeError as exc:
        logger.error("Concept tree transform failed: %s", exc.message)
        return ConceptTreeOutcome(status="ERROR", results={RESULT_ERROR: exc.message})
    return ConceptTreeOutcome(
        status="PARTIAL" if notation_failed else "SUCCESS",
        document=document,
        clear_existing=True,
        results=results,
        alert_html=alert_html,
        **traversal,
    )


def build_concept_tree(
    statements: Iterable[Statement],
    *,
    language: str,
    browse_flags: BrowseConfiguration | Iterable[str] | None = None,
    config: ConceptTreeConfig | None = None,
    version_label: str | None = None,
) -> ConceptTreeOutcome:
    """Build the concept tree outcome for already parsed RDF statements."""
    collector = StatementCollector(_as_browse_configuration(browse_flags))
    collector.observe_all(statements)
    return _outcome_from_collector(
        collector,
        language=language,
        config=config or ConceptTreeConfig(),
        parse_failures={},
        version_label=version_label,
    )


def run_concept_tree_transform(
    paths: Sequence[Path],
    *,
    language: str,
    browse_flags: BrowseConfiguration | Iterable[str] | None = None,
    config: ConceptTreeConfig | None = None,
    version_label: str | None = None,
) -> ConceptTreeOutcome:
    """Parse the vocabulary files of one version and build its concept tree.

    Data problems are reported in the outcome. Only a failure to read the
    sources, or an IRI that cannot be turned into a URL, yields status
    ``ERROR``.
    """
    collector = StatementCollector(_as_browse_configuration(browse_flags))
    try:
        parse_failures = parse_files(paths, collector)
    except ConceptTreeError as exc:
        logger.error("Concept tree transform failed: %s", exc.message)
        return ConceptTreeOutcome(status="ERROR", results={RESULT_ERROR: exc.message})
    except OSError as exc:
        logger.error("Concept tree transform failed reading sources: %s", exc)
        return ConceptTreeOutcome(status="ERROR", results={RESULT_ERROR: str(exc)})
    return _outcome_from_collector(
        collector,
        language=language,
        config=config or ConceptTreeConfig(),
        parse_failures=parse_failures,
        version_label=version_label,
    )
