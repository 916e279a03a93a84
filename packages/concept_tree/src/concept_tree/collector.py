from __future__ import annotations

import html
import logging
from collections.abc import Iterable

from rdflib.term import Literal, Node

from . import vocabulary as voc
from .browse_flags import BrowseConfiguration
from .errors import (
    RDF_ERROR_INVALID_TYPE_CHANGE,
    RDF_ERROR_LIST_FIRST_NIL,
    RDF_ERROR_LIST_REST_LITERAL,
    RDF_ERROR_MEMBER_LITERAL,
    RDF_ERROR_MEMBERLIST_LITERAL,
    RDF_ERROR_MULTIPLE_LIST_FIRST,
    RDF_ERROR_MULTIPLE_LIST_REST,
    RDF_ERROR_MULTIPLE_MEMBERLIST,
    RDF_ERROR_TYPE_LITERAL,
)
from .models import ListCell, Resource, ResourceKind

logger = logging.getLogger(__name__)

Statement = tuple[Node, Node, Node]

_TYPE_KINDS: dict[str, ResourceKind] = {
    voc.SKOS_CONCEPT: "concept",
    voc.SKOS_CONCEPT_SCHEME: "concept_scheme",
    voc.SKOS_COLLECTION: "unordered_collection",
    voc.SKOS_ORDERED_COLLECTION: "ordered_collection",
}

# Resolution order when incompatible kinds were asserted for one resource.
_KIND_PRECEDENCE: tuple[ResourceKind, ...] = (
    "concept",
    "concept_scheme",
    "ordered_collection",
    "unordered_collection",
)

_KIND_NAMES: dict[str, str] = {
    "concept": "Concept",
    "concept_scheme": "ConceptScheme",
    "unordered_collection": "Collection",
    "ordered_collection": "OrderedCollection",
}


def rdf_error(message: str, *iris: str) -> str:
    return html.escape(message + "; ".join(iris))


class StatementCollector:
    """Accumulates the SKOS facts of interest from a stream of RDF statements.

    Statements may arrive in any order and any number of times. Structural
    problems are recorded in ``rdf_errors`` and never raised.
    """

    def __init__(self, browse: BrowseConfiguration) -> None:
        self.browse = browse
        self.resources: dict[str, Resource] = {}
        self.list_cells: dict[str, ListCell] = {}
        self.rdf_errors: list[str] = []
        self.statement_count = 0

    def resource(self, iri: str) -> Resource:
        found = self.resources.get(iri)
        if found is None:
            found = Resource(iri=iri)
            self.resources[iri] = found
        return found

    def add_rdf_error(self, message: str, *iris: str) -> None:
        error = rdf_error(message, *iris)
        logger.debug("RDF structural error: %s", error)
        self.rdf_errors.append(error)

    def _list_cell(self, iri: str) -> ListCell:
        cell = self.list_cells.get(iri)
        if cell is None:
            cell = ListCell(iri=iri)
            self.list_cells[iri] = cell
        return cell

    def observe_all(self, statements: Iterable[Statement]) -> None:
        for subject, predicate, obj in statements:
            self.observe(subject, predicate, obj)

    def observe(self, subject: Node, predicate: Node, obj: Node) -> None:
        self.statement_count += 1
        pred = str(predicate)
        subject_iri = str(subject)

        label_prop = voc.LABEL_PREDICATES.get(pred)
        if label_prop is not None:
            if isinstance(obj, Literal):
                texts = self.resource(subject_iri).labels.setdefault(label_prop, set())
                texts.add((obj.language, str(obj)))
            return

        if pred in voc.SCHEME_PREDICATES and not self.browse.include_concept_schemes:
            return
        if pred in voc.COLLECTION_PREDICATES and not self.browse.include_collections:
            return

        if pred == voc.RDF_TYPE:
            self._observe_type(subject_iri, obj)
        elif pred == voc.SKOS_DEFINITION:
            if isinstance(obj, Literal):
                self.resource(subject_iri).definitions.add((obj.language, str(obj)))
        elif pred == voc.DCTERMS_DESCRIPTION:
            language = obj.language if isinstance(obj, Literal) else None
            self.resource(subject_iri).descriptions.add((language, str(obj)))
        elif pred == voc.SKOS_NOTATION:
            self.resource(subject_iri).notations.add(str(obj))
        elif pred == voc.SKOS_BROADER:
            self._observe_hierarchy(subject_iri, obj, narrower=False)
        elif pred == voc.SKOS_NARROWER:
            self._observe_hierarchy(subject_iri, obj, narrower=True)
        elif pred == voc.SKOS_IN_SCHEME:
            if not isinstance(obj, Literal):
                self.resource(subject_iri).in_scheme.add(str(obj))
                self.resource(str(obj)).asserted_kinds.add("concept_scheme")
        elif pred == voc.SKOS_TOP_CONCEPT_OF:
            if not isinstance(obj, Literal):
                self._observe_top_concept(str(obj), subject_iri)
        elif pred == voc.SKOS_HAS_TOP_CONCEPT:
            if not isinstance(obj, Literal):
                self._observe_top_concept(subject_iri, str(obj))
        elif pred == voc.SKOS_MEMBER:
            self._observe_member(subject_iri, obj)
        elif pred == voc.SKOS_MEMBER_LIST:
            self._observe_member_list(subject_iri, obj)
        elif pred == voc.RDF_FIRST:
            self._observe_list_first(subject_iri, obj)
        elif pred == voc.RDF_REST:
            self._observe_list_rest(subject_iri, obj)

    def _observe_type(self, subject_iri: str, obj: Node) -> None:
        if isinstance(obj, Literal):
            self.add_rdf_error(RDF_ERROR_TYPE_LITERAL, subject_iri)
            return
        kind = _TYPE_KINDS.get(str(obj))
        if kind is None:
            return
        if kind == "concept_scheme" and not self.browse.include_concept_schemes:
            return
        if kind in ("unordered_collection", "ordered_collection") and (
            not self.browse.include_collections
        ):
            return
        self.resource(subject_iri).asserted_kinds.add(kind)

    def _observe_hierarchy(self, subject_iri: str, obj: Node, *, narrower: bool) -> None:
        if isinstance(obj, Literal):
            return
        subject = self.resource(subject_iri)
        other = self.resource(str(obj))
        subject.inferred_concept = True
        other.inferred_concept = True
        if narrower:
            subject.narrower.add(other.iri)
        else:
            subject.broader.add(other.iri)

    def _observe_top_concept(self, scheme_iri: str, concept_iri: str) -> None:
        scheme = self.resource(scheme_iri)
        concept = self.resource(concept_iri)
        scheme.asserted_kinds.add("concept_scheme")
        concept.asserted_kinds.add("concept")
        concept.in_scheme.add(scheme_iri)
        concept.top_concept_of.add(scheme_iri)

    def _observe_member(self, subject_iri: str, obj: Node) -> None:
        if isinstance(obj, Literal):
            self.add_rdf_error(RDF_ERROR_MEMBER_LITERAL, subject_iri)
            return
        collection = self.resource(subject_iri)
        collection.asserted_kinds.add("unordered_collection")
        collection.members.add(self.resource(str(obj)).iri)

    def _observe_member_list(self, subject_iri: str, obj: Node) -> None:
        if isinstance(obj, Literal):
            self.add_rdf_error(RDF_ERROR_MEMBERLIST_LITERAL, subject_iri)
            return
        collection = self.resource(subject_iri)
        collection.asserted_kinds.add("ordered_collection")
        head = str(obj)
        if collection.member_list is not None and collection.member_list != head:
            self.add_rdf_error(RDF_ERROR_MULTIPLE_MEMBERLIST, subject_iri)
            return
        collection.member_list = head

    def _observe_list_first(self, subject_iri: str, obj: Node) -> None:
        value = str(obj)
        if value == voc.RDF_NIL:
            self.add_rdf_error(RDF_ERROR_LIST_FIRST_NIL, subject_iri)
            return
        cell = self._list_cell(subject_iri)
        is_literal = isinstance(obj, Literal)
        if cell.first is not None and (cell.first, cell.first_is_literal) != (value, is_literal):
            self.add_rdf_error(RDF_ERROR_MULTIPLE_LIST_FIRST, subject_iri)
            return
        cell.first = value
        cell.first_is_literal = is_literal

    def _observe_list_rest(self, subject_iri: str, obj: Node) -> None:
        if isinstance(obj, Literal):
            self.add_rdf_error(RDF_ERROR_LIST_REST_LITERAL, subject_iri)
            return
        cell = self._list_cell(subject_iri)
        value = str(obj)
        if cell.rest is not None and cell.rest != value:
            self.add_rdf_error(RDF_ERROR_MULTIPLE_LIST_REST, subject_iri)
            return
        cell.rest = value

    def finish(self) -> dict[str, Resource]:
        """Resolve every resource's kind from its type assertions and SKOS usage."""
        for iri in sorted(self.resources):
            resource = self.resources[iri]
            kinds = set(resource.asserted_kinds)
            if {"unordered_collection", "ordered_collection"} <= kinds:
                kinds.discard("unordered_collection")
            if resource.inferred_concept and kinds and "concept" not in kinds:
                self._report_kind_conflict(resource, sorted(kinds) + ["concept"])
            elif len(kinds) > 1:
                self._report_kind_conflict(resource, sorted(kinds))
            if kinds:
                resource.kind = next(kind for kind in _KIND_PRECEDENCE if kind in kinds)
            elif resource.inferred_concept:
                resource.kind = "concept"
            else:
                resource.kind = "other"
        logger.debug(
            "Collected %s resources from %s statements",
            len(self.resources),
            self.statement_count,
        )
        return self.resources

    def _report_kind_conflict(self, resource: Resource, kinds: list[str]) -> None:
        names = " / ".join(_KIND_NAMES[kind] for kind in kinds)
        self.add_rdf_error(RDF_ERROR_INVALID_TYPE_CHANGE, f"{resource.iri} ({names})")
