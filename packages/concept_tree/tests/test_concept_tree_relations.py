from __future__ import annotations

from concept_tree import (
    BrowseConfiguration,
    StatementCollector,
    normalize_relations,
    resolve_member_lists,
    validate_groupings,
)
from concept_tree.errors import (
    RDF_ERROR_COLL_MEMBER_NOT_VALID,
    RDF_ERROR_MEMBER_NOT_IN_MEMBERLIST,
    RDF_ERROR_MEMBER_UNKNOWN_TYPE,
    RDF_ERROR_MEMBERLIST_CYCLE,
    RDF_ERROR_MEMBERLIST_ELEMENT_LITERAL,
    RDF_ERROR_MEMBERLIST_ELEMENT_NOT_VALID,
    RDF_ERROR_TOP_CONCEPT_BROADER,
)
from rdflib import RDF, SKOS, BNode, Graph, Literal, URIRef

EX = "http://example.org/vocab/"

_PREFIXES = """
@prefix skos: <http://www.w3.org/2004/02/skos/core#> .
@prefix ex: <http://example.org/vocab/> .
"""


def _collect(turtle: str, *flags: str) -> StatementCollector:
    graph = Graph()
    graph.parse(data=_PREFIXES + turtle, format="turtle")
    collector = StatementCollector(BrowseConfiguration.from_flags(flags))
    collector.observe_all(graph)
    collector.finish()
    return collector


def test_normalize_relations_adds_missing_inverses() -> None:
    collector = _collect(
        """
        ex:a skos:narrower ex:b .
        ex:c skos:broader ex:b .
        """
    )
    resources = collector.resources

    added = normalize_relations(resources)

    assert added == 2
    assert resources[EX + "b"].broader == {EX + "a"}
    assert resources[EX + "b"].narrower == {EX + "c"}
    assert resources[EX + "a"].narrower == {EX + "b"}
    assert resources[EX + "c"].broader == {EX + "b"}


def test_normalize_relations_is_a_no_op_for_consistent_assertions() -> None:
    collector = _collect(
        """
        ex:a skos:narrower ex:b .
        ex:b skos:broader ex:a .
        """
    )

    assert normalize_relations(collector.resources) == 0
    assert normalize_relations(collector.resources) == 0
    assert collector.resources[EX + "a"].narrower == {EX + "b"}


def test_resolve_member_lists_keeps_list_order() -> None:
    collector = _collect(
        """
        ex:list a skos:OrderedCollection ;
            skos:memberList ( ex:c ex:a ex:b ) .
        ex:a a skos:Concept .
        ex:b a skos:Concept .
        ex:c a skos:Concept .
        """,
        "includeCollections",
    )

    errors = resolve_member_lists(collector.resources, collector.list_cells)

    assert errors == []
    collection = collector.resources[EX + "list"]
    assert collection.ordered_members == [EX + "c", EX + "a", EX + "b"]
    assert collection.members == {EX + "a", EX + "b", EX + "c"}


def test_resolve_member_lists_reports_cycles_and_literal_elements() -> None:
    collector = StatementCollector(BrowseConfiguration.from_flags(["includeCollections"]))
    head, tail = BNode("head"), BNode("tail")
    collector.observe_all(
        [
            (URIRef(EX + "a"), RDF.type, SKOS.Concept),
            (URIRef(EX + "list"), SKOS.memberList, head),
            (head, RDF.first, URIRef(EX + "a")),
            (head, RDF.rest, tail),
            (tail, RDF.first, Literal("oops")),
            (tail, RDF.rest, head),
        ]
    )
    collector.finish()

    errors = resolve_member_lists(collector.resources, collector.list_cells)

    assert errors == [
        RDF_ERROR_MEMBERLIST_ELEMENT_LITERAL + EX + "list",
        RDF_ERROR_MEMBERLIST_CYCLE + EX + "list",
    ]
    assert collector.resources[EX + "list"].ordered_members == [EX + "a"]


def test_validate_groupings_reports_top_concept_with_broader_in_scheme() -> None:
    collector = _collect(
        """
        ex:scheme a skos:ConceptScheme ; skos:hasTopConcept ex:b .
        ex:a a skos:Concept ; skos:inScheme ex:scheme .
        ex:b a skos:Concept ; skos:broader ex:a .
        """,
        "includeConceptSchemes",
    )
    normalize_relations(collector.resources)

    errors = validate_groupings(collector.resources, collector.browse)

    assert errors == [RDF_ERROR_TOP_CONCEPT_BROADER + EX + "b"]


def test_validate_groupings_reports_scheme_member_of_collection() -> None:
    collector = _collect(
        """
        ex:scheme a skos:ConceptScheme .
        ex:coll a skos:Collection ; skos:member ex:scheme .
        """,
        "includeConceptSchemes",
        "includeCollections",
    )

    errors = validate_groupings(collector.resources, collector.browse)

    assert errors == [RDF_ERROR_COLL_MEMBER_NOT_VALID + EX + "coll; " + EX + "scheme"]


def test_resolve_member_lists_reports_unknown_list_element() -> None:
    collector = _collect(
        """
        ex:list a skos:OrderedCollection ; skos:memberList ( ex:a ex:ghost ) .
        ex:a a skos:Concept .
        """,
        "includeCollections",
    )

    errors = resolve_member_lists(collector.resources, collector.list_cells)

    assert errors == [RDF_ERROR_MEMBERLIST_ELEMENT_NOT_VALID + EX + "ghost"]
    assert collector.resources[EX + "list"].ordered_members == [EX + "a"]
    assert EX + "ghost" not in collector.resources


def test_resolve_member_lists_reports_member_missing_from_member_list() -> None:
    collector = _collect(
        """
        ex:list skos:memberList ( ex:a ) ; skos:member ex:b .
        ex:a a skos:Concept .
        ex:b a skos:Concept .
        """,
        "includeCollections",
    )

    errors = resolve_member_lists(collector.resources, collector.list_cells)

    assert errors == [RDF_ERROR_MEMBER_NOT_IN_MEMBERLIST + EX + "list"]
    assert collector.resources[EX + "list"].ordered_members == [EX + "a"]


def test_validate_groupings_reports_untyped_collection_member() -> None:
    collector = _collect(
        """
        ex:coll a skos:Collection ; skos:member ex:a, ex:x .
        ex:a a skos:Concept .
        """,
        "includeCollections",
    )

    errors = validate_groupings(collector.resources, collector.browse)

    assert errors == [RDF_ERROR_MEMBER_UNKNOWN_TYPE + EX + "coll; resource: " + EX + "x"]
