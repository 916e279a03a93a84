from __future__ import annotations

from typing import Literal

from rdflib import RDF, RDFS, SKOS
from rdflib.namespace import DCTERMS

LabelProperty = Literal["prefLabel", "altLabel", "hiddenLabel", "dctermsTitle", "rdfsLabel"]

# Label properties consulted for display, most preferred first.
DISPLAY_LABEL_PROPERTIES: tuple[LabelProperty, ...] = ("prefLabel", "dctermsTitle", "rdfsLabel")

LABEL_PREDICATES: dict[str, LabelProperty] = {
    str(SKOS.prefLabel): "prefLabel",
    str(SKOS.altLabel): "altLabel",
    str(SKOS.hiddenLabel): "hiddenLabel",
    str(DCTERMS.title): "dctermsTitle",
    str(RDFS.label): "rdfsLabel",
}

RDF_TYPE = str(RDF.type)
RDF_FIRST = str(RDF.first)
RDF_REST = str(RDF.rest)
RDF_NIL = str(RDF.nil)

SKOS_CONCEPT = str(SKOS.Concept)
SKOS_CONCEPT_SCHEME = str(SKOS.ConceptScheme)
SKOS_COLLECTION = str(SKOS.Collection)
SKOS_ORDERED_COLLECTION = str(SKOS.OrderedCollection)

SKOS_DEFINITION = str(SKOS.definition)
DCTERMS_DESCRIPTION = str(DCTERMS.description)
SKOS_NOTATION = str(SKOS.notation)
SKOS_BROADER = str(SKOS.broader)
SKOS_NARROWER = str(SKOS.narrower)
SKOS_IN_SCHEME = str(SKOS.inScheme)
SKOS_TOP_CONCEPT_OF = str(SKOS.topConceptOf)
SKOS_HAS_TOP_CONCEPT = str(SKOS.hasTopConcept)
SKOS_MEMBER = str(SKOS.member)
SKOS_MEMBER_LIST = str(SKOS.memberList)

SCHEME_PREDICATES = frozenset({SKOS_IN_SCHEME, SKOS_TOP_CONCEPT_OF, SKOS_HAS_TOP_CONCEPT})
COLLECTION_PREDICATES = frozenset({SKOS_MEMBER, SKOS_MEMBER_LIST, RDF_FIRST, RDF_REST})
