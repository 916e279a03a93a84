from __future__ import annotations

from typing import Any

# Structural problems in the vocabulary data. Each message is followed by the
# offending resource IRI(s) when reported.
RDF_ERROR_TYPE_LITERAL = "A type must be an IRI or blank node, but found a literal: "
RDF_ERROR_INVALID_TYPE_CHANGE = (
    "Attempt to change the type of a resource to something incompatible: "
)
RDF_ERROR_MEMBER_LITERAL = (
    "The object of a skos:member triple was expected to be an IRI or blank node, "
    "but is a literal: "
)
RDF_ERROR_MEMBERLIST_LITERAL = (
    "The object of a skos:memberList triple was expected to be an IRI or blank node, "
    "but is a literal: "
)
RDF_ERROR_MULTIPLE_MEMBERLIST = (
    "There may only be one skos:memberList triple for a collection, "
    "but found more than one for: "
)
RDF_ERROR_MEMBERLIST_ELEMENT_LITERAL = (
    "Every memberList element must be either an IRI or a blank node, but found a literal: "
)
RDF_ERROR_MEMBERLIST_CYCLE = "A memberList list contains a cycle: "
RDF_ERROR_MEMBERLIST_BROKEN = "A memberList list is missing an rdf:first or rdf:rest value: "
RDF_ERROR_MEMBER_NOT_IN_MEMBERLIST = (
    "This OrderedCollection has at least one member not in its memberList: "
)
RDF_ERROR_MEMBERLIST_ELEMENT_NOT_VALID = (
    "Every memberList element must be defined as either a Concept or Collection, "
    "but found a value not defined as either type: "
)
RDF_ERROR_MEMBER_UNKNOWN_TYPE = (
    "Every collection member must be defined as either a Concept or Collection, "
    "but found a value not defined as either type. Collection: "
)
RDF_ERROR_MEMBER_UNKNOWN_TYPE_RESOURCE = "; resource: "
RDF_ERROR_LIST_FIRST_NIL = "A List's rdf:first can't be rdf:nil: "
RDF_ERROR_MULTIPLE_LIST_FIRST = "Multiple, but different rdf:first values for RDF List: "
RDF_ERROR_LIST_REST_LITERAL = "A List's rdf:rest can't be a literal: "
RDF_ERROR_MULTIPLE_LIST_REST = "Multiple, but different rdf:rest values for RDF List: "
RDF_ERROR_TOP_CONCEPT_BROADER = (
    "A top concept of a concept scheme has a broader concept in the same concept scheme: "
)
RDF_ERROR_CS_MEMBER_NOT_CONCEPT = "Found a concept scheme member that is not a concept: "
RDF_ERROR_COLL_MEMBER_NOT_VALID = "Found a collection member that is a concept scheme: "
RDF_ERROR_CYCLE_BROADER = (
    "There is a cycle in the broader/narrower hierarchy; there is a back edge from: "
)
RDF_ERROR_CYCLE_COLLECTION = (
    "There is a cycle in the collection hierarchy; there is a back edge from: "
)

SORT_BY_NOTATION_NOT_OFFERED = "Sorting by notation will not be offered."
NOTATION_DOTTED_ERROR = (
    "The notation format was specified to be numeric hierarchical, "
    "but one of the notation values contains a component that is not a number. "
)
NOTATION_FLOAT_MULTIPLE_POINTS = (
    "The notation format was specified to be floating-point numbers, "
    "but one of the notation values contains more than one decimal point. "
    "(Hint: is the format in fact multi-level hierarchical?) "
)
NOTATION_FLOAT_OTHER_ERROR = (
    "The notation format was specified to be floating-point numbers, "
    "but one of the notation values is not a floating-point number. "
)


class ConceptTreeError(Exception):
    def __init__(
        self,
        *,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = context or {}


class NotationError(ConceptTreeError):
    """A notation value cannot be parsed in the declared notation format."""

    def __init__(
        self,
        *,
        message: str,
        alert_html: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(code="NOTATION_PARSE_ERROR", message=message, context=context)
        self.alert_html = alert_html


class ConceptTreeWriteError(ConceptTreeError):
    """The output document could not be persisted."""
