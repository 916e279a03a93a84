from __future__ import annotations

import logging
from collections.abc import Mapping

from .browse_flags import BrowseConfiguration
from .collector import rdf_error
from .errors import (
    RDF_ERROR_COLL_MEMBER_NOT_VALID,
    RDF_ERROR_CS_MEMBER_NOT_CONCEPT,
    RDF_ERROR_MEMBER_NOT_IN_MEMBERLIST,
    RDF_ERROR_MEMBER_UNKNOWN_TYPE,
    RDF_ERROR_MEMBER_UNKNOWN_TYPE_RESOURCE,
    RDF_ERROR_MEMBERLIST_BROKEN,
    RDF_ERROR_MEMBERLIST_CYCLE,
    RDF_ERROR_MEMBERLIST_ELEMENT_LITERAL,
    RDF_ERROR_MEMBERLIST_ELEMENT_NOT_VALID,
    RDF_ERROR_TOP_CONCEPT_BROADER,
)
from .models import ListCell, Resource
from .vocabulary import RDF_NIL

logger = logging.getLogger(__name__)


def normalize_relations(resources: Mapping[str, Resource]) -> int:
    """Make broader and narrower mutual inverses; returns the number of edges added."""
    added = 0
    for resource in resources.values():
        for parent_iri in sorted(resource.broader):
            parent = resources[parent_iri]
            if resource.iri not in parent.narrower:
                parent.narrower.add(resource.iri)
                added += 1
        for child_iri in sorted(resource.narrower):
            child = resources[child_iri]
            if resource.iri not in child.broader:
                child.broader.add(resource.iri)
                added += 1
    logger.debug("Inferred %s inverse broader/narrower edges", added)
    return added


def _walk_member_list(
    collection: Resource,
    resources: Mapping[str, Resource],
    cells: Mapping[str, ListCell],
    errors: list[str],
) -> list[str]:
    members: list[str] = []
    seen: set[str] = set()
    current = collection.member_list
    while current is not None and current != RDF_NIL:
        if current in seen:
            errors.append(rdf_error(RDF_ERROR_MEMBERLIST_CYCLE, collection.iri))
            break
        seen.add(current)
        cell = cells.get(current)
        if cell is None or cell.first is None or cell.rest is None:
            errors.append(rdf_error(RDF_ERROR_MEMBERLIST_BROKEN, collection.iri))
            break
        if cell.first_is_literal:
            errors.append(rdf_error(RDF_ERROR_MEMBERLIST_ELEMENT_LITERAL, collection.iri))
        elif cell.first not in resources:
            errors.append(rdf_error(RDF_ERROR_MEMBERLIST_ELEMENT_NOT_VALID, cell.first))
            break
        elif cell.first not in members:
            members.append(cell.first)
        current = cell.rest
    return members


def resolve_member_lists(
    resources: Mapping[str, Resource],
    cells: Mapping[str, ListCell],
) -> list[str]:
    """Expand each ordered collection's RDF list into its ordered members.

    Every ``skos:member`` of an ordered collection must also appear in its
    ``skos:memberList``.
    """
    errors: list[str] = []
    for iri in sorted(resources):
        collection = resources[iri]
        if collection.kind != "ordered_collection":
            continue
        ordered = _walk_member_list(collection, resources, cells, errors)
        if collection.members - set(ordered):
            errors.append(rdf_error(RDF_ERROR_MEMBER_NOT_IN_MEMBERLIST, collection.iri))
        collection.members.update(ordered)
        collection.ordered_members = ordered
    return errors


def validate_groupings(
    resources: Mapping[str, Resource],
    browse: BrowseConfiguration,
) -> list[str]:
    """Report scheme and collection memberships the forest cannot represent."""
    errors: list[str] = []
    for iri in sorted(resources):
        resource = resources[iri]
        if browse.include_concept_schemes:
            for scheme_iri in sorted(resource.in_scheme):
                if resources[scheme_iri].kind != "concept_scheme":
                    continue
                if resource.kind == "concept_scheme" or resource.is_collection:
                    errors.append(rdf_error(RDF_ERROR_CS_MEMBER_NOT_CONCEPT, scheme_iri, iri))
            for scheme_iri in sorted(resource.top_concept_of):
                broader_in_scheme = {
                    parent_iri
                    for parent_iri in resource.broader
                    if scheme_iri in resources[parent_iri].in_scheme
                }
                if broader_in_scheme:
                    errors.append(rdf_error(RDF_ERROR_TOP_CONCEPT_BROADER, iri))
        if browse.include_collections and resource.is_collection:
            for member_iri in sorted(resource.members):
                member_kind = resources[member_iri].kind
                if member_kind == "concept_scheme":
                    errors.append(rdf_error(RDF_ERROR_COLL_MEMBER_NOT_VALID, iri, member_iri))
                elif member_kind == "other":
                    errors.append(
                        rdf_error(
                            RDF_ERROR_MEMBER_UNKNOWN_TYPE,
                            iri + RDF_ERROR_MEMBER_UNKNOWN_TYPE_RESOURCE + member_iri,
                        )
                    )
    return errors
