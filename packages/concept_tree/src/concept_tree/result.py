from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .browse_flags import BrowseConfiguration
from .errors import ConceptTreeWriteError
from .forest import TreeNode
from .iris import resolvable_url
from .labels import LabelOrder, display_definition, display_description, display_notation
from .models import (
    ConceptNode,
    ConceptRefNode,
    ConceptSchemeNode,
    ConceptTreeDocument,
    OrderedCollectionNode,
    OrderedCollectionRefNode,
    UnorderedCollectionNode,
    UnorderedCollectionRefNode,
)

_FULL_NODE_TYPES: dict[str, type] = {
    "concept": ConceptNode,
    "concept_scheme": ConceptSchemeNode,
    "unordered_collection": UnorderedCollectionNode,
    "ordered_collection": OrderedCollectionNode,
}
_REF_NODE_TYPES: dict[str, type] = {
    "concept": ConceptRefNode,
    "unordered_collection": UnorderedCollectionRefNode,
    "ordered_collection": OrderedCollectionRefNode,
}


def canonical_json(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _marshal_node(
    node: TreeNode,
    labels: LabelOrder,
    children: list[Any] | None,
    *,
    resolve_urls: bool,
) -> Any:
    resource = node.resource
    fields: dict[str, Any] = {
        "iri": resource.iri,
        "url": resolvable_url(resource.iri) if resolve_urls else None,
        "label": labels.label(resource),
        "definition": display_definition(resource, labels.fallback),
        "dcterms_description": display_description(resource, labels.fallback),
        "notation": display_notation(resource),
        "notation_sort_order": node.notation_sort_order,
        "label_sort_order": node.label_sort_order,
        "ordered_collection_sort_order": node.ordered_collection_sort_order,
    }
    if node.reference:
        return _REF_NODE_TYPES[resource.kind](**fields)
    return _FULL_NODE_TYPES[resource.kind](children=children or None, **fields)


def _marshal_forest(
    roots: list[TreeNode],
    labels: LabelOrder,
    *,
    resolve_urls: bool = False,
) -> list[Any]:
    # Post-order over an explicit stack; children are marshalled before parents.
    done: dict[int, Any] = {}
    stack: list[tuple[TreeNode, bool]] = [(root, False) for root in reversed(roots)]
    while stack:
        node, expanded = stack.pop()
        if not expanded:
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))
            continue
        children = [done.pop(id(child)) for child in node.children]
        done[id(node)] = _marshal_node(node, labels, children, resolve_urls=resolve_urls)
    return [done.pop(id(root)) for root in roots]


def assemble_document(
    roots: list[TreeNode],
    *,
    language: str,
    browse: BrowseConfiguration,
    labels: LabelOrder,
    notation_failed: bool = False,
) -> ConceptTreeDocument:
    """Marshal the ordered forest and the browse flags into the output document."""
    may_sort = browse.may_sort_by_notation and not notation_failed
    return ConceptTreeDocument(
        language=language,
        may_sort_by_notation=may_sort,
        notation_format=browse.notation_format if may_sort else None,
        default_sort_by_notation=browse.default_sort_by_notation if may_sort else None,
        default_display_notation=browse.default_display_notation,
        may_resolve_resources=browse.may_resolve_resources,
        forest=_marshal_forest(roots, labels, resolve_urls=browse.may_resolve_resources),
    )


def write_document(document: ConceptTreeDocument, path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(canonical_json(document.to_payload()) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConceptTreeWriteError(
            code="CONCEPT_TREE_WRITE_FAILED",
            message=f"could not write concept tree document: {exc}",
            context={"path": str(path)},
        ) from exc
