from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from .browse_flags import BrowseConfiguration
from .collector import rdf_error
from .errors import RDF_ERROR_CYCLE_BROADER, RDF_ERROR_CYCLE_COLLECTION
from .labels import LabelOrder
from .models import Resource

logger = logging.getLogger(__name__)


@dataclass
class TreeNode:
    resource: Resource
    reference: bool = False
    children: list[TreeNode] = field(default_factory=list)
    ordered_children: bool = False
    notation_sort_order: int | None = None
    label_sort_order: int | None = None
    ordered_collection_sort_order: int | None = None


@dataclass
class TraversalState:
    unvisited: set[str]
    active: set[str] = field(default_factory=set)
    cycle_detected: bool = False
    only_tree_edges: bool = True
    back_edges: list[str] = field(default_factory=list)


@dataclass
class ForestBuild:
    roots: list[TreeNode]
    cycle_detected: bool
    only_tree_edges: bool
    back_edges: list[str]


@dataclass(frozen=True)
class _ChildEdge:
    resource: Resource
    membership_only: bool = False
    position: int | None = None


def iter_tree(roots: list[TreeNode]) -> Iterator[TreeNode]:
    """Yield every node of the forest in pre-order."""
    stack = list(reversed(roots))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


class ForestBuilder:
    """Depth-first spanning forest over concepts, schemes and collections.

    Every resource of interest gets exactly one full node. A later edge to an
    already visited resource yields a reference node instead; if that resource
    is still on the traversal path the edge closes a cycle.
    """

    def __init__(
        self,
        resources: Mapping[str, Resource],
        browse: BrowseConfiguration,
        labels: LabelOrder,
    ) -> None:
        self.resources = resources
        self.browse = browse
        self.labels = labels
        self._scheme_members: dict[str, set[str]] = {}
        self._collection_members: set[str] = set()
        for resource in resources.values():
            if resource.kind == "concept" and browse.include_concept_schemes:
                for scheme_iri in resource.in_scheme:
                    if resources[scheme_iri].kind == "concept_scheme":
                        self._scheme_members.setdefault(scheme_iri, set()).add(resource.iri)
            if resource.is_collection and browse.include_collections:
                self._collection_members.update(resource.members)
        self.state = TraversalState(
            unvisited={
                iri for iri, resource in resources.items() if self._of_interest(resource)
            }
        )

    def _of_interest(self, resource: Resource) -> bool:
        if resource.kind == "concept":
            return True
        if resource.kind == "concept_scheme":
            return self.browse.include_concept_schemes
        if resource.is_collection:
            return self.browse.include_collections
        return False

    def _in_some_scheme(self, resource: Resource) -> bool:
        return any(resource.iri in self._scheme_members.get(iri, ()) for iri in resource.in_scheme)

    def _is_root(self, resource: Resource) -> bool:
        if resource.kind == "concept":
            return not resource.broader and not self._in_some_scheme(resource)
        if resource.kind == "concept_scheme":
            return self.browse.include_concept_schemes
        if resource.is_collection:
            return self.browse.include_collections and resource.iri not in self._collection_members
        return False

    def _concept_edges(self, resource: Resource) -> list[_ChildEdge]:
        children = [
            self.resources[iri]
            for iri in resource.narrower
            if self.resources[iri].kind == "concept"
        ]
        children.sort(key=self.labels.key)
        return [_ChildEdge(resource=child) for child in children]

    def _scheme_edges(self, scheme: Resource) -> list[_ChildEdge]:
        members = self._scheme_members.get(scheme.iri, set())
        keyed: list[tuple[tuple, Resource]] = []
        for iri in members:
            member = self.resources[iri]
            is_top = scheme.iri in member.top_concept_of
            if is_top or not (member.broader & members):
                keyed.append((self.labels.key(member, top_concept=is_top), member))
        keyed.sort(key=lambda item: item[0])
        return [_ChildEdge(resource=member) for _, member in keyed]

    def _collection_edge(self, member: Resource, position: int | None) -> _ChildEdge | None:
        if member.kind == "concept":
            return _ChildEdge(resource=member, membership_only=True, position=position)
        if member.is_collection:
            return _ChildEdge(resource=member, position=position)
        return None

    def _collection_edges(self, collection: Resource) -> list[_ChildEdge]:
        edges: list[_ChildEdge] = []
        if collection.kind == "ordered_collection":
            for position, iri in enumerate(collection.ordered_members or ()):
                edge = self._collection_edge(self.resources[iri], position)
                if edge is not None:
                    edges.append(edge)
            return edges
        members = sorted(
            (self.resources[iri] for iri in collection.members),
            key=self.labels.key,
        )
        for member in members:
            edge = self._collection_edge(member, None)
            if edge is not None:
                edges.append(edge)
        return edges

    def _child_edges(self, resource: Resource) -> list[_ChildEdge]:
        if resource.kind == "concept":
            return self._concept_edges(resource)
        if resource.kind == "concept_scheme":
            return self._scheme_edges(resource)
        if resource.is_collection:
            return self._collection_edges(resource)
        return []

    def _new_node(self, edge: _ChildEdge, *, reference: bool) -> TreeNode:
        return TreeNode(
            resource=edge.resource,
            reference=reference,
            ordered_children=edge.resource.kind == "ordered_collection",
            ordered_collection_sort_order=edge.position,
        )

    def _record_back_edge(self, source: Resource, target: Resource) -> None:
        message = RDF_ERROR_CYCLE_COLLECTION if source.is_collection else RDF_ERROR_CYCLE_BROADER
        self.state.back_edges.append(rdf_error(message, f"{source.iri} to {target.iri}"))

    def _visit(self, root: TreeNode) -> None:
        state = self.state
        state.unvisited.discard(root.resource.iri)
        state.active.add(root.resource.iri)
        stack = [(root, iter(self._child_edges(root.resource)))]
        while stack:
            node, edges = stack[-1]
            edge = next(edges, None)
            if edge is None:
                state.active.discard(node.resource.iri)
                stack.pop()
                continue
            child = edge.resource
            if edge.membership_only:
                node.children.append(self._new_node(edge, reference=True))
                continue
            if child.iri in state.unvisited:
                child_node = self._new_node(edge, reference=False)
                node.children.append(child_node)
                state.unvisited.discard(child.iri)
                state.active.add(child.iri)
                stack.append((child_node, iter(self._child_edges(child))))
                continue
            state.only_tree_edges = False
            node.children.append(self._new_node(edge, reference=True))
            if child.iri in state.active:
                state.cycle_detected = True
                self._record_back_edge(node.resource, child)

    def _root_node(self, resource: Resource) -> TreeNode:
        return TreeNode(
            resource=resource,
            ordered_children=resource.kind == "ordered_collection",
        )

    def build(self) -> ForestBuild:
        state = self.state
        roots = [
            self._root_node(self.resources[iri])
            for iri in state.unvisited
            if self._is_root(self.resources[iri])
        ]
        roots.sort(key=lambda node: self.labels.key(node.resource))
        for root in roots:
            self._visit(root)

        if state.unvisited:
            state.cycle_detected = True
            leftovers = sorted(
                (self.resources[iri] for iri in state.unvisited),
                key=self.labels.key,
            )
            for resource in leftovers:
                if resource.iri not in state.unvisited:
                    continue
                root = self._root_node(resource)
                roots.append(root)
                self._visit(root)
            roots.sort(key=lambda node: self.labels.key(node.resource))

        logger.debug(
            "Built forest with %s roots (cycle_detected=%s, only_tree_edges=%s)",
            len(roots),
            state.cycle_detected,
            state.only_tree_edges,
        )
        return ForestBuild(
            roots=roots,
            cycle_detected=state.cycle_detected,
            only_tree_edges=state.only_tree_edges,
            back_edges=list(state.back_edges),
        )


def build_forest(
    resources: Mapping[str, Resource],
    browse: BrowseConfiguration,
    labels: LabelOrder,
) -> ForestBuild:
    return ForestBuilder(resources, browse, labels).build()
