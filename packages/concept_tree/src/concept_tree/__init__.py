from .browse_flags import BROWSE_FLAGS, BrowseConfiguration, BrowseFlag, NotationFormat
from .collector import StatementCollector
from .config import ConceptTreeConfig
from .errors import ConceptTreeError, ConceptTreeWriteError, NotationError
from .forest import ForestBuild, ForestBuilder, TraversalState, TreeNode, build_forest
from .iris import resolvable_url
from .labels import LabelOrder, LanguageFallback
from .models import (
    ConceptNode,
    ConceptRefNode,
    ConceptSchemeNode,
    ConceptTreeDocument,
    ForestNode,
    OrderedCollectionNode,
    OrderedCollectionRefNode,
    Resource,
    ResourceKind,
    UnorderedCollectionNode,
    UnorderedCollectionRefNode,
)
from .ordering import assign_sort_orders, compare_notations, notation_ranks
from .relations import normalize_relations, resolve_member_lists, validate_groupings
from .result import assemble_document, canonical_json, write_document
from .sources import parse_files
from .transform import ConceptTreeOutcome, build_concept_tree, run_concept_tree_transform

__all__ = [
    "BROWSE_FLAGS",
    "BrowseConfiguration",
    "BrowseFlag",
    "ConceptNode",
    "ConceptRefNode",
    "ConceptSchemeNode",
    "ConceptTreeConfig",
    "ConceptTreeDocument",
    "ConceptTreeError",
    "ConceptTreeOutcome",
    "ConceptTreeWriteError",
    "ForestBuild",
    "ForestBuilder",
    "ForestNode",
    "LabelOrder",
    "LanguageFallback",
    "NotationError",
    "NotationFormat",
    "OrderedCollectionNode",
    "OrderedCollectionRefNode",
    "Resource",
    "ResourceKind",
    "StatementCollector",
    "TraversalState",
    "TreeNode",
    "UnorderedCollectionNode",
    "UnorderedCollectionRefNode",
    "assemble_document",
    "assign_sort_orders",
    "build_concept_tree",
    "build_forest",
    "canonical_json",
    "compare_notations",
    "normalize_relations",
    "notation_ranks",
    "parse_files",
    "resolvable_url",
    "resolve_member_lists",
    "run_concept_tree_transform",
    "validate_groupings",
    "write_document",
]
