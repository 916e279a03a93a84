from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from .browse_flags import NotationFormat
from .vocabulary import LabelProperty

ConceptTreeFormat = Literal["3"]
ResourceKind = Literal[
    "concept",
    "concept_scheme",
    "unordered_collection",
    "ordered_collection",
    "other",
]
TaggedText = tuple[str | None, str]

COLLECTION_KINDS: frozenset[str] = frozenset({"unordered_collection", "ordered_collection"})


@dataclass
class Resource:
    iri: str
    kind: ResourceKind = "other"
    asserted_kinds: set[str] = field(default_factory=set)
    inferred_concept: bool = False
    labels: dict[LabelProperty, set[TaggedText]] = field(default_factory=dict)
    definitions: set[TaggedText] = field(default_factory=set)
    descriptions: set[TaggedText] = field(default_factory=set)
    notations: set[str] = field(default_factory=set)
    broader: set[str] = field(default_factory=set)
    narrower: set[str] = field(default_factory=set)
    in_scheme: set[str] = field(default_factory=set)
    top_concept_of: set[str] = field(default_factory=set)
    members: set[str] = field(default_factory=set)
    member_list: str | None = None
    ordered_members: list[str] | None = None

    @property
    def is_collection(self) -> bool:
        return self.kind in COLLECTION_KINDS


@dataclass
class ListCell:
    iri: str
    first: str | None = None
    first_is_literal: bool = False
    rest: str | None = None


class _ForestNodeFields(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    iri: str
    url: str | None = None
    label: str | None = None
    definition: str | None = None
    dcterms_description: str | None = Field(default=None, alias="dctermsDescription")
    notation: str | None = None
    notation_sort_order: int | None = Field(default=None, alias="notationSortOrder")
    label_sort_order: int | None = Field(default=None, alias="labelSortOrder")
    ordered_collection_sort_order: int | None = Field(
        default=None, alias="orderedCollectionSortOrder"
    )


class ConceptNode(_ForestNodeFields):
    type: Literal["concept"] = "concept"
    children: list["ForestNode"] | None = None


class ConceptSchemeNode(_ForestNodeFields):
    type: Literal["concept_scheme"] = "concept_scheme"
    children: list["ForestNode"] | None = None


class UnorderedCollectionNode(_ForestNodeFields):
    type: Literal["unordered_collection"] = "unordered_collection"
    children: list["ForestNode"] | None = None


class OrderedCollectionNode(_ForestNodeFields):
    type: Literal["ordered_collection"] = "ordered_collection"
    children: list["ForestNode"] | None = None


class ConceptRefNode(_ForestNodeFields):
    type: Literal["concept_ref"] = "concept_ref"


class UnorderedCollectionRefNode(_ForestNodeFields):
    type: Literal["unordered_collection_ref"] = "unordered_collection_ref"


class OrderedCollectionRefNode(_ForestNodeFields):
    type: Literal["ordered_collection_ref"] = "ordered_collection_ref"


ForestNode = Annotated[
    Union[
        ConceptNode,
        ConceptSchemeNode,
        UnorderedCollectionNode,
        OrderedCollectionNode,
        ConceptRefNode,
        UnorderedCollectionRefNode,
        OrderedCollectionRefNode,
    ],
    Field(discriminator="type"),
]


class ConceptTreeDocument(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    format: ConceptTreeFormat = "3"
    language: str
    may_sort_by_notation: bool = Field(default=False, alias="maySortByNotation")
    notation_format: NotationFormat | None = Field(default=None, alias="notationFormat")
    default_sort_by_notation: bool | None = Field(default=None, alias="defaultSortByNotation")
    default_display_notation: bool = Field(default=False, alias="defaultDisplayNotation")
    may_resolve_resources: bool = Field(default=False, alias="mayResolveResources")
    forest: list[ForestNode] = Field(default_factory=list)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


ConceptNode.model_rebuild()
ConceptSchemeNode.model_rebuild()
UnorderedCollectionNode.model_rebuild()
OrderedCollectionNode.model_rebuild()
ConceptTreeDocument.model_rebuild()
