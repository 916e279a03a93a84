from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from .config import DEFAULT_LABEL_LANGUAGES, PRIMARY_LANGUAGE_TOKEN, UNTAGGED_TOKEN
from .models import Resource, TaggedText
from .vocabulary import DISPLAY_LABEL_PROPERTIES


def _normalize_tag(tag: str | None) -> str | None:
    if tag is None:
        return None
    tag = tag.strip().lower()
    return tag or None


def _tag_matches(wanted: str, tag: str | None) -> bool:
    if tag is None:
        return False
    return tag == wanted or tag.startswith(wanted + "-")


@dataclass(frozen=True)
class LanguageFallback:
    """Ordered language preferences used to pick one text out of a tagged set.

    ``None`` in ``chain`` stands for untagged text. A tag also matches its
    region variants, so ``en`` accepts ``en-AU``. Values matched by no chain
    entry are considered last, by tag and then text.
    """

    chain: tuple[str | None, ...]

    @classmethod
    def from_tokens(
        cls,
        tokens: Sequence[str] = DEFAULT_LABEL_LANGUAGES,
        *,
        primary_language: str | None,
    ) -> LanguageFallback:
        chain: list[str | None] = []
        for token in tokens:
            if token == PRIMARY_LANGUAGE_TOKEN:
                entry = _normalize_tag(primary_language)
                if entry is None:
                    continue
            elif token == UNTAGGED_TOKEN:
                entry = None
            else:
                entry = _normalize_tag(token)
                if entry is None:
                    continue
            if entry not in chain:
                chain.append(entry)
        return cls(chain=tuple(chain))

    def select(self, values: Iterable[TaggedText]) -> str | None:
        candidates = [(_normalize_tag(tag), text) for tag, text in values]
        if not candidates:
            return None
        for wanted in self.chain:
            if wanted is None:
                matched = [text for tag, text in candidates if tag is None]
            else:
                matched = [text for tag, text in candidates if tag == wanted]
                if not matched:
                    matched = [text for tag, text in candidates if _tag_matches(wanted, tag)]
            if matched:
                return min(matched)
        return min(candidates, key=lambda item: (item[0] or "", item[1]))[1]


def display_label(resource: Resource, fallback: LanguageFallback) -> str | None:
    for prop in DISPLAY_LABEL_PROPERTIES:
        label = fallback.select(resource.labels.get(prop, ()))
        if label is not None:
            return label
    return None


def display_definition(resource: Resource, fallback: LanguageFallback) -> str | None:
    return fallback.select(resource.definitions)


def display_description(resource: Resource, fallback: LanguageFallback) -> str | None:
    return fallback.select(resource.descriptions)


def display_notation(resource: Resource) -> str | None:
    if not resource.notations:
        return None
    return min(resource.notations)


_TYPE_CATEGORY: dict[str, int] = {
    "concept_scheme": 0,
    "unordered_collection": 1,
    "ordered_collection": 1,
    "concept": 2,
    "other": 3,
}


class LabelOrder:
    """Base sibling order: type category, top concepts, label, then IRI.

    Labels compare case-insensitively. Resources without a label follow the
    labelled ones and are ordered by the bytes of their IRI.
    """

    def __init__(self, fallback: LanguageFallback) -> None:
        self.fallback = fallback
        self._labels: dict[str, str | None] = {}

    def label(self, resource: Resource) -> str | None:
        if resource.iri not in self._labels:
            self._labels[resource.iri] = display_label(resource, self.fallback)
        return self._labels[resource.iri]

    def key(self, resource: Resource, *, top_concept: bool = False) -> tuple:
        category = _TYPE_CATEGORY[resource.kind]
        top_rank = 0 if top_concept else 1
        iri_bytes = resource.iri.encode("utf-8")
        label = self.label(resource)
        if label is None:
            return (category, top_rank, 1, "", iri_bytes)
        return (category, top_rank, 0, label.casefold(), iri_bytes)
