from __future__ import annotations

import os
from dataclasses import dataclass

PRIMARY_LANGUAGE_TOKEN = "@primary"
UNTAGGED_TOKEN = "@none"

DEFAULT_LABEL_LANGUAGES: tuple[str, ...] = (PRIMARY_LANGUAGE_TOKEN, UNTAGGED_TOKEN, "en")
DEFAULT_MAX_RDF_ERRORS = 1_000


def _env_positive_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc
    if value < 1:
        raise RuntimeError(f"{name} must be >= 1")
    return value


def _env_language_chain(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    tokens = tuple(token.strip() for token in raw.split(",") if token.strip())
    if not tokens:
        raise RuntimeError(f"{name} must list at least one language")
    for token in tokens:
        if token.startswith("@") and token not in (PRIMARY_LANGUAGE_TOKEN, UNTAGGED_TOKEN):
            raise RuntimeError(
                f"{name} token {token!r} must be a language tag, "
                f"{PRIMARY_LANGUAGE_TOKEN!r} or {UNTAGGED_TOKEN!r}"
            )
    return tokens


@dataclass(frozen=True)
class ConceptTreeConfig:
    label_languages: tuple[str, ...] = DEFAULT_LABEL_LANGUAGES
    max_rdf_errors: int = DEFAULT_MAX_RDF_ERRORS

    @classmethod
    def from_env(cls) -> "ConceptTreeConfig":
        return cls(
            label_languages=_env_language_chain(
                "CONCEPT_TREE_LABEL_LANGUAGES",
                DEFAULT_LABEL_LANGUAGES,
            ),
            max_rdf_errors=_env_positive_int(
                "CONCEPT_TREE_MAX_RDF_ERRORS",
                DEFAULT_MAX_RDF_ERRORS,
            ),
        )
