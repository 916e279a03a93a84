from __future__ import annotations

import logging

import pytest
from concept_tree import BrowseConfiguration, ConceptTreeConfig
from concept_tree.config import DEFAULT_LABEL_LANGUAGES, DEFAULT_MAX_RDF_ERRORS


def test_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CONCEPT_TREE_LABEL_LANGUAGES", raising=False)
    monkeypatch.delenv("CONCEPT_TREE_MAX_RDF_ERRORS", raising=False)

    config = ConceptTreeConfig.from_env()

    assert config.label_languages == DEFAULT_LABEL_LANGUAGES
    assert config.max_rdf_errors == DEFAULT_MAX_RDF_ERRORS


def test_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CONCEPT_TREE_LABEL_LANGUAGES", "fr, @primary ,@none")
    monkeypatch.setenv("CONCEPT_TREE_MAX_RDF_ERRORS", "5")

    config = ConceptTreeConfig.from_env()

    assert config.label_languages == ("fr", "@primary", "@none")
    assert config.max_rdf_errors == 5


@pytest.mark.parametrize(
    ("name", "value", "message"),
    [
        ("CONCEPT_TREE_MAX_RDF_ERRORS", "many", "must be an integer"),
        ("CONCEPT_TREE_MAX_RDF_ERRORS", "0", "must be >= 1"),
        ("CONCEPT_TREE_LABEL_LANGUAGES", "en,@other", "must be a language tag"),
    ],
)
def test_config_rejects_bad_values(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str, message: str
) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(RuntimeError, match=message):
        ConceptTreeConfig.from_env()


def test_browse_flags_parse_known_names() -> None:
    browse = BrowseConfiguration.from_flags(
        ["maySortByNotation", "notationAlpha", "notationFloat", "includeCollections"]
    )

    assert browse.may_sort_by_notation is True
    assert browse.notation_format == "notationFloat"
    assert browse.include_collections is True
    assert browse.include_concept_schemes is False
    assert browse.notation_sort_enabled is True


def test_browse_flags_log_unknown_names(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR, logger="concept_tree.browse_flags"):
        browse = BrowseConfiguration.from_flags(["sortByMagic", "notationDotted"])

    assert browse.notation_format == "notationDotted"
    assert browse.notation_sort_enabled is False
    assert "sortByMagic" in caplog.text
