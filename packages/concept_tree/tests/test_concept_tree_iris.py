from __future__ import annotations

import pytest
from concept_tree import ConceptTreeError, resolvable_url


def test_ascii_iri_needs_no_url() -> None:
    assert resolvable_url("http://example.org/vocab/a") is None
    assert resolvable_url("urn:isbn:0451450523") is None


def test_non_ascii_path_is_percent_encoded_as_utf8() -> None:
    assert resolvable_url("http://example.org/vocab/café") == "http://example.org/vocab/caf%C3%A9"
    assert resolvable_url("http://example.org/a?q=ü#frag") == "http://example.org/a?q=%C3%BC#frag"


def test_host_is_lower_cased_and_idna_encoded() -> None:
    assert resolvable_url("HTTP://Bücher.Example/x") == "http://xn--bcher-kva.example/x"


def test_default_port_dot_segments_and_escapes_are_normalized() -> None:
    assert resolvable_url("http://example.org:80/a/./b/../c") == "http://example.org/a/c"
    assert resolvable_url("http://example.org:8080/a") is None
    assert resolvable_url("http://example.org/%7euser/%c3%a9") == "http://example.org/~user/%C3%A9"
    assert resolvable_url("http://example.org") == "http://example.org/"


def test_overlong_host_label_cannot_be_normalized() -> None:
    with pytest.raises(ConceptTreeError) as exc_info:
        resolvable_url("http://" + "ü" * 70 + ".example/a")

    assert exc_info.value.code == "IRI_NOT_NORMALIZABLE"
