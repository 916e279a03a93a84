from __future__ import annotations

import pytest
from concept_tree import (
    LanguageFallback,
    NotationError,
    Resource,
    TreeNode,
    assign_sort_orders,
    compare_notations,
    notation_ranks,
)
from concept_tree.errors import (
    NOTATION_DOTTED_ERROR,
    NOTATION_FLOAT_MULTIPLE_POINTS,
    NOTATION_FLOAT_OTHER_ERROR,
)


def _node(
    name: str,
    notation: str | None = None,
    children: list[TreeNode] | None = None,
) -> TreeNode:
    resource = Resource(iri=f"http://example.org/{name}", kind="concept")
    if notation is not None:
        resource.notations.add(notation)
    return TreeNode(resource=resource, children=children or [])


def _names(nodes: list[TreeNode]) -> list[str]:
    return [node.resource.iri.rsplit("/", 1)[-1] for node in nodes]


def test_dotted_notations_compare_component_wise() -> None:
    ordered = ["1", "1.1", "1.1.1", "1.2", "1.9", "1.10", "2"]
    for left, right in zip(ordered, ordered[1:]):
        assert compare_notations(left, right, "notationDotted") < 0
        assert compare_notations(right, left, "notationDotted") > 0


def test_dotted_missing_components_count_as_zero() -> None:
    assert compare_notations("1", "1.0", "notationDotted") == 0
    assert compare_notations("1.", "1", "notationDotted") == 0


def test_alpha_notations_ignore_case() -> None:
    assert compare_notations("b", "A", "notationAlpha") > 0
    assert compare_notations("abc", "ABC", "notationAlpha") == 0


def test_float_notations_compare_numerically() -> None:
    assert compare_notations("9.5", "10", "notationFloat") < 0
    assert compare_notations("-1e3", "0.5", "notationFloat") < 0
    assert compare_notations("2.50", "2.5", "notationFloat") == 0


def test_float_notations_compare_at_single_precision() -> None:
    assert compare_notations("1.00000001", "1.00000002", "notationFloat") == 0
    assert notation_ranks(["1.00000002", "1.00000001"], "notationFloat") == [0, 1]
    assert compare_notations("1e39", "Infinity", "notationFloat") == 0
    assert compare_notations("-0.0", "0.0", "notationFloat") < 0
    assert compare_notations("NaN", "Infinity", "notationFloat") > 0


@pytest.mark.parametrize(
    ("left", "right", "notation_format", "message"),
    [
        ("1.a", "2", "notationDotted", NOTATION_DOTTED_ERROR),
        ("1..2", "2", "notationDotted", NOTATION_DOTTED_ERROR),
        ("1.2.3", "2", "notationFloat", NOTATION_FLOAT_MULTIPLE_POINTS),
        ("twelve", "2", "notationFloat", NOTATION_FLOAT_OTHER_ERROR),
    ],
)
def test_unparseable_notation_raises_with_alert(
    left: str, right: str, notation_format: str, message: str
) -> None:
    with pytest.raises(NotationError) as exc_info:
        compare_notations(left, right, notation_format)  # type: ignore[arg-type]

    assert exc_info.value.message.startswith(message)
    assert exc_info.value.alert_html.endswith("Sorting by notation will not be offered.")
    assert exc_info.value.context["notation"] == left


def test_notation_ranks_put_missing_notations_last_in_label_order() -> None:
    assert notation_ranks(["2", None, "1", ""], "notationDotted") == [1, 2, 0, 3]


def test_notation_ranks_break_ties_by_label_rank() -> None:
    assert notation_ranks(["1.0", "1"], "notationDotted") == [0, 1]
    assert notation_ranks(["1", "1.0"], "notationDotted") == [0, 1]


def test_lone_notation_is_never_parsed() -> None:
    assert notation_ranks(["not a number", None], "notationFloat") == [0, 1]


def test_assign_sort_orders_ranks_every_sibling_group() -> None:
    roots = [
        _node("fruit", "2", [_node("apple", "2.10"), _node("banana", "2.9")]),
        _node("grain", "1"),
    ]

    assign_sort_orders(roots, "notationDotted", default_sort_by_notation=False)

    assert _names(roots) == ["fruit", "grain"]
    assert [node.notation_sort_order for node in roots] == [1, 0]
    assert [node.notation_sort_order for node in roots[0].children] == [1, 0]
    assert all(node.label_sort_order is None for node in roots)


def test_default_sort_by_notation_reorders_groups_and_keeps_label_rank() -> None:
    roots = [
        _node("fruit", "2", [_node("apple", "2.10"), _node("banana", "2.9")]),
        _node("grain", "1"),
    ]

    assign_sort_orders(roots, "notationDotted", default_sort_by_notation=True)

    assert _names(roots) == ["grain", "fruit"]
    assert [node.label_sort_order for node in roots] == [1, 0]
    assert _names(roots[1].children) == ["banana", "apple"]
    assert [node.label_sort_order for node in roots[1].children] == [1, 0]
    assert all(node.notation_sort_order is None for node in roots)


def test_notation_error_leaves_forest_untouched() -> None:
    roots = [
        _node("fruit", "2", [_node("apple", "x.1"), _node("banana", "2.9")]),
        _node("grain", "1"),
    ]

    with pytest.raises(NotationError):
        assign_sort_orders(roots, "notationDotted", default_sort_by_notation=True)

    assert _names(roots) == ["fruit", "grain"]
    assert all(node.label_sort_order is None for node in roots)
    assert all(node.notation_sort_order is None for node in roots[0].children)


def test_ordered_collection_children_are_not_reranked() -> None:
    collection = TreeNode(
        resource=Resource(iri="http://example.org/list", kind="ordered_collection"),
        ordered_children=True,
        children=[_node("b", "2"), _node("a", "1")],
    )

    assign_sort_orders([collection], "notationDotted", default_sort_by_notation=True)

    assert _names(collection.children) == ["b", "a"]
    assert all(child.label_sort_order is None for child in collection.children)


def test_language_fallback_default_chain() -> None:
    fallback = LanguageFallback.from_tokens(primary_language="de")

    assert fallback.chain == ("de", None, "en")
    assert fallback.select([("en", "Colour"), (None, "Farbe?"), ("de", "Farbe")]) == "Farbe"
    assert fallback.select([("en", "Colour"), (None, "Kolor")]) == "Kolor"
    assert fallback.select([("en-AU", "Colour"), ("fr", "Couleur")]) == "Colour"
    assert fallback.select([("fr", "Couleur"), ("es", "Color")]) == "Color"
    assert fallback.select([]) is None


def test_language_fallback_custom_chain() -> None:
    fallback = LanguageFallback.from_tokens(["fr", "@primary"], primary_language="en")

    assert fallback.chain == ("fr", "en")
    assert fallback.select([("en", "Colour"), ("fr", "Couleur")]) == "Couleur"
    assert fallback.select([("en", "Colour"), (None, "Untagged")]) == "Colour"
