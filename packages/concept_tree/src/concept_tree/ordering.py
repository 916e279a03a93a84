from __future__ import annotations

import html
import logging
import math
import re
import struct
from collections.abc import Callable, Sequence
from functools import cmp_to_key
from typing import Any

from .browse_flags import NotationFormat
from .errors import (
    NOTATION_DOTTED_ERROR,
    NOTATION_FLOAT_MULTIPLE_POINTS,
    NOTATION_FLOAT_OTHER_ERROR,
    SORT_BY_NOTATION_NOT_OFFERED,
    NotationError,
)
from .forest import TreeNode, iter_tree
from .labels import display_notation

logger = logging.getLogger(__name__)

_DOTTED_COMPONENT = re.compile(r"[+-]?[0-9]+")
_FLOAT_VALUE = re.compile(
    r"[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?[fFdD]?)"
)


def _notation_error(message: str, notation: str, notation_format: str) -> NotationError:
    return NotationError(
        message=message + SORT_BY_NOTATION_NOT_OFFERED,
        alert_html=html.escape(message) + SORT_BY_NOTATION_NOT_OFFERED,
        context={"notation": notation, "notation_format": notation_format},
    )


def _parse_dotted(notation: str) -> tuple[int, ...]:
    components = notation.split(".")
    while components and components[-1] == "":
        components.pop()
    values: list[int] = []
    for component in components:
        if not _DOTTED_COMPONENT.fullmatch(component):
            raise _notation_error(NOTATION_DOTTED_ERROR, notation, "notationDotted")
        values.append(int(component))
    return tuple(values)


def _single_precision(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _parse_float(notation: str) -> float:
    text = notation.strip()
    if text.count(".") > 1:
        raise _notation_error(NOTATION_FLOAT_MULTIPLE_POINTS, notation, "notationFloat")
    if not _FLOAT_VALUE.fullmatch(text):
        raise _notation_error(NOTATION_FLOAT_OTHER_ERROR, notation, "notationFloat")
    # Float notations compare at single precision.
    return _single_precision(float(text.rstrip("fFdD")))


def parse_notation(notation: str, notation_format: NotationFormat) -> Any:
    """Parse one notation into a comparable key for the given format."""
    if notation_format == "notationDotted":
        return _parse_dotted(notation)
    if notation_format == "notationFloat":
        return _parse_float(notation)
    return notation.casefold()


def _compare_dotted(left: tuple[int, ...], right: tuple[int, ...]) -> int:
    width = max(len(left), len(right))
    padded_left = left + (0,) * (width - len(left))
    padded_right = right + (0,) * (width - len(right))
    return (padded_left > padded_right) - (padded_left < padded_right)


def _float_key(value: float) -> tuple[bool, float, float]:
    # NaN sorts after every number and -0.0 before 0.0.
    if math.isnan(value):
        return (True, 0.0, 0.0)
    return (False, value, math.copysign(1.0, value))


def _compare_float(left: float, right: float) -> int:
    left_key, right_key = _float_key(left), _float_key(right)
    return (left_key > right_key) - (left_key < right_key)


def _compare_plain(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


_KEY_COMPARATORS: dict[str, Callable[[Any, Any], int]] = {
    "notationAlpha": _compare_plain,
    "notationDotted": _compare_dotted,
    "notationFloat": _compare_float,
}


def compare_notations(left: str, right: str, notation_format: NotationFormat) -> int:
    """Compare two non-empty notations; negative, zero or positive like ``cmp``."""
    compare = _KEY_COMPARATORS[notation_format]
    return compare(
        parse_notation(left, notation_format),
        parse_notation(right, notation_format),
    )


def notation_ranks(
    notations: Sequence[str | None],
    notation_format: NotationFormat,
) -> list[int]:
    """Rank a sibling group by notation, given in label order.

    Missing or empty notations rank after present ones and ties keep the
    label order. Notations are parsed only when at least two siblings have
    one, since a lone notation is never compared.
    """
    present = [notation for notation in notations if notation]
    keys: list[Any] = [None] * len(notations)
    if len(present) > 1:
        keys = [
            parse_notation(notation, notation_format) if notation else None
            for notation in notations
        ]
    compare_keys = _KEY_COMPARATORS[notation_format]

    def compare(left: int, right: int) -> int:
        left_key, right_key = keys[left], keys[right]
        if left_key is None or right_key is None:
            if left_key is None and right_key is None:
                return left - right
            return 1 if left_key is None else -1
        return compare_keys(left_key, right_key) or left - right

    order = sorted(range(len(notations)), key=cmp_to_key(compare))
    ranks = [0] * len(notations)
    for rank, index in enumerate(order):
        ranks[index] = rank
    return ranks


def _sibling_groups(roots: list[TreeNode]) -> list[list[TreeNode]]:
    groups = [roots]
    for node in iter_tree(roots):
        if node.children and not node.ordered_children:
            groups.append(node.children)
    return groups


def assign_sort_orders(
    roots: list[TreeNode],
    notation_format: NotationFormat,
    *,
    default_sort_by_notation: bool,
) -> None:
    """Attach notation ranks to every sibling group, in place.

    Groups arrive in label order. All ranks are computed before any node is
    touched, so a ``NotationError`` leaves the forest unchanged. With
    ``default_sort_by_notation`` each group is reordered by notation and its
    nodes keep their label rank instead.
    """
    groups = _sibling_groups(roots)
    ranked = [
        (group, notation_ranks([display_notation(n.resource) for n in group], notation_format))
        for group in groups
    ]
    for group, ranks in ranked:
        for label_rank, (node, notation_rank) in enumerate(zip(group, ranks)):
            if default_sort_by_notation:
                node.label_sort_order = label_rank
            else:
                node.notation_sort_order = notation_rank
        if default_sort_by_notation:
            by_notation = sorted(zip(ranks, group), key=lambda item: item[0])
            group[:] = [node for _, node in by_notation]
    logger.debug("Assigned notation ranks to %s sibling groups", len(groups))
