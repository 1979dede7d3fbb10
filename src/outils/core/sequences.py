"""Bounds-checked indexing and stable sorting by a derived key.

Sorting helpers take an explicit *key* callable instead of reflecting
on attributes.  Every sort is stable: elements with equal keys keep
their original relative order, in both directions.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from typing import Any, TypeVar

T = TypeVar("T")
K = TypeVar("K")

LessThan = Callable[[Any, Any], bool]


class SortOrder(Enum):
    """Direction for :func:`sorted_by`."""

    FORWARD = "forward"
    REVERSE = "reverse"


def safe_get(items: Sequence[T], index: int) -> T | None:
    """Return ``items[index]`` when ``0 <= index < len(items)``, else ``None``.

    Negative indices never wrap around.
    """
    if 0 <= index < len(items):
        return items[index]
    return None


def _comparison(key: Callable[[T], K], less_than: LessThan) -> Callable[[T, T], int]:
    def compare(lhs: T, rhs: T) -> int:
        left, right = key(lhs), key(rhs)
        if less_than(left, right):
            return -1
        if less_than(right, left):
            return 1
        return 0

    return compare


def sorted_by(
    items: Iterable[T],
    key: Callable[[T], K],
    order: SortOrder = SortOrder.FORWARD,
    *,
    comparator: LessThan | None = None,
) -> list[T]:
    """Return a new list of *items* stably sorted by ``key(item)``.

    Parameters
    ----------
    items:
        Elements to sort.
    key:
        Extracts the comparison key from an element.
    order:
        Ascending (``FORWARD``) or descending (``REVERSE``) by key.
        Ignored when *comparator* is given.
    comparator:
        Optional strict "less than" predicate over keys, for keys
        without a natural ordering.
    """
    if comparator is not None:
        return sorted(items, key=functools.cmp_to_key(_comparison(key, comparator)))
    return sorted(items, key=key, reverse=order is SortOrder.REVERSE)


def sort_by(
    items: list[T],
    key: Callable[[T], K],
    order: SortOrder = SortOrder.FORWARD,
    *,
    comparator: LessThan | None = None,
) -> None:
    """In-place variant of :func:`sorted_by`."""
    items[:] = sorted_by(items, key, order, comparator=comparator)
