"""
Sibling order helpers shared by step and goal operations.

Works on anything with an ``order`` field (Step, Goal).
"""
from dataclasses import replace
from typing import List, Sequence, Tuple, TypeVar

T = TypeVar("T")


def next_order(siblings: Sequence) -> int:
    """Order for an item appended to ``siblings``: max + 1, or 0 when empty."""
    if not siblings:
        return 0
    return max(s.order for s in siblings) + 1


def renumber(items: Sequence[T]) -> Tuple[T, ...]:
    """Assign order = 0..N-1 by position; items already in place are reused."""
    return tuple(
        item if item.order == index else replace(item, order=index)
        for index, item in enumerate(items)
    )


def splice_move(items: Sequence[T], source_index: int, destination_index: int) -> List[T]:
    """
    Remove the item at ``source_index`` and re-insert it at ``destination_index``.

    Same semantics as a list splice: a destination past the end appends.
    A negative destination is clamped to 0.
    """
    moved = list(items)
    item = moved.pop(source_index)
    moved.insert(max(0, destination_index), item)
    return moved


def sort_by_order(items: Sequence[T]) -> List[T]:
    # Stable, so equal orders keep their stored position.
    return sorted(items, key=lambda x: x.order)


def is_dense(items: Sequence) -> bool:
    return sorted(i.order for i in items) == list(range(len(items)))
