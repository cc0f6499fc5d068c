"""Ordered merge-join over two storages.

This module is the only place that decides how the keys of two storages are
paired up. ``union``, ``intersect`` and ``diff`` on :class:`Storage` are all
folds built on :func:`merge`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, TypeVar

from pykvstore.models.value import Value

if TYPE_CHECKING:
    from pykvstore.storage.store import Storage

A = TypeVar("A")

OnLeft = Callable[[str, Value, A], A]
OnBoth = Callable[[str, Value, Value, A], A]
OnRight = Callable[[str, Value, A], A]


class MergeSide(StrEnum):
    LEFT = "left"
    BOTH = "both"
    RIGHT = "right"


@dataclass(frozen=True)
class MergeStep:
    """One key of the merged key sequence.

    ``left`` is set for ``LEFT`` and ``BOTH`` steps, ``right`` for ``RIGHT``
    and ``BOTH`` steps.
    """

    key: str
    side: MergeSide
    left: Value | None = None
    right: Value | None = None


def merge_join(
    left: Sequence[tuple[str, Value]],
    right: Sequence[tuple[str, Value]],
) -> Iterator[MergeStep]:
    """Walk two key-sorted pair sequences in lockstep.

    Both inputs must be strictly ascending by key. Yields one
    :class:`MergeStep` per key of the union, in ascending key order.
    """
    i = j = 0
    while i < len(left) and j < len(right):
        left_key, left_value = left[i]
        right_key, right_value = right[j]
        if left_key < right_key:
            yield MergeStep(left_key, MergeSide.LEFT, left=left_value)
            i += 1
        elif right_key < left_key:
            yield MergeStep(right_key, MergeSide.RIGHT, right=right_value)
            j += 1
        else:
            yield MergeStep(left_key, MergeSide.BOTH, left=left_value, right=right_value)
            i += 1
            j += 1

    for left_key, left_value in left[i:]:
        yield MergeStep(left_key, MergeSide.LEFT, left=left_value)
    for right_key, right_value in right[j:]:
        yield MergeStep(right_key, MergeSide.RIGHT, right=right_value)


def merge(
    on_left: OnLeft[A],
    on_both: OnBoth[A],
    on_right: OnRight[A],
    left: Storage,
    right: Storage,
    initial: A,
) -> A:
    """Fold over the sorted union of keys of *left* and *right*.

    For each key in ascending order exactly one callback runs:

    * ``on_left(key, left_value, acc)`` when only *left* has the key
    * ``on_both(key, left_value, right_value, acc)`` when both have it
    * ``on_right(key, right_value, acc)`` when only *right* has it

    The return value of each callback becomes the accumulator for the next
    key; the final accumulator is returned.
    """
    acc = initial
    for step in merge_join(left.to_list(), right.to_list()):
        if step.side is MergeSide.LEFT:
            acc = on_left(step.key, step.left, acc)  # type: ignore[arg-type]
        elif step.side is MergeSide.BOTH:
            acc = on_both(step.key, step.left, step.right, acc)  # type: ignore[arg-type]
        else:
            acc = on_right(step.key, step.right, acc)  # type: ignore[arg-type]
    return acc
