from __future__ import annotations

from typing import Callable, Sequence

from .config import ParentNumbering

NumberingPolicy = Callable[[Sequence[int], int, int], tuple[int, ...]]


def _zero(prefix: Sequence[int], count: int, subchapter_count: int) -> tuple[int, ...]:
    if subchapter_count > 0:
        return (*prefix, 0, count)
    return (*prefix, count)


def _allow_duplicates(
    prefix: Sequence[int], count: int, subchapter_count: int
) -> tuple[int, ...]:
    return (*prefix, count)


def _offset(
    prefix: Sequence[int], count: int, subchapter_count: int
) -> tuple[int, ...]:
    return (*prefix, count + subchapter_count)


POLICIES: dict[ParentNumbering, NumberingPolicy] = {
    ParentNumbering.ZERO: _zero,
    ParentNumbering.ALLOW_DUPLICATES: _allow_duplicates,
    ParentNumbering.OFFSET: _offset,
}


def trace_number(
    policy: ParentNumbering,
    prefix: Sequence[int],
    count: int,
    subchapter_count: int,
) -> tuple[int, ...]:
    """Number the ``count``-th trace (1-based) of a chapter numbered ``prefix``."""
    return POLICIES[policy](prefix, count, subchapter_count)
