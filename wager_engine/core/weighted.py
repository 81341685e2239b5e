"""
Weighted random selection over a fixed table.
Used by the slot machine for symbol frequencies.
"""

from bisect import bisect_left
from itertools import accumulate
from typing import Generic, Iterable, Tuple, TypeVar

from wager_engine.core.rng import RandomSource

T = TypeVar("T")


class WeightedTable(Generic[T]):
    """
    Immutable (item, weight) table with precomputed cumulative weights.

    A draw picks a uniform integer r in [1, total] and walks the table in
    order subtracting weights until r is non-positive. Searching the
    cumulative weights for the first entry >= r gives the same item, and
    ties always resolve to the earlier entry.
    """

    def __init__(self, entries: Iterable[Tuple[T, int]]):
        entries = tuple(entries)
        if not entries:
            raise ValueError("Weighted table needs at least one entry")
        for item, weight in entries:
            if not isinstance(weight, int) or isinstance(weight, bool) or weight <= 0:
                raise ValueError(f"Weight for {item!r} must be a positive integer, got {weight!r}")

        self._items = tuple(item for item, _ in entries)
        self._weights = tuple(weight for _, weight in entries)
        self._cumulative = tuple(accumulate(self._weights))

    @property
    def items(self) -> Tuple[T, ...]:
        return self._items

    @property
    def weights(self) -> Tuple[int, ...]:
        return self._weights

    @property
    def total_weight(self) -> int:
        return self._cumulative[-1]

    def select(self, roll: int) -> T:
        """Map a roll in [1, total_weight] onto its table entry."""
        if not 1 <= roll <= self.total_weight:
            raise ValueError(f"Roll {roll} outside [1, {self.total_weight}]")
        return self._items[bisect_left(self._cumulative, roll)]

    def draw(self, source: RandomSource) -> T:
        return self.select(source.random_int(1, self.total_weight))

    def __len__(self) -> int:
        return len(self._items)
