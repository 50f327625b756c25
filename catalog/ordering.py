"""
Ordered reference map for lorebook aggregates.

Keeps a dense display order over a set of string references (catalogue,
article or entry IDs). The order values are always exactly 0..n-1:

- append() gives the new reference the next free order
- remove() compacts every order above the removed one
- swap() exchanges two order values and leaves the rest alone

The order value is the only source of truth for display; iterate with
ordered() (or iter()) rather than relying on insertion order.

Usage:
    from catalog.ordering import OrderedReferenceMap

    entries = OrderedReferenceMap()
    entries.append("entry-a")
    entries.append("entry-b")
    entries.swap("entry-a", "entry-b")
    entries.ordered()  # ['entry-b', 'entry-a']
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional

from .errors import DuplicateReferenceError, ReferenceNotFoundError
from .invariants import check_dense_order


class OrderedReferenceMap:
    """Reference -> order mapping with a gap-free 0..n-1 ordering."""

    def __init__(self, references: Optional[List[str]] = None):
        """Initialize map.

        Args:
            references: Optional references to append in the given order
        """
        self._map: Dict[str, int] = {}
        for reference in references or []:
            self.append(reference)

    def append(self, reference: str) -> int:
        """Append a reference after every existing one.

        Args:
            reference: Reference to append

        Returns:
            The order assigned to the reference

        Raises:
            DuplicateReferenceError: If the reference is already present
        """
        if reference in self._map:
            raise DuplicateReferenceError(reference)

        order = len(self._map)
        self._map[reference] = order
        return order

    def remove(self, reference: str) -> int:
        """Remove a reference and close the gap it leaves.

        Args:
            reference: Reference to remove

        Returns:
            The order the reference had

        Raises:
            ReferenceNotFoundError: If the reference is absent
        """
        if reference not in self._map:
            raise ReferenceNotFoundError(reference)

        removed_order = self._map.pop(reference)
        for key, order in self._map.items():
            if order > removed_order:
                self._map[key] = order - 1

        return removed_order

    subtract = remove

    def swap(self, first: str, second: str) -> None:
        """Exchange the order values of two references.

        Args:
            first: First reference
            second: Second reference

        Raises:
            ReferenceNotFoundError: Naming whichever reference is missing
        """
        if first not in self._map:
            raise ReferenceNotFoundError(first)
        if second not in self._map:
            raise ReferenceNotFoundError(second)

        self._map[first], self._map[second] = self._map[second], self._map[first]
        self._sort_by_order()

    switch = swap

    def contains(self, reference: str) -> bool:
        return reference in self._map

    def get(self, reference: str) -> Optional[int]:
        return self._map.get(reference)

    def raw(self) -> Mapping[str, int]:
        """Read-only view of the reference -> order mapping."""
        return MappingProxyType(self._map)

    def ordered(self) -> List[str]:
        """References sorted by order, ascending."""
        return sorted(self._map, key=self._map.__getitem__)

    def copy(self) -> "OrderedReferenceMap":
        clone = OrderedReferenceMap()
        clone._map = dict(self._map)
        return clone

    def to_dict(self) -> Dict[str, int]:
        return dict(self._map)

    @classmethod
    def from_dict(cls, data: Mapping[str, int]) -> "OrderedReferenceMap":
        """Rebuild a map from a stored reference -> order mapping.

        Raises:
            ValueError: If the orders are not exactly 0..n-1
        """
        check_dense_order(data.values())

        ordered_map = cls()
        ordered_map._map = {key: int(order) for key, order in data.items()}
        ordered_map._sort_by_order()
        return ordered_map

    def _sort_by_order(self) -> None:
        self._map = {key: self._map[key] for key in self.ordered()}

    def __contains__(self, reference: object) -> bool:
        return reference in self._map

    def __len__(self) -> int:
        return len(self._map)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ordered())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OrderedReferenceMap):
            return NotImplemented
        return self._map == other._map

    def __repr__(self) -> str:
        return f"OrderedReferenceMap({self.ordered()!r})"
