"""
Hierarchy invariants for catalogues.

Pure predicates used by the hierarchy manager before it adopts a child.
Only direct cycles are detected: a catalogue cannot contain itself and a
parent whose own parent is the child cannot adopt it. Longer cycles
(A -> B -> C -> A) are not looked for.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from .errors import AlreadyChildError, CircularInheritanceError, SelfContainmentError

if TYPE_CHECKING:
    from .models import Catalogue


def is_self_contained(child: "Catalogue", parent: "Catalogue") -> bool:
    return child.id == parent.id


def is_already_child(child: "Catalogue", parent: "Catalogue") -> bool:
    return child.parent_id == parent.id


def is_circular(child: "Catalogue", parent: "Catalogue") -> bool:
    """Whether adopting child under parent closes a two-catalogue loop."""
    return parent.parent_id == child.id


def check_can_adopt(child: "Catalogue", parent: "Catalogue") -> None:
    """Validate that parent may take child as a direct child.

    Args:
        child: Catalogue to be moved
        parent: Catalogue that would become its parent

    Raises:
        AlreadyChildError: child already hangs under parent
        SelfContainmentError: child and parent are the same catalogue
        CircularInheritanceError: parent is itself a direct child of child
    """
    if is_already_child(child, parent):
        raise AlreadyChildError(parent.id, child.id)

    if is_self_contained(child, parent):
        raise SelfContainmentError(parent.id)

    if is_circular(child, parent):
        raise CircularInheritanceError(parent.id, child.id)


def check_dense_order(orders: Iterable[int]) -> None:
    """Validate that order values are exactly 0..n-1.

    Raises:
        ValueError: If there is a gap, a duplicate or a negative order
    """
    values = sorted(int(order) for order in orders)
    if values != list(range(len(values))):
        raise ValueError(f"Order values must be exactly 0..{len(values) - 1}, got: {values}")
