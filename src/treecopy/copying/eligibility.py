"""Batch-level checks run before a copy is offered."""

from __future__ import annotations

from typing import TYPE_CHECKING

from treecopy.tree.types import DirectoryItem, FileItem, is_ancestor

if TYPE_CHECKING:
    from collections.abc import Sequence

    from treecopy.tree.types import Node


def filter_ancestors(items: Sequence[Node]) -> list[Node]:
    """Drop every item that lies inside another item of the same batch."""
    return [
        item
        for item in items
        if not any(
            other is not item and isinstance(other, DirectoryItem) and is_ancestor(other, item)
            for other in items
        )
    ]


def can_copy(items: Sequence[object]) -> bool:
    """Check that a selection can be copied as one batch.

    Rejects unknown or invalid items, items that forbid textual duplication,
    two items with the same name, and items nested inside another selected
    directory. Touches nothing at the destination.
    """
    names: set[str] = set()
    for item in items:
        if not isinstance(item, (FileItem, DirectoryItem)):
            return False
        if not item.is_valid() or not item.copyable:
            return False
        if item.name in names:
            return False
        names.add(item.name)

    nodes: list[Node] = list(items)  # type: ignore[arg-type]
    return len(filter_ancestors(nodes)) == len(nodes)
