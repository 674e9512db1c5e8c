"""Higher-level copy entry points: default targets, cloning, checked copies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from treecopy.tree.types import is_ancestor

from .eligibility import can_copy
from .engine import copy_batch
from .errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from treecopy.tree.types import DirectoryItem, FileItem, Node

    from .decisions import DecisionProvider
    from .types import CopyOutcome


def common_parent_directory(items: Sequence[Node]) -> DirectoryItem | None:
    """Pick the outermost directory containing any of the items.

    Items without a parent are ignored.
    """
    result: DirectoryItem | None = None
    for item in items:
        directory = item.parent
        if directory is None:
            continue
        if result is None or is_ancestor(directory, result):
            result = directory
    return result


def copy_items(
    items: Sequence[Node],
    target: DirectoryItem | None = None,
    new_name: str | None = None,
    decisions: DecisionProvider | None = None,
    *,
    on_first_file: Callable[[FileItem], None] | None = None,
) -> CopyOutcome:
    """Check a selection and copy it, defaulting the target to the items' common parent."""
    if not can_copy(items):
        raise InvalidArgumentError(
            "Selection cannot be copied: items must be valid, uniquely named and not nested in each other",
            {"items": [getattr(item, "path", repr(item)) for item in items]},
        )
    if target is None:
        target = common_parent_directory(items)
        if target is None:
            raise InvalidArgumentError("No target directory given and the items have no common parent")
    return copy_batch(items, new_name, target, decisions, on_first_file=on_first_file)


def clone_item(
    item: Node,
    new_name: str,
    decisions: DecisionProvider | None = None,
    *,
    on_first_file: Callable[[FileItem], None] | None = None,
) -> CopyOutcome:
    """Duplicate a single file or directory next to itself under ``new_name``."""
    if not new_name:
        raise InvalidArgumentError("A clone needs a new name")
    if new_name == item.name:
        raise InvalidArgumentError(f"A clone of {item.path} must not reuse its name")
    target = item.parent
    if target is None:
        raise InvalidArgumentError(f"Cannot clone {item.path}: it has no parent directory")
    return copy_batch([item], new_name, target, decisions, on_first_file=on_first_file)
