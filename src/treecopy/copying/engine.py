"""Depth-first copy of files and directories into a target directory.

One call to ``copy_batch`` is one batch: it validates the whole request,
takes the write lock once, then copies every root item in order. Collisions
with different existing files are settled through a ``DecisionProvider``;
an "all" answer is remembered in the batch's ``ConflictState`` and reused
for every later collision of the same batch. Directories merge into
same-named directories that already exist at the destination.

Nothing is rolled back when a storage error aborts a batch: whatever was
copied before the failure stays in place.
"""

from __future__ import annotations

import contextlib
from typing import TYPE_CHECKING

from treecopy.infrastructure.logger import logger
from treecopy.tree.types import DirectoryItem, FileItem, is_ancestor

from .decisions import applies_overwrite, default_decision_provider, offered_options
from .errors import CopyError, CopyIOError, InvalidArgumentError, SelfContainmentError
from .lock import write_scope
from .types import ConflictState, CopyOutcome

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence
    from pathlib import Path

    from treecopy.tree.types import Node

    from .decisions import DecisionProvider


@contextlib.contextmanager
def _storage(action: str, path: str) -> Iterator[None]:
    try:
        yield
    except OSError as err:
        raise CopyIOError(f"Failed to {action} {path}: {err}", {"action": action, "path": path}) from err


def check_copy_into_self(items: Sequence[Node], target: DirectoryItem) -> None:
    """Reject any directory item that contains ``target``.

    A directory equal to the target is allowed here; copying it is a no-op.
    """
    for item in items:
        if isinstance(item, DirectoryItem) and is_ancestor(item, target):
            raise SelfContainmentError(
                f"Cannot copy directory {item.path} into itself ({target.path})",
                {"source": item.path, "target": target.path},
            )


def _validate_request(items: Sequence[Node], new_name: str | None, target: DirectoryItem) -> None:
    if not items:
        raise InvalidArgumentError("Nothing to copy")
    if new_name is not None:
        if len(items) != 1:
            raise InvalidArgumentError(f"No new name should be set; number of items is: {len(items)}")
        if not new_name:
            raise InvalidArgumentError("New name must not be empty")
    for item in items:
        if not isinstance(item, (FileItem, DirectoryItem)):
            raise InvalidArgumentError(f"Unexpected item to copy: {item!r}")
    check_copy_into_self(items, target)


def _should_overwrite(
    name: str,
    target: DirectoryItem,
    decisions: DecisionProvider,
    state: ConflictState | None,
) -> bool:
    """Settle a collision with a different existing file."""
    if state is not None and state.sticky is not None:
        decision = state.sticky
        logger.debug("Applying sticky conflict decision", file=name, target=target.path, decision=decision)
        return applies_overwrite(decision)

    allow_all = state is not None
    decision = decisions.ask(name, target.path, allow_all)
    if decision not in offered_options(allow_all):
        raise InvalidArgumentError(
            f"Decision provider returned {decision!r}; expected one of {', '.join(offered_options(allow_all))}",
            {"file": name, "target": target.path},
        )
    if state is not None:
        state.remember(decision)
    logger.info("Resolved file conflict", file=name, target=target.path, decision=decision)
    return applies_overwrite(decision)


def copy_node(
    node: Node,
    new_name: str | None,
    target: DirectoryItem,
    decisions: DecisionProvider,
    state: ConflictState | None = None,
    outcome: CopyOutcome | None = None,
) -> FileItem | None:
    """Copy one file or directory into ``target``.

    Returns the first file materialized (recursively), or None when nothing
    but directories were produced or every file was skipped.
    """
    if outcome is None:
        outcome = CopyOutcome()

    match node:
        case FileItem():
            name = new_name if new_name is not None else node.name
            with _storage("look up", f"{target.path}/{name}"):
                existing = target.find_child_file(name)

            if existing is not None:
                if existing == node:
                    return existing
                if not _should_overwrite(name, target, decisions, state):
                    outcome.skipped.append(existing.path)
                    return None
                existing_path = existing.path
                with _storage("delete", existing_path):
                    target.delete(existing)
                outcome.overwritten.append(existing_path)

            with _storage("copy", node.path):
                copy = target.copy_file_into(name, node)
            logger.debug("Copied file", source=node.path, dest=copy.path)
            outcome.copied.append(copy.path)
            return copy

        case DirectoryItem():
            if node == target:
                logger.debug("Skipping copy of directory into itself", directory=node.path)
                return None

            name = new_name if new_name is not None else node.name
            with _storage("create directory", f"{target.path}/{name}"):
                subdirectory = target.find_subdirectory(name)
                if subdirectory is None:
                    subdirectory = target.create_subdirectory(name)
                    outcome.created_directories.append(subdirectory.path)
                else:
                    logger.debug("Merging into existing directory", source=node.path, dest=subdirectory.path)
                if node.encoding is not None:
                    subdirectory.set_encoding(node.encoding)
            with _storage("list", node.path):
                children = node.children()

            first_file: FileItem | None = None
            for child in children:
                copied = copy_node(child, None, subdirectory, decisions, state, outcome)
                if first_file is None:
                    first_file = copied
            return first_file

        case _:
            raise InvalidArgumentError(f"Unexpected item to copy: {node!r}")


def copy_batch(
    items: Sequence[Node],
    new_name: str | None,
    target: DirectoryItem,
    decisions: DecisionProvider | None = None,
    *,
    on_first_file: Callable[[FileItem], None] | None = None,
    lock_path: Path | None = None,
) -> CopyOutcome:
    """Copy every item into ``target`` as a single batch.

    ``new_name`` may only be given for a single item. Raises
    ``InvalidArgumentError`` or ``SelfContainmentError`` before anything is
    written, and ``CopyIOError`` when storage fails part way through.
    """
    _validate_request(items, new_name, target)
    if decisions is None:
        decisions = default_decision_provider()

    # A lone file can collide at most once, so it never offers "for all".
    state = ConflictState() if len(items) > 1 or isinstance(items[0], DirectoryItem) else None
    outcome = CopyOutcome()

    logger.info("Copy batch started", items=[item.path for item in items], target=target.path, new_name=new_name)
    with write_scope(lock_path):
        try:
            for item in items:
                copied = copy_node(item, new_name, target, decisions, state, outcome)
                if outcome.first_file is None:
                    outcome.first_file = copied
        except CopyError as err:
            logger.error(
                "Copy batch aborted",
                error=str(err),
                copied=len(outcome.copied),
                target=target.path,
            )
            raise

    logger.info(
        "Copy batch finished",
        copied=len(outcome.copied),
        overwritten=len(outcome.overwritten),
        skipped=len(outcome.skipped),
        created_directories=len(outcome.created_directories),
        first_file=outcome.first_file.path if outcome.first_file is not None else None,
    )

    if outcome.first_file is not None and on_first_file is not None:
        on_first_file(outcome.first_file)

    return outcome
