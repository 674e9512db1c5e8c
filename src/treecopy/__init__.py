"""Copy files and directory trees with merge, conflict prompts and self-copy guards."""

from __future__ import annotations

from treecopy.copying.decisions import (
    ALWAYS_OVERWRITE,
    ALWAYS_SKIP,
    ConflictDecision,
    ConsolePrompt,
    DecisionProvider,
    FixedDecision,
    default_decision_provider,
    provider_for_policy,
)
from treecopy.copying.eligibility import can_copy, filter_ancestors
from treecopy.copying.engine import check_copy_into_self, copy_batch, copy_node
from treecopy.copying.errors import (
    CopyCancelledError,
    CopyError,
    CopyIOError,
    CopyLockError,
    InvalidArgumentError,
    SelfContainmentError,
)
from treecopy.copying.lock import acquire_lock, is_locked, write_scope
from treecopy.copying.operations import clone_item, common_parent_directory, copy_items
from treecopy.copying.types import ConflictState, CopyOutcome, CopyReport
from treecopy.tree.encodings import EncodingRegistry
from treecopy.tree.fs import FsDirectory, FsFile
from treecopy.tree.memory import MemoryDirectory, MemoryFile
from treecopy.tree.types import DirectoryItem, FileItem, Node, TreeItem, is_ancestor

__all__ = [
    # decisions
    "ALWAYS_OVERWRITE",
    "ALWAYS_SKIP",
    "ConflictDecision",
    "ConsolePrompt",
    "DecisionProvider",
    "FixedDecision",
    "default_decision_provider",
    "provider_for_policy",
    # eligibility
    "can_copy",
    "filter_ancestors",
    # engine
    "check_copy_into_self",
    "copy_batch",
    "copy_node",
    # errors
    "CopyCancelledError",
    "CopyError",
    "CopyIOError",
    "CopyLockError",
    "InvalidArgumentError",
    "SelfContainmentError",
    # lock
    "acquire_lock",
    "is_locked",
    "write_scope",
    # operations
    "clone_item",
    "common_parent_directory",
    "copy_items",
    # types
    "ConflictState",
    "CopyOutcome",
    "CopyReport",
    # tree
    "DirectoryItem",
    "EncodingRegistry",
    "FileItem",
    "FsDirectory",
    "FsFile",
    "MemoryDirectory",
    "MemoryFile",
    "Node",
    "TreeItem",
    "is_ancestor",
]
