"""Tree node types shared by every tree provider.

A node is either a ``FileItem`` or a ``DirectoryItem``. Directories double as
copy targets: the same handle is used to list a source tree and to write into
a destination tree, so a batch can copy between providers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TypeAlias


class TreeItem(ABC):
    """Common attributes of files and directories."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def parent(self) -> DirectoryItem | None:
        """Containing directory, or None for a root."""

    @property
    @abstractmethod
    def path(self) -> str:
        """Display path used in prompts, logs and reports."""

    @property
    @abstractmethod
    def encoding(self) -> str | None:
        """Opaque charset tag carried through copies."""

    @abstractmethod
    def set_encoding(self, encoding: str | None) -> None: ...

    @abstractmethod
    def is_valid(self) -> bool:
        """False once the item was deleted or vanished from storage."""

    @property
    def copyable(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.path!r})"


class FileItem(TreeItem):
    @abstractmethod
    def read_content(self) -> bytes: ...


class DirectoryItem(TreeItem):
    @abstractmethod
    def children(self) -> list[Node]:
        """Direct children in the provider's listing order."""

    @abstractmethod
    def find_child_file(self, name: str) -> FileItem | None: ...

    @abstractmethod
    def find_subdirectory(self, name: str) -> DirectoryItem | None: ...

    @abstractmethod
    def create_subdirectory(self, name: str) -> DirectoryItem:
        """Return the subdirectory ``name``, creating it if missing."""

    @abstractmethod
    def copy_file_into(self, name: str, source: FileItem) -> FileItem:
        """Write a new file ``name`` holding the content and encoding of ``source``."""

    @abstractmethod
    def delete(self, file: FileItem) -> None: ...


Node: TypeAlias = FileItem | DirectoryItem


def is_ancestor(ancestor: TreeItem, node: TreeItem, strict: bool = True) -> bool:
    """Check whether ``ancestor`` contains ``node`` by walking the parent chain."""
    current = node.parent if strict else node
    while current is not None:
        if current == ancestor:
            return True
        current = current.parent
    return False
