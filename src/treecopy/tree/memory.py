"""In-memory tree provider."""

from __future__ import annotations

from typing import Any

from .types import DirectoryItem, FileItem, Node


class MemoryFile(FileItem):
    def __init__(
        self,
        name: str,
        content: bytes = b"",
        encoding: str | None = None,
        copyable: bool = True,
    ) -> None:
        if not name:
            raise ValueError("File name must not be empty")
        self._name = name
        self.content = content
        self._encoding = encoding
        self._copyable = copyable
        self._parent: MemoryDirectory | None = None
        self._deleted = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def parent(self) -> MemoryDirectory | None:
        return self._parent

    @property
    def path(self) -> str:
        return _join(self._parent, self._name)

    @property
    def encoding(self) -> str | None:
        return self._encoding

    def set_encoding(self, encoding: str | None) -> None:
        self._encoding = encoding

    @property
    def copyable(self) -> bool:
        return self._copyable

    def is_valid(self) -> bool:
        return not self._deleted

    def read_content(self) -> bytes:
        return self.content


class MemoryDirectory(DirectoryItem):
    def __init__(self, name: str, encoding: str | None = None) -> None:
        if not name:
            raise ValueError("Directory name must not be empty")
        self._name = name
        self._encoding = encoding
        self._children: dict[str, Node] = {}
        self._parent: MemoryDirectory | None = None
        self._deleted = False

    @classmethod
    def from_mapping(cls, name: str, entries: dict[str, Any]) -> MemoryDirectory:
        """Build a tree from nested dicts: ``str``/``bytes`` values are files, dicts are directories."""
        directory = cls(name)
        for child_name, value in entries.items():
            if isinstance(value, dict):
                directory.add(cls.from_mapping(child_name, value))
            elif isinstance(value, bytes):
                directory.add(MemoryFile(child_name, value))
            elif isinstance(value, str):
                directory.add(MemoryFile(child_name, value.encode("utf-8"), encoding="UTF-8"))
            else:
                raise TypeError(f"Unsupported entry for {child_name!r}: {type(value).__name__}")
        return directory

    def add(self, node: MemoryFile | MemoryDirectory) -> MemoryFile | MemoryDirectory:
        """Attach a detached node as a child."""
        if node._parent is not None:
            raise ValueError(f"{node.name} already belongs to {node._parent.path}")
        if node.name in self._children:
            raise ValueError(f"{self.path} already contains {node.name}")
        node._parent = self
        self._children[node.name] = node
        return node

    @property
    def name(self) -> str:
        return self._name

    @property
    def parent(self) -> MemoryDirectory | None:
        return self._parent

    @property
    def path(self) -> str:
        return _join(self._parent, self._name)

    @property
    def encoding(self) -> str | None:
        return self._encoding

    def set_encoding(self, encoding: str | None) -> None:
        self._encoding = encoding

    def is_valid(self) -> bool:
        return not self._deleted

    def children(self) -> list[Node]:
        return list(self._children.values())

    def find_child_file(self, name: str) -> MemoryFile | None:
        child = self._children.get(name)
        return child if isinstance(child, MemoryFile) else None

    def find_subdirectory(self, name: str) -> MemoryDirectory | None:
        child = self._children.get(name)
        return child if isinstance(child, MemoryDirectory) else None

    def create_subdirectory(self, name: str) -> MemoryDirectory:
        existing = self.find_subdirectory(name)
        if existing is not None:
            return existing
        if name in self._children:
            raise FileExistsError(f"A file named {name} already exists in {self.path}")
        subdirectory = MemoryDirectory(name)
        self.add(subdirectory)
        return subdirectory

    def copy_file_into(self, name: str, source: FileItem) -> MemoryFile:
        if name in self._children:
            raise FileExistsError(f"{name} already exists in {self.path}")
        copy = MemoryFile(name, source.read_content(), encoding=source.encoding)
        self.add(copy)
        return copy

    def delete(self, file: FileItem) -> None:
        if self._children.get(file.name) is not file:
            raise FileNotFoundError(f"{file.path} is not a child of {self.path}")
        del self._children[file.name]
        if isinstance(file, MemoryFile):
            file._parent = None
            file._deleted = True

    def get(self, *parts: str) -> Node | None:
        """Walk down by child names, returning None when any step is missing."""
        node: Node | None = self
        for part in parts:
            if not isinstance(node, MemoryDirectory):
                return None
            node = node._children.get(part)
        return node


def _join(parent: MemoryDirectory | None, name: str) -> str:
    return name if parent is None else f"{parent.path}/{name}"
