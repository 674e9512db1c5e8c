"""Filesystem tree provider over pathlib paths."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from treecopy.infrastructure import config

from .encodings import EncodingRegistry
from .types import DirectoryItem, FileItem, Node


class _FsItem:
    """Identity, hashing and encoding lookup shared by files and directories."""

    def __init__(self, path: str | Path, registry: EncodingRegistry | None = None) -> None:
        self._path = Path(path).absolute()
        self._registry = registry or EncodingRegistry()

    @property
    def fs_path(self) -> Path:
        return self._path

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def path(self) -> str:
        return str(self._path)

    def _location(self) -> Path:
        """Real location of this entry, with symlinks in the parent chain resolved."""
        return self._path.parent.resolve() / self._path.name

    @property
    def parent(self) -> FsDirectory | None:
        location = self._location()
        if location.parent == location:
            return None
        return FsDirectory(location.parent, self._registry)

    @property
    def encoding(self) -> str | None:
        return self._registry.get(self._location())

    def set_encoding(self, encoding: str | None) -> None:
        self._registry.set(self._location(), encoding)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _FsItem):
            return NotImplemented
        return type(self) is type(other) and self._location() == other._location()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._location()))


class FsFile(_FsItem, FileItem):
    """A regular file, or a symlink of any kind. Links are copied as links."""

    def is_valid(self) -> bool:
        return self._path.is_symlink() or self._path.is_file()

    @property
    def copyable(self) -> bool:
        return os.access(self._path, os.R_OK)

    def read_content(self) -> bytes:
        return self._path.read_bytes()


class FsDirectory(_FsItem, DirectoryItem):
    def _location(self) -> Path:
        return self._path.resolve()

    def is_valid(self) -> bool:
        return self._path.is_dir()

    def _wrap(self, path: Path) -> Node:
        if path.is_dir() and not path.is_symlink():
            return FsDirectory(path, self._registry)
        return FsFile(path, self._registry)

    def children(self) -> list[Node]:
        """List entries, leaving out the working directory's own state directory."""
        state_dir = (Path.cwd() / config.STATE_DIR).resolve()
        with os.scandir(self._path) as entries:
            paths = [Path(entry.path) for entry in entries]
        paths = [p for p in paths if p.name != config.STATE_DIR.name or p.resolve() != state_dir]
        if config.SORT_CHILDREN:
            paths.sort(key=lambda p: p.name)
        return [self._wrap(p) for p in paths]

    def find_child_file(self, name: str) -> FsFile | None:
        candidate = self._path / name
        if candidate.is_symlink() or candidate.is_file():
            return FsFile(candidate, self._registry)
        return None

    def find_subdirectory(self, name: str) -> FsDirectory | None:
        candidate = self._path / name
        if candidate.is_dir() and not candidate.is_symlink():
            return FsDirectory(candidate, self._registry)
        return None

    def create_subdirectory(self, name: str) -> FsDirectory:
        subdirectory = self._path / name
        subdirectory.mkdir(exist_ok=True)
        return FsDirectory(subdirectory, self._registry)

    def copy_file_into(self, name: str, source: FileItem) -> FsFile:
        dest = self._path / name
        if dest.is_symlink() or dest.exists():
            raise FileExistsError(f"{dest} already exists")
        if isinstance(source, FsFile):
            shutil.copy2(source.fs_path, dest, follow_symlinks=False)
        else:
            dest.write_bytes(source.read_content())
        copy = FsFile(dest, self._registry)
        copy.set_encoding(source.encoding)
        return copy

    def delete(self, file: FileItem) -> None:
        if not isinstance(file, FsFile):
            raise TypeError(f"Cannot delete non-filesystem file {file!r}")
        file.fs_path.unlink()
        file.set_encoding(None)
