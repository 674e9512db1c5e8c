"""Per-path charset tags for the filesystem provider."""

from __future__ import annotations

from pathlib import Path

import yaml

from treecopy.infrastructure.config import ENCODINGS_FILE


def _key(file_path: Path) -> str:
    # resolve the parent chain only, so a symlink keeps its own entry
    return str(file_path.absolute().parent.resolve() / file_path.name)


class EncodingRegistry:
    """YAML-backed mapping of absolute path to encoding tag.

    The registry is re-read on every lookup so several handles created for
    the same tree always agree.
    """

    def __init__(self, registry_path: Path | None = None) -> None:
        self._registry_path = registry_path

    @property
    def registry_path(self) -> Path:
        return self._registry_path or Path.cwd() / ENCODINGS_FILE

    def _read(self) -> dict[str, str]:
        path = self.registry_path
        if not path.exists():
            return {}
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise ValueError(f"{path} must contain a mapping, got {type(raw).__name__}")
        return {str(k): str(v) for k, v in raw.items()}

    def _write(self, mapping: dict[str, str]) -> None:
        path = self.registry_path
        path.parent.mkdir(parents=True, exist_ok=True)
        content = yaml.safe_dump(mapping, sort_keys=True)

        # Write to temp file then atomic rename to prevent corruption on crash
        tmp_path = path.with_suffix(".yaml.tmp")
        tmp_path.write_text(content, encoding="utf-8")
        tmp_path.replace(path)

    def get(self, file_path: Path) -> str | None:
        return self._read().get(_key(file_path))

    def set(self, file_path: Path, encoding: str | None) -> None:
        """Record ``encoding`` for ``file_path``; None forgets it."""
        mapping = self._read()
        key = _key(file_path)
        if encoding is None:
            if key not in mapping:
                return
            del mapping[key]
        else:
            if mapping.get(key) == encoding:
                return
            mapping[key] = encoding
        self._write(mapping)
