"""Errors raised by the copy engine."""

from __future__ import annotations

from typing import Any


class CopyError(Exception):
    """Base class for failures surfaced to the caller of a copy batch."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class InvalidArgumentError(CopyError):
    """Malformed request; raised before anything is written."""


class SelfContainmentError(CopyError):
    """A source directory contains the target directory."""


class CopyIOError(CopyError):
    """The storage layer failed while creating, deleting or duplicating an item."""


class CopyCancelledError(CopyError):
    """Raised by a decision provider to abandon the rest of a batch."""


class CopyLockError(CopyError):
    """Another process holds the write scope."""
