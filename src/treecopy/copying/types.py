"""Copy engine result types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pydantic import BaseModel

from .decisions import ConflictDecision, is_sticky

if TYPE_CHECKING:
    from treecopy.tree.types import FileItem


class CopyReport(BaseModel):
    first_file: str | None = None
    copied: list[str]
    overwritten: list[str]
    skipped: list[str]
    created_directories: list[str]


@dataclass
class CopyOutcome:
    """What a batch produced.

    ``first_file`` is the first file materialized in depth-first order and is
    what a caller would open or select afterwards.
    """

    first_file: FileItem | None = None
    copied: list[str] = field(default_factory=list)
    overwritten: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    created_directories: list[str] = field(default_factory=list)

    def to_report(self) -> CopyReport:
        return CopyReport(
            first_file=self.first_file.path if self.first_file is not None else None,
            copied=list(self.copied),
            overwritten=list(self.overwritten),
            skipped=list(self.skipped),
            created_directories=list(self.created_directories),
        )


@dataclass
class ConflictState:
    """Sticky overwrite/skip choice shared by every collision of one batch."""

    sticky: ConflictDecision | None = None

    def remember(self, decision: ConflictDecision) -> None:
        if is_sticky(decision):
            self.sticky = decision
