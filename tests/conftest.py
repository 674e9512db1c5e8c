"""Shared fixtures for treecopy tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

    from treecopy.copying.decisions import ConflictDecision


class RecordingDecisions:
    """Decision provider that replays scripted answers and records every prompt."""

    def __init__(self, *answers: ConflictDecision) -> None:
        self.answers = list(answers)
        self.calls: list[tuple[str, str, bool]] = []

    def ask(self, existing_name: str, target_path: str, allow_all_options: bool) -> ConflictDecision:
        self.calls.append((existing_name, target_path, allow_all_options))
        if not self.answers:
            raise AssertionError(f"Unexpected prompt for {existing_name} in {target_path}")
        return self.answers.pop(0)


@pytest.fixture(autouse=True)
def copy_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test from a fresh temp directory so lock and registry files stay isolated."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def decisions() -> type[RecordingDecisions]:
    return RecordingDecisions
