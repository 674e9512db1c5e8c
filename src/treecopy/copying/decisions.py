"""Conflict decisions and the providers that supply them."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Literal, Protocol, TextIO, runtime_checkable

from treecopy.infrastructure import config

from .errors import CopyCancelledError

if TYPE_CHECKING:
    from treecopy.infrastructure.config import ConflictPolicy

ConflictDecision = Literal["overwrite", "skip", "overwrite_all", "skip_all"]

ONCE_OPTIONS: tuple[ConflictDecision, ...] = ("overwrite", "skip")
ALL_OPTIONS: tuple[ConflictDecision, ...] = ("overwrite", "skip", "overwrite_all", "skip_all")


def offered_options(allow_all_options: bool) -> tuple[ConflictDecision, ...]:
    return ALL_OPTIONS if allow_all_options else ONCE_OPTIONS


def is_sticky(decision: ConflictDecision) -> bool:
    return decision.endswith("_all")


def applies_overwrite(decision: ConflictDecision) -> bool:
    return decision in ("overwrite", "overwrite_all")


@runtime_checkable
class DecisionProvider(Protocol):
    def ask(self, existing_name: str, target_path: str, allow_all_options: bool) -> ConflictDecision: ...


class FixedDecision:
    """Headless provider that answers every prompt the same way."""

    def __init__(self, decision: ConflictDecision) -> None:
        if decision not in ALL_OPTIONS:
            raise ValueError(f"Unknown conflict decision: {decision!r}")
        self.decision = decision

    def ask(self, existing_name: str, target_path: str, allow_all_options: bool) -> ConflictDecision:
        if not allow_all_options and is_sticky(self.decision):
            return "overwrite" if applies_overwrite(self.decision) else "skip"
        return self.decision

    def __repr__(self) -> str:
        return f"FixedDecision({self.decision!r})"


ALWAYS_OVERWRITE = FixedDecision("overwrite")
ALWAYS_SKIP = FixedDecision("skip")

_LABELS: dict[ConflictDecision, str] = {
    "overwrite": "[o]verwrite",
    "skip": "[s]kip",
    "overwrite_all": "overwrite [a]ll",
    "skip_all": "skip a[l]l",
}

_KEYS: dict[str, ConflictDecision] = {
    "o": "overwrite",
    "s": "skip",
    "a": "overwrite_all",
    "l": "skip_all",
}


class ConsolePrompt:
    """Interactive provider reading single-letter answers from a text stream."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stderr

    def ask(self, existing_name: str, target_path: str, allow_all_options: bool) -> ConflictDecision:
        options = offered_options(allow_all_options)
        labels = ", ".join(_LABELS[option] for option in options)
        while True:
            self._stdout.write(f"File '{existing_name}' already exists in directory '{target_path}'. {labels}? ")
            self._stdout.flush()
            line = self._stdin.readline()
            if not line:
                raise CopyCancelledError("Copy cancelled: no answer to overwrite prompt", {"file": existing_name})
            answer = line.strip().lower()
            if answer in ("c", "cancel", "q", "quit"):
                raise CopyCancelledError("Copy cancelled by user", {"file": existing_name})
            decision = _KEYS.get(answer[:1]) if answer else None
            if decision is not None and decision in options:
                return decision
            self._stdout.write(f"Please answer one of: {labels}\n")


def provider_for_policy(policy: ConflictPolicy, interactive: bool | None = None) -> DecisionProvider:
    """Map a configured conflict policy to a provider.

    ``ask`` only prompts when stdin is a terminal; headless runs overwrite.
    """
    if policy == "overwrite":
        return ALWAYS_OVERWRITE
    if policy == "skip":
        return ALWAYS_SKIP
    if interactive is None:
        interactive = sys.stdin.isatty()
    return ConsolePrompt() if interactive else ALWAYS_OVERWRITE


def default_decision_provider() -> DecisionProvider:
    return provider_for_policy(config.CONFLICT_POLICY)
