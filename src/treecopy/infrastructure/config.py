"""Configuration constants and .env parsing."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, cast

ConflictPolicy = Literal["ask", "overwrite", "skip"]

_CONFLICT_POLICIES: tuple[ConflictPolicy, ...] = ("ask", "overwrite", "skip")


def read_env_file(keys: list[str]) -> dict[str, str]:
    """Parse .env in the working directory and return values for requested keys.

    Does NOT load into os.environ; callers decide what to do with values.
    """
    env_file = Path.cwd() / ".env"
    try:
        content = env_file.read_text()
    except OSError:
        return {}

    result: dict[str, str] = {}
    wanted = set(keys)

    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        eq_idx = trimmed.find("=")
        if eq_idx == -1:
            continue
        key = trimmed[:eq_idx].strip()
        if key not in wanted:
            continue
        value = trimmed[eq_idx + 1 :].strip()
        if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
            value = value[1:-1]
        if value:
            result[key] = value

    return result


def get_setting(key: str, default: str) -> str:
    """Look up a setting in the process environment, then .env, then the default."""
    return os.environ.get(key) or read_env_file([key]).get(key, default)


def parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def parse_conflict_policy(value: str) -> ConflictPolicy:
    """Normalize a conflict policy name, rejecting unknown values."""
    policy = value.strip().lower()
    if policy not in _CONFLICT_POLICIES:
        raise ValueError(f"Unknown conflict policy: {value!r} (expected one of {', '.join(_CONFLICT_POLICIES)})")
    return cast(ConflictPolicy, policy)


# Working state lives next to the invocation, like a VCS metadata dir.
STATE_DIR = Path(".treecopy")
LOCK_FILE = STATE_DIR / "lock"
ENCODINGS_FILE = STATE_DIR / "encodings.yaml"

CONFLICT_POLICY: ConflictPolicy = parse_conflict_policy(get_setting("TREECOPY_CONFLICT_POLICY", "ask"))
SORT_CHILDREN: bool = parse_bool(get_setting("TREECOPY_SORT_CHILDREN", "true"))
LOCK_STALE_TIMEOUT_S: float = float(get_setting("TREECOPY_LOCK_STALE_SECONDS", "300"))  # 5 minutes
