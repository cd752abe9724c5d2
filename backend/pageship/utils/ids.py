"""ID helpers."""

from __future__ import annotations

import re
import uuid

_UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)


def new_id(prefix: str | None = None) -> str:
    """Generate a random UUID4 string with optional prefix."""
    base = uuid.uuid4().hex
    return f"{prefix}_{base}" if prefix else base


def new_durable_id() -> str:
    """Canonical UUID string, the only id shape storage accepts."""
    return str(uuid.uuid4())


def is_durable_id(value: str | None) -> bool:
    """True for ids minted by storage; placeholders from ``new_id`` are rejected."""
    return bool(value) and bool(_UUID_RE.match(value))
