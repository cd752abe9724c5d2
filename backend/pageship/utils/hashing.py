"""Hashing utilities."""

from __future__ import annotations

import hashlib


def sha1_bytes(data: bytes) -> str:
    """Return SHA-1 hex digest, the content address used by the hosting provider."""
    return hashlib.sha1(data).hexdigest()


def dedupe_hashes(hashes: list[str]) -> list[str]:
    """Remove duplicates while preserving order."""
    seen: set[str] = set()
    unique: list[str] = []
    for item in hashes:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique
