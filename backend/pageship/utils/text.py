"""Text processing helpers."""

from __future__ import annotations

import re

WHITESPACE_RE = re.compile(r"\s+")
_SITE_NAME_RE = re.compile(r"[^a-z0-9-]")
_DASHES_RE = re.compile(r"-+")
_CAMEL_RE = re.compile(r"([a-z0-9])([A-Z])")


def normalize(text: str) -> str:
    """Collapse whitespace and strip."""
    return WHITESPACE_RE.sub(" ", text).strip()


def site_slug(value: str, max_length: int = 50) -> str:
    """Reduce an arbitrary page slug to a hosting-safe site name stem."""
    cleaned = _SITE_NAME_RE.sub("-", value.lower())
    cleaned = _DASHES_RE.sub("-", cleaned).strip("-")
    return cleaned[:max_length].rstrip("-") or "landing-page"


def kebab_case(name: str) -> str:
    """``backgroundColor`` -> ``background-color``."""
    return _CAMEL_RE.sub(r"\1-\2", name).lower()
