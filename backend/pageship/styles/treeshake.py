"""Emit the minimal stylesheet for a page."""

from __future__ import annotations

import re
from itertools import groupby
from typing import Iterable

from pageship.core.logging import get_logger
from pageship.models.document import Theme
from pageship.styles.utilities import BREAKPOINTS, UtilityRule
from pageship.styles.vocabulary import StyleVocabulary

logger = get_logger(__name__)

BASE_RESET = """
*,::before,::after{box-sizing:border-box;border-width:0;border-style:solid;border-color:#e5e7eb}
html{line-height:1.5;-webkit-text-size-adjust:100%;tab-size:4}
body{margin:0;line-height:inherit;background-color:var(--background-color);font-family:var(--font-family),ui-sans-serif,system-ui,sans-serif}
h1,h2,h3,h4,h5,h6{font-size:inherit;font-weight:inherit;margin:0}
p,blockquote,dl,dd,figure,ul,ol{margin:0}
ul,ol{padding:0}
a{color:inherit;text-decoration:inherit}
button{font-family:inherit;font-size:100%;line-height:inherit;color:inherit;margin:0;padding:0;background-color:transparent;background-image:none;cursor:pointer}
img,video{display:block;max-width:100%;height:auto}
[hidden]{display:none}
"""

# Classes emitted by the compiler's own wrappers, never by class maps.
STRUCTURAL_CSS = """
.pgs-placeholder{padding:3rem 1rem;text-align:center;color:#6b7280;border:2px dashed #d1d5db;margin:1rem}
.pgs-empty{min-height:60vh;display:flex;align-items:center;justify-content:center;text-align:center;color:#6b7280;padding:2rem}
.pgs-generic{padding:4rem 1rem;text-align:center}
.pgs-generic h2{font-size:1.875rem;font-weight:700;margin-bottom:1rem}
.pgs-generic p{color:#4b5563}
.pgs-faq-answer[hidden]{display:none}
.pgs-modal{position:fixed;inset:0;display:flex;align-items:center;justify-content:center;background:rgb(0 0 0 / 0.5);z-index:50}
.pgs-modal-body{background:#fff;border-radius:0.75rem;padding:2rem;max-width:32rem;width:90%}
.pgs-toast{position:fixed;top:1.25rem;right:1.25rem;padding:0.75rem 1.25rem;border-radius:0.5rem;color:#fff;z-index:60;background:#1f2937}
.pgs-toast-error{background:#dc2626}
.pgs-toast-success{background:#16a34a}
"""

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_SPACE_RE = re.compile(r"\s+")
_PUNCT_RE = re.compile(r"\s*([{};:,>~])\s*")


def theme_variables(theme: Theme) -> str:
    return (
        ":root{"
        f"--primary-color:{theme.primary_color};"
        f"--secondary-color:{theme.secondary_color};"
        f"--background-color:{theme.background_color};"
        f"--font-family:{theme.font_family}"
        "}"
    )


def generate_rules(tokens: Iterable[str], vocabulary: StyleVocabulary) -> list[UtilityRule]:
    rules = []
    dropped = []
    for token in tokens:
        rule = vocabulary.rule_for(token)
        if rule is None:
            dropped.append(token)
            continue
        rules.append(rule)
    if dropped:
        logger.debug("Dropped unknown utility classes", extra={"ctx_tokens": sorted(dropped)})
    return sorted(rules, key=lambda rule: rule.sort_key)


def render_rules(rules: list[UtilityRule]) -> str:
    """Base rules first, then one media block per breakpoint in ascending width."""
    chunks = []
    for breakpoint, group in groupby(rules, key=lambda rule: rule.breakpoint):
        body = "".join(rule.render() for rule in group)
        if breakpoint:
            chunks.append(f"@media (min-width:{BREAKPOINTS[breakpoint]}){{{body}}}")
        else:
            chunks.append(body)
    return "".join(chunks)


def minify_css(css: str) -> str:
    css = _COMMENT_RE.sub("", css)
    css = _SPACE_RE.sub(" ", css)
    css = _PUNCT_RE.sub(r"\1", css)
    return css.replace(";}", "}").strip()


def build_stylesheet(theme: Theme, tokens: Iterable[str], vocabulary: StyleVocabulary) -> str:
    """Reset, theme variables and one rule per recognised token actually rendered."""
    rules = generate_rules(set(tokens), vocabulary)
    css = "\n".join((theme_variables(theme), BASE_RESET, STRUCTURAL_CSS, render_rules(rules)))
    return minify_css(css)


__all__ = [
    "BASE_RESET",
    "STRUCTURAL_CSS",
    "theme_variables",
    "generate_rules",
    "render_rules",
    "minify_css",
    "build_stylesheet",
]
