"""Utility-class vocabulary and stylesheet tree-shaking."""

from .vocabulary import (
    ComponentVariationMetadata,
    ElementClasses,
    StyleVocabulary,
    VariationDefinition,
    VisibilityKey,
    default_vocabulary,
)
from .utilities import rule_for
from .treeshake import build_stylesheet, minify_css

__all__ = [
    "ComponentVariationMetadata",
    "ElementClasses",
    "StyleVocabulary",
    "VariationDefinition",
    "VisibilityKey",
    "default_vocabulary",
    "rule_for",
    "build_stylesheet",
    "minify_css",
]
