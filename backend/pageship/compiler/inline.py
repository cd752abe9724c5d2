"""Inline style resolution for rendered elements."""

from __future__ import annotations

from typing import Any, Mapping

from pageship.models.document import Theme
from pageship.styles.overrides import is_gradient
from pageship.utils.text import kebab_case

TRANSPARENT_VALUES = frozenset({"", "transparent", "none", "rgba(0,0,0,0)", "rgba(0, 0, 0, 0)", "#0000", "#00000000"})

PX_PROPERTIES = frozenset(
    {
        "fontSize",
        "borderRadius",
        "borderWidth",
        "width",
        "height",
        "maxWidth",
        "minHeight",
        "letterSpacing",
        "gap",
        "top",
        "right",
        "bottom",
        "left",
        "padding",
        "paddingTop",
        "paddingRight",
        "paddingBottom",
        "paddingLeft",
        "margin",
        "marginTop",
        "marginRight",
        "marginBottom",
        "marginLeft",
    }
)

_PROPERTY_ALIASES = {"textColor": "color"}


def is_transparent(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip().lower() in TRANSPARENT_VALUES)


def theme_styles(theme: Theme, element: str) -> dict[str, Any]:
    if element == "container":
        return {"backgroundColor": theme.background_color}
    if element == "ctaButton":
        return {"backgroundColor": theme.primary_color}
    return {}


def merge_styles(
    theme_layer: Mapping[str, Any],
    variation_layer: Mapping[str, Any],
    override_layer: Mapping[str, Any],
) -> dict[str, Any]:
    """Theme, then variation defaults, then author overrides.

    An empty or transparent background override does not win over the
    layers below it.
    """
    merged = {**theme_layer, **variation_layer}
    for key, value in override_layer.items():
        if key in ("backgroundColor", "background") and is_transparent(value):
            continue
        if value is None:
            continue
        merged[key] = value
    return merged


def _format_value(prop: str, value: Any) -> str | None:
    if isinstance(value, bool) or isinstance(value, Mapping):
        return None
    if isinstance(value, (int, float)):
        return f"{value:g}px" if prop in PX_PROPERTIES else f"{value:g}"
    if isinstance(value, (list, tuple)):
        parts = [_format_value(prop, item) for item in value[:4]]
        if not parts or any(part is None for part in parts):
            return None
        return " ".join(parts)
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return None


def to_declarations(styles: Mapping[str, Any]) -> str:
    """Serialise a style mapping to a ``style`` attribute value, sorted by property."""
    declarations: dict[str, str] = {}
    for key, raw in styles.items():
        value = _format_value(key, raw)
        if value is None:
            continue
        for forbidden in (";", "{", "}"):
            value = value.replace(forbidden, "")
        if key in ("backgroundColor", "background") and is_gradient(value):
            declarations["background"] = value
            continue
        if key == "backgroundImage":
            if not value.startswith("url(") and not is_gradient(value):
                value = f'url("{value}")'
            declarations["background-image"] = value
            declarations.setdefault("background-size", "cover")
            declarations.setdefault("background-position", "center")
            continue
        declarations[kebab_case(_PROPERTY_ALIASES.get(key, key))] = value
    return ";".join(f"{prop}:{declarations[prop]}" for prop in sorted(declarations))


__all__ = [
    "TRANSPARENT_VALUES",
    "is_transparent",
    "theme_styles",
    "merge_styles",
    "to_declarations",
]
