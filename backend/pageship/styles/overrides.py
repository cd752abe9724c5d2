"""Per-element style override helpers.

Overrides are stored as ``{elementId: {cssProperty: value}}``. Older
documents carry a handful of container properties at the root level and
gradients under ``background``; :func:`cleanup_overrides` folds those
into the canonical shape.
"""

from __future__ import annotations

from typing import Any, Mapping

from pageship.core.result import Err, Ok, Result

ROOT_CONTAINER_KEYS = (
    "backgroundColor",
    "color",
    "fontFamily",
    "fontSize",
    "fontWeight",
    "textAlign",
    "padding",
    "margin",
)


def is_gradient(value: Any) -> bool:
    return isinstance(value, str) and "gradient(" in value


def cleanup_overrides(overrides: Any) -> Result[dict[str, dict[str, Any]], str]:
    if overrides is None:
        return Ok({})
    if not isinstance(overrides, Mapping):
        return Err("style overrides must be an object")
    cleaned: dict[str, dict[str, Any]] = {
        element: dict(styles) for element, styles in overrides.items() if isinstance(styles, Mapping)
    }
    moved = {
        key: overrides[key]
        for key in ROOT_CONTAINER_KEYS
        if key in overrides and not isinstance(overrides[key], Mapping)
    }
    if moved:
        container = cleaned.setdefault("container", {})
        for key, value in moved.items():
            container.setdefault(key, value)
    for styles in cleaned.values():
        background = styles.get("background")
        if is_gradient(background) and not styles.get("backgroundColor"):
            styles["backgroundColor"] = background
            del styles["background"]
    return Ok(cleaned)


def merge_element_styles(
    overrides: Any,
    element_id: str,
    styles: Any,
    replace: bool = False,
) -> Result[dict[str, dict[str, Any]], str]:
    """Merge ``styles`` into one element, leaving every other element untouched.

    A ``None`` value removes that property; ``replace`` discards the
    element's previous overrides first.
    """
    if not element_id:
        return Err("element id is required")
    if not isinstance(styles, Mapping):
        return Err(f"styles for {element_id} must be an object")
    result = cleanup_overrides(overrides)
    if not result.ok:
        return result
    merged = result.value
    current = {} if replace else dict(merged.get(element_id, {}))
    for key, value in styles.items():
        if value is None:
            current.pop(key, None)
        else:
            current[key] = value
    merged[element_id] = current
    return Ok(merged)


__all__ = ["ROOT_CONTAINER_KEYS", "is_gradient", "cleanup_overrides", "merge_element_styles"]
