"""Template-facing view of one component instance."""

from __future__ import annotations

from typing import Any, Mapping

import orjson
from markupsafe import Markup, escape

from pageship.compiler.inline import merge_styles, theme_styles, to_declarations
from pageship.models.document import ComponentInstance, CustomAction, Theme
from pageship.styles.overrides import cleanup_overrides
from pageship.styles.vocabulary import VariationDefinition


class ComponentView:
    """Resolves visibility, content, classes and inline styles for templates.

    Every element whose attributes are emitted registers its class tokens
    in :attr:`used_tokens`, which feeds the stylesheet tree-shaker.
    """

    def __init__(self, instance: ComponentInstance, definition: VariationDefinition, theme: Theme) -> None:
        self.instance = instance
        self.definition = definition
        self.theme = theme
        self.used_tokens: set[str] = set()
        cleaned = cleanup_overrides(instance.style_overrides)
        self._overrides: dict[str, dict[str, Any]] = cleaned.value if cleaned.ok else {}

    @property
    def id(self) -> str:
        return self.instance.id

    @property
    def component_type(self) -> str:
        return self.definition.metadata.component_type

    @property
    def variation_number(self) -> int:
        return self.definition.metadata.variation_number

    def declares(self, key: str) -> bool:
        return self.definition.declares(key)

    def show(self, key: str) -> bool:
        return self.definition.renders(self.instance, key)

    def value(self, key: str, fallback: Any = None) -> Any:
        content = self.instance.content
        if content.get(key) not in (None, ""):
            return content[key]
        default = self.definition.metadata.default_content.get(key)
        if default not in (None, ""):
            return default
        return fallback

    def text(self, key: str, fallback: str = "") -> str:
        value = self.value(key, fallback)
        return value if isinstance(value, str) else str(value)

    def items(self, key: str) -> list[Mapping[str, Any]]:
        value = self.value(key, [])
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, Mapping)]

    def media(self, key: str) -> str | None:
        url = self.instance.media_urls.get(key) or self.instance.content.get(key)
        return url if isinstance(url, str) and url else None

    def cls(self, key: str) -> str:
        classes = self.definition.class_map.get(key)
        if classes is None:
            return ""
        tokens = classes.tokens()
        self.used_tokens.update(tokens)
        return " ".join(tokens)

    def style(self, key: str) -> str:
        return to_declarations(
            merge_styles(
                theme_styles(self.theme, key),
                self.definition.default_styles.get(key, {}),
                self._overrides.get(key, {}),
            )
        )

    def action(self, key: str) -> CustomAction | None:
        return self.instance.custom_actions.get(key)

    def attrs(self, key: str) -> Markup:
        """`` class="..." style="..." data-element="..."`` plus action data when configured."""
        parts = [f' data-element="{escape(key)}"']
        classes = self.cls(key)
        if classes:
            parts.append(f' class="{escape(classes)}"')
        style = self.style(key)
        if style:
            parts.append(f' style="{escape(style)}"')
        action = self.action(key)
        if action is not None:
            payload = orjson.dumps(action.payload(), option=orjson.OPT_SORT_KEYS).decode("utf-8")
            parts.append(f' data-action="{escape(action.action_type)}" data-action-data="{escape(payload)}"')
        return Markup("".join(parts))

    def section_attrs(self) -> Markup:
        return Markup(
            f' id="section-{escape(self.id)}"'
            f' data-section-id="{escape(self.id)}"'
            f' data-component-type="{escape(self.component_type)}"'
            f' data-variation="{self.variation_number}"'
        )


__all__ = ["ComponentView"]
