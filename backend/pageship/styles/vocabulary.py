"""Component variation vocabulary: class maps, metadata and default styles."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Iterable, Iterator, Mapping

from pageship.models.document import ComponentInstance, VariationRef
from pageship.styles.utilities import UtilityRule, rule_for


@dataclass(frozen=True, slots=True)
class ElementClasses:
    """Class tokens for one element at the three editor breakpoints."""

    mobile: str
    tablet: str
    desktop: str

    @classmethod
    def of(cls, mobile: str, tablet: str | None = None, desktop: str | None = None) -> "ElementClasses":
        tablet = mobile if tablet is None else tablet
        desktop = tablet if desktop is None else desktop
        return cls(mobile, tablet, desktop)

    @property
    def responsive(self) -> str:
        """Mobile tokens bare, tablet-only tokens under ``md:``, desktop-only under ``lg:``."""
        mobile = self.mobile.split()
        tablet = self.tablet.split()
        desktop = self.desktop.split()
        tokens = list(mobile)
        tokens.extend(f"md:{token}" for token in tablet if token not in mobile)
        tokens.extend(f"lg:{token}" for token in desktop if token not in tablet)
        return " ".join(tokens)

    def tokens(self) -> list[str]:
        return self.responsive.split()


@dataclass(frozen=True, slots=True)
class VisibilityKey:
    key: str
    label: str


@dataclass(frozen=True, slots=True)
class ComponentVariationMetadata:
    component_type: str
    variation_number: int
    variation_name: str
    visibility_keys: tuple[VisibilityKey, ...] = ()
    default_content: Mapping[str, Any] = field(default_factory=dict)
    required_images: int = 0
    supports_video: bool = False

    @property
    def ref(self) -> VariationRef:
        return VariationRef(component_type=self.component_type, variation_number=self.variation_number)


@dataclass(frozen=True, slots=True)
class VariationDefinition:
    """Everything the compiler needs to render one variation."""

    metadata: ComponentVariationMetadata
    class_map: Mapping[str, ElementClasses]
    default_styles: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    media_elements: frozenset[str] = frozenset()

    @property
    def ref(self) -> VariationRef:
        return self.metadata.ref

    def elements(self) -> list[str]:
        return list(self.class_map)

    def declares(self, element: str) -> bool:
        return element in self.class_map

    def renders(self, instance: ComponentInstance, element: str) -> bool:
        """Declared, not hidden, and for media slots backed by a URL."""
        if element not in self.class_map or not instance.is_visible(element):
            return False
        if element in self.media_elements:
            return bool(instance.media_urls.get(element) or instance.content.get(element))
        return True

    def problems(self) -> list[str]:
        issues = []
        if not self.class_map:
            issues.append("class map is empty")
        elif "container" not in self.class_map:
            issues.append("class map has no container element")
        unknown_media = self.media_elements - set(self.class_map)
        if unknown_media:
            issues.append(f"media elements without classes: {', '.join(sorted(unknown_media))}")
        return issues


class StyleVocabulary:
    """Registry of variation definitions plus the utility rule generator."""

    def __init__(self, definitions: Iterable[VariationDefinition] = ()) -> None:
        self._definitions: dict[tuple[str, int], VariationDefinition] = {}
        for definition in definitions:
            self.register(definition)

    def register(self, definition: VariationDefinition) -> None:
        key = (definition.metadata.component_type, definition.metadata.variation_number)
        self._definitions[key] = definition

    def resolve(self, ref: VariationRef) -> VariationDefinition | None:
        return self._definitions.get((ref.component_type, ref.variation_number))

    def __iter__(self) -> Iterator[VariationDefinition]:
        for key in sorted(self._definitions):
            yield self._definitions[key]

    def __len__(self) -> int:
        return len(self._definitions)

    def rule_for(self, token: str) -> UtilityRule | None:
        return rule_for(token)


@lru_cache(maxsize=1)
def default_vocabulary() -> StyleVocabulary:
    from pageship.styles.catalog import CATALOG

    return StyleVocabulary(CATALOG)


__all__ = [
    "ElementClasses",
    "VisibilityKey",
    "ComponentVariationMetadata",
    "VariationDefinition",
    "StyleVocabulary",
    "default_vocabulary",
]
