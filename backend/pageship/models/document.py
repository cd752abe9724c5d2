"""Page document model shared by the compiler, the deployer and the sync layer."""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any, Literal, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from pageship.core.errors import InvalidDocument, InvalidStatusTransition, SlugLocked
from pageship.utils.ids import is_durable_id, new_id

_SLUG_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
_LEGACY_REF_RE = re.compile(r"^(?P<type>[a-z_]+?)(?:[-_:]variation)?[-_:](?P<number>\d+)$", re.IGNORECASE)
# Characters that would end a declaration or the style block a theme value lands in.
_CSS_UNSAFE_RE = re.compile(r"[;{}<>\\]")

_ACTION_ALIASES = {
    "marketplace_checkout": "checkout",
    "open_link": "external_link",
    "open-url": "external_link",
    "link": "external_link",
    "scroll": "scroll_to",
    "scroll-to": "scroll_to",
    "track-event": "track_event",
}


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class PageStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHING = "publishing"
    PUBLISHED = "published"


_ALLOWED_TRANSITIONS: Mapping[PageStatus, frozenset[PageStatus]] = {
    PageStatus.DRAFT: frozenset({PageStatus.PUBLISHING}),
    PageStatus.PUBLISHING: frozenset({PageStatus.PUBLISHED, PageStatus.DRAFT}),
    PageStatus.PUBLISHED: frozenset({PageStatus.PUBLISHING}),
}


class Theme(_CamelModel):
    primary_color: str = "#3b82f6"
    secondary_color: str = "#f3f4f6"
    background_color: str = "#ffffff"
    font_family: str = "Inter"
    direction: Literal["ltr", "rtl"] = "ltr"
    language: str = "en"

    @field_validator("primary_color", "secondary_color", "background_color", "font_family")
    @classmethod
    def _check_css_value(cls, value: str) -> str:
        value = value.strip()
        if not value or _CSS_UNSAFE_RE.search(value):
            raise ValueError(f"not a usable CSS value: {value!r}")
        return value


class SeoConfig(_CamelModel):
    title: str = ""
    description: str = ""
    keywords: list[str] = Field(default_factory=list)
    canonical: str | None = None
    og_image: str | None = None

    @field_validator("keywords", mode="before")
    @classmethod
    def _split_keywords(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value


class VariationRef(_CamelModel):
    """Identifies a visual template: ``(componentType, variationNumber)``."""

    model_config = ConfigDict(frozen=True)

    component_type: str
    variation_number: int = Field(ge=1)

    @classmethod
    def parse(cls, value: Any) -> "VariationRef":
        """Accept mappings plus the legacy string shapes ``hero:3``, ``hero-3``, ``hero-variation-3``."""
        if isinstance(value, VariationRef):
            return value
        if isinstance(value, Mapping):
            return cls.model_validate(value)
        if isinstance(value, str):
            match = _LEGACY_REF_RE.match(value.strip())
            if match:
                return cls(component_type=match["type"].lower(), variation_number=int(match["number"]))
        raise ValueError(f"Unrecognised variation reference: {value!r}")

    def __str__(self) -> str:
        return f"{self.component_type}:{self.variation_number}"


class CustomAction(_CamelModel):
    """Button behaviour consumed by the page script; extra keys are kept as payload."""

    model_config = ConfigDict(extra="allow")

    action_type: str
    url: str | None = None
    target: str | None = None
    amount: float | None = None
    currency: str | None = None
    product_id: str | None = None
    event_name: str | None = None

    @field_validator("action_type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            lowered = value.strip().lower()
            return _ACTION_ALIASES.get(lowered, lowered)
        return value

    def payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"action_type"})


class ComponentInstance(_CamelModel):
    id: str = Field(default_factory=lambda: new_id("comp"))
    variation_ref: VariationRef
    order_index: int = 0
    content: dict[str, Any] = Field(default_factory=dict)
    visibility: dict[str, bool] = Field(default_factory=dict)
    style_overrides: dict[str, Any] = Field(default_factory=dict)
    media_urls: dict[str, str] = Field(default_factory=dict)
    custom_actions: dict[str, CustomAction] = Field(default_factory=dict)

    @field_validator("variation_ref", mode="before")
    @classmethod
    def _parse_ref(cls, value: Any) -> VariationRef:
        return VariationRef.parse(value)

    @property
    def is_durable(self) -> bool:
        return is_durable_id(self.id)

    def is_visible(self, key: str) -> bool:
        return self.visibility.get(key, True) is not False


class PageDocument(_CamelModel):
    id: str
    slug: str
    theme: Theme = Field(default_factory=Theme)
    seo: SeoConfig = Field(default_factory=SeoConfig)
    tracking_config: dict[str, Any] = Field(default_factory=dict)
    custom_domain: str | None = None
    hosting_site_id: str | None = None
    deployed_url: str | None = None
    last_deployed_at: datetime | None = None
    last_error: str | None = None
    status: PageStatus = PageStatus.DRAFT
    components: list[ComponentInstance] = Field(default_factory=list)

    @field_validator("slug")
    @classmethod
    def _check_slug(cls, value: str) -> str:
        if not _SLUG_RE.match(value):
            raise ValueError("slug must be URL-safe")
        return value

    @model_validator(mode="after")
    def _resequence(self) -> "PageDocument":
        self.components = normalize_order(self.components)
        return self

    def component(self, component_id: str) -> ComponentInstance | None:
        for component in self.components:
            if component.id == component_id:
                return component
        return None

    def transition(self, status: PageStatus) -> "PageDocument":
        """Return a copy moved to ``status``; illegal moves raise."""
        status = PageStatus(status)
        if status not in _ALLOWED_TRANSITIONS[self.status]:
            raise InvalidStatusTransition(self.status.value, status.value)
        return self.model_copy(update={"status": status})

    def change_slug(self, slug: str) -> "PageDocument":
        if self.hosting_site_id:
            raise SlugLocked(self.id, self.hosting_site_id)
        return self.model_copy(update={"slug": self._check_slug(slug)})


def normalize_order(components: Sequence[ComponentInstance]) -> list[ComponentInstance]:
    """Stable-sort by orderIndex and re-sequence to 1..n.

    Duplicate or sparse indices are repaired rather than rejected; ties keep
    their incoming order.
    """
    ranked = sorted(enumerate(components), key=lambda pair: (pair[1].order_index, pair[0]))
    normalized: list[ComponentInstance] = []
    for position, (_, component) in enumerate(ranked, start=1):
        if component.order_index != position:
            component = component.model_copy(update={"order_index": position})
        normalized.append(component)
    return normalized


def swap_components(components: Sequence[ComponentInstance], first: int, second: int) -> list[ComponentInstance]:
    """Swap two positions (0-based, in render order) and re-sequence."""
    ordered = normalize_order(components)
    ordered[first], ordered[second] = ordered[second], ordered[first]
    return [
        component.model_copy(update={"order_index": position})
        for position, component in enumerate(ordered, start=1)
    ]


def parse_document(data: Mapping[str, Any]) -> PageDocument:
    try:
        return PageDocument.model_validate(data)
    except ValidationError as exc:
        raise InvalidDocument(str(exc)) from exc


def parse_components(items: Sequence[Any]) -> list[ComponentInstance]:
    try:
        return [ComponentInstance.model_validate(item) for item in items]
    except ValidationError as exc:
        raise InvalidDocument(str(exc)) from exc


__all__ = [
    "PageStatus",
    "Theme",
    "SeoConfig",
    "VariationRef",
    "CustomAction",
    "ComponentInstance",
    "PageDocument",
    "normalize_order",
    "swap_components",
    "parse_document",
    "parse_components",
]
