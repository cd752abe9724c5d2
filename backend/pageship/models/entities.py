"""Internal dataclasses passed between the compiler, storage, sync and deploy layers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pageship.models.document import ComponentInstance, PageDocument


@dataclass(frozen=True, slots=True)
class CompiledArtifact:
    markup: str
    stylesheet: str
    script: str


@dataclass(frozen=True, slots=True)
class CompileDegraded:
    component_id: str
    variation_ref: str
    reason: str


@dataclass(slots=True)
class ComponentWrite:
    """Column set written for one component on save."""

    component_id: str
    content: dict[str, Any]
    visibility: dict[str, bool]
    style_overrides: dict[str, Any]
    custom_actions: dict[str, Any]
    media_urls: dict[str, str]
    order_index: int

    @classmethod
    def from_instance(cls, instance: ComponentInstance) -> "ComponentWrite":
        return cls(
            component_id=instance.id,
            content=dict(instance.content),
            visibility=dict(instance.visibility),
            style_overrides=dict(instance.style_overrides),
            custom_actions={
                key: action.model_dump(by_alias=True, exclude_none=True)
                for key, action in instance.custom_actions.items()
            },
            media_urls=dict(instance.media_urls),
            order_index=instance.order_index,
        )


@dataclass(slots=True)
class SyncState:
    page_id: str
    document: PageDocument
    dirty: bool = False
    saving: bool = False
    last_saved_at: datetime | None = None


@dataclass(slots=True)
class SyncSnapshot:
    """Read-only view of a session handed to callers."""

    page_id: str
    dirty: bool
    saving: bool
    last_saved_at: datetime | None
