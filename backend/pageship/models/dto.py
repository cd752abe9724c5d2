"""Pydantic DTOs exposed via API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from pageship.models.document import PageDocument, PageStatus


class PageCreateRequest(BaseModel):
    document: dict[str, Any] = Field(description="Page document in its camelCase wire shape")


class PageSummary(BaseModel):
    id: str
    slug: str
    status: PageStatus
    deployed_url: str | None = None


class SessionResponse(BaseModel):
    page_id: str
    dirty: bool
    saving: bool
    last_saved_at: datetime | None = None
    document: PageDocument


class ComponentsUpdateRequest(BaseModel):
    components: list[dict[str, Any]]


class ComponentAddRequest(BaseModel):
    component: dict[str, Any]


class ThemeUpdateRequest(BaseModel):
    theme: dict[str, Any]


class StyleOverrideRequest(BaseModel):
    styles: dict[str, Any]
    replace: bool = False


class SaveResponse(BaseModel):
    page_id: str
    dirty: bool
    last_saved_at: datetime | None = None


class CloseResponse(BaseModel):
    status: str
    page_id: str


class DegradedComponent(BaseModel):
    component_id: str
    variation_ref: str
    reason: str


class PreviewResponse(BaseModel):
    page_id: str
    markup: str
    stylesheet: str
    script: str
    degraded: list[DegradedComponent]


class PublishResponse(BaseModel):
    page_id: str
    url: str
    site_id: str
    deploy_id: str
    deployed_at: datetime
    uploaded: int
    skipped: int
    degraded: list[DegradedComponent]


__all__ = [
    "PageCreateRequest",
    "PageSummary",
    "SessionResponse",
    "ComponentsUpdateRequest",
    "ComponentAddRequest",
    "ThemeUpdateRequest",
    "StyleOverrideRequest",
    "SaveResponse",
    "CloseResponse",
    "DegradedComponent",
    "PreviewResponse",
    "PublishResponse",
]
