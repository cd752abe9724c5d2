"""Editing session routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from pageship.api.dependencies import get_session_registry
from pageship.api.errors import http_error
from pageship.core.errors import PageshipError
from pageship.models.dto import (
    CloseResponse,
    ComponentAddRequest,
    ComponentsUpdateRequest,
    SaveResponse,
    SessionResponse,
    StyleOverrideRequest,
    ThemeUpdateRequest,
)
from pageship.sync.session import SessionRegistry, SyncSession

router = APIRouter()


def _session_response(session: SyncSession) -> SessionResponse:
    snapshot = session.snapshot()
    return SessionResponse(
        page_id=snapshot.page_id,
        dirty=snapshot.dirty,
        saving=snapshot.saving,
        last_saved_at=snapshot.last_saved_at,
        document=session.get_document(),
    )


@router.post("/{page_id}", response_model=SessionResponse, summary="Open an editing session")
def open_session(page_id: str, registry: SessionRegistry = Depends(get_session_registry)) -> SessionResponse:
    try:
        session = registry.open(page_id)
    except PageshipError as exc:
        raise http_error(exc) from exc
    return _session_response(session)


@router.get("/{page_id}", response_model=SessionResponse, summary="Read the in-memory document")
def get_session(page_id: str, registry: SessionRegistry = Depends(get_session_registry)) -> SessionResponse:
    try:
        session = registry.get(page_id)
    except PageshipError as exc:
        raise http_error(exc) from exc
    return _session_response(session)


@router.delete("/{page_id}", response_model=CloseResponse, summary="Flush and close a session")
def close_session(
    page_id: str,
    flush: bool = True,
    registry: SessionRegistry = Depends(get_session_registry),
) -> CloseResponse:
    try:
        registry.close(page_id, flush=flush)
    except PageshipError as exc:
        raise http_error(exc) from exc
    return CloseResponse(status="closed", page_id=page_id)


@router.put("/{page_id}/components", response_model=SessionResponse, summary="Replace the component list")
def update_components(
    page_id: str,
    request: ComponentsUpdateRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    try:
        session = registry.get(page_id)
        session.update_components(request.components)
    except PageshipError as exc:
        raise http_error(exc) from exc
    return _session_response(session)


@router.post("/{page_id}/components", response_model=SessionResponse, summary="Add a component and store it")
def add_component(
    page_id: str,
    request: ComponentAddRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    try:
        session = registry.get(page_id)
        session.add_component(request.component)
    except PageshipError as exc:
        raise http_error(exc) from exc
    return _session_response(session)


@router.post(
    "/{page_id}/components/{component_id}/promote",
    response_model=SessionResponse,
    summary="Give a placeholder component its storage id",
)
def promote_component(
    page_id: str,
    component_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    try:
        session = registry.get(page_id)
        session.promote_component(component_id)
    except PageshipError as exc:
        raise http_error(exc) from exc
    return _session_response(session)


@router.delete("/{page_id}/components/{component_id}", response_model=SessionResponse, summary="Remove a component")
def remove_component(
    page_id: str,
    component_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    try:
        session = registry.get(page_id)
        session.remove_component(component_id)
    except PageshipError as exc:
        raise http_error(exc) from exc
    return _session_response(session)


@router.put("/{page_id}/theme", response_model=SessionResponse, summary="Replace the page theme")
def update_theme(
    page_id: str,
    request: ThemeUpdateRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    try:
        session = registry.get(page_id)
        session.update_theme(request.theme)
    except PageshipError as exc:
        raise http_error(exc) from exc
    return _session_response(session)


@router.patch(
    "/{page_id}/components/{component_id}/styles/{element_id}",
    response_model=SessionResponse,
    summary="Merge style overrides into one element",
)
def update_element_styles(
    page_id: str,
    component_id: str,
    element_id: str,
    request: StyleOverrideRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    try:
        session = registry.get(page_id)
        session.update_component_style_override(component_id, element_id, request.styles, request.replace)
    except PageshipError as exc:
        raise http_error(exc) from exc
    return _session_response(session)


@router.post("/{page_id}/save", response_model=SaveResponse, summary="Persist pending edits now")
def save_session(page_id: str, registry: SessionRegistry = Depends(get_session_registry)) -> SaveResponse:
    try:
        session = registry.get(page_id)
        last_saved_at = session.force_save()
    except PageshipError as exc:
        raise http_error(exc) from exc
    return SaveResponse(page_id=page_id, dirty=session.is_dirty(), last_saved_at=last_saved_at)


__all__ = ["router"]
