"""Page routes: creation, preview compile and publish."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from pageship.api.dependencies import get_page_store, get_publish_service, get_session_registry
from pageship.api.errors import http_error
from pageship.compiler import compile_document
from pageship.core.errors import PageshipError, SessionNotFound
from pageship.models.document import PageDocument, parse_document
from pageship.models.dto import (
    DegradedComponent,
    PageCreateRequest,
    PageSummary,
    PreviewResponse,
    PublishResponse,
)
from pageship.models.entities import CompileDegraded
from pageship.publish import PublishService
from pageship.sync.session import SessionRegistry
from pageship.sync.store import SQLitePageStore
from pageship.utils.ids import new_durable_id

router = APIRouter()


def _degraded(items: list[CompileDegraded]) -> list[DegradedComponent]:
    return [
        DegradedComponent(component_id=item.component_id, variation_ref=item.variation_ref, reason=item.reason)
        for item in items
    ]


@router.get("", response_model=list[PageSummary], summary="List stored pages")
def list_pages(store: SQLitePageStore = Depends(get_page_store)) -> list[PageSummary]:
    return [PageSummary(**row) for row in store.list_pages()]


@router.post("", response_model=PageDocument, summary="Create a page from a document")
def create_page(request: PageCreateRequest, store: SQLitePageStore = Depends(get_page_store)) -> PageDocument:
    payload = dict(request.document)
    payload.setdefault("id", new_durable_id())
    try:
        return store.create_page(parse_document(payload))
    except PageshipError as exc:
        raise http_error(exc) from exc


@router.get("/{page_id}/preview", response_model=PreviewResponse, summary="Compile without deploying")
def preview_page(
    page_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
    store: SQLitePageStore = Depends(get_page_store),
) -> PreviewResponse:
    try:
        try:
            document = registry.get(page_id).get_document()
        except SessionNotFound:
            document = store.read_page(page_id)
    except PageshipError as exc:
        raise http_error(exc) from exc
    report = compile_document(document)
    return PreviewResponse(
        page_id=page_id,
        markup=report.artifact.markup,
        stylesheet=report.artifact.stylesheet,
        script=report.artifact.script,
        degraded=_degraded(report.degraded),
    )


@router.post("/{page_id}/publish", response_model=PublishResponse, summary="Compile and deploy a page")
def publish_page(
    page_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
    publisher: PublishService = Depends(get_publish_service),
) -> PublishResponse:
    try:
        result = publisher.publish(registry.open(page_id))
    except PageshipError as exc:
        raise http_error(exc) from exc
    return PublishResponse(
        page_id=result.page_id,
        url=result.url,
        site_id=result.site_id,
        deploy_id=result.deploy_id,
        deployed_at=result.deployed_at,
        uploaded=len(result.uploaded),
        skipped=len(result.skipped),
        degraded=_degraded(result.degraded),
    )


__all__ = ["router"]
