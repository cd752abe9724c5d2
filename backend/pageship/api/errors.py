"""Domain error -> HTTP status mapping used by the routers."""

from __future__ import annotations

from fastapi import HTTPException

from pageship.core.errors import (
    ComponentNotFound,
    DeploymentFailed,
    InvalidDocument,
    InvalidStatusTransition,
    PageNotFound,
    PageshipError,
    SessionNotFound,
    SlugLocked,
    StorageWriteFailed,
)

_STATUS_BY_ERROR: tuple[tuple[type[PageshipError], int], ...] = (
    (PageNotFound, 404),
    (SessionNotFound, 404),
    (ComponentNotFound, 404),
    (InvalidDocument, 422),
    (SlugLocked, 409),
    (InvalidStatusTransition, 409),
    (StorageWriteFailed, 503),
    (DeploymentFailed, 502),
)


def http_error(exc: PageshipError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            detail = exc.reason if isinstance(exc, DeploymentFailed) else str(exc)
            return HTTPException(status_code=status_code, detail=detail)
    return HTTPException(status_code=500, detail=str(exc))


__all__ = ["http_error"]
