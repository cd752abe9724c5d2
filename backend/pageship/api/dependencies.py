"""Shared FastAPI dependencies."""

from __future__ import annotations

from functools import lru_cache

from fastapi import HTTPException

from pageship.core.config import Settings, get_settings
from pageship.db.sqlite import SQLiteDatabase
from pageship.deploy.deployer import Deployer
from pageship.deploy.hosting import HostingClient
from pageship.publish import PublishService
from pageship.sync.scheduler import ThreadingScheduler
from pageship.sync.session import SessionRegistry, SyncSession
from pageship.sync.store import SQLitePageStore

_DB: SQLiteDatabase | None = None
_STORE: SQLitePageStore | None = None
_REGISTRY: SessionRegistry | None = None
_PUBLISHER: PublishService | None = None


@lru_cache(maxsize=1)
def get_app_settings() -> Settings:
    return get_settings()


def get_database() -> SQLiteDatabase:
    global _DB
    if _DB is None:
        settings = get_app_settings()
        db = SQLiteDatabase(settings.db_path)
        db.ensure_schema()
        _DB = db
    return _DB


def get_page_store() -> SQLitePageStore:
    global _STORE
    if _STORE is None:
        _STORE = SQLitePageStore(get_database())
    return _STORE


def get_session_registry() -> SessionRegistry:
    global _REGISTRY
    if _REGISTRY is None:
        settings = get_app_settings()
        store = get_page_store()
        scheduler = ThreadingScheduler()
        _REGISTRY = SessionRegistry(
            lambda: SyncSession(
                store,
                scheduler,
                debounce_seconds=settings.debounce_seconds,
                flush_interval_seconds=settings.flush_interval_seconds,
            )
        )
    return _REGISTRY


def get_publish_service() -> PublishService:
    global _PUBLISHER
    if _PUBLISHER is None:
        settings = get_app_settings()
        if not settings.hosting_access_token:
            raise HTTPException(status_code=503, detail="Hosting access token is not configured")
        client = HostingClient(
            settings.hosting_access_token,
            api_url=settings.hosting_api_url,
            timeout=settings.http_timeout_seconds,
        )
        deployer = Deployer(
            client,
            upload_workers=settings.upload_workers,
            poll_interval=settings.poll_interval_seconds,
            poll_timeout=settings.poll_timeout_seconds,
        )
        _PUBLISHER = PublishService(get_page_store(), deployer)
    return _PUBLISHER


def shutdown() -> None:
    """Flush open sessions and release the database."""
    global _DB, _STORE, _REGISTRY, _PUBLISHER
    if _REGISTRY is not None:
        _REGISTRY.close_all()
    if _PUBLISHER is not None:
        _PUBLISHER.deployer.client.close()
    if _DB is not None:
        _DB.close()
    _DB = None
    _STORE = None
    _REGISTRY = None
    _PUBLISHER = None


__all__ = [
    "get_app_settings",
    "get_database",
    "get_page_store",
    "get_session_registry",
    "get_publish_service",
    "shutdown",
]
