"""FastAPI application setup for pageship."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pageship.api.dependencies import (
    get_app_settings,
    get_database,
    get_page_store,
    get_session_registry,
    shutdown as shutdown_dependencies,
)
from pageship.api.routes_pages import router as pages_router
from pageship.api.routes_sessions import router as sessions_router
from pageship.core.logging import configure_logging
from pageship.core.metrics import metrics_response

configure_logging()

app = FastAPI(
    title="pageship",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://127.0.0.1:5174",
        "http://localhost:5174",
    ],
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.include_router(sessions_router, prefix="/sessions", tags=["sessions"])
app.include_router(pages_router, prefix="/pages", tags=["pages"])


@app.on_event("startup")
async def startup() -> None:
    """Apply logging settings and warm up core singletons."""
    settings = get_app_settings()
    configure_logging(settings.log_level, use_json=settings.log_json)
    get_database()
    get_page_store()
    get_session_registry()


@app.on_event("shutdown")
async def shutdown() -> None:
    """Flush open editing sessions before the process exits."""
    shutdown_dependencies()


@app.get("/health", tags=["admin"])
def health() -> dict[str, bool]:
    """Simple liveness check."""
    return {"ok": True}


@app.get("/metrics", tags=["admin"], summary="Prometheus metrics")
async def get_metrics():
    return metrics_response()
