"""Prometheus metrics instrumentation."""

from __future__ import annotations

from fastapi import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()

SAVES_TOTAL = Counter(
    "pgs_saves_total",
    "Durable saves attempted by the sync layer",
    labelnames=("trigger", "outcome"),
    registry=REGISTRY,
)

DEPLOYS_TOTAL = Counter(
    "pgs_deploys_total",
    "Deploy attempts by outcome",
    labelnames=("outcome",),
    registry=REGISTRY,
)

FILES_UPLOADED = Counter(
    "pgs_files_uploaded_total",
    "Files uploaded to the hosting provider",
    registry=REGISTRY,
)

FILES_SKIPPED = Counter(
    "pgs_files_skipped_total",
    "Files skipped because the provider already had their hash",
    registry=REGISTRY,
)

COMPILE_DEGRADED = Counter(
    "pgs_compile_degraded_total",
    "Components rendered as placeholders",
    labelnames=("component_type",),
    registry=REGISTRY,
)

DEPLOY_DURATION = Histogram(
    "pgs_deploy_duration_seconds",
    "Wall time of a full deploy",
    registry=REGISTRY,
)


def metrics_response() -> Response:
    """Return Prometheus metrics as an HTTP response."""
    payload = generate_latest(REGISTRY)
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "REGISTRY",
    "SAVES_TOTAL",
    "DEPLOYS_TOTAL",
    "FILES_UPLOADED",
    "FILES_SKIPPED",
    "COMPILE_DEGRADED",
    "DEPLOY_DURATION",
    "metrics_response",
]
