"""Page script generation: action dispatch, accordions and tracking loaders."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

import orjson
from jinja2 import Environment

from pageship.core.logging import get_logger
from pageship.models.document import PageDocument

logger = get_logger(__name__)

FACEBOOK_PIXEL_RE = re.compile(r"^\d{15,16}$")
CLARITY_MIN_LENGTH = 8


@dataclass(frozen=True, slots=True)
class TrackingIds:
    facebook_pixel_id: str | None = None
    google_analytics_id: str | None = None
    clarity_id: str | None = None
    track_page_view: bool = False

    def as_config(self) -> dict[str, Any]:
        config: dict[str, Any] = {}
        if self.facebook_pixel_id:
            config["facebookPixelId"] = self.facebook_pixel_id
        if self.google_analytics_id:
            config["googleAnalyticsId"] = self.google_analytics_id
        if self.clarity_id:
            config["clarityId"] = self.clarity_id
        return config


def _lookup(config: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if config.get(name):
            return config[name]
    return None


def validate_tracking(config: Mapping[str, Any] | None) -> TrackingIds:
    """Keep only well-formed provider ids; malformed ones are logged and dropped."""
    if not config:
        return TrackingIds()
    pixel = _lookup(config, "facebookPixelId", "facebook_pixel_id")
    analytics = _lookup(config, "googleAnalyticsId", "google_analytics_id")
    clarity = _lookup(config, "clarityId", "clarity_id")
    events = _lookup(config, "conversionEvents", "conversion_events") or {}

    if pixel is not None and not (isinstance(pixel, str) and FACEBOOK_PIXEL_RE.match(pixel)):
        logger.warning("Ignoring malformed Facebook Pixel id", extra={"ctx_value": pixel})
        pixel = None
    if analytics is not None and not (isinstance(analytics, str) and analytics.startswith("G-")):
        logger.warning("Ignoring malformed Google Analytics id", extra={"ctx_value": analytics})
        analytics = None
    if clarity is not None and not (isinstance(clarity, str) and len(clarity) >= CLARITY_MIN_LENGTH):
        logger.warning("Ignoring malformed Clarity id", extra={"ctx_value": clarity})
        clarity = None
    page_view = bool(events.get("pageView", events.get("page_view"))) if isinstance(events, Mapping) else False
    return TrackingIds(pixel, analytics, clarity, page_view)


def build_script(document: PageDocument | None, env: Environment) -> str:
    tracking = validate_tracking(document.tracking_config if document is not None else None)
    page_config = {
        "slug": document.slug if document is not None else "",
        "title": (document.seo.title if document is not None else "") or "Landing Page",
        "language": document.theme.language if document is not None else "en",
        "tracking": tracking.as_config(),
    }
    rendered = env.get_template("app.js.j2").render(
        page_config=orjson.dumps(page_config, option=orjson.OPT_SORT_KEYS).decode("utf-8"),
        tracking=tracking,
    )
    return rendered.strip() + "\n"


__all__ = ["TrackingIds", "validate_tracking", "build_script"]
