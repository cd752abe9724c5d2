"""Head metadata: title, meta tags, canonical link and JSON-LD."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote_plus

import orjson
from markupsafe import Markup

from pageship.models.document import PageDocument, SeoConfig, Theme
from pageship.utils.text import normalize


@dataclass(frozen=True, slots=True)
class MetaTag:
    attr: str
    key: str
    content: str


@dataclass(slots=True)
class HeadContext:
    title: str
    canonical: str | None
    meta: list[MetaTag] = field(default_factory=list)
    structured_data: Markup = Markup("{}")


def _json_ld(payload: dict[str, Any]) -> Markup:
    raw = orjson.dumps(payload, option=orjson.OPT_SORT_KEYS).decode("utf-8")
    return Markup(raw.replace("<", "\\u003c").replace(">", "\\u003e").replace("&", "\\u0026"))


def build_head(document: PageDocument | None) -> HeadContext:
    seo = document.seo if document is not None else SeoConfig()
    description = normalize(seo.description)
    title = normalize(seo.title)
    if not title:
        title = document.slug.replace("-", " ").title() if document is not None else "Landing Page"
    canonical = seo.canonical or (document.deployed_url if document is not None else None)

    meta = [MetaTag("name", "robots", "index, follow")]
    if description:
        meta.append(MetaTag("name", "description", description))
    if seo.keywords:
        meta.append(MetaTag("name", "keywords", ", ".join(seo.keywords)))
    meta.append(MetaTag("property", "og:type", "website"))
    meta.append(MetaTag("property", "og:title", title))
    if description:
        meta.append(MetaTag("property", "og:description", description))
    if canonical:
        meta.append(MetaTag("property", "og:url", canonical))
    if seo.og_image:
        meta.append(MetaTag("property", "og:image", seo.og_image))
    meta.append(MetaTag("name", "twitter:card", "summary_large_image" if seo.og_image else "summary"))
    meta.append(MetaTag("name", "twitter:title", title))
    if description:
        meta.append(MetaTag("name", "twitter:description", description))
    if seo.og_image:
        meta.append(MetaTag("name", "twitter:image", seo.og_image))

    structured: dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": "WebPage",
        "name": title,
    }
    if description:
        structured["description"] = description
    if canonical:
        structured["url"] = canonical
    if seo.og_image:
        structured["image"] = seo.og_image
    if document is not None:
        structured["inLanguage"] = document.theme.language

    return HeadContext(title=title, canonical=canonical, meta=meta, structured_data=_json_ld(structured))


def font_stylesheet_url(theme: Theme) -> str:
    family = quote_plus(theme.font_family.split(",")[0].strip().strip("'\""))
    return f"https://fonts.googleapis.com/css2?family={family}:wght@400;500;600;700;800&display=swap"


__all__ = ["MetaTag", "HeadContext", "build_head", "font_stylesheet_url"]
