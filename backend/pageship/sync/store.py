"""Durable page storage."""

from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Any, Protocol

import orjson

from pageship.core.errors import PageNotFound, StorageWriteFailed
from pageship.db.sqlite import SQLiteDatabase
from pageship.models.document import ComponentInstance, PageDocument, PageStatus, Theme
from pageship.models.entities import ComponentWrite
from pageship.utils.ids import is_durable_id, new_durable_id
from pageship.utils.time import utc_now

_UNSET: Any = object()


class PageStore(Protocol):
    def read_page(self, page_id: str) -> PageDocument: ...

    def write_page(self, page_id: str, theme: Theme) -> None: ...

    def write_component(self, write: ComponentWrite) -> None: ...

    def insert_component(self, page_id: str, instance: ComponentInstance) -> ComponentInstance: ...

    def delete_component(self, page_id: str, component_id: str) -> None: ...


def _dumps(value: Any) -> str:
    return orjson.dumps(value, option=orjson.OPT_SORT_KEYS).decode("utf-8")


def _loads(raw: str | None) -> Any:
    return orjson.loads(raw) if raw else {}


class SQLitePageStore:
    """SQLite implementation of :class:`PageStore` plus the page lifecycle writes."""

    def __init__(self, db: SQLiteDatabase) -> None:
        self.db = db

    def read_page(self, page_id: str) -> PageDocument:
        rows = self.db.query("SELECT * FROM pages WHERE id = ?", [page_id])
        if not rows:
            raise PageNotFound(page_id)
        page = rows[0]
        component_rows = self.db.query(
            "SELECT * FROM components WHERE page_id = ? ORDER BY order_index, created_at, id",
            [page_id],
        )
        return PageDocument.model_validate(
            {
                "id": page["id"],
                "slug": page["slug"],
                "theme": _loads(page["theme_json"]),
                "seo": _loads(page["seo_json"]),
                "trackingConfig": _loads(page["tracking_json"]),
                "customDomain": page["custom_domain"],
                "hostingSiteId": page["hosting_site_id"],
                "deployedUrl": page["deployed_url"],
                "lastDeployedAt": page["last_deployed_at"],
                "lastError": page["last_error"],
                "status": page["status"],
                "components": [self._component_from_row(row) for row in component_rows],
            }
        )

    @staticmethod
    def _component_from_row(row: sqlite3.Row) -> dict[str, Any]:
        return {
            "id": row["id"],
            "variationRef": {"componentType": row["component_type"], "variationNumber": row["variation_number"]},
            "orderIndex": row["order_index"],
            "content": _loads(row["content_json"]),
            "visibility": _loads(row["visibility_json"]),
            "styleOverrides": _loads(row["style_overrides_json"]),
            "mediaUrls": _loads(row["media_urls_json"]),
            "customActions": _loads(row["custom_actions_json"]),
        }

    def list_pages(self) -> list[dict[str, Any]]:
        rows = self.db.query("SELECT id, slug, status, deployed_url, updated_at FROM pages ORDER BY updated_at DESC")
        return [dict(row) for row in rows]

    def create_page(self, document: PageDocument) -> PageDocument:
        """Insert a page and its components, minting durable ids where needed."""
        now = utc_now().isoformat()
        components = [
            component if component.is_durable else component.model_copy(update={"id": new_durable_id()})
            for component in document.components
        ]
        try:
            with self.db.transaction() as cur:
                cur.execute(
                    """
                    INSERT INTO pages (id, slug, theme_json, seo_json, tracking_json, custom_domain,
                                       hosting_site_id, deployed_url, status, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        document.id,
                        document.slug,
                        _dumps(document.theme.model_dump(by_alias=True)),
                        _dumps(document.seo.model_dump(by_alias=True)),
                        _dumps(document.tracking_config),
                        document.custom_domain,
                        document.hosting_site_id,
                        document.deployed_url,
                        document.status.value,
                        now,
                        now,
                    ],
                )
                for component in components:
                    self._insert_component(cur, document.id, component, now)
        except sqlite3.Error as exc:
            raise StorageWriteFailed(f"page {document.id}", str(exc)) from exc
        return document.model_copy(update={"components": components})

    def insert_component(self, page_id: str, instance: ComponentInstance) -> ComponentInstance:
        """Persist a placeholder component, returning it with its durable id."""
        stored = instance if instance.is_durable else instance.model_copy(update={"id": new_durable_id()})
        try:
            with self.db.transaction() as cur:
                self._insert_component(cur, page_id, stored, utc_now().isoformat())
        except sqlite3.Error as exc:
            raise StorageWriteFailed(f"component {stored.id}", str(exc)) from exc
        return stored

    def delete_component(self, page_id: str, component_id: str) -> None:
        """Remove a component row; an id that was never stored is a no-op."""
        if not is_durable_id(component_id):
            return
        try:
            with self.db.transaction() as cur:
                cur.execute("DELETE FROM components WHERE id = ? AND page_id = ?", [component_id, page_id])
        except sqlite3.Error as exc:
            raise StorageWriteFailed(f"component {component_id}", str(exc)) from exc

    @staticmethod
    def _insert_component(cur: sqlite3.Cursor, page_id: str, component: ComponentInstance, now: str) -> None:
        write = ComponentWrite.from_instance(component)
        cur.execute(
            """
            INSERT INTO components (id, page_id, component_type, variation_number, order_index,
                                    content_json, visibility_json, style_overrides_json, media_urls_json,
                                    custom_actions_json, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                component.id,
                page_id,
                component.variation_ref.component_type,
                component.variation_ref.variation_number,
                write.order_index,
                _dumps(write.content),
                _dumps(write.visibility),
                _dumps(write.style_overrides),
                _dumps(write.media_urls),
                _dumps(write.custom_actions),
                now,
                now,
            ],
        )

    def write_page(self, page_id: str, theme: Theme) -> None:
        self._update(
            f"page {page_id}",
            "UPDATE pages SET theme_json = ?, updated_at = ? WHERE id = ?",
            [_dumps(theme.model_dump(by_alias=True)), utc_now().isoformat(), page_id],
        )

    def write_component(self, write: ComponentWrite) -> None:
        if not is_durable_id(write.component_id):
            raise StorageWriteFailed(f"component {write.component_id}", "id is not a storage id")
        self._update(
            f"component {write.component_id}",
            """
            UPDATE components
               SET content_json = ?, visibility_json = ?, style_overrides_json = ?,
                   custom_actions_json = ?, media_urls_json = ?, order_index = ?, updated_at = ?
             WHERE id = ?
            """,
            [
                _dumps(write.content),
                _dumps(write.visibility),
                _dumps(write.style_overrides),
                _dumps(write.custom_actions),
                _dumps(write.media_urls),
                write.order_index,
                utc_now().isoformat(),
                write.component_id,
            ],
        )

    def update_status(
        self,
        page_id: str,
        status: PageStatus,
        *,
        deployed_url: str | None = _UNSET,
        last_error: str | None = _UNSET,
        last_deployed_at: datetime | None = _UNSET,
    ) -> None:
        assignments = ["status = ?", "updated_at = ?"]
        params: list[Any] = [PageStatus(status).value, utc_now().isoformat()]
        for column, value in (
            ("deployed_url", deployed_url),
            ("last_error", last_error),
            ("last_deployed_at", last_deployed_at),
        ):
            if value is _UNSET:
                continue
            assignments.append(f"{column} = ?")
            params.append(value.isoformat() if isinstance(value, datetime) else value)
        params.append(page_id)
        self._update(f"page {page_id}", f"UPDATE pages SET {', '.join(assignments)} WHERE id = ?", params)

    def set_hosting_site(self, page_id: str, site_id: str) -> None:
        self._update(
            f"page {page_id}",
            "UPDATE pages SET hosting_site_id = ?, updated_at = ? WHERE id = ?",
            [site_id, utc_now().isoformat(), page_id],
        )

    def update_slug(self, page_id: str, slug: str) -> PageDocument:
        page = self.read_page(page_id).change_slug(slug)
        self._update(
            f"page {page_id}",
            "UPDATE pages SET slug = ?, updated_at = ? WHERE id = ?",
            [page.slug, utc_now().isoformat(), page_id],
        )
        return page

    def _update(self, target: str, sql: str, params: list[Any]) -> None:
        try:
            with self.db.transaction() as cur:
                cur.execute(sql, params)
                if cur.rowcount == 0:
                    raise StorageWriteFailed(target, "row does not exist")
        except sqlite3.Error as exc:
            raise StorageWriteFailed(target, str(exc)) from exc


__all__ = ["PageStore", "SQLitePageStore"]
