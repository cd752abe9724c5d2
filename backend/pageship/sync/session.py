"""Editor sync session: debounced, periodic and forced saves with one save in flight."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Any, Callable, Mapping, Sequence

from pageship.core.errors import (
    ComponentNotFound,
    InvalidDocument,
    PageshipError,
    SessionNotFound,
    StorageError,
    StorageWriteFailed,
)
from pageship.core.logging import get_logger
from pageship.core.metrics import SAVES_TOTAL
from pageship.models.document import ComponentInstance, PageDocument, PageStatus, Theme, normalize_order, parse_components
from pageship.models.entities import ComponentWrite, SyncSnapshot, SyncState
from pageship.styles.overrides import cleanup_overrides, merge_element_styles
from pageship.sync.scheduler import Scheduler, TimerHandle
from pageship.sync.store import PageStore
from pageship.utils.time import utc_now

logger = get_logger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 2.0
DEFAULT_FLUSH_INTERVAL_SECONDS = 30.0


class SyncSession:
    """Keeps one page's in-memory document and durable storage convergent.

    Edits mark the session dirty and (re)arm a debounce timer; a periodic
    tick flushes whatever is still dirty; :meth:`force_save` writes
    immediately and raises on failure. Background saves never overlap: one
    that finds a save in flight is coalesced into a follow-up debounce.
    Conflicting edits from another session are last-write-wins.
    """

    def __init__(
        self,
        store: PageStore,
        scheduler: Scheduler,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        flush_interval_seconds: float = DEFAULT_FLUSH_INTERVAL_SECONDS,
    ) -> None:
        self.store = store
        self.scheduler = scheduler
        self.debounce_seconds = debounce_seconds
        self.flush_interval_seconds = flush_interval_seconds
        self._lock = threading.RLock()
        self._save_lock = threading.Lock()
        self._state: SyncState | None = None
        self._revision = 0
        self._coalesced = False
        self._closed = False
        self._debounce: TimerHandle | None = None
        self._debounce_generation = 0
        self._removed: set[str] = set()
        self._ticker: TimerHandle | None = None

    # -- lifecycle ---------------------------------------------------------

    def initialize(self, page_id: str) -> PageDocument:
        document = self.store.read_page(page_id)
        with self._lock:
            self._cancel_timers()
            self._state = SyncState(page_id=page_id, document=document)
            self._revision = 0
            self._coalesced = False
            self._closed = False
            self._removed = set()
            self._ticker = self.scheduler.call_every(self.flush_interval_seconds, self._on_tick)
        logger.info("Sync session opened", extra={"ctx_page_id": page_id})
        return document.model_copy(deep=True)

    def close(self, flush: bool = True) -> None:
        """Stop timers; with ``flush`` a dirty document is force-saved first."""
        with self._lock:
            if self._state is None or self._closed:
                return
            dirty = self._state.dirty
        if flush and dirty:
            self.force_save()
        with self._lock:
            self._closed = True
            self._cancel_timers()
        logger.info("Sync session closed", extra={"ctx_page_id": self.page_id})

    @property
    def page_id(self) -> str:
        return self._require_state().page_id

    # -- reads -------------------------------------------------------------

    def get_document(self) -> PageDocument:
        with self._lock:
            return self._require_state().document.model_copy(deep=True)

    def is_dirty(self) -> bool:
        with self._lock:
            return self._require_state().dirty

    def get_last_saved_at(self) -> datetime | None:
        with self._lock:
            return self._require_state().last_saved_at

    def snapshot(self) -> SyncSnapshot:
        with self._lock:
            state = self._require_state()
            return SyncSnapshot(
                page_id=state.page_id,
                dirty=state.dirty,
                saving=state.saving,
                last_saved_at=state.last_saved_at,
            )

    # -- edits -------------------------------------------------------------

    def update_components(self, components: Sequence[ComponentInstance | Mapping[str, Any]]) -> None:
        instances = parse_components(
            [item.model_dump(by_alias=True) if isinstance(item, ComponentInstance) else item for item in components]
        )
        with self._lock:
            state = self._require_state()
            kept = {instance.id for instance in instances}
            self._forget_components([c for c in state.document.components if c.id not in kept])
            self._removed -= kept
            state.document = state.document.model_copy(update={"components": normalize_order(instances)})
            self._mark_dirty()

    def add_component(self, component: ComponentInstance | Mapping[str, Any]) -> ComponentInstance:
        """Insert a new component into storage and the document; returns it with its durable id."""
        raw = component.model_dump(by_alias=True) if isinstance(component, ComponentInstance) else component
        instance = parse_components([raw])[0]
        try:
            with self._save_lock:
                with self._lock:
                    state = self._require_state()
                    if state.document.component(instance.id) is not None:
                        raise InvalidDocument(f"component {instance.id} is already on the page")
                stored = self.store.insert_component(state.page_id, instance)
                with self._lock:
                    self._removed.discard(stored.id)
                    state.document = state.document.model_copy(
                        update={"components": normalize_order([*state.document.components, stored])}
                    )
                    self._mark_dirty()
                    added = state.document.component(stored.id)
        finally:
            self._rearm_if_coalesced()
        logger.info("Component added", extra={"ctx_page_id": state.page_id, "ctx_component_id": stored.id})
        return added.model_copy(deep=True)

    def promote_component(self, component_id: str) -> ComponentInstance:
        """Give a placeholder component its storage row and swap the durable id in."""
        try:
            with self._save_lock:
                with self._lock:
                    state = self._require_state()
                    current = state.document.component(component_id)
                    if current is None:
                        raise ComponentNotFound(component_id)
                    if current.is_durable:
                        return current.model_copy(deep=True)
                stored = self.store.insert_component(state.page_id, current)
                with self._lock:
                    components = list(state.document.components)
                    for index, component in enumerate(components):
                        if component.id == component_id:
                            components[index] = component.model_copy(update={"id": stored.id})
                            break
                    else:
                        # removed while the row was being written
                        self._removed.add(stored.id)
                        self._mark_dirty()
                        return stored
                    state.document = state.document.model_copy(update={"components": components})
        finally:
            self._rearm_if_coalesced()
        logger.info("Component promoted", extra={"ctx_page_id": state.page_id, "ctx_component_id": stored.id})
        return components[index].model_copy(deep=True)

    def remove_component(self, component_id: str) -> None:
        """Drop a component; its storage row is deleted by the next save."""
        with self._lock:
            state = self._require_state()
            removed = state.document.component(component_id)
            if removed is None:
                raise ComponentNotFound(component_id)
            remaining = [c for c in state.document.components if c.id != component_id]
            self._forget_components([removed])
            state.document = state.document.model_copy(update={"components": normalize_order(remaining)})
            self._mark_dirty()

    def update_theme(self, theme: Theme | Mapping[str, Any]) -> None:
        if not isinstance(theme, Theme):
            try:
                theme = Theme.model_validate(theme)
            except ValueError as exc:
                raise InvalidDocument(str(exc)) from exc
        with self._lock:
            state = self._require_state()
            state.document = state.document.model_copy(update={"theme": theme})
            self._mark_dirty()

    def update_component_style_override(
        self,
        component_id: str,
        element_id: str,
        styles: Mapping[str, Any],
        replace: bool = False,
    ) -> None:
        """Merge ``styles`` into a single element without touching its siblings."""
        with self._lock:
            state = self._require_state()
            components = list(state.document.components)
            for index, component in enumerate(components):
                if component.id == component_id:
                    break
            else:
                raise ComponentNotFound(component_id)
            merged = merge_element_styles(component.style_overrides, element_id, styles, replace)
            if not merged.ok:
                raise InvalidDocument(merged.error)
            components[index] = component.model_copy(update={"style_overrides": merged.value})
            state.document = state.document.model_copy(update={"components": components})
            self._mark_dirty()

    def apply_publish_state(self, status: PageStatus, **fields: Any) -> None:
        """Mirror lifecycle fields written by the publisher; does not dirty the session."""
        with self._lock:
            state = self._require_state()
            state.document = state.document.model_copy(update={"status": PageStatus(status), **fields})

    # -- saving ------------------------------------------------------------

    def force_save(self) -> datetime | None:
        """Write now, waiting for any in-flight save first; raises :class:`StorageWriteFailed`."""
        with self._lock:
            self._require_state()
            self._cancel_debounce()
        try:
            with self._save_lock:
                self._persist("force")
        finally:
            self._rearm_if_coalesced()
        return self.get_last_saved_at()

    def _mark_dirty(self) -> None:
        state = self._require_state()
        self._revision += 1
        state.dirty = True
        if self._closed:
            return
        self._arm_debounce()

    def _forget_components(self, components: Sequence[ComponentInstance]) -> None:
        self._removed.update(component.id for component in components if component.is_durable)

    def _arm_debounce(self) -> None:
        """Replace any pending debounce timer; caller holds ``_lock``."""
        self._cancel_debounce()
        generation = self._debounce_generation
        self._debounce = self.scheduler.call_later(self.debounce_seconds, lambda: self._on_debounce(generation))

    def _on_debounce(self, generation: int) -> None:
        with self._lock:
            # superseded by a newer timer or cancelled after it fired
            if generation != self._debounce_generation or self._closed:
                return
            self._debounce = None
        self._background_save("debounce")

    def _on_tick(self) -> None:
        with self._lock:
            if self._state is None or not self._state.dirty:
                return
        self._background_save("interval")

    def _background_save(self, trigger: str) -> None:
        if not self._save_lock.acquire(blocking=False):
            with self._lock:
                self._coalesced = True
            SAVES_TOTAL.labels(trigger=trigger, outcome="coalesced").inc()
            return
        try:
            self._persist(trigger)
        except StorageError:
            logger.warning(
                "Background save failed; will retry",
                extra={"ctx_page_id": self.page_id, "ctx_trigger": trigger},
                exc_info=True,
            )
        finally:
            self._save_lock.release()
        self._rearm_if_coalesced()

    def _rearm_if_coalesced(self) -> None:
        """A save skipped while another was in flight becomes a fresh debounce."""
        with self._lock:
            coalesced, self._coalesced = self._coalesced, False
            if coalesced and not self._closed and self._state is not None and self._state.dirty:
                self._arm_debounce()

    def _persist(self, trigger: str) -> None:
        """Write the current snapshot; caller holds ``_save_lock``."""
        with self._lock:
            state = self._require_state()
            if not state.dirty:
                return
            snapshot = state.document.model_copy(deep=True)
            removed = set(self._removed)
            revision = self._revision
            state.saving = True
        try:
            self._write(snapshot, removed)
        except StorageError as exc:
            SAVES_TOTAL.labels(trigger=trigger, outcome="failed").inc()
            if isinstance(exc, StorageWriteFailed):
                raise
            raise StorageWriteFailed(f"page {snapshot.id}", str(exc)) from exc
        finally:
            with self._lock:
                state.saving = False
        with self._lock:
            state.last_saved_at = utc_now()
            self._removed -= removed
            if self._revision == revision:
                state.dirty = False
        SAVES_TOTAL.labels(trigger=trigger, outcome="ok").inc()
        logger.debug("Page saved", extra={"ctx_page_id": snapshot.id, "ctx_trigger": trigger})

    def _write(self, document: PageDocument, removed: set[str]) -> None:
        self.store.write_page(document.id, document.theme)
        for component in document.components:
            if not component.is_durable:
                logger.debug("Skipping unsaved component", extra={"ctx_component_id": component.id})
                continue
            cleaned = cleanup_overrides(component.style_overrides)
            write = ComponentWrite.from_instance(component)
            if cleaned.ok:
                write.style_overrides = cleaned.value
            self.store.write_component(write)
        present = {component.id for component in document.components}
        for component_id in sorted(removed - present):
            self.store.delete_component(document.id, component_id)

    # -- helpers -----------------------------------------------------------

    def _require_state(self) -> SyncState:
        if self._state is None:
            raise PageshipError("sync session is not initialized")
        return self._state

    def _cancel_debounce(self) -> None:
        self._debounce_generation += 1
        if self._debounce is not None:
            self._debounce.cancel()
            self._debounce = None

    def _cancel_timers(self) -> None:
        self._cancel_debounce()
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None


class SessionRegistry:
    """One open session per page id."""

    def __init__(self, factory: Callable[[], SyncSession]) -> None:
        self._factory = factory
        self._sessions: dict[str, SyncSession] = {}
        self._lock = threading.Lock()

    def open(self, page_id: str) -> SyncSession:
        with self._lock:
            session = self._sessions.get(page_id)
            if session is not None:
                return session
            session = self._factory()
            session.initialize(page_id)
            self._sessions[page_id] = session
            return session

    def get(self, page_id: str) -> SyncSession:
        with self._lock:
            session = self._sessions.get(page_id)
        if session is None:
            raise SessionNotFound(page_id)
        return session

    def close(self, page_id: str, flush: bool = True) -> None:
        with self._lock:
            session = self._sessions.pop(page_id, None)
        if session is None:
            raise SessionNotFound(page_id)
        session.close(flush=flush)

    def close_all(self, flush: bool = True) -> None:
        with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            try:
                session.close(flush=flush)
            except StorageError:
                logger.error("Failed to flush session on shutdown", extra={"ctx_page_id": session.page_id}, exc_info=True)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = ["SyncSession", "SessionRegistry", "DEFAULT_DEBOUNCE_SECONDS", "DEFAULT_FLUSH_INTERVAL_SECONDS"]
