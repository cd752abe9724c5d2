"""Sync session tests driven by a manual clock and an in-memory store."""

from __future__ import annotations

import threading
import uuid

import pytest

from pageship.core.errors import ComponentNotFound, InvalidDocument, PageNotFound, SessionNotFound, StorageWriteFailed
from pageship.models.document import ComponentInstance, PageDocument, PageStatus, Theme, parse_document
from pageship.models.entities import ComponentWrite
from pageship.sync.scheduler import ManualScheduler
from pageship.sync.session import SessionRegistry, SyncSession

DEBOUNCE = 2.0
INTERVAL = 30.0


class MemoryStore:
    """Records every write in order; can fail or block on demand."""

    def __init__(self, document: PageDocument) -> None:
        self.documents = {document.id: document}
        self.calls: list[tuple[str, str]] = []
        self.components: dict[str, ComponentWrite] = {}
        self.themes: dict[str, Theme] = {}
        self.fail = False
        self.gate: threading.Event | None = None
        self.entered = threading.Event()
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def read_page(self, page_id: str) -> PageDocument:
        if page_id not in self.documents:
            raise PageNotFound(page_id)
        return self.documents[page_id]

    def write_page(self, page_id: str, theme: Theme) -> None:
        with self._lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            self.entered.set()
            if self.gate is not None:
                assert self.gate.wait(5.0)
            if self.fail:
                raise StorageWriteFailed(f"page {page_id}", "disk unavailable")
            self.calls.append(("page", page_id))
            self.themes[page_id] = theme
        finally:
            with self._lock:
                self.in_flight -= 1

    def write_component(self, write: ComponentWrite) -> None:
        if self.fail:
            raise StorageWriteFailed(f"component {write.component_id}", "disk unavailable")
        self.calls.append(("component", write.component_id))
        self.components[write.component_id] = write

    def insert_component(self, page_id: str, instance: ComponentInstance) -> ComponentInstance:
        if self.fail:
            raise StorageWriteFailed(f"component {instance.id}", "disk unavailable")
        stored = instance if instance.is_durable else instance.model_copy(update={"id": str(uuid.uuid4())})
        self.calls.append(("insert", stored.id))
        return stored

    def delete_component(self, page_id: str, component_id: str) -> None:
        if self.fail:
            raise StorageWriteFailed(f"component {component_id}", "disk unavailable")
        self.calls.append(("delete", component_id))

    def page_writes(self) -> int:
        return sum(1 for kind, _ in self.calls if kind == "page")


@pytest.fixture
def document(sample_document) -> PageDocument:
    return parse_document(sample_document)


@pytest.fixture
def store(document: PageDocument) -> MemoryStore:
    return MemoryStore(document)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def session(store: MemoryStore, scheduler: ManualScheduler, document: PageDocument) -> SyncSession:
    session = SyncSession(store, scheduler, debounce_seconds=DEBOUNCE, flush_interval_seconds=INTERVAL)
    session.initialize(document.id)
    return session


def _theme(color: str) -> Theme:
    return Theme(primary_color=color)


def test_initialize_returns_a_copy(session: SyncSession, document: PageDocument) -> None:
    copy = session.get_document()
    assert copy == document
    assert copy is not document
    assert not session.is_dirty()
    assert session.get_last_saved_at() is None


def test_rapid_edits_coalesce_into_one_save(session: SyncSession, store: MemoryStore, scheduler: ManualScheduler) -> None:
    for index in range(5):
        session.update_theme(_theme(f"#00000{index}"))
        scheduler.advance(1)
    assert store.page_writes() == 0
    assert session.is_dirty()

    scheduler.advance(DEBOUNCE)

    assert store.page_writes() == 1
    assert store.themes[session.page_id].primary_color == "#000004"
    assert not session.is_dirty()
    assert session.get_last_saved_at() is not None


def test_theme_is_written_before_components(session: SyncSession, store: MemoryStore) -> None:
    session.update_theme({"primaryColor": "#123456"})
    session.force_save()
    kinds = [kind for kind, _ in store.calls]
    assert kinds[0] == "page"
    assert kinds[1:] == ["component"]


def test_failed_background_save_keeps_dirty_and_retries_on_tick(
    session: SyncSession, store: MemoryStore, scheduler: ManualScheduler
) -> None:
    store.fail = True
    session.update_theme(_theme("#111111"))
    scheduler.advance(DEBOUNCE)
    assert session.is_dirty()
    assert session.get_last_saved_at() is None

    store.fail = False
    scheduler.advance(INTERVAL)

    assert not session.is_dirty()
    assert store.themes[session.page_id].primary_color == "#111111"
    assert session.get_last_saved_at() is not None


def test_tick_does_nothing_when_clean(session: SyncSession, store: MemoryStore, scheduler: ManualScheduler) -> None:
    scheduler.advance(INTERVAL * 3)
    assert store.calls == []


def test_force_save_raises_and_stays_dirty(session: SyncSession, store: MemoryStore) -> None:
    store.fail = True
    session.update_theme(_theme("#222222"))
    with pytest.raises(StorageWriteFailed):
        session.force_save()
    assert session.is_dirty()


def test_force_save_cancels_pending_debounce(
    session: SyncSession, store: MemoryStore, scheduler: ManualScheduler
) -> None:
    session.update_theme(_theme("#333333"))
    saved_at = session.force_save()
    assert saved_at is not None
    scheduler.advance(DEBOUNCE * 2)
    assert store.page_writes() == 1


def test_at_most_one_save_in_flight(session: SyncSession, store: MemoryStore, scheduler: ManualScheduler) -> None:
    session.update_theme(_theme("#444444"))
    store.gate = threading.Event()
    worker = threading.Thread(target=session.force_save)
    worker.start()
    assert store.entered.wait(5.0)

    session.update_theme(_theme("#555555"))
    scheduler.advance(DEBOUNCE)
    assert store.in_flight == 1

    store.gate.set()
    worker.join(5.0)
    assert not worker.is_alive()
    assert session.is_dirty()

    store.gate = None
    scheduler.advance(DEBOUNCE)

    assert store.max_in_flight == 1
    assert store.page_writes() == 2
    assert store.themes[session.page_id].primary_color == "#555555"
    assert not session.is_dirty()


def test_style_override_is_targeted(session: SyncSession, store: MemoryStore) -> None:
    component = session.get_document().components[0]
    session.update_components(
        [
            component.model_copy(
                update={"style_overrides": {"headline": {"color": "#111"}, "ctaButton": {"backgroundColor": "#f00"}}}
            )
        ]
    )
    session.update_component_style_override(component.id, "headline", {"fontSize": "40px"})
    session.force_save()

    written = store.components[component.id].style_overrides
    assert written == {"headline": {"color": "#111", "fontSize": "40px"}, "ctaButton": {"backgroundColor": "#f00"}}


def test_style_override_on_missing_component(session: SyncSession) -> None:
    with pytest.raises(ComponentNotFound):
        session.update_component_style_override("missing", "headline", {"color": "#000"})


def test_placeholder_components_are_not_written(session: SyncSession, store: MemoryStore, make_hero) -> None:
    durable = str(uuid.uuid4())
    session.update_components(
        [make_hero(id=durable), {"variationRef": "faq:1", "orderIndex": 2}]
    )
    session.force_save()
    assert [cid for kind, cid in store.calls if kind == "component"] == [durable]
    assert len(session.get_document().components) == 2


def test_publish_state_does_not_dirty(session: SyncSession) -> None:
    session.apply_publish_state(PageStatus.PUBLISHING, last_error=None)
    assert session.get_document().status is PageStatus.PUBLISHING
    assert not session.is_dirty()


def test_close_flushes_and_stops_timers(session: SyncSession, store: MemoryStore, scheduler: ManualScheduler) -> None:
    session.update_theme(_theme("#666666"))
    session.close()
    assert store.page_writes() == 1
    assert scheduler.pending() == 0


def test_close_without_flush_discards(session: SyncSession, store: MemoryStore, scheduler: ManualScheduler) -> None:
    session.update_theme(_theme("#777777"))
    session.close(flush=False)
    scheduler.advance(INTERVAL * 2)
    assert store.calls == []


def test_registry_reuses_sessions(store: MemoryStore, scheduler: ManualScheduler, document: PageDocument) -> None:
    registry = SessionRegistry(lambda: SyncSession(store, scheduler))
    first = registry.open(document.id)
    assert registry.open(document.id) is first
    assert registry.get(document.id) is first
    assert len(registry) == 1

    registry.close(document.id)
    assert len(registry) == 0
    with pytest.raises(SessionNotFound):
        registry.get(document.id)
    with pytest.raises(SessionNotFound):
        registry.close(document.id)


def test_registry_open_missing_page(store: MemoryStore, scheduler: ManualScheduler) -> None:
    registry = SessionRegistry(lambda: SyncSession(store, scheduler))
    with pytest.raises(PageNotFound):
        registry.open("ghost")
    assert len(registry) == 0


def test_removed_components_are_deleted_on_save(session: SyncSession, store: MemoryStore, make_hero) -> None:
    original = session.get_document().components[0].id
    session.update_components([make_hero(content={"headline": "Replacement"})])
    session.force_save()

    assert ("delete", original) in store.calls

    store.calls.clear()
    session.update_theme(_theme("#abcdef"))
    session.force_save()
    assert not any(kind == "delete" for kind, _ in store.calls)


def test_remove_component_then_restore_keeps_the_row(session: SyncSession, store: MemoryStore) -> None:
    component = session.get_document().components[0]
    session.remove_component(component.id)
    assert session.get_document().components == []
    assert session.is_dirty()

    session.update_components([component])
    session.force_save()
    assert not any(kind == "delete" for kind, _ in store.calls)
    assert ("component", component.id) in store.calls


def test_remove_missing_component(session: SyncSession) -> None:
    with pytest.raises(ComponentNotFound):
        session.remove_component("missing")


def test_add_component_gets_a_durable_id(session: SyncSession, store: MemoryStore, make_hero) -> None:
    added = session.add_component(make_hero(id="comp_new", orderIndex=9))

    assert added.is_durable
    assert added.order_index == 2
    assert ("insert", added.id) in store.calls
    assert [c.id for c in session.get_document().components][-1] == added.id

    session.force_save()
    assert ("component", added.id) in store.calls


def test_add_component_rejects_duplicate_id(session: SyncSession) -> None:
    existing = session.get_document().components[0]
    with pytest.raises(InvalidDocument):
        session.add_component(existing)


def test_promote_placeholder_swaps_in_durable_id(session: SyncSession, store: MemoryStore, make_hero) -> None:
    first = session.get_document().components[0]
    session.update_components([first, make_hero(id="comp_draft", orderIndex=2)])

    promoted = session.promote_component("comp_draft")

    assert promoted.is_durable
    assert [c.id for c in session.get_document().components] == [first.id, promoted.id]
    session.force_save()
    assert ("component", promoted.id) in store.calls
    assert session.promote_component(promoted.id).id == promoted.id


def test_promote_missing_component(session: SyncSession) -> None:
    with pytest.raises(ComponentNotFound):
        session.promote_component("comp_ghost")


class _Handle:
    def __init__(self) -> None:
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class LateScheduler:
    """Keeps callbacks so a test can fire one after it was cancelled, as a woken timer thread would."""

    def __init__(self) -> None:
        self.later: list[tuple[_Handle, object]] = []

    def call_later(self, delay, callback):
        handle = _Handle()
        self.later.append((handle, callback))
        return handle

    def call_every(self, interval, callback):
        return _Handle()


def test_stale_debounce_does_not_save(store: MemoryStore, document: PageDocument) -> None:
    scheduler = LateScheduler()
    session = SyncSession(store, scheduler)
    session.initialize(document.id)

    session.update_theme(_theme("#000001"))
    session.update_theme(_theme("#000002"))
    (first_handle, first), (_, second) = scheduler.later

    assert first_handle.cancelled
    first()
    assert store.calls == []

    second()
    assert store.page_writes() == 1
    assert store.themes[document.id].primary_color == "#000002"


def test_close_without_flush_beats_a_timer_already_firing(store: MemoryStore, document: PageDocument) -> None:
    scheduler = LateScheduler()
    session = SyncSession(store, scheduler)
    session.initialize(document.id)

    session.update_theme(_theme("#000003"))
    session.close(flush=False)
    for _, callback in scheduler.later:
        callback()

    assert store.calls == []
