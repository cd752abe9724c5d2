"""API integration tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from pageship.api.dependencies import get_page_store, get_publish_service
from pageship.app import app
from pageship.deploy import Deployer
from pageship.publish import PublishService


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def page(client: TestClient, sample_document) -> dict:
    resp = client.post("/pages", json={"document": sample_document})
    assert resp.status_code == 200
    return resp.json()


def test_health(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["ok"] is True


def test_metrics(client: TestClient) -> None:
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "pgs_files_uploaded_total" in resp.text


def test_create_and_list_pages(client: TestClient, page: dict) -> None:
    assert page["slug"] == "spring-sale"
    assert page["status"] == "draft"
    assert page["components"][0]["orderIndex"] == 1

    listed = client.get("/pages").json()
    assert [item["id"] for item in listed] == [page["id"]]


def test_create_page_rejects_bad_slug(client: TestClient, sample_document) -> None:
    sample_document["slug"] = "has spaces"
    resp = client.post("/pages", json={"document": sample_document})
    assert resp.status_code == 422


def test_editing_session_flow(client: TestClient, page: dict) -> None:
    page_id = page["id"]
    component_id = page["components"][0]["id"]

    opened = client.post(f"/sessions/{page_id}").json()
    assert opened["dirty"] is False
    assert opened["document"]["id"] == page_id

    themed = client.put(f"/sessions/{page_id}/theme", json={"theme": {"primaryColor": "#ff0000"}}).json()
    assert themed["dirty"] is True
    assert themed["document"]["theme"]["primaryColor"] == "#ff0000"

    styled = client.patch(
        f"/sessions/{page_id}/components/{component_id}/styles/headline",
        json={"styles": {"color": "#222222"}},
    ).json()
    assert styled["document"]["components"][0]["styleOverrides"] == {"headline": {"color": "#222222"}}

    saved = client.post(f"/sessions/{page_id}/save").json()
    assert saved["dirty"] is False
    assert saved["last_saved_at"] is not None

    stored = get_page_store().read_page(page_id)
    assert stored.theme.primary_color == "#ff0000"
    assert stored.components[0].style_overrides == {"headline": {"color": "#222222"}}

    closed = client.delete(f"/sessions/{page_id}")
    assert closed.json() == {"status": "closed", "page_id": page_id}
    assert client.get(f"/sessions/{page_id}").status_code == 404


def test_reorder_through_components_update(client: TestClient, page: dict, make_hero) -> None:
    page_id = page["id"]
    client.post(f"/sessions/{page_id}")
    second = make_hero(orderIndex=1, content={"headline": "Second"})
    components = [dict(page["components"][0], orderIndex=2), second]

    resp = client.put(f"/sessions/{page_id}/components", json={"components": components})
    assert resp.status_code == 200
    ids = [item["id"] for item in resp.json()["document"]["components"]]
    assert ids == [second["id"], page["components"][0]["id"]]


def test_style_patch_unknown_component(client: TestClient, page: dict) -> None:
    client.post(f"/sessions/{page['id']}")
    resp = client.patch(f"/sessions/{page['id']}/components/nope/styles/headline", json={"styles": {"color": "#000"}})
    assert resp.status_code == 404


def test_preview_prefers_open_session(client: TestClient, page: dict) -> None:
    page_id = page["id"]
    stored = client.get(f"/pages/{page_id}/preview").json()
    assert "Hello" in stored["markup"]
    assert stored["degraded"] == []

    client.post(f"/sessions/{page_id}")
    client.put(f"/sessions/{page_id}/theme", json={"theme": {"fontFamily": "Roboto"}})
    live = client.get(f"/pages/{page_id}/preview").json()
    assert "family=Roboto" in live["markup"]


def test_missing_pages_and_sessions(client: TestClient) -> None:
    assert client.get("/pages/ghost/preview").status_code == 404
    assert client.post("/sessions/ghost").status_code == 404
    assert client.get("/sessions/ghost").status_code == 404
    assert client.delete("/sessions/ghost").status_code == 404


def test_publish_requires_hosting_token(client: TestClient, page: dict) -> None:
    resp = client.post(f"/pages/{page['id']}/publish")
    assert resp.status_code == 503


def test_publish_with_provider(client: TestClient, page: dict, provider) -> None:
    service = PublishService(get_page_store(), Deployer(provider, poll_interval=0, sleep=lambda _: None))
    app.dependency_overrides[get_publish_service] = lambda: service

    resp = client.post(f"/pages/{page['id']}/publish")

    assert resp.status_code == 200
    body = resp.json()
    assert body["url"] == "https://site-1.example"
    assert body["uploaded"] == 4
    assert body["skipped"] == 0
    summary = client.get("/pages").json()[0]
    assert summary["status"] == "published"
    assert summary["deployed_url"] == "https://site-1.example"


def test_publish_failure_maps_to_bad_gateway(client: TestClient, page: dict, provider) -> None:
    provider.final_state = "error"
    service = PublishService(get_page_store(), Deployer(provider, poll_interval=0, sleep=lambda _: None))
    app.dependency_overrides[get_publish_service] = lambda: service

    resp = client.post(f"/pages/{page['id']}/publish")

    assert resp.status_code == 502
    assert "build exploded" in resp.json()["detail"]
    assert client.get("/pages").json()[0]["status"] == "draft"


def test_add_promote_and_remove_components(client: TestClient, page: dict, make_hero) -> None:
    page_id = page["id"]
    original = page["components"][0]
    client.post(f"/sessions/{page_id}")

    added = client.post(f"/sessions/{page_id}/components", json={"component": make_hero(id="comp_new", orderIndex=2)})
    assert added.status_code == 200
    added_id = added.json()["document"]["components"][1]["id"]
    assert added_id != "comp_new"

    draft = make_hero(id="comp_draft", orderIndex=3)
    components = added.json()["document"]["components"] + [draft]
    client.put(f"/sessions/{page_id}/components", json={"components": components})
    promoted = client.post(f"/sessions/{page_id}/components/comp_draft/promote")
    assert promoted.status_code == 200
    promoted_id = promoted.json()["document"]["components"][2]["id"]
    assert promoted_id != "comp_draft"

    removed = client.delete(f"/sessions/{page_id}/components/{original['id']}")
    assert removed.status_code == 200
    client.post(f"/sessions/{page_id}/save")

    stored = get_page_store().read_page(page_id)
    assert [c.id for c in stored.components] == [added_id, promoted_id]
    assert [c.order_index for c in stored.components] == [1, 2]


def test_component_routes_unknown_ids(client: TestClient, page: dict) -> None:
    client.post(f"/sessions/{page['id']}")
    assert client.delete(f"/sessions/{page['id']}/components/nope").status_code == 404
    assert client.post(f"/sessions/{page['id']}/components/nope/promote").status_code == 404


def test_theme_rejects_css_breaking_values(client: TestClient, page: dict) -> None:
    client.post(f"/sessions/{page['id']}")
    resp = client.put(f"/sessions/{page['id']}/theme", json={"theme": {"primaryColor": "red}body{display:none"}})
    assert resp.status_code == 422
