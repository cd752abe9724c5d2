"""Test fixtures for pageship."""

from __future__ import annotations

import sys
import threading
import uuid
from pathlib import Path
from typing import Any, Mapping

import pytest

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from pageship.core.errors import HostingAPIError  # noqa: E402
from pageship.deploy.hosting import DeploymentTicket, SiteInfo  # noqa: E402
from pageship.utils.hashing import sha1_bytes  # noqa: E402


@pytest.fixture(autouse=True)
def reset_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset global singletons and environment between tests."""
    monkeypatch.setenv("PGS_DB_PATH", str(tmp_path / "pageship.db"))
    monkeypatch.delenv("PGS_CONFIG", raising=False)
    monkeypatch.delenv("PGS_HOSTING_ACCESS_TOKEN", raising=False)

    from pageship.api import dependencies as deps
    from pageship.core.config import get_settings

    deps.shutdown()
    deps.get_app_settings.cache_clear()
    get_settings.cache_clear()
    yield
    deps.shutdown()
    deps.get_app_settings.cache_clear()
    get_settings.cache_clear()


def hero_component(**overrides: Any) -> dict[str, Any]:
    component: dict[str, Any] = {
        "id": str(uuid.uuid4()),
        "variationRef": {"componentType": "hero", "variationNumber": 1},
        "orderIndex": 1,
        "content": {"headline": "Hello"},
        "visibility": {"subheadline": False},
    }
    component.update(overrides)
    return component


@pytest.fixture
def sample_document() -> dict[str, Any]:
    return {
        "id": str(uuid.uuid4()),
        "slug": "spring-sale",
        "theme": {"primaryColor": "#2563eb", "backgroundColor": "#ffffff", "fontFamily": "Inter"},
        "seo": {"title": "Spring Sale", "description": "Everything half price", "keywords": "sale, spring"},
        "components": [hero_component()],
    }


@pytest.fixture
def make_hero():
    return hero_component


class FakeProvider:
    """In-memory hosting provider that remembers every uploaded hash per site."""

    def __init__(self) -> None:
        self.sites: dict[str, set[str]] = {}
        self.deploys: dict[str, dict[str, Any]] = {}
        self.uploads: list[str] = []
        self.fail_uploads: set[str] = set()
        self.fail_create_site = False
        self.final_state = "ready"
        self.domains: dict[str, str] = {}
        self.closed = False
        self._lock = threading.Lock()

    def create_site(self, name: str) -> SiteInfo:
        if self.fail_create_site:
            raise HostingAPIError("POST /sites", 500, "boom")
        site_id = f"site-{len(self.sites) + 1}"
        self.sites[site_id] = set()
        return SiteInfo(site_id=site_id, name=name, url=f"https://{name}.example")

    def create_deployment(self, site_id: str, files: Mapping[str, str]) -> DeploymentTicket:
        deploy_id = f"dep-{len(self.deploys) + 1}"
        known = self.sites[site_id]
        required = sorted({digest for digest in files.values() if digest not in known})
        self.deploys[deploy_id] = {"site_id": site_id, "required": set(required)}
        return DeploymentTicket(deploy_id=deploy_id, state="uploading", required=required)

    def upload_file(self, deploy_id: str, file_hash: str, data: bytes) -> None:
        if file_hash in self.fail_uploads:
            raise HostingAPIError(f"PUT /deploys/{deploy_id}/files/{file_hash}", 500, "disk full")
        assert sha1_bytes(data) == file_hash
        with self._lock:
            self.uploads.append(file_hash)
            self.sites[self.deploys[deploy_id]["site_id"]].add(file_hash)

    def get_deployment(self, deploy_id: str) -> DeploymentTicket:
        site_id = self.deploys[deploy_id]["site_id"]
        return DeploymentTicket(
            deploy_id=deploy_id,
            state=self.final_state,
            url=f"https://{site_id}.example",
            error_message="build exploded" if self.final_state == "error" else None,
        )

    def update_site_domain(self, site_id: str, domain: str) -> None:
        self.domains[site_id] = domain

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()
