"""HTTP client for the static hosting provider's deploy API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import requests

from pageship.core.errors import HostingAPIError
from pageship.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_API_URL = "https://api.netlify.com/api/v1"


@dataclass(slots=True)
class SiteInfo:
    site_id: str
    name: str
    url: str | None = None


@dataclass(slots=True)
class DeploymentTicket:
    deploy_id: str
    state: str
    required: list[str] = field(default_factory=list)
    url: str | None = None
    error_message: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "DeploymentTicket":
        return cls(
            deploy_id=str(payload["id"]),
            state=str(payload.get("state") or "new"),
            required=[str(item) for item in payload.get("required") or []],
            url=payload.get("ssl_url") or payload.get("deploy_ssl_url") or payload.get("url"),
            error_message=payload.get("error_message"),
        )


class HostingClient:
    """Thin wrapper over the provider REST API.

    Every transport or HTTP failure surfaces as :class:`HostingAPIError`.
    """

    def __init__(
        self,
        access_token: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Authorization": f"Bearer {access_token}"})

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        data: bytes | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        endpoint = f"{method} {path}"
        try:
            resp = self._session.request(
                method,
                f"{self.api_url}{path}",
                json=json,
                data=data,
                headers=dict(headers or {}),
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            raise HostingAPIError(endpoint, None, f"timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            raise HostingAPIError(endpoint, None, str(exc)) from exc
        if not resp.ok:
            try:
                payload = resp.json()
            except ValueError:
                payload = None
            detail = payload.get("message") if isinstance(payload, dict) else None
            detail = detail or resp.text
            raise HostingAPIError(endpoint, resp.status_code, str(detail)[:500])
        if not resp.content:
            return {}
        try:
            body = resp.json()
        except ValueError as exc:
            raise HostingAPIError(endpoint, resp.status_code, "response was not JSON") from exc
        return body if isinstance(body, dict) else {"items": body}

    def create_site(self, name: str) -> SiteInfo:
        body = self._request("POST", "/sites", json={"name": name})
        site = SiteInfo(
            site_id=str(body["id"]),
            name=str(body.get("name") or name),
            url=body.get("ssl_url") or body.get("url"),
        )
        logger.info("Created hosting site", extra={"ctx_site_id": site.site_id, "ctx_name": site.name})
        return site

    def create_deployment(self, site_id: str, files: Mapping[str, str]) -> DeploymentTicket:
        body = self._request("POST", f"/sites/{site_id}/deploys", json={"files": dict(files)})
        return DeploymentTicket.from_payload(body)

    def upload_file(self, deploy_id: str, file_hash: str, data: bytes) -> None:
        self._request(
            "PUT",
            f"/deploys/{deploy_id}/files/{file_hash}",
            data=data,
            headers={"Content-Type": "application/octet-stream"},
        )

    def get_deployment(self, deploy_id: str) -> DeploymentTicket:
        return DeploymentTicket.from_payload(self._request("GET", f"/deploys/{deploy_id}"))

    def update_site_domain(self, site_id: str, domain: str) -> None:
        self._request("PATCH", f"/sites/{site_id}", json={"custom_domain": domain})

    def close(self) -> None:
        self._session.close()


__all__ = ["DEFAULT_API_URL", "SiteInfo", "DeploymentTicket", "HostingClient"]
