"""Hosting client tests against a mocked HTTP session."""

from __future__ import annotations

from unittest import mock

import pytest
import requests

from pageship.core.errors import HostingAPIError
from pageship.deploy.hosting import HostingClient


def _response(status: int, payload=None, text: str = "") -> mock.Mock:
    resp = mock.Mock(spec=requests.Response)
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.content = b"" if payload is None and not text else b"x"
    resp.text = text
    if payload is None:
        resp.json.side_effect = ValueError("no json")
    else:
        resp.json.return_value = payload
    return resp


@pytest.fixture
def session() -> mock.Mock:
    fake = mock.Mock(spec=requests.Session)
    fake.headers = {}
    return fake


def test_bearer_token_and_create_site(session: mock.Mock) -> None:
    session.request.return_value = _response(201, {"id": "site-1", "name": "launch-1", "ssl_url": "https://launch-1.example"})
    client = HostingClient("token-123", api_url="https://hosting.example/api/v1/", session=session)

    site = client.create_site("launch-1")

    assert session.headers["Authorization"] == "Bearer token-123"
    assert site.site_id == "site-1"
    assert site.url == "https://launch-1.example"
    method, url = session.request.call_args.args
    assert (method, url) == ("POST", "https://hosting.example/api/v1/sites")
    assert session.request.call_args.kwargs["json"] == {"name": "launch-1"}
    assert session.request.call_args.kwargs["timeout"] == 30.0


def test_create_deployment_returns_required_hashes(session: mock.Mock) -> None:
    session.request.return_value = _response(200, {"id": "dep-1", "state": "uploading", "required": ["aaa", "bbb"]})
    client = HostingClient("t", session=session)

    ticket = client.create_deployment("site-1", {"/index.html": "aaa", "/app.js": "bbb"})

    assert ticket.deploy_id == "dep-1"
    assert ticket.required == ["aaa", "bbb"]
    assert session.request.call_args.kwargs["json"] == {"files": {"/index.html": "aaa", "/app.js": "bbb"}}


def test_upload_file_sends_raw_bytes(session: mock.Mock) -> None:
    session.request.return_value = _response(200)
    client = HostingClient("t", session=session)

    client.upload_file("dep-1", "aaa", b"<html></html>")

    method, url = session.request.call_args.args
    assert method == "PUT"
    assert url.endswith("/deploys/dep-1/files/aaa")
    assert session.request.call_args.kwargs["data"] == b"<html></html>"
    assert session.request.call_args.kwargs["headers"]["Content-Type"] == "application/octet-stream"


def test_non_2xx_raises_with_status_and_detail(session: mock.Mock) -> None:
    session.request.return_value = _response(422, {"message": "bad manifest"})
    client = HostingClient("t", session=session)

    with pytest.raises(HostingAPIError) as excinfo:
        client.create_deployment("site-1", {})

    assert excinfo.value.status_code == 422
    assert excinfo.value.detail == "bad manifest"


def test_non_json_error_body_uses_text(session: mock.Mock) -> None:
    session.request.return_value = _response(502, text="Bad Gateway")
    client = HostingClient("t", session=session)

    with pytest.raises(HostingAPIError) as excinfo:
        client.get_deployment("dep-1")

    assert excinfo.value.status_code == 502
    assert excinfo.value.detail == "Bad Gateway"


@pytest.mark.parametrize("error", [requests.Timeout("slow"), requests.ConnectionError("refused")])
def test_transport_errors_have_no_status(session: mock.Mock, error: Exception) -> None:
    session.request.side_effect = error
    client = HostingClient("t", session=session, timeout=5.0)

    with pytest.raises(HostingAPIError) as excinfo:
        client.create_site("x")

    assert excinfo.value.status_code is None
