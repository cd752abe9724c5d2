"""CLI entrypoint for pageship."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

import requests
import typer
import yaml

from pageship.compiler import compile_document
from pageship.core.errors import InvalidDocument
from pageship.deploy.manifest import build_manifest
from pageship.models.document import parse_document

app = typer.Typer(name="pageship", help="Landing page compiler and publisher")

DEFAULT_HOST = "http://127.0.0.1:5173"


def _resolve_host(override: Optional[str]) -> str:
    if override:
        return override.rstrip('/')
    env_host = os.environ.get("PGS_HOST")
    if env_host:
        return env_host.rstrip('/')
    return DEFAULT_HOST


def _request(method: str, path: str, host: Optional[str] = None, **kwargs) -> requests.Response:
    base = _resolve_host(host)
    url = f"{base}{path}"
    resp = requests.request(method, url, timeout=120, **kwargs)
    if not resp.ok:
        try:
            detail = resp.json()
        except ValueError:
            detail = resp.text
        typer.echo(f"Request failed ({resp.status_code}): {detail}", err=True)
        raise typer.Exit(code=1)
    return resp


def _load_document(path: Path) -> dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        data = yaml.safe_load(raw) or {}
    else:
        data = json.loads(raw)
    if not isinstance(data, dict):
        raise typer.BadParameter("document must be a mapping", param_hint="DOCUMENT")
    return data


@app.command()
def build(
    document: Path = typer.Argument(..., exists=True, dir_okay=False, help="Page document (JSON or YAML)"),
    out: Path = typer.Option(Path("dist"), "--out", help="Output directory"),
) -> None:
    """Compile a page document to static files without deploying."""
    try:
        page = parse_document(_load_document(document))
    except InvalidDocument as exc:
        typer.echo(f"Invalid document: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    report = compile_document(page)
    manifest = build_manifest(report.artifact)
    out.mkdir(parents=True, exist_ok=True)
    for path, digest in manifest.files.items():
        (out / path.lstrip("/")).write_bytes(manifest.blobs[digest])
    for item in report.degraded:
        typer.echo(f"warning: {item.component_id} ({item.variation_ref}): {item.reason}", err=True)
    typer.echo(json.dumps({"out": str(out), "files": manifest.payload()["files"]}, indent=2))


@app.command("open")
def open_session(
    page_id: str = typer.Argument(..., help="Page identifier"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Open an editing session for a stored page."""
    resp = _request("POST", f"/sessions/{page_id}", host=host)
    typer.echo(json.dumps(resp.json(), indent=2))


@app.command()
def save(
    page_id: str = typer.Argument(..., help="Page identifier"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Force-save an open session."""
    resp = _request("POST", f"/sessions/{page_id}/save", host=host)
    typer.echo(json.dumps(resp.json(), indent=2))


@app.command()
def publish(
    page_id: str = typer.Argument(..., help="Page identifier"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Compile and deploy a page."""
    resp = _request("POST", f"/pages/{page_id}/publish", host=host)
    typer.echo(json.dumps(resp.json(), indent=2))


@app.command()
def preview(
    page_id: str = typer.Argument(..., help="Page identifier"),
    out: Optional[Path] = typer.Option(None, "--out", help="Write index.html, styles.css and app.js here"),
    host: Optional[str] = typer.Option(None, "--host", help="Override backend host"),
) -> None:
    """Compile a stored page on the backend without deploying."""
    payload = _request("GET", f"/pages/{page_id}/preview", host=host).json()
    if out is None:
        typer.echo(json.dumps(payload, indent=2))
        return
    out.mkdir(parents=True, exist_ok=True)
    (out / "index.html").write_text(payload["markup"], encoding="utf-8")
    (out / "styles.css").write_text(payload["stylesheet"], encoding="utf-8")
    (out / "app.js").write_text(payload["script"], encoding="utf-8")
    typer.echo(json.dumps({"out": str(out), "degraded": payload["degraded"]}, indent=2))


if __name__ == "__main__":
    app()
