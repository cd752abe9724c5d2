"""Content-addressed file manifest for a compiled artifact."""

from __future__ import annotations

from dataclasses import dataclass, field

from pageship.models.entities import CompiledArtifact
from pageship.utils.hashing import sha1_bytes

INDEX_PATH = "/index.html"
STYLESHEET_PATH = "/styles.css"
SCRIPT_PATH = "/app.js"
HEADERS_PATH = "/_headers"

SECURITY_HEADERS = (
    ("X-Frame-Options", "DENY"),
    ("X-Content-Type-Options", "nosniff"),
    ("X-XSS-Protection", "1; mode=block"),
    ("Referrer-Policy", "strict-origin-when-cross-origin"),
    ("Permissions-Policy", "geolocation=(), microphone=(), camera=()"),
    ("Strict-Transport-Security", "max-age=31536000; includeSubDomains"),
    ("X-Permitted-Cross-Domain-Policies", "none"),
    ("Cross-Origin-Opener-Policy", "same-origin-allow-popups"),
)

CACHE_RULES = (
    ("/*.html", "no-cache"),
    ("/*.css", "public, max-age=31536000"),
    ("/*.js", "public, max-age=31536000"),
    ("/*.png", "public, max-age=31536000"),
    ("/*.jpg", "public, max-age=31536000"),
    ("/*.webp", "public, max-age=31536000"),
    ("/*.svg", "public, max-age=31536000"),
    ("/*.woff2", "public, max-age=31536000"),
)


def render_headers() -> str:
    """Static hosting ``_headers`` file: security headers plus cache policy."""
    lines = ["/*"]
    lines.extend(f"  {name}: {value}" for name, value in SECURITY_HEADERS)
    for pattern, policy in CACHE_RULES:
        lines.append("")
        lines.append(pattern)
        lines.append(f"  Cache-Control: {policy}")
    return "\n".join(lines) + "\n"


@dataclass(slots=True)
class DeploymentManifest:
    """``files`` maps path -> sha1; ``blobs`` maps sha1 -> bytes."""

    files: dict[str, str] = field(default_factory=dict)
    blobs: dict[str, bytes] = field(default_factory=dict)

    def add(self, path: str, data: bytes) -> str:
        digest = sha1_bytes(data)
        self.files[path] = digest
        self.blobs.setdefault(digest, data)
        return digest

    def payload(self) -> dict[str, dict[str, str]]:
        return {"files": dict(sorted(self.files.items()))}

    def unique_hashes(self) -> list[str]:
        return sorted(self.blobs)


def build_manifest(artifact: CompiledArtifact, extra_files: dict[str, bytes] | None = None) -> DeploymentManifest:
    manifest = DeploymentManifest()
    manifest.add(INDEX_PATH, artifact.markup.encode("utf-8"))
    manifest.add(STYLESHEET_PATH, artifact.stylesheet.encode("utf-8"))
    manifest.add(SCRIPT_PATH, artifact.script.encode("utf-8"))
    manifest.add(HEADERS_PATH, render_headers().encode("utf-8"))
    for path, data in sorted((extra_files or {}).items()):
        manifest.add(path if path.startswith("/") else f"/{path}", data)
    return manifest


__all__ = [
    "INDEX_PATH",
    "STYLESHEET_PATH",
    "SCRIPT_PATH",
    "HEADERS_PATH",
    "render_headers",
    "DeploymentManifest",
    "build_manifest",
]
