"""Exception hierarchy shared across pageship."""

from __future__ import annotations


class PageshipError(Exception):
    """Base class for every error raised by pageship."""


class InvalidDocument(PageshipError):
    """Raised when a page document cannot be parsed at all."""


class ComponentNotFound(PageshipError):
    def __init__(self, component_id: str) -> None:
        super().__init__(f"Component {component_id} not found")
        self.component_id = component_id


class SessionNotFound(PageshipError):
    def __init__(self, page_id: str) -> None:
        super().__init__(f"No open sync session for page {page_id}")
        self.page_id = page_id


class SlugLocked(PageshipError):
    """Raised when changing the slug of a page that already has a hosting site."""

    def __init__(self, page_id: str, site_id: str) -> None:
        super().__init__(f"Slug of page {page_id} is locked by hosting site {site_id}")
        self.page_id = page_id
        self.site_id = site_id


class InvalidStatusTransition(PageshipError):
    def __init__(self, current: str, requested: str) -> None:
        super().__init__(f"Cannot move page status from {current} to {requested}")
        self.current = current
        self.requested = requested


class StorageError(PageshipError):
    """Durable storage failure."""


class PageNotFound(StorageError):
    def __init__(self, page_id: str) -> None:
        super().__init__(f"Page {page_id} not found")
        self.page_id = page_id


class StorageWriteFailed(StorageError):
    """A write to durable storage failed; the session stays dirty."""

    def __init__(self, target: str, reason: str) -> None:
        super().__init__(f"Failed to persist {target}: {reason}")
        self.target = target
        self.reason = reason


class HostingAPIError(PageshipError):
    """Transport-level failure talking to the hosting provider.

    ``status_code`` is ``None`` when no response was received (timeout,
    connection refused).
    """

    def __init__(self, endpoint: str, status_code: int | None, detail: str) -> None:
        prefix = f"HTTP {status_code}" if status_code is not None else "no response"
        super().__init__(f"Hosting API error on {endpoint} ({prefix}): {detail}")
        self.endpoint = endpoint
        self.status_code = status_code
        self.detail = detail


class DeploymentFailed(PageshipError):
    """A deploy attempt was aborted; nothing is reported as published."""

    stage = "deploy"

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class ProvisioningFailed(DeploymentFailed):
    stage = "provision"


class ManifestFailed(DeploymentFailed):
    stage = "manifest"


class UploadFailed(DeploymentFailed):
    stage = "upload"

    def __init__(self, reason: str, file_hash: str | None = None) -> None:
        super().__init__(reason)
        self.file_hash = file_hash


__all__ = [
    "PageshipError",
    "InvalidDocument",
    "ComponentNotFound",
    "SessionNotFound",
    "SlugLocked",
    "InvalidStatusTransition",
    "StorageError",
    "PageNotFound",
    "StorageWriteFailed",
    "HostingAPIError",
    "DeploymentFailed",
    "ProvisioningFailed",
    "ManifestFailed",
    "UploadFailed",
]
