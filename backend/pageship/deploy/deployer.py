"""Content-addressed deploy: provision, diff by hash, upload what is missing, await readiness."""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from pageship.core.errors import (
    DeploymentFailed,
    HostingAPIError,
    ManifestFailed,
    ProvisioningFailed,
    UploadFailed,
)
from pageship.core.logging import get_logger
from pageship.core.metrics import DEPLOY_DURATION, DEPLOYS_TOTAL, FILES_SKIPPED, FILES_UPLOADED
from pageship.deploy.hosting import DeploymentTicket, HostingClient
from pageship.deploy.manifest import DeploymentManifest, build_manifest
from pageship.models.document import PageDocument
from pageship.models.entities import CompiledArtifact
from pageship.utils.hashing import dedupe_hashes
from pageship.utils.text import site_slug
from pageship.utils.time import now_ms

logger = get_logger(__name__)

READY_STATES = frozenset({"ready"})
ERROR_STATES = frozenset({"error", "rejected"})

# A provider reply missing fields surfaces as one of these from DeploymentTicket/SiteInfo parsing.
PROVIDER_ERRORS = (HostingAPIError, KeyError, ValueError, TypeError)


class DeployState(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True)
class DeploymentJob:
    """Lifecycle record of one deploy attempt."""

    page_id: str
    state: DeployState = DeployState.PENDING
    site_id: str | None = None
    deploy_id: str | None = None
    error: str | None = None

    def start(self) -> None:
        if self.state is not DeployState.PENDING:
            raise ValueError(f"deployment job already {self.state.value}")
        self.state = DeployState.IN_PROGRESS

    def complete(self) -> None:
        if self.state is not DeployState.IN_PROGRESS:
            raise ValueError(f"cannot complete a job that is {self.state.value}")
        self.state = DeployState.COMPLETED

    def fail(self, reason: str) -> None:
        if self.state in (DeployState.COMPLETED, DeployState.FAILED):
            raise ValueError(f"cannot fail a job that is {self.state.value}")
        self.state = DeployState.FAILED
        self.error = reason


@dataclass(slots=True)
class DeployResult:
    url: str
    site_id: str
    deploy_id: str
    uploaded: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def site_name_for(page: PageDocument, stamp: int | None = None) -> str:
    return f"{site_slug(page.slug)}-{stamp if stamp is not None else now_ms()}"


class Deployer:
    def __init__(
        self,
        client: HostingClient,
        *,
        upload_workers: int = 4,
        poll_interval: float = 1.0,
        poll_timeout: float = 60.0,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client = client
        self.upload_workers = max(1, upload_workers)
        self.poll_interval = poll_interval
        self.poll_timeout = poll_timeout
        self._sleep = sleep
        self._clock = clock

    def deploy(
        self,
        artifact: CompiledArtifact,
        page: PageDocument,
        on_provisioned: Callable[[str], None] | None = None,
    ) -> DeployResult:
        """Publish ``artifact`` for ``page``.

        A site is created only when the page has none yet; ``on_provisioned``
        receives the new site id before any file is uploaded so a later
        failure does not orphan it. Any failure raises a
        :class:`DeploymentFailed` subclass and nothing is reported as live.
        """
        job = DeploymentJob(page_id=page.id, site_id=page.hosting_site_id)
        job.start()
        started = time.perf_counter()
        try:
            if job.site_id is None:
                job.site_id = self._provision(page)
                if on_provisioned is not None:
                    on_provisioned(job.site_id)
            manifest = build_manifest(artifact)
            ticket = self._submit_manifest(job.site_id, manifest)
            job.deploy_id = ticket.deploy_id
            uploaded = self._upload_required(ticket, manifest)
            uploaded_set = set(uploaded)
            skipped = [digest for digest in manifest.unique_hashes() if digest not in uploaded_set]
            url = self._await_ready(ticket) or page.deployed_url or ""
        except DeploymentFailed as exc:
            job.fail(str(exc))
            DEPLOYS_TOTAL.labels(outcome=exc.stage).inc()
            logger.error(
                "Deploy failed",
                extra={"ctx_page_id": page.id, "ctx_stage": exc.stage, "ctx_reason": exc.reason},
            )
            raise
        job.complete()
        DEPLOYS_TOTAL.labels(outcome="ok").inc()
        DEPLOY_DURATION.observe(time.perf_counter() - started)
        FILES_UPLOADED.inc(len(uploaded))
        FILES_SKIPPED.inc(len(skipped))
        if page.custom_domain:
            self._attach_domain(job.site_id, page.custom_domain)
        logger.info(
            "Deploy ready",
            extra={
                "ctx_page_id": page.id,
                "ctx_site_id": job.site_id,
                "ctx_deploy_id": job.deploy_id,
                "ctx_uploaded": len(uploaded),
                "ctx_skipped": len(skipped),
            },
        )
        return DeployResult(
            url=url,
            site_id=job.site_id,
            deploy_id=ticket.deploy_id,
            uploaded=uploaded,
            skipped=skipped,
        )

    def _provision(self, page: PageDocument) -> str:
        try:
            return self.client.create_site(site_name_for(page)).site_id
        except PROVIDER_ERRORS as exc:
            raise ProvisioningFailed(f"could not create site: {exc}") from exc

    def _submit_manifest(self, site_id: str, manifest: DeploymentManifest) -> DeploymentTicket:
        try:
            ticket = self.client.create_deployment(site_id, manifest.payload()["files"])
        except PROVIDER_ERRORS as exc:
            raise ManifestFailed(f"manifest rejected: {exc}") from exc
        unknown = [digest for digest in ticket.required if digest not in manifest.blobs]
        if unknown:
            raise ManifestFailed(f"provider requested unknown hashes: {', '.join(sorted(unknown))}")
        return ticket

    def _upload_required(self, ticket: DeploymentTicket, manifest: DeploymentManifest) -> list[str]:
        required = dedupe_hashes(ticket.required)
        if not required:
            return []
        uploaded: list[str] = []
        failure: tuple[str, Exception] | None = None
        with ThreadPoolExecutor(max_workers=min(self.upload_workers, len(required))) as executor:
            futures = {
                executor.submit(self.client.upload_file, ticket.deploy_id, digest, manifest.blobs[digest]): digest
                for digest in required
            }
            for future in as_completed(futures):
                digest = futures[future]
                if future.cancelled():
                    continue
                try:
                    future.result()
                except Exception as exc:
                    if failure is None:
                        failure = (digest, exc)
                        for pending in futures:
                            pending.cancel()
                    continue
                uploaded.append(digest)
        if failure is not None:
            digest, exc = failure
            raise UploadFailed(f"upload of {digest} failed: {exc}", file_hash=digest) from exc
        return sorted(uploaded)

    def _await_ready(self, ticket: DeploymentTicket) -> str:
        deadline = self._clock() + self.poll_timeout
        current = ticket
        while True:
            if current.state in READY_STATES:
                return current.url or ""
            if current.state in ERROR_STATES:
                raise DeploymentFailed(f"deploy {ticket.deploy_id} errored: {current.error_message or 'unknown error'}")
            if self._clock() >= deadline:
                raise DeploymentFailed(f"deploy {ticket.deploy_id} not ready after {self.poll_timeout}s")
            self._sleep(self.poll_interval)
            try:
                current = self.client.get_deployment(ticket.deploy_id)
            except PROVIDER_ERRORS as exc:
                raise DeploymentFailed(f"could not poll deploy {ticket.deploy_id}: {exc}") from exc

    def _attach_domain(self, site_id: str, domain: str) -> None:
        try:
            self.client.update_site_domain(site_id, domain)
        except HostingAPIError:
            logger.warning(
                "Custom domain could not be attached",
                extra={"ctx_site_id": site_id, "ctx_domain": domain},
                exc_info=True,
            )


__all__ = [
    "DeployState",
    "DeploymentJob",
    "DeployResult",
    "Deployer",
    "site_name_for",
]
