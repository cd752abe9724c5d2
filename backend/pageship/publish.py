"""Publish orchestration: save, compile, deploy and record the page lifecycle."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime

from pageship.compiler.compiler import PageCompiler
from pageship.core.errors import DeploymentFailed, InvalidStatusTransition, StorageError
from pageship.core.logging import get_logger
from pageship.deploy.deployer import Deployer
from pageship.models.document import PageDocument, PageStatus
from pageship.models.entities import CompileDegraded
from pageship.styles.vocabulary import StyleVocabulary
from pageship.sync.session import SyncSession
from pageship.sync.store import SQLitePageStore
from pageship.utils.time import utc_now

logger = get_logger(__name__)


@dataclass(slots=True)
class PublishResult:
    page_id: str
    url: str
    site_id: str
    deploy_id: str
    deployed_at: datetime
    uploaded: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    degraded: list[CompileDegraded] = field(default_factory=list)


class PublishService:
    def __init__(
        self,
        store: SQLitePageStore,
        deployer: Deployer,
        vocabulary: StyleVocabulary | None = None,
    ) -> None:
        self.store = store
        self.deployer = deployer
        self.compiler = PageCompiler(vocabulary)
        self._lock = threading.Lock()
        self._publishing: set[str] = set()

    def publish(self, session: SyncSession) -> PublishResult:
        """Publish the session's current document.

        Pending edits are force-saved first, so a storage failure aborts
        before anything is deployed. Once the page is ``publishing`` any
        failure puts it back to ``draft`` with the reason recorded and
        re-raises. A second publish of the same page while one is running
        raises :class:`InvalidStatusTransition`.
        """
        page_id = session.page_id
        with self._lock:
            if page_id in self._publishing:
                raise InvalidStatusTransition(PageStatus.PUBLISHING.value, PageStatus.PUBLISHING.value)
            self._publishing.add(page_id)
        try:
            return self._publish(session)
        finally:
            with self._lock:
                self._publishing.discard(page_id)

    def _publish(self, session: SyncSession) -> PublishResult:
        session.force_save()
        document = session.get_document().transition(PageStatus.PUBLISHING)
        self.store.update_status(document.id, PageStatus.PUBLISHING, last_error=None)
        session.apply_publish_state(PageStatus.PUBLISHING, last_error=None)
        logger.info("Publishing page", extra={"ctx_page_id": document.id, "ctx_slug": document.slug})

        def remember_site(site_id: str) -> None:
            session.apply_publish_state(PageStatus.PUBLISHING, hosting_site_id=site_id)
            try:
                self.store.set_hosting_site(document.id, site_id)
            except StorageError:
                logger.error(
                    "Could not record hosting site",
                    extra={"ctx_page_id": document.id, "ctx_site_id": site_id},
                    exc_info=True,
                )

        try:
            report = self.compiler.compile(document)
            deployed = self.deployer.deploy(report.artifact, document, on_provisioned=remember_site)
            deployed_at = utc_now()
            published = document.transition(PageStatus.PUBLISHED)
            self.store.update_status(
                document.id,
                published.status,
                deployed_url=deployed.url,
                last_error=None,
                last_deployed_at=deployed_at,
            )
        except DeploymentFailed as exc:
            self._revert(session, document, exc.reason)
            raise
        except Exception as exc:
            logger.error("Publish aborted", extra={"ctx_page_id": document.id}, exc_info=True)
            self._revert(session, document, str(exc) or type(exc).__name__)
            raise

        session.apply_publish_state(
            published.status,
            hosting_site_id=deployed.site_id,
            deployed_url=deployed.url,
            last_deployed_at=deployed_at,
            last_error=None,
        )
        logger.info(
            "Page published",
            extra={"ctx_page_id": document.id, "ctx_url": deployed.url, "ctx_degraded": len(report.degraded)},
        )
        return PublishResult(
            page_id=document.id,
            url=deployed.url,
            site_id=deployed.site_id,
            deploy_id=deployed.deploy_id,
            deployed_at=deployed_at,
            uploaded=deployed.uploaded,
            skipped=deployed.skipped,
            degraded=report.degraded,
        )

    def _revert(self, session: SyncSession, document: PageDocument, reason: str) -> None:
        draft = document.transition(PageStatus.DRAFT)
        session.apply_publish_state(draft.status, last_error=reason)
        try:
            self.store.update_status(document.id, draft.status, last_error=reason)
        except StorageError:
            logger.error("Could not record failed publish", extra={"ctx_page_id": document.id}, exc_info=True)


__all__ = ["PublishResult", "PublishService"]
