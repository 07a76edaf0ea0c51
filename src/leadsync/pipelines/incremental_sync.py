"""
Incremental lead sync pipeline.

One run: load cursor -> pick mode -> log in -> extract every window ->
filter/normalize -> deliver -> advance cursor. The cursor only moves after
the webhook accepted the batch.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Callable, List, Optional, Tuple

import structlog

from config.settings import Settings, settings as default_settings
from src.leadsync.auth.browser import BrowserDriver, PlaywrightBrowser
from src.leadsync.auth.portal_authenticator import PortalAuthenticator
from src.leadsync.delivery.webhook import WebhookDispatcher
from src.leadsync.errors import ConfigurationError
from src.leadsync.models.lead import NormalizedRecord, SyncBatch
from src.leadsync.models.session import PortalCredentials, SyncContext, SyncMode, mode_for_watermark
from src.leadsync.planning.windows import plan_windows
from src.leadsync.scrapers.lead_list_scraper import LeadListScraper
from src.leadsync.state.cursor_store import CursorStore, next_watermark
from src.leadsync.transformers.lead_normalizer import filter_records
from src.leadsync.utils.logger import get_logger

logger = get_logger(__name__)

REQUIRED_SETTINGS = {
    "portal_email": "PORTAL_EMAIL",
    "portal_password": "PORTAL_PASSWORD",
    "viasocket_webhook": "VIASOCKET_WEBHOOK",
}


@dataclass
class SyncResult:
    """Summary of a finished run."""

    mode: str
    records_fetched: int
    records_delivered: int
    previous_watermark: str
    new_watermark: str
    delivered: bool

    def to_dict(self) -> dict:
        return asdict(self)


def require_sync_settings(cfg: Settings) -> Tuple[PortalCredentials, str]:
    """
    Validate the inputs a run cannot start without.

    Raises:
        ConfigurationError: Naming every missing environment variable
    """
    missing = [env for field, env in REQUIRED_SETTINGS.items() if not getattr(cfg, field)]
    if missing:
        raise ConfigurationError(f"Missing environment variables: {', '.join(missing)}")

    credentials = PortalCredentials(email=cfg.portal_email, password=cfg.portal_password)
    return credentials, cfg.viasocket_webhook


class LeadSyncPipeline:
    """Runs a single backfill or incremental sync."""

    def __init__(
        self,
        credentials: PortalCredentials,
        cursor_store: CursorStore,
        scraper: LeadListScraper,
        dispatcher: WebhookDispatcher,
        browser_factory: Callable[[], BrowserDriver],
        authenticator_factory: Callable[[BrowserDriver], PortalAuthenticator] = PortalAuthenticator,
        project_id: Optional[int] = None,
        source_tag: Optional[str] = None,
        month_count: Optional[int] = None,
        today: Callable[[], date] = date.today,
    ):
        self.credentials = credentials
        self.cursor_store = cursor_store
        self.scraper = scraper
        self.dispatcher = dispatcher
        self.browser_factory = browser_factory
        self.authenticator_factory = authenticator_factory
        self.project_id = project_id if project_id is not None else default_settings.portal_project_id
        self.source_tag = source_tag or default_settings.source_tag
        self.month_count = month_count or default_settings.window_month_count
        self.today = today

    def run(self) -> SyncResult:
        watermark = self.cursor_store.load()
        mode = mode_for_watermark(watermark)
        structlog.contextvars.bind_contextvars(sync_mode=mode.label, last_created_at=watermark)
        try:
            return self._run(mode, watermark)
        finally:
            structlog.contextvars.unbind_contextvars("sync_mode", "last_created_at")

    def _run(self, mode: SyncMode, watermark: str) -> SyncResult:
        logger.info("sync_mode_selected")

        # The browser is released on every exit path.
        with self.browser_factory() as browser:
            session = self.authenticator_factory(browser).authenticate(self.credentials)
            context = SyncContext(mode=mode, session=session, project_id=self.project_id)
            records, fetched = self._collect(context)

            batch = SyncBatch.build(
                records,
                source=self.source_tag,
                project_id=self.project_id,
                mode=mode.label,
            )
            logger.info("batch_assembled", total_records=batch.meta.total_records, fetched=fetched)

            delivered = self.dispatcher.deliver(batch)

        if not delivered:
            logger.info("no_new_records")
            return SyncResult(
                mode=mode.label,
                records_fetched=fetched,
                records_delivered=0,
                previous_watermark=watermark,
                new_watermark=watermark,
                delivered=False,
            )

        newest = next_watermark(batch.records, current=watermark)
        self.cursor_store.commit(newest)
        logger.info("cursor_updated", previous=watermark, new_watermark=newest)

        return SyncResult(
            mode=mode.label,
            records_fetched=fetched,
            records_delivered=len(batch.records),
            previous_watermark=watermark,
            new_watermark=newest,
            delivered=True,
        )

    def _collect(self, context: SyncContext) -> Tuple[List[NormalizedRecord], int]:
        records: List[NormalizedRecord] = []
        fetched = 0
        for window in plan_windows(self.today(), self.month_count):
            raw = list(self.scraper.fetch_window(window, context.session))
            fetched += len(raw)
            records.extend(filter_records(raw, context.mode))
        return records, fetched


def build_pipeline(cfg: Optional[Settings] = None) -> LeadSyncPipeline:
    """Wire a pipeline from settings; fails fast on missing configuration."""
    cfg = cfg or default_settings
    credentials, webhook_url = require_sync_settings(cfg)

    return LeadSyncPipeline(
        credentials=credentials,
        cursor_store=CursorStore(cfg.cursor_path),
        scraper=LeadListScraper(
            base_url=cfg.portal_base_url,
            project_id=cfg.portal_project_id,
            timeout=cfg.http_timeout_seconds,
            session_cookie_name=cfg.session_cookie_name,
            xsrf_cookie_name=cfg.xsrf_cookie_name,
        ),
        dispatcher=WebhookDispatcher(webhook_url=webhook_url, timeout=cfg.http_timeout_seconds),
        browser_factory=lambda: PlaywrightBrowser(headless=cfg.browser_headless),
        authenticator_factory=lambda browser: PortalAuthenticator(
            browser,
            base_url=cfg.portal_base_url,
            session_cookie_name=cfg.session_cookie_name,
            xsrf_cookie_name=cfg.xsrf_cookie_name,
            timeout=cfg.auth_timeout_seconds,
            poll_interval=cfg.auth_poll_interval_seconds,
            settle_seconds=cfg.login_settle_seconds,
            email_selector=cfg.login_email_selector,
            password_selector=cfg.login_password_selector,
            submit_selector=cfg.login_submit_selector,
        ),
        project_id=cfg.portal_project_id,
        source_tag=cfg.source_tag,
        month_count=cfg.window_month_count,
    )
