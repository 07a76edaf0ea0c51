"""
Lead List Scraper

Pages through the portal ``/leadList`` search endpoint for one date window
using the tokens of an authenticated session.
"""
from typing import Any, Dict, Iterator, Optional

import requests
from pydantic import ValidationError

from config.settings import settings
from src.leadsync.errors import ExtractionError
from src.leadsync.models.lead import LeadListPage, RawLeadRecord
from src.leadsync.models.session import AuthSession, DateWindow
from src.leadsync.utils.logger import get_logger

logger = get_logger(__name__)


class LeadListScraper:
    """
    Paginated extractor for portal lead records.

    Pages are requested strictly one after another; any failure aborts the
    run with ``ExtractionError``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        project_id: Optional[int] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
        session_cookie_name: Optional[str] = None,
        xsrf_cookie_name: Optional[str] = None,
    ):
        """
        Initialize the lead list scraper.

        Args:
            base_url: Override the portal root URL (for testing)
            project_id: Portal project to query
            timeout: Per-request timeout in seconds
            session: Reusable HTTP session
            session_cookie_name: Session cookie sent with every page request
            xsrf_cookie_name: Anti-forgery cookie sent with every page request
        """
        self.base_url = (base_url or settings.portal_base_url).rstrip("/")
        self.project_id = project_id if project_id is not None else settings.portal_project_id
        self.timeout = timeout or settings.http_timeout_seconds
        self.session = session or requests.Session()
        self.session_cookie_name = session_cookie_name or settings.session_cookie_name
        self.xsrf_cookie_name = xsrf_cookie_name or settings.xsrf_cookie_name
        logger.info("lead_list_scraper_initialized", base_url=self.base_url, project_id=self.project_id)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/leadList"

    def fetch_window(self, window: DateWindow, auth: AuthSession) -> Iterator[RawLeadRecord]:
        """
        Yield every record in ``window``, following ``next_page_url`` until absent.

        Records within a page come back in no defined order. Iterating again
        re-issues every request.
        """
        logger.info("fetching_window", date_filter=window.to_filter_string())

        page_no = 1
        total = 0
        while True:
            page = self.fetch_page(window, auth, page_no)
            records = page.records()
            total += len(records)
            logger.info(
                "page_fetched",
                date_filter=window.to_filter_string(),
                page=page_no,
                records=len(records),
                has_next_page=page.has_next_page,
            )
            yield from records

            if not page.has_next_page:
                break
            page_no += 1

        logger.info("window_complete", date_filter=window.to_filter_string(), pages=page_no, records=total)

    def fetch_page(self, window: DateWindow, auth: AuthSession, page_no: int) -> LeadListPage:
        """
        Request and validate a single page.

        Raises:
            ExtractionError: On transport failure, error status, non-JSON
                body or a body that is not a lead list page
        """
        try:
            response = self.session.post(
                self.endpoint,
                params={"page": page_no},
                json=self._build_query(window),
                headers=self._build_headers(auth),
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(
                "lead_list_request_failed",
                page=page_no,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ExtractionError(f"Lead list request for page {page_no} failed: {e}") from e
        except ValueError as e:
            logger.error("lead_list_response_not_json", page=page_no, error=str(e))
            raise ExtractionError(f"Lead list page {page_no} is not valid JSON") from e

        if not isinstance(payload, dict):
            raise ExtractionError(f"Lead list page {page_no} is {type(payload).__name__}, expected object")

        try:
            return LeadListPage.model_validate(payload)
        except ValidationError as e:
            logger.error("lead_list_validation_failed", page=page_no, error=str(e))
            raise ExtractionError(f"Lead list page {page_no} has an unexpected shape: {e}") from e

    def _build_query(self, window: DateWindow) -> Dict[str, Any]:
        return {
            "searchBy": "contact",
            "dateFilter": window.to_filter_string(),
            "project": self.project_id,
        }

    def _build_headers(self, auth: AuthSession) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "X-XSRF-TOKEN": auth.xsrf_token,
            "Cookie": (
                f"{self.xsrf_cookie_name}={auth.xsrf_token}; "
                f"{self.session_cookie_name}={auth.session_token}"
            ),
        }
