"""
Browser Driver

The small browser capability the authenticator needs, plus a Playwright
implementation. The driver owns the browser and must be closed at the end
of a run whatever its outcome; use it as a context manager.
"""
from typing import Any, Dict, List, Optional, Protocol

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from src.leadsync.errors import LeadSyncError
from src.leadsync.utils.logger import get_logger

logger = get_logger(__name__)


class BrowserError(LeadSyncError):
    """A browser action failed or timed out."""


class BrowserDriver(Protocol):
    def __enter__(self) -> "BrowserDriver": ...

    def __exit__(self, exc_type, exc, tb) -> None: ...

    def navigate(self, url: str, wait_until: str = "domcontentloaded", timeout_ms: int = 60_000) -> None: ...

    def wait_for_selector(self, selector: str, timeout_ms: int = 60_000) -> None: ...

    def fill_field(self, selector: str, value: str) -> None: ...

    def click(self, selector: str) -> None: ...

    def read_cookies(self) -> List[Dict[str, Any]]: ...

    def close(self) -> None: ...


class PlaywrightBrowser:
    """
    Headless Chromium session backed by Playwright's sync API.

    Playwright errors are re-raised as ``BrowserError`` so callers never
    depend on the engine.
    """

    def __init__(self, headless: bool = True):
        self.headless = headless
        self._playwright = None
        self._browser = None
        self._context = None
        self._page = None

    def __enter__(self) -> "PlaywrightBrowser":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def start(self) -> None:
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(headless=self.headless)
            self._context = self._browser.new_context()
            self._page = self._context.new_page()
        except PlaywrightError as e:
            self.close()
            raise BrowserError(f"Failed to launch browser: {e}") from e
        logger.info("browser_started", headless=self.headless)

    def navigate(self, url: str, wait_until: str = "domcontentloaded", timeout_ms: int = 60_000) -> None:
        try:
            self._require_page().goto(url, wait_until=wait_until, timeout=timeout_ms)
        except PlaywrightError as e:
            raise BrowserError(f"Navigation to {url} failed: {e}") from e

    def wait_for_selector(self, selector: str, timeout_ms: int = 60_000) -> None:
        try:
            self._require_page().wait_for_selector(selector, timeout=timeout_ms)
        except PlaywrightError as e:
            raise BrowserError(f"Selector {selector!r} never appeared: {e}") from e

    def fill_field(self, selector: str, value: str) -> None:
        try:
            self._require_page().fill(selector, value)
        except PlaywrightError as e:
            raise BrowserError(f"Could not fill {selector!r}: {e}") from e

    def click(self, selector: str) -> None:
        try:
            self._require_page().click(selector)
        except PlaywrightError as e:
            raise BrowserError(f"Could not click {selector!r}: {e}") from e

    def read_cookies(self) -> List[Dict[str, Any]]:
        if self._context is None:
            raise BrowserError("Browser context is not started")
        try:
            return list(self._context.cookies())
        except PlaywrightError as e:
            raise BrowserError(f"Could not read cookies: {e}") from e

    def close(self) -> None:
        """Tear down page, context, browser and driver; safe to call twice."""
        for name, closer in (
            ("context", self._context.close if self._context else None),
            ("browser", self._browser.close if self._browser else None),
            ("playwright", self._playwright.stop if self._playwright else None),
        ):
            if closer is None:
                continue
            try:
                closer()
            except PlaywrightError as e:
                logger.warning("browser_close_failed", component=name, error=str(e))

        was_open = self._playwright is not None
        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None
        if was_open:
            logger.info("browser_closed")

    def _require_page(self):
        if self._page is None:
            raise BrowserError("Browser page is not started")
        return self._page


def find_cookie(cookies: List[Dict[str, Any]], name: str) -> Optional[Dict[str, Any]]:
    """Return the first cookie called ``name``, if any."""
    for cookie in cookies:
        if cookie.get("name") == name:
            return cookie
    return None
