"""
Portal Session Authenticator

Logs into the lead portal through a browser driver and extracts the session
and anti-forgery tokens needed by the lead list API.
"""
import time
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import unquote

from config.settings import settings
from src.leadsync.auth.browser import BrowserDriver, BrowserError, find_cookie
from src.leadsync.errors import AuthenticationError
from src.leadsync.models.session import AuthSession, PortalCredentials
from src.leadsync.utils.logger import get_logger
from src.leadsync.utils.polling import PollingTimeoutError, await_condition

logger = get_logger(__name__)


class PortalAuthenticator:
    """
    Establishes an authenticated portal session.

    The browser stays open after ``authenticate`` returns; the caller owns
    and closes it.
    """

    def __init__(
        self,
        browser: BrowserDriver,
        base_url: Optional[str] = None,
        session_cookie_name: Optional[str] = None,
        xsrf_cookie_name: Optional[str] = None,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
        settle_seconds: Optional[float] = None,
        email_selector: Optional[str] = None,
        password_selector: Optional[str] = None,
        submit_selector: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            browser: Driver exposing navigate/fill/click/cookie access
            base_url: Portal root URL (login page)
            session_cookie_name: Cookie that signals a completed login
            xsrf_cookie_name: Anti-forgery cookie (URL-encoded)
            timeout: Seconds allowed for the form and for the session cookie
            poll_interval: Seconds between cookie checks
            settle_seconds: Pause between filling the form and submitting it
            email_selector: Login form email input
            password_selector: Login form password input; its presence marks the form ready
            submit_selector: Login form submit control
            clock: Monotonic time source
            sleep: Sleep function
        """
        self.browser = browser
        self.base_url = (base_url or settings.portal_base_url).rstrip("/")
        self.session_cookie_name = session_cookie_name or settings.session_cookie_name
        self.xsrf_cookie_name = xsrf_cookie_name or settings.xsrf_cookie_name
        self.timeout = timeout if timeout is not None else settings.auth_timeout_seconds
        self.poll_interval = poll_interval if poll_interval is not None else settings.auth_poll_interval_seconds
        self.settle_seconds = settle_seconds if settle_seconds is not None else settings.login_settle_seconds
        self.email_selector = email_selector or settings.login_email_selector
        self.password_selector = password_selector or settings.login_password_selector
        self.submit_selector = submit_selector or settings.login_submit_selector
        self.clock = clock
        self.sleep = sleep

    def authenticate(self, credentials: PortalCredentials) -> AuthSession:
        """
        Submit the login form and wait for the session cookie.

        Raises:
            AuthenticationError: If the form or the session cookie does not
                appear within ``timeout``
        """
        self._submit_login(credentials)

        try:
            cookies = await_condition(
                self._session_cookies,
                interval=self.poll_interval,
                timeout=self.timeout,
                clock=self.clock,
                sleep=self.sleep,
            )
        except PollingTimeoutError as e:
            logger.error("session_cookie_not_detected", cookie=self.session_cookie_name, timeout=self.timeout)
            raise AuthenticationError(
                f"Session cookie {self.session_cookie_name!r} not detected within {self.timeout}s"
            ) from e

        session = self._extract_session(cookies)
        logger.info("login_successful", base_url=self.base_url)
        return session

    def _submit_login(self, credentials: PortalCredentials) -> None:
        timeout_ms = int(self.timeout * 1000)
        try:
            self.browser.navigate(f"{self.base_url}/", wait_until="domcontentloaded", timeout_ms=timeout_ms)
            self.browser.wait_for_selector(self.password_selector, timeout_ms=timeout_ms)
            self.browser.fill_field(self.email_selector, credentials.email)
            self.browser.fill_field(self.password_selector, credentials.password.get_secret_value())
            if self.settle_seconds > 0:
                self.sleep(self.settle_seconds)
            self.browser.click(self.submit_selector)
        except BrowserError as e:
            logger.error("login_form_failed", error=str(e))
            raise AuthenticationError(f"Login form did not become interactive: {e}") from e

        logger.info("login_submitted", base_url=self.base_url)

    def _session_cookies(self) -> Optional[List[Dict[str, Any]]]:
        try:
            cookies = self.browser.read_cookies()
        except BrowserError as e:
            raise AuthenticationError(f"Could not read browser cookies: {e}") from e
        if find_cookie(cookies, self.session_cookie_name):
            return cookies
        return None

    def _extract_session(self, cookies: List[Dict[str, Any]]) -> AuthSession:
        session_cookie = find_cookie(cookies, self.session_cookie_name)
        xsrf_cookie = find_cookie(cookies, self.xsrf_cookie_name)
        if xsrf_cookie is None or not xsrf_cookie.get("value"):
            raise AuthenticationError(f"Anti-forgery cookie {self.xsrf_cookie_name!r} missing after login")

        return AuthSession(
            xsrf_token=unquote(xsrf_cookie["value"]),
            session_token=session_cookie["value"],
        )
