"""
Tests for the portal session authenticator.
"""
import pytest

from src.leadsync.auth.browser import BrowserError, find_cookie
from src.leadsync.auth.portal_authenticator import PortalAuthenticator
from src.leadsync.errors import AuthenticationError
from src.leadsync.models.session import AuthSession, PortalCredentials

LOGGED_IN_COOKIES = [
    {"name": "XSRF-TOKEN", "value": "eyJpdiI6Ik1%3D%3D"},
    {"name": "sv_forms_session", "value": "session-abc"},
]


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class FakeBrowser:
    """Records driver calls and serves a scripted cookie jar sequence."""

    def __init__(self, cookie_jars=None, fail_on=None):
        self.cookie_jars = cookie_jars or [[]]
        self.fail_on = fail_on
        self.calls = []
        self.cookie_reads = 0

    def _record(self, action, *args):
        self.calls.append((action,) + args)
        if self.fail_on == action:
            raise BrowserError(f"{action} failed")

    def navigate(self, url, wait_until="domcontentloaded", timeout_ms=60_000):
        self._record("navigate", url, wait_until)

    def wait_for_selector(self, selector, timeout_ms=60_000):
        self._record("wait_for_selector", selector)

    def fill_field(self, selector, value):
        self._record("fill_field", selector, value)

    def click(self, selector):
        self._record("click", selector)

    def read_cookies(self):
        jar = self.cookie_jars[min(self.cookie_reads, len(self.cookie_jars) - 1)]
        self.cookie_reads += 1
        return jar

    def close(self):
        pass


@pytest.fixture
def credentials():
    return PortalCredentials(email="ops@example.com", password="s3cret")


def make_authenticator(browser, clock):
    return PortalAuthenticator(
        browser,
        base_url="https://portal.example.com",
        session_cookie_name="sv_forms_session",
        xsrf_cookie_name="XSRF-TOKEN",
        timeout=60,
        poll_interval=0.5,
        settle_seconds=2,
        clock=clock,
        sleep=clock.sleep,
    )


class TestPortalAuthenticator:
    """Tests for PortalAuthenticator.authenticate."""

    def test_successful_login(self, credentials):
        clock = FakeClock()
        browser = FakeBrowser(cookie_jars=[[], [{"name": "XSRF-TOKEN", "value": "x"}], LOGGED_IN_COOKIES])

        session = make_authenticator(browser, clock).authenticate(credentials)

        assert session == AuthSession(xsrf_token="eyJpdiI6Ik1==", session_token="session-abc")
        assert browser.cookie_reads == 3
        assert clock.sleeps == [2, 0.5, 0.5]

    def test_submits_login_form(self, credentials):
        clock = FakeClock()
        browser = FakeBrowser(cookie_jars=[LOGGED_IN_COOKIES])

        make_authenticator(browser, clock).authenticate(credentials)

        assert browser.calls == [
            ("navigate", "https://portal.example.com/", "domcontentloaded"),
            ("wait_for_selector", 'input[type="password"]'),
            ("fill_field", 'input[type="email"], input[name="email"]', "ops@example.com"),
            ("fill_field", 'input[type="password"]', "s3cret"),
            ("click", "button"),
        ]

    def test_custom_form_selectors(self, credentials):
        clock = FakeClock()
        browser = FakeBrowser(cookie_jars=[[
            {"name": "OTHER-XSRF", "value": "tok%3D"},
            {"name": "other_session", "value": "sess"},
        ]])
        authenticator = PortalAuthenticator(
            browser,
            base_url="https://portal.example.com",
            session_cookie_name="other_session",
            xsrf_cookie_name="OTHER-XSRF",
            settle_seconds=0,
            email_selector="#email",
            password_selector="#password",
            submit_selector="#submit",
            clock=clock,
            sleep=clock.sleep,
        )

        session = authenticator.authenticate(credentials)

        assert session == AuthSession(xsrf_token="tok=", session_token="sess")
        assert browser.calls[1:] == [
            ("wait_for_selector", "#password"),
            ("fill_field", "#email", "ops@example.com"),
            ("fill_field", "#password", "s3cret"),
            ("click", "#submit"),
        ]

    def test_session_cookie_timeout(self, credentials):
        clock = FakeClock()
        browser = FakeBrowser(cookie_jars=[[{"name": "XSRF-TOKEN", "value": "x"}]])

        with pytest.raises(AuthenticationError, match="sv_forms_session"):
            make_authenticator(browser, clock).authenticate(credentials)

        assert browser.cookie_reads == 120

    def test_login_form_never_interactive(self, credentials):
        clock = FakeClock()
        browser = FakeBrowser(fail_on="wait_for_selector")

        with pytest.raises(AuthenticationError):
            make_authenticator(browser, clock).authenticate(credentials)

        assert not any(call[0] == "click" for call in browser.calls)
        assert browser.cookie_reads == 0

    def test_navigation_failure(self, credentials):
        clock = FakeClock()
        browser = FakeBrowser(fail_on="navigate")

        with pytest.raises(AuthenticationError):
            make_authenticator(browser, clock).authenticate(credentials)

    def test_missing_xsrf_cookie(self, credentials):
        clock = FakeClock()
        browser = FakeBrowser(cookie_jars=[[{"name": "sv_forms_session", "value": "session-abc"}]])

        with pytest.raises(AuthenticationError, match="XSRF-TOKEN"):
            make_authenticator(browser, clock).authenticate(credentials)


def test_find_cookie():
    assert find_cookie(LOGGED_IN_COOKIES, "sv_forms_session")["value"] == "session-abc"
    assert find_cookie(LOGGED_IN_COOKIES, "missing") is None
