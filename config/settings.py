"""
Configuration Settings

Centralized configuration management using Pydantic and environment variables.
"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All sensitive values should be stored in .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Portal credentials (required for a sync run)
    portal_email: Optional[str] = None
    portal_password: Optional[str] = None

    # Downstream webhook (required for a sync run)
    viasocket_webhook: Optional[str] = None

    # Portal settings
    portal_base_url: str = "https://svform.urbanriseprojects.in"
    portal_project_id: int = 21
    portal_source_tag: Optional[str] = None
    session_cookie_name: str = "sv_forms_session"
    xsrf_cookie_name: str = "XSRF-TOKEN"

    # Login form selectors
    login_email_selector: str = 'input[type="email"], input[name="email"]'
    login_password_selector: str = 'input[type="password"]'
    login_submit_selector: str = "button"

    # Sync settings
    cursor_path: str = "cursor.json"
    window_month_count: int = 6

    # Timeouts
    auth_timeout_seconds: float = 60.0
    auth_poll_interval_seconds: float = 0.5
    login_settle_seconds: float = 2.0
    browser_headless: bool = True
    http_timeout_seconds: int = 30

    # Alert settings
    alert_slack_webhook: Optional[str] = None
    alert_enable_slack: bool = False

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "json"

    # Application settings
    environment: str = "development"
    debug: bool = False

    @property
    def source_tag(self) -> str:
        """Source label sent in the webhook meta envelope."""
        return self.portal_source_tag or f"project_{self.portal_project_id}_portal"


# Singleton instance
settings = Settings()
