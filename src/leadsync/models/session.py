"""
Run-scoped Models

Credentials, authenticated session, date windows, sync mode and the context
threaded through a single sync run. None of these are persisted.
"""
from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Union

from pydantic import BaseModel, SecretStr

from src.leadsync.models.lead import EPOCH_WATERMARK, is_sortable_timestamp


class PortalCredentials(BaseModel):
    """Portal login credentials."""

    email: str
    password: SecretStr


@dataclass(frozen=True)
class AuthSession:
    """
    Tokens extracted from the authenticated browser context.

    Attributes:
        xsrf_token: URL-decoded anti-forgery token
        session_token: Session cookie value
    """

    xsrf_token: str
    session_token: str

    def __repr__(self) -> str:
        return "AuthSession(xsrf_token=***, session_token=***)"


@dataclass(frozen=True)
class DateWindow:
    """Calendar-month date range used to scope lead list queries."""

    start: date
    end: date

    def to_filter_string(self) -> str:
        """Portal ``dateFilter`` format: ``MM/DD/YYYY - MM/DD/YYYY``."""
        return f"{self.start:%m/%d/%Y} - {self.end:%m/%d/%Y}"

    def __str__(self) -> str:
        return self.to_filter_string()


@dataclass(frozen=True)
class Backfill:
    """First run: every extracted record is forwarded."""

    label: ClassVar[str] = "6_month_backfill"
    is_backfill: ClassVar[bool] = True

    @property
    def watermark(self) -> str:
        return EPOCH_WATERMARK


@dataclass(frozen=True)
class Incremental:
    """Recurring run: only records newer than ``watermark`` are forwarded."""

    watermark: str

    label: ClassVar[str] = "2_hour_incremental"
    is_backfill: ClassVar[bool] = False

    def __post_init__(self):
        if not is_sortable_timestamp(self.watermark):
            raise ValueError(f"Watermark must be YYYY-MM-DD HH:MM:SS, got {self.watermark!r}")


SyncMode = Union[Backfill, Incremental]


def mode_for_watermark(watermark: str) -> SyncMode:
    """Decide the run mode once, from the persisted watermark."""
    if watermark == EPOCH_WATERMARK:
        return Backfill()
    return Incremental(watermark=watermark)


@dataclass(frozen=True)
class SyncContext:
    """Everything a run's components need, built once after login."""

    mode: SyncMode
    session: AuthSession
    project_id: int

    @property
    def watermark(self) -> str:
        return self.mode.watermark

    @property
    def is_backfill(self) -> bool:
        return self.mode.is_backfill
