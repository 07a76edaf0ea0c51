"""
Lead Data Models

Pydantic models for lead list responses, normalized lead records and the
webhook batch envelope.
"""
import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Fixed-width, zero-padded: string order equals chronological order.
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")
EPOCH_WATERMARK = "1970-01-01 00:00:00"


def is_sortable_timestamp(value: Any) -> bool:
    """Check that a value is a ``YYYY-MM-DD HH:MM:SS`` string."""
    return isinstance(value, str) and bool(TIMESTAMP_PATTERN.match(value))


class RawLeadRecord(BaseModel):
    """
    Lead record as returned by the portal lead list endpoint.

    Values are untrusted and heterogeneous, so every known field accepts
    anything and unknown fields are kept.
    """

    model_config = ConfigDict(extra="allow")

    recent_date: Any = None
    first_name: Any = None
    contact: Any = None
    lead_source: Any = None
    lead_sub_source: Any = None
    lead_stage: Any = None
    lead_number: Any = None
    created_at: Any = None
    updated_at: Any = None


class LeadListPage(BaseModel):
    """
    One page of the ``/leadList`` response.

    Attributes:
        data: Records keyed by arbitrary ids (order not guaranteed)
        next_page_url: Present and non-empty when another page exists
    """

    model_config = ConfigDict(extra="ignore")

    data: Dict[str, RawLeadRecord] = Field(default_factory=dict)
    next_page_url: Optional[str] = None

    @field_validator("data", mode="before")
    @classmethod
    def coerce_data(cls, v: Any) -> Any:
        """Treat a null collection as empty and index a plain list by position."""
        if v is None:
            return {}
        if isinstance(v, list):
            return {str(idx): item for idx, item in enumerate(v)}
        return v

    def records(self) -> List[RawLeadRecord]:
        return list(self.data.values())

    @property
    def has_next_page(self) -> bool:
        return bool(self.next_page_url)


class NormalizedRecord(BaseModel):
    """
    Canonical lead record forwarded to the webhook.

    Every field is always present and always a string.
    """

    recent_site_visit_date: str = ""
    name: str = ""
    contact: str = ""
    lead_source: str = ""
    lead_sub_source: str = ""
    lead_stage: str = ""
    lead_number: str = ""
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> Dict[str, str]:
        return self.model_dump()


class BatchMeta(BaseModel):
    """Metadata envelope sent alongside the records."""

    source: str
    project_id: int
    mode: str
    total_records: int = Field(..., ge=0)


class SyncBatch(BaseModel):
    """All records accumulated in one run plus their metadata envelope."""

    meta: BatchMeta
    records: List[NormalizedRecord] = Field(default_factory=list)

    @classmethod
    def build(
        cls,
        records: List[NormalizedRecord],
        source: str,
        project_id: int,
        mode: str,
    ) -> "SyncBatch":
        meta = BatchMeta(
            source=source,
            project_id=project_id,
            mode=mode,
            total_records=len(records),
        )
        return cls(meta=meta, records=list(records))

    def is_empty(self) -> bool:
        return not self.records

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the webhook JSON body."""
        return self.model_dump()
