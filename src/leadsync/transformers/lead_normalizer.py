"""
Lead Record Filter & Normalizer

Decides which raw lead records are forwarded and coerces them into
``NormalizedRecord`` instances.
"""
from typing import Any, Iterable, List, Mapping, Union

from src.leadsync.models.lead import NormalizedRecord, RawLeadRecord, is_sortable_timestamp
from src.leadsync.models.session import SyncMode
from src.leadsync.utils.logger import get_logger

logger = get_logger(__name__)

# output field -> portal field
FIELD_MAP = {
    "recent_site_visit_date": "recent_date",
    "name": "first_name",
    "contact": "contact",
    "lead_source": "lead_source",
    "lead_sub_source": "lead_sub_source",
    "lead_stage": "lead_stage",
    "lead_number": "lead_number",
    "created_at": "created_at",
    "updated_at": "updated_at",
}

RecordLike = Union[RawLeadRecord, NormalizedRecord, Mapping[str, Any]]


def normalize_value(value: Any) -> str:
    """
    Coerce a single field value to a trimmed string.

    None, mappings and sequences become an empty string.
    """
    if value is None:
        return ""
    if isinstance(value, (dict, list, tuple, set)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if not isinstance(value, (str, int, float)):
        return ""
    return str(value).strip()


def _get(record: RecordLike, key: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def normalize(record: RecordLike) -> NormalizedRecord:
    """
    Build a ``NormalizedRecord`` from a raw record.

    Already-normalized records are re-normalized field by field, so the
    operation is idempotent.
    """
    if isinstance(record, NormalizedRecord):
        return NormalizedRecord(**{field: normalize_value(getattr(record, field)) for field in FIELD_MAP})
    return NormalizedRecord(
        **{field: normalize_value(_get(record, source)) for field, source in FIELD_MAP.items()}
    )


def include(record: RecordLike, mode: SyncMode) -> bool:
    """
    Inclusion policy.

    Backfill keeps everything. Incremental keeps a record only when its
    ``created_at`` is well-formed and strictly greater than the watermark.
    """
    if mode.is_backfill:
        return True

    created_at = normalize_value(_get(record, "created_at"))
    if not is_sortable_timestamp(created_at):
        logger.warning("record_timestamp_malformed", created_at=created_at)
        return False
    return created_at > mode.watermark


def filter_records(records: Iterable[RecordLike], mode: SyncMode) -> List[NormalizedRecord]:
    """Apply ``include`` then ``normalize`` to every record, preserving order."""
    kept: List[NormalizedRecord] = []
    seen = 0
    for record in records:
        seen += 1
        if include(record, mode):
            kept.append(normalize(record))

    logger.info("records_filtered", seen=seen, kept=len(kept), mode=mode.label)
    return kept
