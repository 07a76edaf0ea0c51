"""
Cursor Store

Persists the single watermark (newest ``created_at`` already delivered) as a
small JSON document: ``{"last_created_at": "YYYY-MM-DD HH:MM:SS"}``.
"""
import json
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional, Union

from config.settings import settings
from src.leadsync.errors import CursorStateError
from src.leadsync.models.lead import EPOCH_WATERMARK, NormalizedRecord, is_sortable_timestamp
from src.leadsync.utils.logger import get_logger

logger = get_logger(__name__)

CURSOR_KEY = "last_created_at"


class CursorStore:
    """
    File-backed watermark storage.

    A missing file (or a file without a watermark) reads as the epoch
    sentinel, which selects backfill mode. Malformed content is fatal.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path or settings.cursor_path)

    def load(self) -> str:
        """
        Read the persisted watermark.

        Returns:
            Stored watermark, or ``EPOCH_WATERMARK`` when none is stored

        Raises:
            CursorStateError: If the file cannot be read or parsed
        """
        if not self.path.exists():
            logger.info("cursor_not_found", path=str(self.path))
            return EPOCH_WATERMARK

        try:
            with self.path.open("r", encoding="utf-8") as f:
                state = json.load(f)
        except (OSError, ValueError) as e:
            raise CursorStateError(f"Cannot read cursor file {self.path}: {e}") from e

        if not isinstance(state, dict):
            raise CursorStateError(f"Cursor file {self.path} must contain a JSON object")

        watermark = state.get(CURSOR_KEY)
        if not watermark:
            logger.info("cursor_empty", path=str(self.path))
            return EPOCH_WATERMARK

        if not is_sortable_timestamp(watermark):
            raise CursorStateError(
                f"Cursor value {watermark!r} in {self.path} is not YYYY-MM-DD HH:MM:SS"
            )

        logger.info("cursor_loaded", path=str(self.path), last_created_at=watermark)
        return watermark

    def commit(self, watermark: str) -> None:
        """
        Replace the persisted watermark.

        The new document is written to a temporary file in the same directory
        and moved into place, so a failed write leaves the old value intact.
        """
        if not is_sortable_timestamp(watermark):
            raise ValueError(f"Refusing to persist malformed watermark {watermark!r}")

        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump({CURSOR_KEY: watermark}, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.info("cursor_committed", path=str(self.path), last_created_at=watermark)


def next_watermark(records: Iterable[NormalizedRecord], current: str = EPOCH_WATERMARK) -> str:
    """
    Compute the watermark to commit after a successful delivery.

    Args:
        records: Delivered records (must be non-empty)
        current: Watermark the run started from

    Returns:
        Greatest well-formed ``created_at`` in the batch, never below ``current``
    """
    records = list(records)
    if not records:
        raise ValueError("next_watermark requires a non-empty batch")

    candidates = [r.created_at for r in records if is_sortable_timestamp(r.created_at)]
    skipped = len(records) - len(candidates)
    if skipped:
        logger.warning("watermark_candidates_skipped", skipped=skipped)

    if not candidates:
        return current
    return max(max(candidates), current)
