"""
Run Portal Lead Sync

Runs one sync: a six-month backfill when no cursor is stored, otherwise an
incremental poll from the stored watermark. Exits non-zero on any failure.
"""
import sys
from pathlib import Path

# Add parent directory to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.leadsync.errors import LeadSyncError
from src.leadsync.pipelines.incremental_sync import build_pipeline
from src.leadsync.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> int:
    setup_logging()
    logger.info("lead_sync_started")

    try:
        result = build_pipeline().run()
    except LeadSyncError as e:
        logger.error("sync_failed", error=str(e), error_type=type(e).__name__)
        return 1

    logger.info("lead_sync_complete", **result.to_dict())
    return 0


if __name__ == "__main__":
    sys.exit(main())
