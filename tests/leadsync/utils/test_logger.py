"""
Tests for the log context processor.
"""
from unittest.mock import patch

import pytest

from src.leadsync.utils.logger import add_sync_context


@pytest.fixture
def mock_settings():
    with patch("src.leadsync.utils.logger.settings") as mock:
        mock.environment = "production"
        mock.portal_project_id = 21
        mock.source_tag = "project_21_portal"
        yield mock


class TestAddSyncContext:
    """Tests for add_sync_context."""

    def test_adds_project_fields(self, mock_settings):
        event = add_sync_context(None, "info", {"event": "batch_delivered"})

        assert event == {
            "event": "batch_delivered",
            "environment": "production",
            "project_id": 21,
            "source": "project_21_portal",
        }

    def test_keeps_explicit_values(self, mock_settings):
        event = add_sync_context(None, "info", {"event": "fetching_window", "project_id": 34})

        assert event["project_id"] == 34
        assert event["source"] == "project_21_portal"
