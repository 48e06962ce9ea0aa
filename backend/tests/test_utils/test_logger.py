"""
Tests for logging configuration.
"""

import json
import logging

import pytest

from jobly.core.config import get_settings
from jobly.utils.logger import configure_logging


@pytest.mark.unit
class TestConfigureLogging:
    """Test the JSON file handler."""

    def test_log_dir_writes_json_lines(self, tmp_path, monkeypatch):
        """Test that LOG_DIR adds a handler writing one JSON object per record."""
        monkeypatch.setenv("LOG_DIR", str(tmp_path))
        get_settings.cache_clear()
        root = logging.getLogger()
        before = list(root.handlers)

        try:
            configure_logging()
            added = [handler for handler in root.handlers if handler not in before]
            assert len(added) == 1

            logging.getLogger("jobly.tests").warning("written to file")
            added[0].flush()

            lines = (tmp_path / "jobly.log").read_text(encoding="utf-8").splitlines()
            record = json.loads(lines[-1])
            assert record["message"] == "written to file"
            assert record["levelname"] == "WARNING"
            assert record["name"] == "jobly.tests"
        finally:
            for handler in root.handlers[:]:
                if handler not in before:
                    root.removeHandler(handler)
                    handler.close()
            monkeypatch.delenv("LOG_DIR")
            get_settings.cache_clear()
