"""Unit tests for the shared utility helpers."""
import logging
import sys

import pandas as pd
import pytest

from finsentiment.utils.utils import (LOG_FORMAT, compute_data_hash, load_joblib,
                                      save_joblib, setup_logging)


class TestSetupLogging:
    """Tests for logger configuration."""

    def test_console_handler_added_once(self):
        logger = setup_logging('finsentiment_test_console')
        setup_logging('finsentiment_test_console')
        console = [h for h in logger.handlers
                   if isinstance(h, logging.StreamHandler) and h.stream is sys.stdout]
        assert len(console) == 1
        assert console[0].formatter._fmt == LOG_FORMAT

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logging('finsentiment_test_file', str(log_file))
        logger.info("scoring started")
        for handler in logger.handlers:
            handler.flush()
        assert "scoring started" in log_file.read_text()
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)


class TestJoblib:
    """Tests for object persistence."""

    def test_round_trip_creates_directories(self, tmp_path):
        path = tmp_path / "nested" / "obj.joblib"
        save_joblib({'labels': [-1, 0, 1]}, str(path))
        assert load_joblib(str(path)) == {'labels': [-1, 0, 1]}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_joblib(str(tmp_path / "missing.joblib"))


class TestComputeDataHash:
    """Tests for corpus fingerprints."""

    def test_stable(self):
        df = pd.DataFrame({'text': ['Profit rose.', 'Sales fell.'], 'sentiment': [1, -1]})
        assert compute_data_hash(df) == compute_data_hash(df.copy())
        assert len(compute_data_hash(df)) == 10

    def test_content_sensitive(self):
        df = pd.DataFrame({'text': ['Profit rose.', 'Sales fell.'], 'sentiment': [1, -1]})
        changed = df.copy()
        changed.loc[1, 'sentiment'] = 0
        assert compute_data_hash(df) != compute_data_hash(changed)
