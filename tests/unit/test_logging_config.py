"""
Unit tests for logging setup.
"""

import logging

import pytest

from more_like_this.logging_config import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    
    def test_console_and_file_handlers(self, tmp_path, restore_root_logger):
        session_log = setup_logging(log_file=str(tmp_path / "logs" / "mlt.log"))
        
        assert session_log.exists()
        assert session_log.name.startswith("mlt_")
        assert len(logging.getLogger().handlers) == 2
    
    def test_console_only(self, restore_root_logger):
        assert setup_logging(log_file=None) is None
        assert len(logging.getLogger().handlers) == 1
    
    def test_old_session_logs_cleaned_up(self, tmp_path, restore_root_logger):
        for day in range(1, 8):
            (tmp_path / f"mlt_2020010{day}_000000.log").write_text("old")
        
        setup_logging(log_file=str(tmp_path / "mlt.log"), keep_sessions=5)
        
        assert len(list(tmp_path.glob("mlt_*.log"))) == 5
