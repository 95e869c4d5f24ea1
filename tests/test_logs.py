"""
Unit tests for codemap.logs
"""

from __future__ import annotations

import logging

import pytest

from codemap.logs import setup_logger


@pytest.fixture
def restore_handlers():
    logger = logging.getLogger("codemap")
    before = list(logger.handlers)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        if handler not in before:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


class TestSetupLogger:
    def test_writes_to_timestamped_file(self, tmp_path, restore_handlers):
        logger = setup_logger(str(tmp_path / "logs"))
        logging.getLogger("codemap.scanner").info("scan finished")
        for handler in logger.handlers:
            handler.flush()
        (log_file,) = (tmp_path / "logs").glob("codemap_*.log")
        assert "[INFO] codemap.scanner: scan finished" in log_file.read_text(encoding="utf-8")

    def test_same_directory_reuses_handler(self, tmp_path, restore_handlers):
        logger = setup_logger(str(tmp_path / "logs"))
        count = len(logger.handlers)
        setup_logger(str(tmp_path / "logs"))
        assert len(logger.handlers) == count
