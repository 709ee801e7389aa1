"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from sonar_insight.logging_config import get_logger, resolve_level, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLogging:
    @pytest.mark.parametrize("verbose,quiet,level", [
        (False, False, logging.WARNING),
        (True, False, logging.DEBUG),
        (False, True, logging.ERROR),
        (True, True, logging.ERROR),
    ])
    def test_resolve_level(self, verbose, quiet, level):
        assert resolve_level(verbose, quiet) == level

    def test_setup_replaces_handlers(self):
        setup_logging()
        setup_logging(verbose=True)
        root = logging.getLogger()
        assert len([h for h in root.handlers if isinstance(h, RichHandler)]) == 1
        assert logging.getLogger("sonar_insight").level == logging.DEBUG
        assert logging.getLogger("urllib3").level == logging.INFO

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "run.log"
        setup_logging(log_file=str(log_file))
        get_logger("storage").warning("disk almost full")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "sonar_insight.storage: disk almost full" in log_file.read_text(encoding="utf-8")

    def test_get_logger_names(self):
        assert get_logger().name == "sonar_insight"
        assert get_logger("sonar_insight.diff.engine").name == "sonar_insight.diff.engine"
        assert get_logger("api").name == "sonar_insight.api"
