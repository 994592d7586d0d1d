# File: tests/test_logger.py
import logging
from logging.handlers import RotatingFileHandler

from axe_scout.logger import LOGGER_NAME, configure, init_logging


def test_log_file_receives_messages(tmp_path):
    log_file = tmp_path / "logs" / "axe-scout.log"
    lg = configure(level="debug", log_file=log_file, log_format="%(levelname)s %(message)s")
    try:
        lg.debug("Visiting %s", "/contact")
        for handler in lg.handlers:
            handler.flush()
        assert log_file.read_text(encoding="utf-8").strip() == "DEBUG Visiting /contact"
        assert any(isinstance(h, RotatingFileHandler) for h in lg.handlers)
    finally:
        init_logging()


def test_reconfigure_replaces_handlers():
    init_logging(level=logging.WARNING)
    lg = init_logging(level="INFO")

    assert lg is logging.getLogger(LOGGER_NAME)
    assert len(lg.handlers) == 1
    assert lg.level == logging.INFO
    assert lg.propagate is False
