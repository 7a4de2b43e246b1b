import logging
import os

import pytest

from marketplace.logging_config import setup_logging


pytestmark = pytest.mark.unit


def test_setup_logging_writes_to_rotating_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        log_file = setup_logging(log_dir=str(tmp_path / "logs"), level="debug")
        logging.getLogger("marketplace.test").debug("hello from test")
        for handler in root.handlers:
            handler.flush()

        assert os.path.exists(log_file)
        assert root.level == logging.DEBUG
        with open(log_file) as fh:
            content = fh.read()
        assert "marketplace.test - DEBUG - hello from test" in content
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
