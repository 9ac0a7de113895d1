"""测试：configure_logging（text / json 两种格式）"""

import json
import logging

import pytest

from planpilot.config import Settings
from planpilot.logging_config import configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


def _installed(root: logging.Logger) -> list[logging.Handler]:
    return [handler for handler in root.handlers if handler.get_name() == "planpilot"]


class TestConfigureLogging:
    def test_json_format_emits_one_object_per_line(self, restore_root_logger, capsys):
        configure_logging(Settings(log_format="json", log_level="INFO"))

        logging.getLogger("planpilot.test").info("Step %d started", 1)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "Step 1 started"
        assert payload["level"] == "info"
        assert payload["logger"] == "planpilot.test"
        assert "timestamp" in payload

    def test_json_format_includes_exception(self, restore_root_logger, capsys):
        configure_logging(Settings(log_format="json", log_level="INFO"))

        try:
            raise RuntimeError("database went away")
        except RuntimeError:
            logging.getLogger("planpilot.test").exception("Phase failed")

        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "Phase failed"
        assert "RuntimeError: database went away" in payload["exception"]

    def test_text_format(self, restore_root_logger, capsys):
        configure_logging(Settings(log_format="text", log_level="WARNING"))

        logger = logging.getLogger("planpilot.test")
        logger.info("hidden")
        logger.warning("visible")

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "planpilot.test - WARNING - visible" in err

    def test_reconfigure_replaces_handler(self, restore_root_logger):
        configure_logging(Settings(log_format="text"))
        configure_logging(Settings(log_format="json"))

        assert len(_installed(restore_root_logger)) == 1
