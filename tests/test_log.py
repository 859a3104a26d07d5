import json
import logging

from passpolicy.utils.log import JsonFormatter, configure, get_logger


def test_json_formatter_basic_and_extra():
    class CapHandler(logging.Handler):
        def __init__(self):
            super().__init__(level=0)
            self.last = None
            self._formatter = JsonFormatter()

        def emit(self, record: logging.LogRecord) -> None:
            self.last = self._formatter.format(record)

    logger = logging.getLogger("t-json")
    cap = CapHandler()
    logger.handlers = [cap]
    logger.setLevel(logging.INFO)

    logger.info("checked candidate", extra={"passed": False, "violations": ["TooShort"]})
    payload = json.loads(cap.last)
    assert payload["message"] == "checked candidate"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "t-json"
    assert payload["passed"] is False
    assert payload["violations"] == ["TooShort"]
    assert payload["time"].endswith("+00:00")
    assert "msg" not in payload
    assert "args" not in payload


def test_get_logger_idempotent_and_plain_mode():
    lg1 = get_logger("pp-test", level="DEBUG", structured_json=True)
    lg2 = get_logger("pp-test", level="INFO", structured_json=True)
    assert lg1 is lg2
    assert lg1.level == logging.DEBUG
    lg3 = get_logger("pp-plain", level="INFO", structured_json=False)
    assert not isinstance(lg3.handlers[0].formatter, JsonFormatter)


def test_configure_replaces_handlers():
    configure(level="DEBUG", structured_json=False)
    logger = configure(level="WARNING", structured_json=True)
    assert logger.name == "passpolicy"
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, JsonFormatter)
    assert logger.level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    logger = get_logger("pp-badlevel", level="chatty")
    assert logger.level == logging.INFO


def test_module_loggers_reach_package_handler():
    logger = configure(level="INFO", structured_json=True)
    records = []

    class ListHandler(logging.Handler):
        def emit(self, record):
            records.append(record)

    logger.addHandler(ListHandler())
    logging.getLogger("passpolicy.core.settings").warning("clamped policy setting")
    assert [r.getMessage() for r in records] == ["clamped policy setting"]
