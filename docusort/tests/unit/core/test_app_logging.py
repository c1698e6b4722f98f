"""Unit tests for the JSON log formatter."""
import json
import logging

from docusort.app_logging import JsonFormatter, configure_logging


def _record(**extra):
    record = logging.makeLogRecord({"name": "docusort.test", "levelname": "WARNING", "levelno": logging.WARNING, "msg": "page %s failed", "args": ("p-1",)})
    record.__dict__.update(extra)
    return record


def test_formats_core_fields():
    payload = json.loads(JsonFormatter().format(_record()))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "docusort.test"
    assert payload["message"] == "page p-1 failed"
    assert payload["ts"].endswith("Z")
    assert "args" not in payload
    assert "lineno" not in payload


def test_includes_extra_fields():
    payload = json.loads(JsonFormatter().format(_record(page_id="p-1", attempt=1, details=["a"])))

    assert payload["page_id"] == "p-1"
    assert payload["attempt"] == 1
    assert payload["details"] == "['a']"


def test_configure_logging_text_mode(monkeypatch):
    monkeypatch.setenv("LOG_FORMAT", "text")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    root = logging.getLogger()
    previous = list(root.handlers), root.level
    try:
        configure_logging()

        (handler,) = root.handlers
        assert not isinstance(handler.formatter, JsonFormatter)
        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in previous[0]:
            root.addHandler(handler)
        root.setLevel(previous[1])
