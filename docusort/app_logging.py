from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Optional

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Attributes every LogRecord carries; only ``extra=`` keys are emitted.
_RESERVED_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

_QUIET_LOGGERS = {
  "uvicorn.access": logging.WARNING,
  "openai": logging.INFO,
  "httpx": logging.WARNING,
  "azure.core": logging.WARNING,
  "azure.identity": logging.WARNING,
}


class JsonFormatter(logging.Formatter):
  """One JSON object per line: timestamp, level, logger, message and any ``extra`` fields.

  Extra values that are not JSON scalars are rendered with ``str``.
  """

  def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
    created = datetime.fromtimestamp(record.created, tz=timezone.utc)
    payload: dict[str, Any] = {
      "ts": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
      "level": record.levelname,
      "logger": record.name,
      "message": record.getMessage(),
    }
    if record.exc_info:
      payload["exc_info"] = self.formatException(record.exc_info)
    payload.update(_extra_fields(record, skip=payload.keys()))
    return json.dumps(payload, ensure_ascii=False)


def _extra_fields(record: logging.LogRecord, *, skip) -> dict[str, Any]:
  fields: dict[str, Any] = {}
  for key, value in record.__dict__.items():
    if key.startswith("_") or key in _RESERVED_ATTRS or key in skip:
      continue
    if isinstance(value, (str, int, float, bool)) or value is None:
      fields[key] = value
    else:
      fields[key] = str(value)
  return fields


def _log_level() -> str:
  return os.getenv("LOG_LEVEL", "INFO").upper()


def _structured_from_env() -> bool:
  return os.getenv("LOG_FORMAT", "json").strip().lower() != "text"


def configure_logging(structured: Optional[bool] = None) -> None:
  """Route the root logger to stdout.

  ``structured=None`` reads ``LOG_FORMAT`` (``json`` by default, or ``text``).
  """
  if structured is None:
    structured = _structured_from_env()

  root = logging.getLogger()
  for handler in list(root.handlers):
    root.removeHandler(handler)

  root.setLevel(_log_level())
  stream_handler = logging.StreamHandler(sys.stdout)
  stream_handler.setFormatter(JsonFormatter() if structured else logging.Formatter(TEXT_FORMAT))
  root.addHandler(stream_handler)

  for name, level in _QUIET_LOGGERS.items():
    logging.getLogger(name).setLevel(level)
