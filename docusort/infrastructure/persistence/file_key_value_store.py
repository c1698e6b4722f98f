"""File-based implementation of KeyValueStore: one JSON document per key."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

from docusort.domain.exceptions import RepositoryError
from docusort.domain.repositories.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileKeyValueStore(KeyValueStore):
    """Persist values as ``<base_dir>/<key>.json``."""

    def __init__(self, base_dir: str | Path = "docusort_data") -> None:
        self.base_dir = Path(base_dir)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def open(self) -> None:
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise RepositoryError(f"Failed to create storage directory {self.base_dir}", exc)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def get(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise RepositoryError(f"Stored value for {key} is not valid JSON", exc)
        except OSError as exc:
            raise RepositoryError(f"Failed to read {key}", exc)

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")

        try:
            tmp_path.write_text(json.dumps(value, indent=2), encoding="utf-8")
            tmp_path.replace(path)
            logger.debug("Saved %s", key)
        except (OSError, TypeError, ValueError) as exc:
            raise RepositoryError(f"Failed to save {key}", exc)
        finally:
            if tmp_path.exists():
                tmp_path.unlink(missing_ok=True)

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        try:
            path.unlink()
            return True
        except OSError as exc:
            raise RepositoryError(f"Failed to delete {key}", exc)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise RepositoryError(f"Invalid storage key: {key!r}")
        return self.base_dir / f"{key}.json"
