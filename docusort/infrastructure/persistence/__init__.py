"""Persistence adapters."""

from .file_key_value_store import FileKeyValueStore

__all__ = ["FileKeyValueStore"]
