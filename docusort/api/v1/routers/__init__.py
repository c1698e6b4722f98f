"""API v1 routers package."""

from . import exports, history, pages, uploads

__all__ = [
    "exports",
    "history",
    "pages",
    "uploads",
]
