"""Domain exceptions."""
from __future__ import annotations

from typing import Optional


class DomainException(Exception):
    """Base exception for domain layer errors."""
    pass


class DomainValidationError(DomainException):
    """Exception raised when validation fails at the domain boundary."""

    def __init__(self, message: str):
        super().__init__(message)


class RepositoryError(DomainException):
    """Exception raised when repository operations fail."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class EntityNotFoundError(RepositoryError):
    """Exception raised when an entity is not found in the repository."""

    def __init__(self, entity_type: str, entity_id: str, *, message: str | None = None):
        final_message = message or f"{entity_type} not found: {entity_id}"
        super().__init__(final_message)
        self.entity_type = entity_type
        self.entity_id = entity_id


class IngestionError(DomainException):
    """A source document could not be opened or one of its pages rendered.

    Fatal to the whole ingestion call; no page of the batch is kept.
    """

    def __init__(self, message: str, *, document_name: str | None = None, cause: Optional[Exception] = None):
        super().__init__(message)
        self.document_name = document_name
        self.cause = cause


class ClassificationError(DomainException):
    """The classifier failed or answered with something unusable for one page."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class ExportError(DomainException):
    """Producing an export artifact failed; nothing is delivered."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause
