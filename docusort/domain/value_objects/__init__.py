"""
Domain Value Objects

Immutable value objects that encapsulate domain concepts with validation.
"""
from .document_category import DocumentCategory
from .classification import ClassificationResult, PageClassification
from .export_mode import ExportMode
from .session_status import Progress, SessionState, SessionStatus

__all__ = [
    'ClassificationResult',
    'DocumentCategory',
    'ExportMode',
    'PageClassification',
    'Progress',
    'SessionState',
    'SessionStatus',
]
