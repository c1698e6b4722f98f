"""
DocumentCategory value object

The closed set of labels a page can carry.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class DocumentCategory(str, Enum):
    """Page categories understood by the classifier and the exporter."""

    KYC = "KYC"
    APPLICATION_FORM = "ApplicationForm"
    PHOTO = "Photo"
    INCOME_CERTIFICATE = "IncomeCertificate"
    CREDIT_SCORE = "CreditScore"
    TAX_RETURN = "TaxReturn"
    LEGAL_DOCUMENT = "LegalDocument"
    OTHER = "Other"

    @classmethod
    def parse(cls, raw: Any) -> Optional["DocumentCategory"]:
        """Return the category matching ``raw`` or ``None``.

        Accepts canonical values in any casing plus the short codes used by
        earlier prompt versions (``AF``, ``IC``, ``CIBIL``, ``TIR``, ``LD``).

        Examples:
            >>> DocumentCategory.parse("cibil")
            <DocumentCategory.CREDIT_SCORE: 'CreditScore'>
            >>> DocumentCategory.parse("Passport") is None
            True
        """
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        token = raw.strip().replace(" ", "").lower()
        if not token:
            return None
        return _LOOKUP.get(token)


_ALIASES = {
    "af": DocumentCategory.APPLICATION_FORM,
    "ic": DocumentCategory.INCOME_CERTIFICATE,
    "cibil": DocumentCategory.CREDIT_SCORE,
    "tir": DocumentCategory.TAX_RETURN,
    "ld": DocumentCategory.LEGAL_DOCUMENT,
}

_LOOKUP = {category.value.lower(): category for category in DocumentCategory}
_LOOKUP.update(_ALIASES)
