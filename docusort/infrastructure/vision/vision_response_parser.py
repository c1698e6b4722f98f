"""Parse Azure OpenAI classification responses into domain results."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from docusort.domain.exceptions import ClassificationError
from docusort.domain.value_objects.classification import ClassificationResult
from docusort.domain.value_objects.document_category import DocumentCategory

logger = logging.getLogger(__name__)


class ClassificationResponseParser:
    """Validates the model's JSON against the closed category set."""

    def parse(self, content: Optional[str]) -> Optional[ClassificationResult]:
        """Return the result, ``None`` for an empty answer.

        Raises:
            ClassificationError: the content is not a JSON object
        """
        if content is None or not content.strip():
            return None

        payload = extract_json_payload(content)
        if payload is None:
            raise ClassificationError(f"Classifier returned non-JSON content: {content[:200]!r}")
        return self.parse_payload(payload)

    def parse_payload(self, payload: Dict[str, Any]) -> ClassificationResult:
        raw_category = _safe_str(payload.get("category")).strip()
        raw_sub_category = _safe_str(payload.get("subCategory") or payload.get("sub_category")).strip()

        category = DocumentCategory.parse(raw_category)
        if category is None:
            # Out-of-contract label: keep what the model said as the refinement.
            logger.warning("Classifier returned unknown category %r; using Other", raw_category)
            return ClassificationResult(
                category=DocumentCategory.OTHER,
                sub_category=_join_labels(raw_category, raw_sub_category),
            )

        return ClassificationResult(category=category, sub_category=raw_sub_category or category.value)


def extract_json_payload(content: str) -> Optional[dict]:
    text = content.strip()
    if not text:
        return None

    try:
        return _as_object(json.loads(text))
    except json.JSONDecodeError:
        pass

    # Handle fenced code blocks
    if text.startswith("```") and text.endswith("```"):
        body = "\n".join(text.splitlines()[1:-1]).strip()
        if body:
            try:
                return _as_object(json.loads(body))
            except json.JSONDecodeError:
                pass

    # Fallback: attempt to locate first JSON object within the text
    start_index = text.find("{")
    end_index = text.rfind("}")
    if start_index != -1 and end_index != -1 and end_index > start_index:
        snippet = text[start_index : end_index + 1]
        try:
            return _as_object(json.loads(snippet))
        except json.JSONDecodeError:
            return None

    return None


def _join_labels(raw_category: str, raw_sub_category: str) -> Optional[str]:
    if raw_category and raw_sub_category and raw_sub_category != raw_category:
        return f"{raw_category}: {raw_sub_category}"
    return raw_sub_category or raw_category or None


def _as_object(value: Any) -> Optional[dict]:
    return value if isinstance(value, dict) else None


def _safe_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
