"""Vision infrastructure adapters."""

from .azure_vision_client import AzureClassificationClient
from .vision_prompt_builder import build_classification_prompt, DEFAULT_PROMPT_TEMPLATE
from .vision_response_parser import ClassificationResponseParser, extract_json_payload

__all__ = [
    "AzureClassificationClient",
    "ClassificationResponseParser",
    "build_classification_prompt",
    "extract_json_payload",
    "DEFAULT_PROMPT_TEMPLATE",
]
