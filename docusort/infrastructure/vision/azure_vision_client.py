"""Azure OpenAI vision client acting as the page classifier."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from azure.identity import DefaultAzureCredential, get_bearer_token_provider
from openai import AzureOpenAI, OpenAI, OpenAIError

from docusort.config import Settings, get_settings
from docusort.constants import IMAGE_MIME
from docusort.domain.exceptions import ClassificationError
from docusort.domain.value_objects.classification import ClassificationResult
from docusort.infrastructure.pdf.image_processor import image_to_data_url

from .vision_prompt_builder import ClassificationPrompt, build_classification_prompt
from .vision_response_parser import ClassificationResponseParser

logger = logging.getLogger(__name__)

COGNITIVE_SERVICES_SCOPE = "https://cognitiveservices.azure.com/.default"
MAX_COMPLETION_TOKENS = 1000


def build_azure_client(settings: Settings) -> AzureOpenAI:
    """Create an SDK client that gives up after one attempt per call.

    Uses the API key when configured, otherwise an Entra ID token from
    :class:`DefaultAzureCredential`.
    """
    endpoint = settings.ensure_endpoint()
    if not endpoint:
        raise RuntimeError("AZURE_OPENAI_ENDPOINT must be configured before using the classifier")

    common: Dict[str, Any] = {
        "api_version": settings.azure_openai_api_version,
        "azure_endpoint": endpoint,
        "timeout": settings.classification_timeout_seconds,
        "max_retries": 0,
    }
    if settings.azure_openai_api_key:
        return AzureOpenAI(api_key=settings.azure_openai_api_key, **common)

    token_provider = get_bearer_token_provider(DefaultAzureCredential(), COGNITIVE_SERVICES_SCOPE)
    return AzureOpenAI(azure_ad_token_provider=token_provider, **common)


class AzureClassificationClient:
    """Classifies page images with an Azure OpenAI vision deployment.

    Each call is bounded by the configured timeout and is never retried by
    the SDK; the caller decides what a failure means.
    """

    def __init__(
        self,
        *,
        client: Optional[OpenAI] = None,
        parser: Optional[ClassificationResponseParser] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        settings = settings or get_settings()
        model = settings.classifier_model
        if not model:
            raise RuntimeError("AZURE_OPENAI_VISION_MODEL or AZURE_OPENAI_DEPLOYMENT_NAME must be configured")

        self._client = client if client is not None else build_azure_client(settings)
        self._model = model
        self._parser = parser or ClassificationResponseParser()

    def classify(self, image: bytes, mime_type: str = IMAGE_MIME) -> Optional[ClassificationResult]:
        """Classify one page image.

        Returns ``None`` when the model answers with an empty body.

        Raises:
            ClassificationError: the call failed, timed out or returned unusable content
        """
        prompt = build_classification_prompt(image_to_data_url(image, mime_type))
        content = self._complete(prompt)
        if content is None:
            logger.warning("Classifier returned an empty response")
            return None
        return self._parser.parse(content)

    def _complete(self, prompt: ClassificationPrompt) -> Optional[str]:
        request: Dict[str, Any] = {
            "model": self._model,
            "messages": prompt.messages,
            "max_completion_tokens": MAX_COMPLETION_TOKENS,
        }
        if prompt.force_json:
            request["response_format"] = {"type": "json_object"}

        try:
            response = self._client.chat.completions.create(**request)
        except OpenAIError as exc:
            raise ClassificationError(f"Classifier call failed: {exc}", exc) from exc

        usage = getattr(response, "usage", None)
        if usage is not None:
            logger.debug("Classifier usage: %s", usage)

        choices = getattr(response, "choices", None) or []
        if not choices:
            return None
        return choices[0].message.content or None
