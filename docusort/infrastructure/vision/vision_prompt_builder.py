"""Utilities for constructing Azure OpenAI page classification prompts."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

from docusort.domain.value_objects.document_category import DocumentCategory

_CATEGORY_CHOICES = ", ".join(f"'{category.value}'" for category in DocumentCategory)

DEFAULT_PROMPT_TEMPLATE = (
    "You are a document classification system for loan application bundles."
    " Analyze the document page image and classify it.\n"
    f"1. Assign a main 'category' from: {_CATEGORY_CHOICES}.\n"
    "2. Identify the specific 'subCategory' (document type).\n"
    "   - For KYC: 'Aadhar', 'PAN', 'Voter ID', 'Driving License', 'Passport', 'Ration Card', 'Identity Card'.\n"
    "   - For ApplicationForm: 'Application Form', 'Filled Form'.\n"
    "   - For IncomeCertificate: 'Salary Slip', 'Bank Statement', 'Income Certificate'.\n"
    "   - For Photo: 'Passport Photo', 'Full Body'.\n"
    "   - For anything else: a short, descriptive name (e.g. 'Legal Agreement', 'Tax Receipt').\n"
    "Respond with JSON only, using this exact schema: "
    "{\"category\": string from the list above, \"subCategory\": string}."
    " Do not add commentary."
)


@dataclass(frozen=True)
class ClassificationPrompt:
    """The chat payload for a single classification call."""

    messages: List[dict[str, Any]]
    force_json: bool = True


def build_classification_prompt(image_data_url: str) -> ClassificationPrompt:
    """Construct the prompt for one page image."""

    return ClassificationPrompt(
        messages=[
            {"role": "system", "content": DEFAULT_PROMPT_TEMPLATE},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "Classify this document page."},
                    {"type": "image_url", "image_url": {"url": image_data_url}},
                ],
            },
        ],
    )
