import pytest

from docusort.domain.exceptions import ClassificationError
from docusort.domain.value_objects.document_category import DocumentCategory
from docusort.infrastructure.vision.vision_response_parser import ClassificationResponseParser, extract_json_payload


@pytest.fixture
def parser():
    return ClassificationResponseParser()


def test_parses_valid_payload(parser):
    result = parser.parse('{"category": "KYC", "subCategory": "Aadhar"}')
    assert result.category is DocumentCategory.KYC
    assert result.sub_category == "Aadhar"


def test_accepts_short_codes(parser):
    result = parser.parse('{"category": "CIBIL", "subCategory": "CIBIL Report"}')
    assert result.category is DocumentCategory.CREDIT_SCORE


def test_missing_sub_category_falls_back_to_category(parser):
    result = parser.parse('{"category": "Photo"}')
    assert result.sub_category == "Photo"


def test_out_of_enum_category_maps_to_other_keeping_raw_text(parser):
    result = parser.parse('{"category": "Passport", "subCategory": ""}')
    assert result.category is DocumentCategory.OTHER
    assert result.sub_category == "Passport"

    result = parser.parse('{"category": "Invoice", "subCategory": "GST Invoice"}')
    assert result.category is DocumentCategory.OTHER
    assert result.sub_category == "Invoice: GST Invoice"


def test_missing_category_maps_to_other(parser):
    result = parser.parse("{}")
    assert result.category is DocumentCategory.OTHER
    assert result.sub_category is None


@pytest.mark.parametrize("content", [None, "", "   "])
def test_empty_content_is_none(parser, content):
    assert parser.parse(content) is None


def test_non_json_raises(parser):
    with pytest.raises(ClassificationError):
        parser.parse("I think this is an Aadhar card")


def test_json_array_raises(parser):
    with pytest.raises(ClassificationError):
        parser.parse('["KYC"]')


@pytest.mark.parametrize(
    "content",
    [
        '```json\n{"category": "KYC"}\n```',
        'Here you go: {"category": "KYC"} hope that helps',
    ],
)
def test_extracts_wrapped_json(content):
    assert extract_json_payload(content) == {"category": "KYC"}


def test_out_of_enum_category_with_matching_sub_category_is_not_repeated(parser):
    result = parser.parse('{"category": "Passport", "subCategory": "Passport"}')
    assert result.sub_category == "Passport"


def test_sub_category_alone_survives_missing_category(parser):
    result = parser.parse('{"subCategory": "Rent Agreement"}')
    assert result.category is DocumentCategory.OTHER
    assert result.sub_category == "Rent Agreement"
