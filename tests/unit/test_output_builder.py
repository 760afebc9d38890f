"""
Unit tests for output building and schema validation.
"""
import pytest
from pydantic import ValidationError

from catalog_linker.browse.output_builder import (
    build_blocks,
    build_detail_output,
    build_record_summary,
    build_search_output,
    build_segments,
)
from catalog_linker.browse.validation import (
    OutputValidationError,
    ensure_valid,
    validate_document,
)
from catalog_linker.config.schemas import DETAIL_OUTPUT_SCHEMA, SEARCH_OUTPUT_SCHEMA
from catalog_linker.models.catalog_io import EntitySegmentOut, UrlSegmentOut
from catalog_linker.models.segment import (
    BulletList,
    EntityLink,
    ExternalLink,
    Paragraph,
    PlainText,
    Spacer,
)


@pytest.fixture
def anki():
    return {"id": "1", "Library": "Tools", "Display Name": "Anki", "Short Description": "Flashcards"}


class TestBuildSegments:

    def test_segment_shapes(self, anki):
        segments = [
            PlainText("Use "),
            EntityLink(record=anki, text="anki"),
            ExternalLink("https://apps.ankiweb.net"),
        ]
        assert build_segments(segments) == [
            {"type": "text", "text": "Use "},
            {"type": "entity", "text": "anki", "id": "1", "library": "Tools", "href": "/tool/1"},
            {"type": "url", "text": "https://apps.ankiweb.net", "href": "https://apps.ankiweb.net"},
        ]

    def test_block_shapes(self, anki):
        blocks = [
            Paragraph((PlainText("Intro"),)),
            BulletList(((EntityLink(record=anki, text="Anki"),), (PlainText("two"),))),
            Spacer(),
        ]
        built = build_blocks(blocks)

        assert built[0] == {"type": "paragraph", "segments": [{"type": "text", "text": "Intro"}]}
        assert built[1]["type"] == "list"
        assert built[1]["items"][0][0]["id"] == "1"
        assert built[2] == {"type": "spacer"}


class TestContracts:

    def test_entity_href_must_be_route(self):
        with pytest.raises(ValidationError):
            EntitySegmentOut(text="Anki", id="1", library="Tools", href="tool/1")

    def test_url_href_must_be_http(self):
        with pytest.raises(ValidationError):
            UrlSegmentOut(text="ftp://x", href="ftp://x")


class TestSearchOutput:

    def test_summary_fields(self, anki):
        summary = build_record_summary(anki, starred=True, score=1000)
        assert summary.name == "Anki"
        assert summary.href == "/tool/1"
        assert summary.fields == {"Short Description": "Flashcards"}

    def test_valid_document(self, anki):
        output = build_search_output(
            query="anki",
            total=4,
            starred=[],
            results=[build_record_summary(anki, score=1000)],
        )
        assert output["matched"] == 1
        assert validate_document(output, SEARCH_OUTPUT_SCHEMA, "search").valid

    def test_no_match_warning(self):
        output = build_search_output(query="zzz", total=4, starred=[], results=[])
        result = validate_document(output, SEARCH_OUTPUT_SCHEMA, "search")
        assert result.valid
        assert result.warnings == ["query 'zzz' matched no records"]


class TestDetailOutput:

    def test_valid_document(self, anki):
        record = {"id": "6", "Library": "Tools", "Display Name": "Migaku"}
        output = build_detail_output(
            record,
            blocks={"Long Description": [Paragraph((PlainText("Pairs with "), EntityLink(record=anki, text="Anki")))]},
            inline={"Alternatives": [EntityLink(record=anki, text="Anki")]},
        )
        assert output["href"] == "/tool/6"
        assert validate_document(output, DETAIL_OUTPUT_SCHEMA, "detail").valid


class TestValidation:

    def test_errors_collected(self):
        result = validate_document({"query": 1}, SEARCH_OUTPUT_SCHEMA, "search")
        assert not result.valid
        assert len(result.errors) >= 2
        assert result.document == "search"

    def test_ensure_valid_raises(self):
        with pytest.raises(OutputValidationError) as exc_info:
            ensure_valid({"id": "1"}, DETAIL_OUTPUT_SCHEMA, "detail")
        assert exc_info.value.document == "detail"
        assert exc_info.value.errors
