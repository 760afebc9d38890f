"""
Unit tests for the annotation engine.
Tests: entity_index, entity_linker, url_linker, block_splitter, pipeline.
"""
import pytest

from catalog_linker.annotation.block_splitter import (
    BULLET_LIST,
    PARAGRAPH,
    SPACER,
    split_blocks,
)
from catalog_linker.annotation.entity_index import build_entity_index
from catalog_linker.annotation.entity_linker import count_links, link_entities
from catalog_linker.annotation.pipeline import Annotator, annotate, link_inline
from catalog_linker.annotation.url_linker import link_urls
from catalog_linker.models.segment import (
    BulletList,
    EntityLink,
    ExternalLink,
    Paragraph,
    PlainText,
    Spacer,
    segments_text,
)


def _links(segments):
    return [s for s in segments if isinstance(s, EntityLink)]


class TestEntityIndex:
    """Tests for build_entity_index."""

    def test_candidates_longest_first(self, tool_records):
        index = build_entity_index(tool_records)
        lengths = [len(name) for name in index.candidates]
        assert lengths == sorted(lengths, reverse=True)
        assert index.candidates[0] == "ankimobile"

    def test_excludes_current_record(self, tool_records):
        index = build_entity_index(tool_records, exclude_id="1")
        assert index.lookup("Anki") is None
        assert index.lookup("AnkiMobile")["id"] == "2"

    def test_excludes_other_placeholder(self, tool_records):
        index = build_entity_index(tool_records)
        assert index.lookup("other") is None
        assert "other" not in index.candidates

    def test_code_name_fallback(self, activity_records):
        index = build_entity_index(activity_records)
        assert index.lookup("Sentence Mining")["id"] == "12"

    def test_records_without_name_skipped(self):
        index = build_entity_index([{"id": "1"}, {"id": "2", "Display Name": ""}])
        assert len(index) == 0
        assert index.candidates == []

    def test_collision_last_wins_and_is_reported(self):
        records = [
            {"id": "1", "Display Name": "Anki"},
            {"id": "7", "Display Name": "ANKI"},
        ]
        index = build_entity_index(records)
        assert index.lookup("anki")["id"] == "7"
        assert index.collisions == ["anki"]
        assert index.candidates == ["anki"]

    def test_equal_length_keeps_first_seen_order(self):
        records = [
            {"id": "1", "Display Name": "Beta"},
            {"id": "2", "Display Name": "Alfa"},
        ]
        assert build_entity_index(records).candidates == ["beta", "alfa"]

    def test_candidates_sorted_by_display_name_length(self):
        # "İx".lower() is three characters long, the display name two
        records = [
            {"id": "1", "Display Name": "İx"},
            {"id": "2", "Display Name": "abc"},
        ]
        assert build_entity_index(records).candidates == ["abc", "İx".lower()]

    def test_empty_input(self):
        assert build_entity_index([]).candidates == []
        assert build_entity_index(None).candidates == []


class TestEntityLinker:
    """Tests for link_entities."""

    def test_longest_match_priority(self, tool_records):
        index = build_entity_index(tool_records)
        segments = link_entities("I use Go Pro daily", index)

        assert segments == [
            PlainText("I use "),
            EntityLink(record=tool_records[2], text="Go Pro"),
            PlainText(" daily"),
        ]

    def test_shorter_name_still_matches_remaining_text(self, tool_records):
        index = build_entity_index(tool_records)
        segments = link_entities("Go Pro or Go?", index)

        links = _links(segments)
        assert [(l.text, l.record_id) for l in links] == [("Go Pro", "3"), ("Go", "4")]

    def test_case_insensitive(self, tool_records):
        index = build_entity_index(tool_records)
        segments = link_entities("ANKI, anki and Anki", index)

        links = _links(segments)
        assert [l.text for l in links] == ["ANKI", "anki", "Anki"]
        assert all(l.record_id == "1" for l in links)

    def test_word_boundary_respected(self, tool_records):
        index = build_entity_index(tool_records)
        segments = link_entities("Google is not Go", index)

        links = _links(segments)
        assert len(links) == 1
        assert links[0].text == "Go"
        assert segments[0] == PlainText("Google is not ")

    def test_longer_entity_claims_word_first(self, tool_records):
        index = build_entity_index(tool_records)
        segments = link_entities("AnkiMobile and Anki", index)

        assert [(l.text, l.record_id) for l in _links(segments)] == [
            ("AnkiMobile", "2"),
            ("Anki", "1"),
        ]

    def test_no_partial_word_match_without_longer_entity(self):
        index = build_entity_index([{"id": "1", "Display Name": "Anki"}])
        assert _links(link_entities("AnkiMobile is nice", index)) == []

    def test_punctuation_in_name(self):
        index = build_entity_index([{"id": "9", "Display Name": "C++"}])
        segments = link_entities("I like C++. Not C++x", index)

        links = _links(segments)
        assert len(links) == 1
        assert links[0].text == "C++"

    def test_regex_metacharacters_are_literal(self):
        index = build_entity_index([{"id": "9", "Display Name": "A.B"}])
        assert _links(link_entities("AxB", index)) == []
        assert len(_links(link_entities("use A.B now", index))) == 1

    def test_concatenation_preserved(self, tool_records):
        index = build_entity_index(tool_records)
        text = "Go, Go Pro and AnkiMobile - then anki again. Migaku!"
        assert segments_text(link_entities(text, index)) == text

    def test_empty_text(self, tool_records):
        assert link_entities("", build_entity_index(tool_records)) == []

    def test_count_links(self, tool_records):
        index = build_entity_index(tool_records)
        assert count_links(link_entities("Anki and Migaku", index)) == 2


class TestUrlLinker:
    """Tests for link_urls."""

    def test_url_becomes_external_link(self):
        segments = link_urls([PlainText("Docs: https://apps.ankiweb.net/docs now")])
        assert segments == [
            PlainText("Docs: "),
            ExternalLink("https://apps.ankiweb.net/docs"),
            PlainText(" now"),
        ]

    def test_http_and_multiple_urls(self):
        segments = link_urls([PlainText("http://a.io https://b.io")])
        assert [s.url for s in segments if isinstance(s, ExternalLink)] == ["http://a.io", "https://b.io"]

    def test_entity_links_untouched(self, tool_records):
        link = EntityLink(record=tool_records[0], text="Anki")
        assert link_urls([link]) == [link]

    def test_plain_without_url_unchanged(self):
        assert link_urls([PlainText("ftp://nope")]) == [PlainText("ftp://nope")]


class TestBlockSplitter:
    """Tests for split_blocks."""

    def test_paragraphs_lists_and_spacers(self):
        text = "Intro line\n- a\n* b\nafter\n\nend"
        assert list(split_blocks(text)) == [
            (PARAGRAPH, "Intro line"),
            (BULLET_LIST, ["a", "b"]),
            (PARAGRAPH, "after"),
            (SPACER, None),
            (PARAGRAPH, "end"),
        ]

    def test_no_leading_spacer(self):
        assert list(split_blocks("\n  \nHello")) == [(PARAGRAPH, "Hello")]

    def test_trailing_list_is_flushed(self):
        assert list(split_blocks("Steps:\n  - one\n  - two")) == [
            (PARAGRAPH, "Steps:"),
            (BULLET_LIST, ["one", "two"]),
        ]

    def test_paragraph_keeps_untrimmed_line(self):
        assert list(split_blocks("  indented")) == [(PARAGRAPH, "  indented")]

    def test_marker_requires_space(self):
        assert list(split_blocks("-dash\n*star")) == [(PARAGRAPH, "-dash"), (PARAGRAPH, "*star")]

    def test_blank_line_between_lists(self):
        assert list(split_blocks("- a\n\n- b")) == [
            (BULLET_LIST, ["a"]),
            (SPACER, None),
            (BULLET_LIST, ["b"]),
        ]

    def test_empty_text(self):
        assert list(split_blocks("")) == []


class TestAnnotate:
    """Tests for the full annotation pipeline."""

    def test_empty_or_missing_text(self, tool_records):
        assert annotate("", tool_records) == []
        assert annotate(None, tool_records) == []

    def test_blocks_with_links(self, tool_records):
        text = "Use Anki daily.\n- pair with Go Pro\n- see https://apps.ankiweb.net\n\nDone."
        blocks = annotate(text, tool_records, exclude_id="6")

        assert isinstance(blocks[0], Paragraph)
        assert isinstance(blocks[1], BulletList)
        assert isinstance(blocks[2], Spacer)
        assert isinstance(blocks[3], Paragraph)

        assert _links(blocks[0].segments)[0].record_id == "1"
        first_item, second_item = blocks[1].items
        assert _links(first_item)[0].text == "Go Pro"
        assert ExternalLink("https://apps.ankiweb.net") in second_item
        assert blocks[3].segments == (PlainText("Done."),)

    def test_line_text_preserved(self, tool_records):
        text = "Go Pro, Google and https://x.io/go.\n  - AnkiMobile or anki"
        blocks = annotate(text, tool_records)

        assert blocks[0].text == "Go Pro, Google and https://x.io/go."
        assert segments_text(blocks[1].items[0]) == "AnkiMobile or anki"

    def test_no_self_link(self, tool_records):
        blocks = annotate("Anki is the best. AnkiMobile too.", tool_records, exclude_id="1")
        links = _links(blocks[0].segments)

        assert all(l.record_id != "1" for l in links)
        assert [l.record_id for l in links] == ["2"]

    def test_other_never_linked(self, tool_records):
        blocks = annotate("Other apps exist.", tool_records)
        assert _links(blocks[0].segments) == []

    def test_links_never_cross_lines(self, tool_records):
        blocks = annotate("Go\nPro", tool_records)
        assert [l.record_id for b in blocks for l in _links(b.segments)] == ["4"]

    @pytest.mark.parametrize("library, href", [("Tools", "/tool/3"), ("Activities", "/activity/3")])
    def test_link_carries_route(self, library, href):
        records = [{"id": "3", "Library": library, "Display Name": "Go Pro"}]
        link = _links(annotate("Go Pro", records)[0].segments)[0]
        assert link.href == href
        assert link.library == library


class TestLinkInline:
    """Tests for link_inline (reference fields)."""

    def test_no_block_splitting(self, tool_records):
        segments = link_inline("AnkiMobile, Migaku", tool_records, exclude_id="1")
        assert [l.record_id for l in _links(segments)] == ["2", "6"]
        assert segments_text(segments) == "AnkiMobile, Migaku"

    def test_empty(self, tool_records):
        assert link_inline("", tool_records) == []


class TestAnnotator:
    """Tests for the memoizing Annotator facade."""

    def test_same_output_as_annotate(self, catalog_records):
        text = "Start with Active Listening.\n- Shadowing with Anki\n\nhttps://refold.la"
        annotator = Annotator(catalog_records)
        assert annotator.annotate(text, exclude_id="10") == annotate(text, catalog_records, "10")

    def test_index_memoized_per_exclude_id(self, catalog_records):
        annotator = Annotator(catalog_records, cache_size=8)
        annotator.annotate("Anki", exclude_id="10")
        annotator.link_inline("Migaku", exclude_id="10")
        annotator.annotate("Anki", exclude_id="11")

        info = annotator.cache_info()
        assert info.misses == 2
        assert info.hits == 1

    def test_empty_text_skips_index(self, catalog_records):
        annotator = Annotator(catalog_records)
        assert annotator.annotate("") == []
        assert annotator.cache_info().misses == 0
