"""
Output Builder — annotated blocks and ranked records → JSON-ready dicts.

Converts the internal segment / block dataclasses into the documents
described by SEARCH_OUTPUT_SCHEMA and DETAIL_OUTPUT_SCHEMA, going through
the Pydantic contracts in models/catalog_io.py.
"""
from typing import Dict, Iterable, List, Optional, Sequence

from catalog_linker.config.constants import FIELD_ID, FIELD_LIBRARY, SUMMARY_FIELDS
from catalog_linker.models.catalog_io import (
    BulletListOut,
    EntitySegmentOut,
    ParagraphOut,
    RecordDetail,
    RecordSummary,
    SearchResponse,
    SpacerOut,
    TextSegmentOut,
    UrlSegmentOut,
)
from catalog_linker.models.record import Record, detail_path, display_name, field_value
from catalog_linker.models.segment import (
    Block,
    BulletList,
    EntityLink,
    ExternalLink,
    Paragraph,
    Segment,
)


def segment_to_model(segment: Segment):
    if isinstance(segment, EntityLink):
        return EntitySegmentOut(
            text=segment.text,
            id=segment.record_id,
            library=segment.library,
            href=segment.href,
        )
    if isinstance(segment, ExternalLink):
        return UrlSegmentOut(text=segment.url, href=segment.url)
    return TextSegmentOut(text=segment.text)


def block_to_model(block: Block):
    if isinstance(block, Paragraph):
        return ParagraphOut(segments=[segment_to_model(s) for s in block.segments])
    if isinstance(block, BulletList):
        return BulletListOut(items=[[segment_to_model(s) for s in item] for item in block.items])
    return SpacerOut()


def build_segments(segments: Iterable[Segment]) -> List[dict]:
    return [segment_to_model(s).model_dump() for s in segments]


def build_blocks(blocks: Iterable[Block]) -> List[dict]:
    return [block_to_model(b).model_dump() for b in blocks]


def build_record_summary(
    record: Record,
    starred: bool = False,
    score: Optional[int] = None,
) -> RecordSummary:
    """Card-level summary: identity, route and the non-empty summary fields."""
    fields = {name: field_value(record, name) for name in SUMMARY_FIELDS if field_value(record, name)}
    return RecordSummary(
        id=field_value(record, FIELD_ID),
        library=field_value(record, FIELD_LIBRARY),
        name=display_name(record),
        href=detail_path(record),
        starred=starred,
        score=score,
        fields=fields,
    )


def build_search_output(
    query: str,
    total: int,
    starred: Sequence[RecordSummary],
    results: Sequence[RecordSummary],
) -> dict:
    """Assemble the search document conforming to SEARCH_OUTPUT_SCHEMA."""
    response = SearchResponse(
        query=query,
        total=total,
        matched=len(starred) + len(results),
        starred=list(starred),
        results=list(results),
    )
    return response.model_dump()


def build_detail_output(
    record: Record,
    blocks: Dict[str, List[Block]],
    inline: Dict[str, List[Segment]],
) -> dict:
    """Assemble the detail document conforming to DETAIL_OUTPUT_SCHEMA."""
    detail = RecordDetail(
        id=field_value(record, FIELD_ID),
        library=field_value(record, FIELD_LIBRARY),
        name=display_name(record),
        href=detail_path(record),
        blocks={name: [block_to_model(b) for b in value] for name, value in blocks.items()},
        inline={name: [segment_to_model(s) for s in value] for name, value in inline.items()},
    )
    return detail.model_dump()
