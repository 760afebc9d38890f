"""
JSON Schemas for the documents produced by the browse layer.

Two schemas:
1. SEARCH_OUTPUT_SCHEMA — ranked / filtered result list
2. DETAIL_OUTPUT_SCHEMA — one record with annotated text fields
"""

# =============================================================================
# Shared definitions
# =============================================================================
_SEGMENT_SCHEMA: dict = {
    "oneOf": [
        {
            "type": "object",
            "additionalProperties": False,
            "required": ["type", "text"],
            "properties": {
                "type": {"const": "text"},
                "text": {"type": "string"},
            },
        },
        {
            "type": "object",
            "additionalProperties": False,
            "required": ["type", "text", "id", "library", "href"],
            "properties": {
                "type": {"const": "entity"},
                "text": {"type": "string", "minLength": 1},
                "id": {"type": "string"},
                "library": {"type": "string"},
                "href": {"type": "string", "pattern": "^/"},
            },
        },
        {
            "type": "object",
            "additionalProperties": False,
            "required": ["type", "text", "href"],
            "properties": {
                "type": {"const": "url"},
                "text": {"type": "string"},
                "href": {"type": "string", "pattern": "^https?://"},
            },
        },
    ],
}

_BLOCK_SCHEMA: dict = {
    "oneOf": [
        {
            "type": "object",
            "additionalProperties": False,
            "required": ["type", "segments"],
            "properties": {
                "type": {"const": "paragraph"},
                "segments": {"type": "array", "items": _SEGMENT_SCHEMA},
            },
        },
        {
            "type": "object",
            "additionalProperties": False,
            "required": ["type", "items"],
            "properties": {
                "type": {"const": "list"},
                "items": {
                    "type": "array",
                    "minItems": 1,
                    "items": {"type": "array", "items": _SEGMENT_SCHEMA},
                },
            },
        },
        {
            "type": "object",
            "additionalProperties": False,
            "required": ["type"],
            "properties": {"type": {"const": "spacer"}},
        },
    ],
}

_SUMMARY_SCHEMA: dict = {
    "type": "object",
    "additionalProperties": False,
    "required": ["id", "library", "name", "href", "starred", "score", "fields"],
    "properties": {
        "id": {"type": "string"},
        "library": {"type": "string"},
        "name": {"type": "string"},
        "href": {"type": "string", "pattern": "^/"},
        "starred": {"type": "boolean"},
        "score": {"type": ["integer", "null"], "minimum": 0},
        "fields": {"type": "object", "additionalProperties": {"type": "string"}},
    },
}

# =============================================================================
# 1. Search output
# =============================================================================
SEARCH_OUTPUT_SCHEMA: dict = {
    "type": "object",
    "additionalProperties": False,
    "required": ["query", "total", "matched", "starred", "results"],
    "properties": {
        "query": {"type": "string"},
        "total": {"type": "integer", "minimum": 0},
        "matched": {"type": "integer", "minimum": 0},
        "starred": {"type": "array", "items": _SUMMARY_SCHEMA},
        "results": {"type": "array", "items": _SUMMARY_SCHEMA},
    },
}

# =============================================================================
# 2. Detail output
# =============================================================================
DETAIL_OUTPUT_SCHEMA: dict = {
    "type": "object",
    "additionalProperties": False,
    "required": ["id", "library", "name", "href", "blocks", "inline"],
    "properties": {
        "id": {"type": "string"},
        "library": {"type": "string"},
        "name": {"type": "string"},
        "href": {"type": "string", "pattern": "^/"},
        "blocks": {
            "type": "object",
            "additionalProperties": {"type": "array", "items": _BLOCK_SCHEMA},
        },
        "inline": {
            "type": "object",
            "additionalProperties": {"type": "array", "items": _SEGMENT_SCHEMA},
        },
    },
}
