"""
Constants used across the catalog engines.
Pinned so that linking and ranking stay deterministic.
"""
from typing import Dict, List

# =============================================================================
# Record fields
# =============================================================================
FIELD_ID: str = "id"
FIELD_DISPLAY_NAME: str = "Display Name"
FIELD_CODE_NAME: str = "code name"
FIELD_LIBRARY: str = "Library"
FIELD_ALIASES: str = "Aliases"
FIELD_SHORT_DESCRIPTION: str = "Short Description"

LIBRARY_ACTIVITIES: str = "Activities"
LIBRARY_TOOLS: str = "Tools"

# Display name treated as noise, never linked
PLACEHOLDER_NAME: str = "other"

# =============================================================================
# Annotation
# =============================================================================
LIST_MARKERS: tuple = ("- ", "* ")
URL_PATTERN: str = r"https?://\S+"

# Glyph used by the tabular export to encode embedded line breaks
EXPORT_NEWLINE_GLYPH: str = "⏎"

# Text fields rendered as blocks on a detail view
ANNOTATED_FIELDS: List[str] = [
    "Long Description",
    "Written Guide - Intro",
    "Written Guide - Health Routine",
    "Written Guide - Target Audience",
    "Written Guide - Issues",
    "Written Guide - Setup",
    "Written Guide - Walkthrough",
    "Written Guide - Tips and Tricks",
]

# Semicolon-separated fields rendered as one bullet list (one item per part)
SEMICOLON_LIST_FIELDS: List[str] = [
    "Benefits",
]
SEMICOLON_LIST_SEPARATOR: str = r";+"

# Short reference fields rendered inline (no block splitting)
INLINE_LINKED_FIELDS: List[str] = [
    "Alternatives",
    "Tools",
    "Parent Skills",
    "Child Techniques",
    "Sub-techniques",
]

# =============================================================================
# Ranking
# =============================================================================
DEFAULT_WEIGHTS: Dict[str, int] = {
    "name_exact": 1000,
    "name_prefix": 500,
    "name_substring": 100,
    "aliases": 50,
    "short_description": 25,
    "long_form": 10,
}

LONG_FORM_SEARCH_FIELDS: List[str] = [
    "Long Description",
    "Benefits",
    "Parent Skills",
    "Child Techniques",
    "Alternatives",
    "Sub-techniques",
    "Tools",
    "Written Guide - Intro",
    "Written Guide - Health Routine",
    "Written Guide - Target Audience",
    "Written Guide - Issues",
    "Written Guide - Setup",
    "Written Guide - Walkthrough",
    "Written Guide - Tips and Tricks",
]

# =============================================================================
# Facets
# =============================================================================
FIELD_PILLAR: str = "Pillar"
FIELD_PHASES: str = "Refold Phase(s)"
FIELD_PARENT_SKILLS: str = "Parent Skills"
FIELD_PRICING: str = "Pricing"
FIELD_TECHNICAL_RATING: str = "Technical Rating"
FIELD_PLATFORM: str = "Platform"

# Multi-value facet fields and the separators their cells use
MULTI_VALUE_SEPARATORS: Dict[str, str] = {
    FIELD_PHASES: r";+",
    FIELD_PARENT_SKILLS: r"[;,]+",
    FIELD_PLATFORM: r"[,;]+",
}

# Fields copied into a search result summary
SUMMARY_FIELDS: List[str] = [
    FIELD_SHORT_DESCRIPTION,
    "Type",
    FIELD_PILLAR,
    FIELD_PHASES,
    FIELD_PLATFORM,
    FIELD_PRICING,
]
