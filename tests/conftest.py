"""
Shared test fixtures for the catalog test suite.
"""
import pytest


# ==========================================================================
# Catalog records
# ==========================================================================

@pytest.fixture
def tool_records():
    return [
        {
            "id": "1",
            "Library": "Tools",
            "Display Name": "Anki",
            "code name": "anki",
            "Short Description": "Spaced repetition flashcards",
            "Long Description": "Anki schedules reviews. Pair it with Go Pro for recording.",
            "Platform": "Windows; Mac, Linux",
            "Pricing": "Free",
            "Technical Rating": "Medium",
            "Alternatives": "AnkiMobile, Migaku",
        },
        {
            "id": "2",
            "Library": "Tools",
            "Display Name": "AnkiMobile",
            "code name": "ankimobile",
            "Short Description": "Anki on iOS",
            "Platform": "iOS",
            "Pricing": "Paid",
            "Technical Rating": "Easy",
        },
        {
            "id": "3",
            "Library": "Tools",
            "Display Name": "Go Pro",
            "Short Description": "Action camera",
            "Platform": "Hardware",
            "Pricing": "Paid",
        },
        {
            "id": "4",
            "Library": "Tools",
            "Display Name": "Go",
            "Short Description": "A board game",
            "Pricing": "Free",
        },
        {
            "id": "5",
            "Library": "Tools",
            "Display Name": "Other",
            "Short Description": "Anything else",
        },
        {
            "id": "6",
            "Library": "Tools",
            "Display Name": "Migaku",
            "Short Description": "Browser extension for sentence mining",
            "Platform": "Chrome, Windows",
            "Pricing": "Paid",
        },
    ]


@pytest.fixture
def activity_records():
    return [
        {
            "id": "10",
            "Library": "Activities",
            "Display Name": "Shadowing",
            "Pillar": "Output",
            "Refold Phase(s)": "2;3",
            "Parent Skills": "Speaking, Listening",
            "Short Description": "Repeat audio right after the speaker",
            "Long Description": "Start with Active Listening.\n- record yourself\n- compare with native audio",
        },
        {
            "id": "11",
            "Library": "Activities",
            "Display Name": "Active Listening",
            "Pillar": "Input",
            "Refold Phase(s)": "1;;2",
            "Parent Skills": "Listening",
            "Short Description": "Focused listening to native content",
            "Aliases": "intensive listening",
        },
        {
            "id": "12",
            "Library": "Activities",
            "code name": "sentence mining",
            "Pillar": "Input",
            "Refold Phase(s)": "2",
            "Parent Skills": "Reading; Vocabulary",
            "Short Description": "Collect sentences with one unknown word",
            "Tools": "Anki, Migaku",
        },
    ]


@pytest.fixture
def catalog_records(activity_records, tool_records):
    return activity_records + tool_records


# ==========================================================================
# TSV export
# ==========================================================================

@pytest.fixture
def catalog_tsv():
    header = ["id", "Library", "Display Name", "code name", "Short Description", "Long Description", "Pricing"]
    rows = [
        ["3", "Tools", "Migaku", "", "Mining extension", "Works with Anki.⏎- one-click cards", "Paid"],
        ["1", "Tools", "Anki", "anki", " Flashcards ", "See https://apps.ankiweb.net for installs.", "Free"],
        ["", "", "", "", "", "", ""],
        ["2", "Activities", "", "sentence mining", "Collect sentences", "Use Anki or Migaku daily.", ""],
    ]
    lines = ["\t".join(header)] + ["\t".join(r) for r in rows]
    return "\r\n".join(lines) + "\r\n"


# ==========================================================================
# Redis
# ==========================================================================

class _InMemoryRedis:
    """Minimal in-memory Redis stub (no server required)."""

    def __init__(self):
        self._store: dict = {}

    def set(self, key: str, value: str, **kwargs) -> None:  # noqa: ARG002
        self._store[key] = value

    def get(self, key: str):
        return self._store.get(key)


@pytest.fixture
def redis_stub():
    return _InMemoryRedis()
