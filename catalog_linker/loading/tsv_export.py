"""
TSV Export Loader — catalog records from the tab-separated library export.

The header row defines field names. Every cell is cleaned the same way:
carriage returns dropped, the export's "⏎" glyph expanded to a real line
break, surrounding whitespace trimmed.
"""
import csv
import io
import logging
from pathlib import Path
from typing import Dict, List, Optional

from catalog_linker.config import settings
from catalog_linker.config.constants import EXPORT_NEWLINE_GLYPH, FIELD_LIBRARY
from catalog_linker.models.record import numeric_id

logger = logging.getLogger(__name__)


class CatalogLoadError(Exception):
    """Raised when the catalog export cannot be read."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot load catalog export '{path}': {reason}")


def clean_cell(value: Optional[str]) -> str:
    if value is None:
        return ""
    return value.replace("\r", "").replace(EXPORT_NEWLINE_GLYPH, "\n").strip()


def parse_catalog_tsv(text: str) -> List[Dict[str, str]]:
    """
    Parse the export text into records.

    Short rows are padded with empty strings, extra cells are ignored and
    rows with no content at all are skipped.
    """
    reader = csv.reader(io.StringIO(text), delimiter="\t")
    header: Optional[List[str]] = None
    records: List[Dict[str, str]] = []

    for row in reader:
        if header is None:
            header = [clean_cell(h) for h in row]
            continue

        cells = [clean_cell(c) for c in row]
        if not any(cells):
            continue

        cells += [""] * (len(header) - len(cells))
        records.append(dict(zip(header, cells)))

    logger.debug("Parsed %d records (%d fields)", len(records), len(header or []))
    return records


def load_catalog_records(
    path: Optional[str] = None,
    library: Optional[str] = None,
) -> List[Dict[str, str]]:
    """
    Load, optionally filter by Library, and sort records by numeric id.

    Args:
        path: Export file; defaults to settings.CATALOG_EXPORT_PATH.
        library: "Activities" | "Tools" | None (keep all).

    Raises:
        CatalogLoadError: If the file cannot be read.
    """
    export_path = Path(path or settings.CATALOG_EXPORT_PATH)

    try:
        text = export_path.read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogLoadError(str(export_path), str(e)) from e

    records = parse_catalog_tsv(text)
    if library is not None:
        records = [r for r in records if r.get(FIELD_LIBRARY) == library]

    records.sort(key=numeric_id)
    logger.info("Loaded %d records from %s (library=%s)", len(records), export_path, library or "all")
    return records
