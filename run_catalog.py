"""
Catalog runner — search or render a record from the library export.

Reads:
  - the TSV export (default: CATALOG_EXPORT_PATH from .env)

Produces on stdout:
  - the ranked search document  (--query, default: browse all)
  - or the detail document      (--detail ID)
"""
import argparse
import json
import logging
import sys

from catalog_linker.config import settings

# ---------------------------------------------------------------------------
# Setup logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger("run_catalog")

from catalog_linker.annotation.pipeline import Annotator  # noqa: E402
from catalog_linker.browse.filters import CatalogFilters  # noqa: E402
from catalog_linker.browse.pipeline import (  # noqa: E402
    browse_catalog,
    find_record,
    linkable_records,
    render_record_detail,
)
from catalog_linker.browse.starred_store import StarredStore  # noqa: E402
from catalog_linker.loading.tsv_export import CatalogLoadError, load_catalog_records  # noqa: E402


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Search and render the activity / tool catalog.")
    parser.add_argument("--export", default=None, help="TSV export path")
    parser.add_argument("--library", choices=["Activities", "Tools"], default=None)
    parser.add_argument("--query", default="", help="free-text search")
    parser.add_argument("--detail", default=None, metavar="ID", help="render one record")
    parser.add_argument("--pillar", default="")
    parser.add_argument("--phase", default="")
    parser.add_argument("--parent-skill", default="")
    parser.add_argument("--pricing", default="")
    parser.add_argument("--technical-rating", default="")
    parser.add_argument("--platform", action="append", default=[])
    parser.add_argument("--starred", action="store_true", help="read starred ids from Redis")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        records = load_catalog_records(args.export)
    except CatalogLoadError as e:
        logger.error("%s", e)
        return 1

    if args.detail:
        record = find_record(records, args.detail)
        if record is None:
            logger.error("No record with id=%s", args.detail)
            return 2
        # Tools link to tools; activities link to activities and tools
        linkable = linkable_records(record, records)
        result = render_record_detail(record, linkable, Annotator(linkable))
    else:
        starred_ids = StarredStore.from_url().starred_ids() if args.starred else []
        filters = CatalogFilters(
            pillar=args.pillar,
            phase=args.phase,
            parent_skill=args.parent_skill,
            pricing=args.pricing,
            technical_rating=args.technical_rating,
            platforms=args.platform,
        )
        result = browse_catalog(
            records,
            query=args.query,
            filters=filters,
            starred_ids=starred_ids,
            library=args.library,
        )

    json.dump(result, sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
