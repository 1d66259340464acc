import argparse
import logging
import sys
from pathlib import Path

# Add src to sys.path automatically
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pg_bulk_import.config import ImportConfig
from pg_bulk_import.errors import ImportFailed
from pg_bulk_import.pipeline.csv_import import run_csv_import
from pg_bulk_import.utils.log import setup_logging

logger = logging.getLogger("import_csv")


def main() -> int:
    parser = argparse.ArgumentParser(description="Bulk-import node and relationship CSV files into a graph")
    parser.add_argument("nodes", help="Node file: <id>,value,... with optional [index|]name[@type] header")
    parser.add_argument("rels", nargs="?", help="Relationship file: <from>,<to>,<type>,value,...")
    parser.add_argument("--output", help="GraphML file to write the imported graph to")
    parser.add_argument("--index-db", help="SQLite file receiving secondary indices")
    parser.add_argument("--delimiter", help="Field delimiter (default: ',')")
    parser.add_argument("--progress-every", type=int, help="Log progress every N entities")
    parser.add_argument("--quiet", action="store_true", help="No progress output")
    parser.add_argument("--log-file", help="Also write logs to this file")
    args = parser.parse_args()

    setup_logging(log_file=args.log_file)
    config = ImportConfig.from_env(
        delimiter=args.delimiter,
        progress_every=args.progress_every,
        verbose=False if args.quiet else None,
    )

    try:
        summary = run_csv_import(args.nodes, args.rels, args.output, args.index_db, config)
    except ImportFailed as e:
        logger.error("%s", e)
        logger.error("The target store is in an unknown state; delete it before retrying.")
        return 1

    logger.info("Imported %d nodes and %d relationships", summary.nodes, summary.relationships)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
