import argparse
import logging
import sys
from pathlib import Path

# Add src to sys.path automatically
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pg_bulk_import.config import ImportConfig
from pg_bulk_import.errors import ImportFailed
from pg_bulk_import.pipeline.cursor_import import run_sqlite_import
from pg_bulk_import.utils.log import setup_logging

logger = logging.getLogger("import_sqlite")


def main() -> int:
    parser = argparse.ArgumentParser(description="Bulk-import node and relationship tables from SQLite into a graph")
    parser.add_argument("db", help="SQLite database file")
    parser.add_argument("--nodes-table", default="nodes", help="Table with one row per node")
    parser.add_argument("--rels-table", default="rels", help="Table with one row per relationship")
    parser.add_argument("--output", help="GraphML file to write the imported graph to")
    parser.add_argument("--id-column", help="Node id column (default: id)")
    parser.add_argument(
        "--rel-columns", nargs=3, metavar=("START", "END", "TYPE"),
        help="Relationship start/end/type columns (default: src dest type)",
    )
    parser.add_argument("--node-property", action="append", dest="node_properties",
                        help="Only import these node columns as properties (repeatable)")
    parser.add_argument("--rel-property", action="append", dest="rel_properties",
                        help="Only import these relationship columns as properties (repeatable)")
    parser.add_argument("--progress-every", type=int, help="Log progress every N entities")
    parser.add_argument("--quiet", action="store_true", help="No progress output")
    parser.add_argument("--log-file", help="Also write logs to this file")
    args = parser.parse_args()

    setup_logging(log_file=args.log_file)
    config = ImportConfig.from_env(
        progress_every=args.progress_every,
        verbose=False if args.quiet else None,
    )

    try:
        summary = run_sqlite_import(
            args.db,
            args.nodes_table,
            args.rels_table,
            args.output,
            config,
            node_id_column=args.id_column,
            rel_columns=args.rel_columns,
            node_properties=args.node_properties,
            rel_properties=args.rel_properties,
        )
    except ImportFailed as e:
        logger.error("%s", e)
        logger.error("The target store is in an unknown state; delete it before retrying.")
        return 1

    logger.info("Imported %d nodes and %d relationships", summary.nodes, summary.relationships)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
