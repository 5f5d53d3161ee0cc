"""
Console entry point for the enzyme index.

Sub-commands:
    query <database>            Look up recognition sequences read from stdin
    stats <database> <queries>  Report tree shape and instrumented query costs
"""

import argparse
import logging
import os
import sys

from enzyme_index.engine import HEADER_LINES, QueryRunner, TreeReport, build_tree, read_queries
from enzyme_index.models import DatabaseFormatError

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger()

# Keys read from stdin by the query command
DEFAULT_QUERY_LIMIT = 3


def _format(value: float | None) -> str:
    return "undefined" if value is None else f"{value:g}"


def run_query(args: argparse.Namespace) -> int:
    logger.info(f"Input file is {args.database}")
    tree = build_tree(args.database, header_lines=args.header_lines)
    runner = QueryRunner(tree)

    keys = sys.stdin.read().split()
    if args.limit > 0:
        keys = keys[: args.limit]

    for key in keys:
        entry = runner.lookup(key)
        if entry is None:
            print("Not Found")
        else:
            print(" ".join(entry.enzyme_acronyms))
    return 0


def run_stats(args: argparse.Namespace) -> int:
    logger.info(f"Input files are {args.database} and {args.queries}")
    tree = build_tree(args.database, header_lines=args.header_lines)
    queries = read_queries(args.queries)
    runner = QueryRunner(tree)

    report = TreeReport.from_tree(tree)
    print(f"2: {report.node_count}")
    print(f"3a: {_format(report.average_depth)}")
    print(f"3b: {_format(report.average_depth_ratio)}")

    finds = runner.run_finds(queries)
    print(f"4a: {finds.hits}")
    print(f"4b: {finds.mean_steps:g}")

    removes = runner.run_removes(queries, stride=args.stride)
    print(f"5a: {removes.hits}")
    print(f"5b: {removes.mean_steps:g}")

    report = TreeReport.from_tree(tree)
    print(f"6a: {report.node_count}")
    print(f"6b: {_format(report.average_depth)}")
    print(f"6c: {_format(report.average_depth_ratio)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Index restriction enzymes by recognition sequence in an AVL tree."
    )
    parser.add_argument(
        "--header-lines",
        type=int,
        default=HEADER_LINES,
        help=f"Header lines to skip in the database file (default: {HEADER_LINES})",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    query = subparsers.add_parser("query", help="Look up recognition sequences read from stdin")
    query.add_argument("database", help="Enzyme database file")
    query.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_QUERY_LIMIT,
        help=f"Number of keys to read from stdin, 0 for all (default: {DEFAULT_QUERY_LIMIT})",
    )
    query.set_defaults(handler=run_query)

    stats = subparsers.add_parser("stats", help="Report tree shape and query costs")
    stats.add_argument("database", help="Enzyme database file")
    stats.add_argument("queries", help="File with one recognition sequence per line")
    stats.add_argument(
        "--stride",
        type=int,
        default=QueryRunner.DEFAULT_REMOVE_STRIDE,
        help="Remove every N-th query key (default: %(default)s)",
    )
    stats.set_defaults(handler=run_stats)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.handler(args)
    except OSError as e:
        logger.error(f"File opening failed: {e}")
        return 1
    except DatabaseFormatError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
