"""
Loading and query drivers built on top of the AVL tree.
"""

from enzyme_index.engine.database_reader import (
    HEADER_LINES,
    DatabaseReader,
    build_tree,
    parse_record,
)
from enzyme_index.engine.query_runner import QueryRunner, QueryStats, TreeReport, read_queries

__all__ = [
    "HEADER_LINES",
    "DatabaseReader",
    "QueryRunner",
    "QueryStats",
    "TreeReport",
    "build_tree",
    "parse_record",
    "read_queries",
]
