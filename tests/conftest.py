"""
Shared pytest fixtures for enzyme index tests.
"""

import os
import random
import tempfile

import pytest

from enzyme_index.engine import build_tree
from enzyme_index.models import AvlTree, SequenceMap

DATABASE_HEADER = [
    "REBASE version 903                                              allenz.903",
    "",
    "    =-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=",
    "    REBASE, The Restriction Enzyme Database   http://rebase.neb.com",
    "    Copyright (c)  Dr. Richard J. Roberts, 2019.   All rights reserved.",
    "    =-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=-=",
    "",
    "Rich Roberts                                                    Feb 26 2019",
    "",
    "",
]

DATABASE_RECORDS = [
    "AanI/TTA'TAA//",
    "AarI/CACCTGCNNNN'NNNN/'NNNNNNNNGCAGGTG//",
    "AasI/GACNNNN'NNGTC//",
    "AatII/GACGT'C//",
    "",
    "AbsI/CC'TCGAGG//",
    "Acc16I/TGC'GCA//",
    "Acc36I/ACCTGCNNNN'NNNN/'NNNNNNNNGCAGGT//",
    "Acc65I/G'GTACC//",
    "AccB1I/G'GYRCC//",
    "BanI/G'GYRCC//",
    "BshNI/G'GYRCC//",
    "PshBI/AT'TAAT//",
    "VspI/AT'TAAT//",
]


def write_lines(path: str, lines: list[str]) -> str:
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    return path


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def database_path(temp_dir):
    """Provide a small database file with the standard header."""
    return write_lines(os.path.join(temp_dir, "rebase210.txt"), DATABASE_HEADER + DATABASE_RECORDS)


@pytest.fixture
def queries_path(temp_dir):
    """Provide a query file mixing present and absent sequences."""
    return write_lines(
        os.path.join(temp_dir, "sequences.txt"),
        ["G'GYRCC", "AT'TAAT", "ZZZZ", "GACGT'C", "TTA'TAA", "NOPE"],
    )


@pytest.fixture
def loaded_tree(database_path):
    """Provide a tree built from the sample database."""
    return build_tree(database_path)


@pytest.fixture
def empty_tree():
    """Provide a fresh AvlTree instance."""
    return AvlTree()


@pytest.fixture
def sample_tree():
    """Provide a tree holding the keys 5, 3, 8, 1, 4, 7, 9."""
    tree = AvlTree()
    for key in ["5", "3", "8", "1", "4", "7", "9"]:
        tree.insert(SequenceMap.of(key, f"enzyme{key}"))
    return tree


@pytest.fixture
def large_sample_keys():
    """Provide a larger, shuffled key set for stress testing."""
    keys = [f"SEQ{i:05d}" for i in range(2000)]
    random.Random(42).shuffle(keys)
    return keys
