"""
Tests for QueryRunner, QueryStats, TreeReport and read_queries.
"""

import os

import pytest

from enzyme_index.engine import QueryRunner, QueryStats, TreeReport, read_queries
from enzyme_index.models import AvlTree, SequenceMap, check_avl_invariants

from tests.conftest import write_lines


class TestReadQueries:
    """Tests for read_queries."""

    def test_strips_and_keeps_blank_lines(self, temp_dir):
        """Test whitespace is stripped and blank lines become empty keys."""
        path = write_lines(os.path.join(temp_dir, "q.txt"), ["GAATTC  ", "", "AAGCTT\r", "   "])
        assert read_queries(path) == ["GAATTC", "", "AAGCTT", ""]

    def test_missing_file(self, temp_dir):
        """Test a missing query file raises."""
        with pytest.raises(FileNotFoundError):
            read_queries(os.path.join(temp_dir, "missing.txt"))


class TestQueryStats:
    """Tests for QueryStats."""

    def test_empty_batch(self):
        """Test mean_steps of an empty batch."""
        assert QueryStats().mean_steps == 0.0

    def test_record(self):
        """Test hits and steps accumulate."""
        stats = QueryStats()
        stats.record(True, 3)
        stats.record(False, 4)

        assert stats.queries == 2
        assert stats.hits == 1
        assert stats.steps == 7
        assert stats.mean_steps == 3.5


class TestTreeReport:
    """Tests for TreeReport."""

    def test_from_tree(self, sample_tree):
        """Test report fields match the tree."""
        report = TreeReport.from_tree(sample_tree)
        assert report.node_count == 7
        assert report.average_depth == pytest.approx(sample_tree.average_depth())
        assert report.average_depth_ratio == pytest.approx(sample_tree.average_depth_ratio())

    def test_empty_tree(self, empty_tree):
        """Test undefined statistics are None."""
        assert TreeReport.from_tree(empty_tree) == TreeReport(0, None, None)

    def test_single_node(self):
        """Test the ratio is undefined for one node."""
        tree = AvlTree()
        tree.insert(SequenceMap.of("GAATTC", "EcoRI"))
        assert TreeReport.from_tree(tree) == TreeReport(1, 0.0, None)


class TestQueryRunner:
    """Tests for QueryRunner."""

    def test_lookup(self, loaded_tree):
        """Test lookup returns the stored entry or None."""
        runner = QueryRunner(loaded_tree)
        assert runner.lookup("AT'TAAT").enzyme_acronyms == ["PshBI", "VspI"]
        assert runner.lookup("ZZZZ") is None

    def test_run_finds(self, loaded_tree, queries_path):
        """Test hits and step totals over a query file."""
        queries = read_queries(queries_path)
        expected_steps = sum(loaded_tree.instrumented_find(key)[1] for key in queries)

        stats = QueryRunner(loaded_tree).run_finds(queries)

        assert stats.queries == 6
        assert stats.hits == 4
        assert stats.steps == expected_steps
        assert stats.mean_steps == pytest.approx(expected_steps / 6)
        assert loaded_tree.node_count() == 12

    def test_run_removes_every_other_key(self, loaded_tree, queries_path):
        """Test removals start with the first key and skip every second one."""
        queries = read_queries(queries_path)

        stats = QueryRunner(loaded_tree).run_removes(queries)

        # G'GYRCC, ZZZZ and TTA'TAA are attempted
        assert stats.queries == 3
        assert stats.hits == 2
        assert loaded_tree.node_count() == 10
        assert not loaded_tree.contains("G'GYRCC")
        assert not loaded_tree.contains("TTA'TAA")
        assert loaded_tree.contains("AT'TAAT")
        check_avl_invariants(loaded_tree)

    def test_blank_queries_count(self, sample_tree, temp_dir):
        """Test blank query lines are issued as misses and shift removal parity."""
        path = write_lines(os.path.join(temp_dir, "q.txt"), ["1", "", "3", "4"])
        queries = read_queries(path)
        runner = QueryRunner(sample_tree)

        finds = runner.run_finds(queries)
        assert finds.queries == 4
        assert finds.hits == 3

        removes = runner.run_removes(queries)
        # "1" and "3" sit at even positions, "4" is skipped
        assert removes.queries == 2
        assert removes.hits == 2
        assert [entry.key for entry in sample_tree] == ["4", "5", "7", "8", "9"]

    def test_run_removes_stride_one(self, sample_tree):
        """Test stride 1 removes every key."""
        stats = QueryRunner(sample_tree).run_removes(["1", "3", "4", "5", "7", "8", "9"], stride=1)

        assert stats.hits == 7
        assert sample_tree.is_empty()

    def test_invalid_stride(self, sample_tree):
        """Test stride must be positive."""
        with pytest.raises(ValueError):
            QueryRunner(sample_tree).run_removes(["1"], stride=0)

    def test_tree_property(self, sample_tree):
        """Test the runner exposes the tree it drives."""
        assert QueryRunner(sample_tree).tree is sample_tree
