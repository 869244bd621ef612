"""
Tests for batch evaluation against a reference provider.
"""
import logging
from unittest.mock import Mock

import numpy as np
import pytest

from config.schemas import PairCountingConfig
from nodes.paircounting import (
    ByLabelReference,
    ContingencyTable,
    Partition,
    PairCountingEvaluator,
    normalize_reference_result,
)


class TestReferenceProvider:
    """Test provider results and the by-label reference"""

    def test_normalize_reference_result(self, partition_a):
        assert normalize_reference_result(None) == []
        assert normalize_reference_result(partition_a) == [partition_a]
        assert normalize_reference_result((partition_a, partition_a)) == [partition_a, partition_a]

    def test_by_label_sequence(self):
        """Positions become object ids"""
        provider = ByLabelReference([0, 0, 1, 1, 1])
        (reference,) = provider(frozenset(range(5)))

        assert reference.classes == (frozenset({0, 1}), frozenset({2, 3, 4}))

    def test_by_label_keeps_all_labelled_objects(self):
        """The reference is never cropped to the universe it is handed"""
        provider = ByLabelReference({"a": 1, "b": 1, "c": 2, "z": 3})
        (reference,) = provider(frozenset({"a", "b", "c"}))

        assert set().union(*reference.classes) == {"a", "b", "c", "z"}

    def test_by_label_noise(self):
        provider = ByLabelReference(np.array([-1, 0, 0]), noise_label=-1)
        (reference,) = provider(frozenset())
        assert reference.noise_class == 0


class TestPairCountingEvaluator:
    """Test orchestration of reference and candidates"""

    def test_scores_each_candidate_in_order(self, partition_a, partition_b):
        """One completed result per candidate, same order as the input"""
        provider = Mock(return_value=[partition_b])
        evaluator = PairCountingEvaluator(provider, PairCountingConfig(self_pairing=False))

        results = evaluator.evaluate([partition_a, partition_b], names=["A", "B"])

        provider.assert_called_once_with(frozenset({1, 2, 3, 4, 5}))
        assert [r.candidate_name for r in results] == ["A", "B"]
        assert [r.candidate_index for r in results] == [0, 1]
        assert all(r.ok for r in results)
        assert results[0].scores.rand == pytest.approx(0.6)
        assert results[1].scores.rand == pytest.approx(1.0)

    def test_candidate_is_table_row(self, partition_a, partition_b):
        """Candidate classes are rows, reference classes are columns"""
        evaluator = PairCountingEvaluator(lambda universe: partition_b)
        (result,) = evaluator.evaluate([partition_a])

        assert isinstance(result.table, ContingencyTable)
        assert list(result.table.row_sums) == [3, 2]
        assert list(result.table.col_sums) == [2, 3]

    def test_empty_reference_warns(self, partition_a, caplog):
        """No reference partition: warning and empty result list"""
        evaluator = PairCountingEvaluator(lambda universe: [])

        with caplog.at_level(logging.WARNING):
            results = evaluator.evaluate([partition_a])

        assert results == []
        assert "did not return a clustering result" in caplog.text

    def test_none_reference_warns(self, partition_a, caplog):
        evaluator = PairCountingEvaluator(lambda universe: None)

        with caplog.at_level(logging.WARNING):
            assert evaluator.evaluate([partition_a]) == []
        assert "did not return a clustering result" in caplog.text

    def test_multiple_references_use_first(self, partition_a, partition_b, caplog):
        """Two reference partitions: warning, first one used, one result per candidate"""
        provider = Mock(return_value=[partition_a, partition_b])
        evaluator = PairCountingEvaluator(provider, PairCountingConfig(self_pairing=False))

        with caplog.at_level(logging.WARNING):
            results = evaluator.evaluate([partition_a, partition_b])

        assert provider.call_count == 1
        assert "more than one result" in caplog.text
        assert len(results) == 2
        # reference is partition_a
        assert results[0].scores.rand == pytest.approx(1.0)
        assert results[1].scores.rand == pytest.approx(0.6)

    def test_injected_logger(self, partition_a):
        """Warnings go to the logger passed at construction"""
        logger = Mock(spec=logging.Logger)
        evaluator = PairCountingEvaluator(lambda universe: [], logger=logger)

        evaluator.evaluate([partition_a])

        logger.warning.assert_called_once_with("Reference algorithm did not return a clustering result!")

    def test_provider_errors_propagate(self, partition_a):
        """No retries and no wrapping of provider failures"""
        def failing(universe):
            raise RuntimeError("dataset unavailable")

        evaluator = PairCountingEvaluator(failing)
        with pytest.raises(RuntimeError, match="dataset unavailable"):
            evaluator.evaluate([partition_a])

    def test_structural_error_isolated(self, partition_a, partition_b):
        """A broken candidate fails alone, the rest of the batch is scored"""
        overlapping = Partition(classes=[{1, 2, 3}, {3, 4, 5}])
        other_universe = Partition(classes=[{1, 2}, {3, 4, 6}])
        evaluator = PairCountingEvaluator(lambda universe: [partition_b])

        results = evaluator.evaluate([partition_a, overlapping, other_universe, partition_b])

        assert [r.status for r in results] == ["completed", "failed", "failed", "completed"]
        assert results[1].error.startswith("InvalidPartitionError")
        assert results[2].error.startswith("UniverseMismatchError")
        assert results[1].scores is None and results[1].table is None

    def test_declared_universe(self, partition_a, partition_b):
        """An explicit universe is checked against every partition"""
        evaluator = PairCountingEvaluator(lambda universe: [partition_b])

        results = evaluator.evaluate([partition_a], universe=[1, 2, 3, 4, 5, 6])

        assert results[0].status == "failed"
        assert "InvalidPartitionError" in results[0].error

    def test_broken_reference_fails_every_candidate(self, partition_a, partition_b):
        broken = Partition(classes=[{1, 2}, {2, 3, 4, 5}])
        evaluator = PairCountingEvaluator(lambda universe: [broken])

        results = evaluator.evaluate([partition_a, partition_b])

        assert [r.status for r in results] == ["failed", "failed"]

    def test_no_candidates(self):
        """Nothing to score: the reference is never computed"""
        provider = Mock(return_value=[Partition(classes=[])])
        assert PairCountingEvaluator(provider).evaluate([]) == []
        provider.assert_not_called()

    def test_candidates_of_different_size_fail_individually(self):
        """A short first candidate does not shrink the reference for the rest"""
        reference = ByLabelReference([0, 0, 1, 1, 1])
        short = Partition.from_labels([0, 0, 1])
        full = Partition.from_labels([1, 1, 0, 0, 0])
        evaluator = PairCountingEvaluator(reference, PairCountingConfig(self_pairing=False))

        results = evaluator.evaluate([short, full, short], names=["short", "full", "again"])

        assert [r.status for r in results] == ["failed", "completed", "failed"]
        assert "UniverseMismatchError" in results[0].error
        assert results[1].scores.rand == pytest.approx(1.0)

    def test_names_length_checked(self, partition_a):
        evaluator = PairCountingEvaluator(lambda universe: [partition_a])
        with pytest.raises(ValueError):
            evaluator.evaluate([partition_a], names=["x", "y"])

    def test_parallel_matches_sequential(self, random_labels):
        """Thread pool scoring keeps candidate order and values"""
        labels_true, _ = random_labels
        rng = np.random.default_rng(7)
        candidates = [Partition.from_labels(rng.integers(0, k, size=60)) for k in range(1, 9)]
        reference = ByLabelReference(labels_true)

        sequential = PairCountingEvaluator(reference).evaluate(candidates)
        parallel = PairCountingEvaluator(
            reference, PairCountingConfig(max_workers=4)
        ).evaluate(candidates)

        assert [r.candidate_index for r in parallel] == list(range(8))
        for seq, par in zip(sequential, parallel):
            assert seq.scores == par.scores

    def test_evaluate_one(self, partition_a, partition_b):
        evaluator = PairCountingEvaluator(lambda universe: None, PairCountingConfig(self_pairing=False))
        result = evaluator.evaluate_one(partition_a, partition_b, name="single")

        assert result.candidate_name == "single"
        assert result.scores.pair_counts.a == 2

    def test_noise_config_applied(self, partition_a_noise, partition_b):
        config = PairCountingConfig(noise_special_handling=True, self_pairing=False)
        evaluator = PairCountingEvaluator(lambda universe: [partition_b], config)

        (result,) = evaluator.evaluate([partition_a_noise])

        assert result.scores.pair_counts.a == 1
