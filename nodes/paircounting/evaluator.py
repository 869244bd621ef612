"""
Pair-counting evaluation of candidate partitions against one reference partition.
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, FrozenSet, Hashable, Iterable, List, Optional, Sequence

from config.schemas import EvaluationResult, PairCountingConfig

from .contingency import ContingencyTable
from .errors import PairCountingError
from .metrics import calculate_pair_counting_scores
from .partition_index import Partition, PartitionIndex
from .reference import ReferenceProvider, normalize_reference_result


class PairCountingEvaluator:
    """Scores candidate partitions against the reference a provider yields.

    The provider is invoked once per non-empty ``evaluate`` call. Structural problems with
    a single candidate become a failed result bundle and never stop the batch.
    """

    def __init__(
        self,
        reference_provider: ReferenceProvider,
        config: Optional[PairCountingConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Args:
            reference_provider: Callable yielding the reference partition(s)
            config: Noise / self-pairing policy and parallelism
            logger: Receives the empty / multiple reference warnings
        """
        self.reference_provider = reference_provider
        self.config = config or PairCountingConfig()
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def evaluate(
        self,
        candidates: Sequence[Partition],
        universe: Optional[Iterable[Hashable]] = None,
        names: Optional[Sequence[str]] = None,
    ) -> List[EvaluationResult]:
        """Evaluate every candidate against the reference partition.

        Args:
            candidates: Candidate partitions, already materialised
            universe: Shared object ids. When given, every partition must cover
                exactly this set; otherwise the first candidate's objects are
                handed to the provider and partitions are checked pairwise.
            names: Optional display name per candidate

        Returns:
            One EvaluationResult per candidate in input order, or an empty list
            when there are no candidates (the provider is not invoked) or the
            provider yields no reference partition
        """
        candidates = list(candidates)
        if names is not None and len(names) != len(candidates):
            raise ValueError(f"Got {len(names)} names for {len(candidates)} candidates")
        if not candidates:
            return []

        declared = frozenset(universe) if universe is not None else None
        universe_ids = declared if declared is not None else self._first_universe(candidates)

        references = normalize_reference_result(self.reference_provider(universe_ids))
        if not references:
            self.logger.warning("Reference algorithm did not return a clustering result!")
            return []
        if len(references) > 1:
            self.logger.warning("Reference algorithm returned more than one result!")

        try:
            reference_index = PartitionIndex.build(references[0], declared)
        except PairCountingError as e:
            # A broken reference fails every comparison, not the batch
            return [
                self._failed(idx, self._name(names, idx), e)
                for idx in range(len(candidates))
            ]

        def score(idx: int) -> EvaluationResult:
            return self._evaluate_one(
                idx, self._name(names, idx), candidates[idx], reference_index, declared
            )

        if self.config.max_workers <= 1 or len(candidates) <= 1:
            return [score(idx) for idx in range(len(candidates))]

        results_map: Dict[int, EvaluationResult] = {}
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            future_map = {executor.submit(score, idx): idx for idx in range(len(candidates))}
            for future in as_completed(future_map):
                results_map[future_map[future]] = future.result()

        return [results_map[idx] for idx in sorted(results_map)]

    def evaluate_one(
        self,
        candidate: Partition,
        reference: Partition,
        name: Optional[str] = None,
    ) -> EvaluationResult:
        """Compare a single candidate against an explicit reference partition."""
        try:
            reference_index = PartitionIndex.build(reference)
        except PairCountingError as e:
            return self._failed(0, name, e)
        return self._evaluate_one(0, name, candidate, reference_index, None)

    def _evaluate_one(
        self,
        idx: int,
        name: Optional[str],
        candidate: Partition,
        reference_index: PartitionIndex,
        declared: Optional[FrozenSet[Hashable]],
    ) -> EvaluationResult:
        try:
            candidate_index = PartitionIndex.build(candidate, declared)
            table = ContingencyTable.build(candidate_index, reference_index)
        except PairCountingError as e:
            return self._failed(idx, name, e)

        return EvaluationResult(
            candidate_index=idx,
            candidate_name=name,
            scores=calculate_pair_counting_scores(table, self.config),
            table=table,
        )

    @staticmethod
    def _failed(idx: int, name: Optional[str], error: Exception) -> EvaluationResult:
        return EvaluationResult(
            candidate_index=idx,
            candidate_name=name,
            status="failed",
            error=f"{type(error).__name__}: {error}",
        )

    @staticmethod
    def _name(names: Optional[Sequence[str]], idx: int) -> Optional[str]:
        return names[idx] if names is not None else None

    @staticmethod
    def _first_universe(candidates: List[Partition]) -> FrozenSet[Hashable]:
        return frozenset().union(*candidates[0].classes)
