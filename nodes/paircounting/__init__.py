"""
Pair-counting Evaluation Module

Compares a candidate clustering with a reference clustering of the same objects:
- PartitionIndex: object -> class lookup with disjointness / coverage checks
- ContingencyTable: joint class counts of two partitions
- Metrics: F1, Precision, Recall, Rand, AdjustedRand, FowlkesMallows, Jaccard, Mirkin
- PairCountingEvaluator: batch evaluation against a reference provider
"""

from .errors import (
    PairCountingError,
    InvalidPartitionError,
    UniverseMismatchError
)
from .partition_index import Partition, PartitionIndex
from .contingency import ContingencyTable
from .metrics import (
    calculate_pair_counts,
    calculate_precision,
    calculate_recall,
    calculate_f1,
    calculate_rand,
    calculate_adjusted_rand,
    calculate_fowlkes_mallows,
    calculate_jaccard,
    calculate_mirkin,
    calculate_pair_counting_scores
)
from .reference import ByLabelReference, ReferenceProvider, normalize_reference_result
from .evaluator import PairCountingEvaluator

__all__ = [
    # Errors
    'PairCountingError',
    'InvalidPartitionError',
    'UniverseMismatchError',

    # Data structures
    'Partition',
    'PartitionIndex',
    'ContingencyTable',

    # Metrics
    'calculate_pair_counts',
    'calculate_precision',
    'calculate_recall',
    'calculate_f1',
    'calculate_rand',
    'calculate_adjusted_rand',
    'calculate_fowlkes_mallows',
    'calculate_jaccard',
    'calculate_mirkin',
    'calculate_pair_counting_scores',

    # Orchestration
    'ByLabelReference',
    'ReferenceProvider',
    'normalize_reference_result',
    'PairCountingEvaluator'
]

__version__ = "1.0.0"
