"""
Pair-counting agreement indices between two partitions.

All indices derive from the unordered object pairs, split into four counts:
    a: same class in both partitions
    b: same class in A, different classes in B
    c: different classes in A, same class in B
    d: different classes in both

Undefined ratios (zero denominator) are reported as NaN, never raised.
"""
import math
from typing import Optional

import numpy as np

from config.schemas import PairCountingConfig, PairCounts, PairCountingScores

from .contingency import ContingencyTable


def _pairs(x: np.ndarray) -> int:
    """Sum of C(x, 2) over an integer array, in exact integer arithmetic."""
    x = np.asarray(x, dtype=np.int64)
    return int((x * (x - 1) // 2).sum())


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return float("nan")
    return numerator / denominator


def calculate_pair_counts(
    table: ContingencyTable,
    noise_special_handling: bool = False,
    self_pairing: bool = True,
) -> PairCounts:
    """Classify all object pairs of the table into a, b, c, d.

    Args:
        table: Contingency table of partitions A (rows) and B (columns)
        noise_special_handling: Suppress true-positive credit for pairs in a noise class
        self_pairing: Count every object paired with itself as an agreeing pair

    Returns:
        PairCounts with the totals used by all derived indices
    """
    n = table.total
    same_both = _pairs(table.counts)
    same_a = _pairs(table.row_sums)
    same_b = _pairs(table.col_sums)
    total = n * (n - 1) // 2

    b = same_a - same_both
    c = same_b - same_both
    d = total - same_both - b - c

    a = same_both
    if noise_special_handling:
        # Only the true-positive increment is withheld; b, c, d keep their values
        a -= _pairs(table.counts[table.noise_mask()])

    if self_pairing:
        # Self pairs are credited for every object, noise included
        total += n
        a += n

    return PairCounts(a=a, b=b, c=c, d=d, total=total)


def calculate_precision(counts: PairCounts) -> float:
    """a / (a + c)"""
    return _ratio(counts.a, counts.a + counts.c)


def calculate_recall(counts: PairCounts) -> float:
    """a / (a + b)"""
    return _ratio(counts.a, counts.a + counts.b)


def calculate_f1(counts: PairCounts) -> float:
    """Harmonic mean of pair precision and recall."""
    precision = calculate_precision(counts)
    recall = calculate_recall(counts)
    return _ratio(2.0 * precision * recall, precision + recall)


def calculate_rand(counts: PairCounts) -> float:
    """(a + d) / total"""
    return _ratio(counts.a + counts.d, counts.total)


def calculate_jaccard(counts: PairCounts) -> float:
    """a / (a + b + c)"""
    return _ratio(counts.a, counts.a + counts.b + counts.c)


def calculate_fowlkes_mallows(counts: PairCounts) -> float:
    """Geometric mean of pair precision and recall."""
    return math.sqrt(calculate_precision(counts) * calculate_recall(counts))


def calculate_mirkin(counts: PairCounts) -> float:
    """Unnormalised Mirkin distance 2 * (b + c).

    Divide by ``counts.total`` for the normalised variant.
    """
    return float(2 * counts.disagreements)


def calculate_adjusted_rand(table: ContingencyTable, noise_special_handling: bool = False) -> float:
    """Hubert-Arabie adjusted Rand index.

    Always computed over the C(n, 2) distinct pairs, whatever the self-pairing
    policy. Under noise handling the index uses the noise-suppressed ``a``.

    Args:
        table: Contingency table of the two partitions
        noise_special_handling: Use the noise-suppressed agreement count

    Returns:
        ARI, or NaN when the maximum index equals the expected index
    """
    n = table.total
    n2 = n * (n - 1) // 2
    sum_rows = _pairs(table.row_sums)
    sum_cols = _pairs(table.col_sums)

    a = _pairs(table.counts)
    if noise_special_handling:
        a -= _pairs(table.counts[table.noise_mask()])

    if n2 == 0:
        return float("nan")
    # Numerators kept as exact integers until the final division
    expected = (sum_rows * sum_cols) / n2
    max_index = (sum_rows + sum_cols) / 2
    return _ratio(a - expected, max_index - expected)


def calculate_pair_counting_scores(
    table: ContingencyTable,
    config: Optional[PairCountingConfig] = None,
) -> PairCountingScores:
    """Compute all eight pair-counting indices for one contingency table.

    Args:
        table: Contingency table (rows: candidate, columns: reference)
        config: Policy flags; defaults to no noise handling with self-pairing

    Returns:
        PairCountingScores in canonical order
    """
    config = config or PairCountingConfig()
    counts = calculate_pair_counts(
        table,
        noise_special_handling=config.noise_special_handling,
        self_pairing=config.self_pairing,
    )
    return PairCountingScores(
        f1=calculate_f1(counts),
        precision=calculate_precision(counts),
        recall=calculate_recall(counts),
        rand=calculate_rand(counts),
        adjusted_rand=calculate_adjusted_rand(table, config.noise_special_handling),
        fowlkes_mallows=calculate_fowlkes_mallows(counts),
        jaccard=calculate_jaccard(counts),
        mirkin=calculate_mirkin(counts),
        pair_counts=counts,
    )
