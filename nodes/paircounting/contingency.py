"""
Contingency table between two partitions of the same object universe.
"""
from typing import Any, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .errors import UniverseMismatchError
from .partition_index import Partition, PartitionIndex


PartitionLike = Union[Partition, PartitionIndex]


def _as_index(partition: PartitionLike) -> PartitionIndex:
    if isinstance(partition, PartitionIndex):
        return partition
    return PartitionIndex.build(partition)


class ContingencyTable:
    """Joint counts ``|A_i ∩ B_j|`` of two partitions.

    Rows follow the classes of partition A, columns the classes of partition B.
    The table is immutable once built; all arrays are flagged read-only.
    """

    def __init__(
        self,
        counts: np.ndarray,
        noise_row: Optional[int] = None,
        noise_col: Optional[int] = None,
        row_labels: Optional[Tuple[Any, ...]] = None,
        col_labels: Optional[Tuple[Any, ...]] = None,
    ):
        counts = np.array(counts, dtype=np.int64)
        if counts.ndim != 2:
            raise ValueError(f"Contingency counts must be 2-dimensional, got shape {counts.shape}")
        if (counts < 0).any():
            raise ValueError("Contingency counts must be non-negative")

        self._counts = counts
        self._row_sums = counts.sum(axis=1)
        self._col_sums = counts.sum(axis=0)
        for arr in (self._counts, self._row_sums, self._col_sums):
            arr.setflags(write=False)

        self._noise_row = noise_row
        self._noise_col = noise_col
        self._row_labels = tuple(row_labels) if row_labels is not None else tuple(range(counts.shape[0]))
        self._col_labels = tuple(col_labels) if col_labels is not None else tuple(range(counts.shape[1]))

    @classmethod
    def build(cls, partition_a: PartitionLike, partition_b: PartitionLike) -> "ContingencyTable":
        """Count the overlap of every class pair in one pass over the universe.

        Args:
            partition_a: Row partition (the candidate, in evaluation)
            partition_b: Column partition (the reference, in evaluation)

        Returns:
            ContingencyTable of shape (k_A, k_B)

        Raises:
            InvalidPartitionError: a bare Partition failed to index
            UniverseMismatchError: the partitions cover different objects
        """
        index_a = _as_index(partition_a)
        index_b = _as_index(partition_b)

        if index_a.universe_size != index_b.universe_size:
            raise UniverseMismatchError(
                f"Universe sizes differ: {index_a.universe_size} vs {index_b.universe_size}"
            )
        if index_a.ids != index_b.ids:
            only_a = len(index_a.ids - index_b.ids)
            raise UniverseMismatchError(
                f"Partitions cover different objects ({only_a} object(s) only in the first)"
            )

        n = index_a.universe_size
        rows = np.empty(n, dtype=np.intp)
        cols = np.empty(n, dtype=np.intp)
        for pos, obj in enumerate(index_a.ids):
            rows[pos] = index_a[obj]
            cols[pos] = index_b[obj]

        counts = np.zeros((index_a.n_classes, index_b.n_classes), dtype=np.int64)
        np.add.at(counts, (rows, cols), 1)

        return cls(
            counts,
            noise_row=index_a.noise_class,
            noise_col=index_b.noise_class,
            row_labels=index_a.labels,
            col_labels=index_b.labels,
        )

    @property
    def counts(self) -> np.ndarray:
        return self._counts

    @property
    def row_sums(self) -> np.ndarray:
        return self._row_sums

    @property
    def col_sums(self) -> np.ndarray:
        return self._col_sums

    @property
    def noise_row(self) -> Optional[int]:
        return self._noise_row

    @property
    def noise_col(self) -> Optional[int]:
        return self._noise_col

    @property
    def row_labels(self) -> Tuple[Any, ...]:
        return self._row_labels

    @property
    def col_labels(self) -> Tuple[Any, ...]:
        return self._col_labels

    @property
    def total(self) -> int:
        return int(self._counts.sum())

    @property
    def shape(self) -> Tuple[int, int]:
        return self._counts.shape

    def cell(self, row: int, col: int) -> int:
        return int(self._counts[row, col])

    def noise_mask(self) -> np.ndarray:
        """Boolean mask of cells in A's noise row or B's noise column."""
        mask = np.zeros(self._counts.shape, dtype=bool)
        if self.noise_row is not None:
            mask[self.noise_row, :] = True
        if self.noise_col is not None:
            mask[:, self.noise_col] = True
        return mask

    def to_frame(self) -> pd.DataFrame:
        """Joint counts as a labelled DataFrame (rows: A classes, columns: B classes)."""
        return pd.DataFrame(
            self._counts,
            index=pd.Index(self.row_labels, name="a_class"),
            columns=pd.Index(self.col_labels, name="b_class"),
        )

    def __repr__(self) -> str:
        return f"ContingencyTable(shape={self.shape}, n={self.total})"
