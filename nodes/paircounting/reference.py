"""
Reference-partition providers.

A provider is any callable taking the object universe (a frozenset of ids) and
returning zero or more partitions: ``None``, a single ``Partition`` or a
sequence of them.
"""
from typing import Any, Callable, FrozenSet, Hashable, List, Mapping, Optional, Sequence, Union

import numpy as np
import pandas as pd

from .partition_index import Partition


ReferenceResult = Union[None, Partition, Sequence[Partition]]
ReferenceProvider = Callable[[FrozenSet[Hashable]], ReferenceResult]


def normalize_reference_result(result: ReferenceResult) -> List[Partition]:
    """Flatten whatever a provider returned into a list of partitions."""
    if result is None:
        return []
    if isinstance(result, Partition):
        return [result]
    return list(result)


class ByLabelReference:
    """Ground-truth reference: groups the universe by a known label per object."""

    def __init__(
        self,
        labels: Union[Mapping[Hashable, Any], Sequence[Any], np.ndarray, pd.Series],
        ids: Optional[Sequence[Hashable]] = None,
        noise_label: Any = None,
    ):
        """
        Args:
            labels: ``{object_id: label}`` mapping, a label Series (index = ids)
                or one label per object
            ids: Object ids for sequence labels (defaults to positions 0..n-1)
            noise_label: Label value marking the noise class, if any
        """
        if isinstance(labels, pd.Series):
            membership = dict(zip(labels.index.tolist(), labels.tolist()))
        elif isinstance(labels, Mapping):
            membership = dict(labels)
        else:
            labels = np.asarray(labels).tolist()
            if ids is None:
                ids = range(len(labels))
            membership = dict(zip(ids, labels))
        self.membership = membership
        self.noise_label = noise_label

    def __call__(self, universe: FrozenSet[Hashable]) -> List[Partition]:
        # Every labelled object is kept; a candidate over a different object set
        # fails its own comparison with UniverseMismatchError
        return [Partition.from_mapping(self.membership, noise_label=self.noise_label)]
