"""
Partition containers and the object -> class index lookup.

A partition is a disjoint, covering split of an object universe into classes.
One class may be flagged as the noise class (the "not really a cluster" bucket
produced e.g. by density-based clusterers).
"""
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Hashable, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from .errors import InvalidPartitionError


@dataclass(frozen=True)
class Partition:
    """A materialised clustering: classes of object ids plus an optional noise class."""
    classes: Tuple[FrozenSet[Hashable], ...]
    labels: Optional[Tuple[Any, ...]] = None
    noise_class: Optional[int] = None

    def __post_init__(self):
        # Accept any iterable of iterables, store as tuple of frozensets
        object.__setattr__(self, "classes", tuple(frozenset(c) for c in self.classes))
        if self.labels is not None:
            object.__setattr__(self, "labels", tuple(self.labels))
            if len(self.labels) != len(self.classes):
                raise InvalidPartitionError(
                    f"Got {len(self.labels)} labels for {len(self.classes)} classes"
                )

    @classmethod
    def from_labels(
        cls,
        labels: Union[Sequence[Any], np.ndarray],
        ids: Optional[Sequence[Hashable]] = None,
        noise_label: Any = None,
    ) -> "Partition":
        """Build a partition from one cluster label per object.

        Args:
            labels: Cluster label of each object
            ids: Object identifiers (defaults to positions 0..n-1)
            noise_label: Label value marking the noise class, if any

        Returns:
            Partition with one class per distinct label, in first-seen order
        """
        labels = list(np.asarray(labels).tolist()) if isinstance(labels, np.ndarray) else list(labels)
        if ids is None:
            ids = range(len(labels))
        else:
            ids = list(ids)
            if len(ids) != len(labels):
                raise InvalidPartitionError(
                    f"Got {len(ids)} object ids for {len(labels)} labels"
                )
        return cls.from_mapping(zip(ids, labels), noise_label=noise_label)

    @classmethod
    def from_mapping(
        cls,
        membership: Union[Mapping[Hashable, Any], Iterable[Tuple[Hashable, Any]]],
        noise_label: Any = None,
    ) -> "Partition":
        """Build a partition from an ``{object_id: label}`` membership map."""
        items = membership.items() if isinstance(membership, Mapping) else membership

        members: Dict[Any, List[Hashable]] = {}
        for obj, label in items:
            members.setdefault(label, []).append(obj)

        labels = list(members.keys())
        noise_class = None
        if noise_label is not None and noise_label in members:
            noise_class = labels.index(noise_label)

        return cls(
            classes=tuple(frozenset(v) for v in members.values()),
            labels=tuple(labels),
            noise_class=noise_class,
        )

    def __len__(self) -> int:
        return sum(len(c) for c in self.classes)


class PartitionIndex:
    """Immutable lookup from object id to dense class index in ``[0, k)``."""

    __slots__ = ("_class_of", "_ids", "_sizes", "_labels", "_noise_class")

    def __init__(
        self,
        class_of: Dict[Hashable, int],
        sizes: Tuple[int, ...],
        labels: Tuple[Any, ...],
        noise_class: Optional[int] = None,
    ):
        self._class_of = class_of
        self._ids = frozenset(class_of)
        self._sizes = sizes
        self._labels = labels
        self._noise_class = noise_class

    @classmethod
    def build(
        cls,
        partition: Partition,
        universe: Optional[Union[int, Iterable[Hashable]]] = None,
    ) -> "PartitionIndex":
        """Index a partition over its declared universe.

        Args:
            partition: Partition to index
            universe: Universe size ``n`` or the explicit set of object ids.
                Defaults to the partition's own object count.

        Returns:
            PartitionIndex over the partition

        Raises:
            InvalidPartitionError: classes overlap, or do not cover the universe exactly
        """
        class_of: Dict[Hashable, int] = {}
        for idx, members in enumerate(partition.classes):
            for obj in members:
                if obj in class_of:
                    raise InvalidPartitionError(
                        f"Object {obj!r} appears in classes {class_of[obj]} and {idx}"
                    )
                class_of[obj] = idx

        if universe is None:
            n = len(class_of)
        elif isinstance(universe, (int, np.integer)):
            n = int(universe)
        else:
            expected = frozenset(universe)
            n = len(expected)
            foreign = class_of.keys() - expected
            if foreign:
                raise InvalidPartitionError(
                    f"{len(foreign)} object(s) not in the universe, e.g. {next(iter(foreign))!r}"
                )
            missing = expected - class_of.keys()
            if missing:
                raise InvalidPartitionError(
                    f"{len(missing)} object(s) not assigned to any class, e.g. {next(iter(missing))!r}"
                )

        if len(class_of) != n:
            raise InvalidPartitionError(
                f"Partition covers {len(class_of)} objects, universe has {n}"
            )

        k = len(partition.classes)
        noise_class = partition.noise_class
        if noise_class is not None and not 0 <= noise_class < k:
            raise InvalidPartitionError(f"Noise class {noise_class} out of range for {k} classes")

        labels = partition.labels if partition.labels is not None else tuple(range(k))
        sizes = tuple(len(c) for c in partition.classes)
        return cls(class_of, sizes, labels, noise_class)

    def class_of(self, obj: Hashable) -> int:
        return self._class_of[obj]

    def __getitem__(self, obj: Hashable) -> int:
        return self._class_of[obj]

    def __contains__(self, obj: Hashable) -> bool:
        return obj in self._class_of

    def __len__(self) -> int:
        return len(self._class_of)

    @property
    def ids(self) -> FrozenSet[Hashable]:
        return self._ids

    @property
    def universe_size(self) -> int:
        return len(self._class_of)

    @property
    def n_classes(self) -> int:
        return len(self._sizes)

    @property
    def class_sizes(self) -> Tuple[int, ...]:
        return self._sizes

    @property
    def labels(self) -> Tuple[Any, ...]:
        return self._labels

    @property
    def noise_class(self) -> Optional[int]:
        return self._noise_class

    def __repr__(self) -> str:
        return (
            f"PartitionIndex(n={self.universe_size}, k={self.n_classes}, "
            f"noise_class={self._noise_class})"
        )
