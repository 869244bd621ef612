"""
Error types raised by the pair-counting core.
"""


class PairCountingError(ValueError):
    """Base class for structural problems with compared partitions."""
    pass


class InvalidPartitionError(PairCountingError):
    """Classes are not disjoint or do not cover exactly the declared universe."""
    pass


class UniverseMismatchError(PairCountingError):
    """The two compared partitions do not describe the same object universe."""
    pass
