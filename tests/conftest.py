"""
Pytest configuration and shared fixtures.
"""
import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from nodes.paircounting import Partition


@pytest.fixture
def partition_a() -> Partition:
    """{1,2,3} | {4,5}"""
    return Partition(classes=[{1, 2, 3}, {4, 5}])


@pytest.fixture
def partition_b() -> Partition:
    """{1,2} | {3,4,5}"""
    return Partition(classes=[{1, 2}, {3, 4, 5}])


@pytest.fixture
def partition_a_noise() -> Partition:
    """Partition A with {4,5} flagged as noise"""
    return Partition(classes=[{1, 2, 3}, {4, 5}], noise_class=1)


@pytest.fixture
def random_labels():
    """Two random labellings of the same 60 objects"""
    rng = np.random.default_rng(42)
    labels_true = rng.integers(0, 4, size=60)
    labels_pred = rng.integers(0, 5, size=60)
    return labels_true, labels_pred
