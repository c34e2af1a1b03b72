import numpy as np
import pytest
from numpy.random import default_rng

from vptreex.core.arrays import (
    bootstrap_sample,
    distances_from,
    median,
    min_max,
    partition,
    remove_at,
    spread,
)


def test_remove_at_drops_only_the_index():
    assert remove_at(["a", "b", "c"], 1) == ["a", "c"]
    assert remove_at(["a"], 0) == []


@pytest.mark.parametrize("index", [-1, 3])
def test_remove_at_rejects_out_of_range(index: int):
    with pytest.raises(AssertionError):
        remove_at(["a", "b", "c"], index)


def test_partition_splits_on_strict_threshold():
    points = ["p0", "p1", "p2", "p3"]
    dists = np.array([0.5, 2.0, 1.0, 3.0])

    close, close_d, far, far_d = partition(points, dists, 2.0)

    assert close == ["p0", "p2"]
    assert close_d.tolist() == [0.5, 1.0]
    assert far == ["p1", "p3"]
    assert far_d.tolist() == [2.0, 3.0]


def test_min_max_defaults_for_empty():
    assert min_max(np.empty(0)) == (0.0, 0.0)
    assert min_max(np.array([3.0, -1.0, 2.0])) == (-1.0, 3.0)


def test_bootstrap_sample_draws_with_replacement():
    sample = bootstrap_sample(50, 3, default_rng(0))

    assert sample.shape == (50,)
    assert sample.min() >= 0 and sample.max() < 3
    assert len(set(sample.tolist())) < 50


def test_bootstrap_sample_requires_population():
    with pytest.raises(AssertionError):
        bootstrap_sample(3, 0, default_rng(0))


def test_median_and_spread():
    assert median(np.array([3.0, 1.0, 2.0])) == 2.0
    assert median(np.array([4.0, 1.0, 2.0, 3.0])) == 2.5
    assert spread(2.0, np.array([1.0, 2.0, 4.0])) == pytest.approx(5.0)


def test_distances_from():
    dists = distances_from(1.0, [0.0, 3.0, 1.0], lambda a, b: abs(a - b))

    assert dists.dtype == np.float64
    assert dists.tolist() == [1.0, 2.0, 0.0]
