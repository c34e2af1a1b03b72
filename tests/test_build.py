from collections import Counter
from typing import Any, List

import pytest
from numpy.random import default_rng

from vptreex import (
    ExhaustiveSelection,
    SampledSelection,
    VPNode,
    create,
    get_metric,
    is_empty,
    to_list,
)
from vptreex.core.tree import iter_points

from tests.utils.datasets import gaussian_points

STRATEGIES = ["exhaustive", "sampled:8", "random"]


def _subtree_points(node: VPNode | None) -> List[Any]:
    return list(iter_points(node))


def _assert_bounds(node: VPNode | None, distance) -> None:
    stack = [node] if node is not None else []
    while stack:
        current = stack.pop()
        left = _subtree_points(current.left)
        right = _subtree_points(current.right)
        left_d = [distance(current.vp, p) for p in left]
        right_d = [distance(current.vp, p) for p in right]

        if left_d:
            assert current.lb_low == pytest.approx(min(left_d))
            assert current.lb_high == pytest.approx(max(left_d))
        else:
            assert (current.lb_low, current.lb_high) == (0.0, 0.0)
        if right_d:
            assert current.rb_low == pytest.approx(min(right_d))
            assert current.rb_high == pytest.approx(max(right_d))
        else:
            assert (current.rb_low, current.rb_high) == (0.0, 0.0)
        if left_d and right_d:
            assert max(left_d) < min(right_d)
        assert current.middle == pytest.approx(0.5 * (current.lb_high + current.rb_low))

        stack.extend(child for child in (current.left, current.right) if child is not None)


def test_create_empty() -> None:
    tree = create([], "euclidean")

    assert is_empty(tree)
    assert tree.is_empty()
    assert to_list(tree) == []
    assert tree.size == 0
    assert tree.stats.depth == 0


def test_create_single_point_is_leaf() -> None:
    tree = create([(1.0, 1.0)], "euclidean")

    assert not is_empty(tree)
    root = tree.root
    assert root is not None and root.is_leaf()
    assert root.vp == (1.0, 1.0)
    assert (root.lb_low, root.lb_high, root.middle, root.rb_low, root.rb_high) == (0.0,) * 5
    assert tree.stats.size == 1
    assert tree.stats.leaves == 1


@pytest.mark.parametrize("selection", STRATEGIES)
@pytest.mark.parametrize("count", [2, 3, 17, 200])
def test_to_list_is_permutation(selection: str, count: int) -> None:
    points = gaussian_points(default_rng(count), count, 3)
    tree = create(points, "euclidean", selection=selection, seed=9)

    assert Counter(to_list(tree)) == Counter(points)
    assert tree.size == count
    assert len(tree) == count


def test_duplicates_are_kept() -> None:
    points = [(0.0,), (1.0,), (0.0,), (1.0,), (0.0,)]
    tree = create(points, "euclidean")

    assert Counter(to_list(tree)) == Counter(points)


@pytest.mark.parametrize("selection", STRATEGIES)
def test_node_bounds_match_subtree_distances(selection: str) -> None:
    points = gaussian_points(default_rng(21), 150, 2)
    euclidean = get_metric("euclidean")
    tree = create(points, euclidean, selection=selection, seed=4)

    _assert_bounds(tree.root, euclidean)


def test_exhaustive_build_is_deterministic() -> None:
    points = gaussian_points(default_rng(1), 80, 3)

    first = create(points, "euclidean", selection="exhaustive", seed=1)
    second = create(points, "euclidean", selection="exhaustive", seed=2)

    assert first.root == second.root


@pytest.mark.parametrize("selection", ["sampled:8", "random"])
def test_seeded_builds_are_reproducible(selection: str) -> None:
    points = gaussian_points(default_rng(2), 90, 3)

    first = create(points, "euclidean", selection=selection, seed=123)
    second = create(points, "euclidean", selection=selection, rng=default_rng(123))

    assert first.root == second.root


@pytest.mark.parametrize("count", [5, 40, 64])
def test_sampled_with_large_sample_matches_exhaustive(count: int) -> None:
    points = gaussian_points(default_rng(count), count, 2)

    exhaustive = create(points, "euclidean", selection=ExhaustiveSelection())
    sampled = create(points, "euclidean", selection=SampledSelection(sample_size=count), seed=0)

    assert sampled.root == exhaustive.root


def test_equal_distance_metric_builds_chain() -> None:
    tree = create(list(range(30)), lambda a, b: 0.0 if a == b else 1.0)

    assert sorted(to_list(tree)) == list(range(30))
    assert tree.stats.depth == 30
    assert tree.root is not None and tree.root.left is None


def test_many_duplicates_do_not_exhaust_the_stack() -> None:
    points = [(1.0,)] * 1500

    tree = create(points, lambda a, b: abs(a[0] - b[0]), selection="random", seed=0)

    assert tree.size == 1500
    assert tree.stats.depth == 1500
    assert to_list(tree) == points


def test_metric_defaults_to_runtime_config(monkeypatch: pytest.MonkeyPatch) -> None:
    from vptreex import config as vx_config

    monkeypatch.setenv("VPTREEX_METRIC", "manhattan")
    vx_config.reset_runtime_config_cache()

    tree = create([(0.0, 0.0), (1.0, 1.0)])

    assert tree.metric.name == "manhattan"


def test_generators_are_accepted() -> None:
    tree = create(((float(i),) for i in range(10)), "euclidean")

    assert sorted(to_list(tree)) == [(float(i),) for i in range(10)]


def test_deep_chain_supports_repr_and_equality() -> None:
    def distance(a, b) -> float:
        return abs(a[0] - b[0])

    first = create([(1.0,)] * 1500, distance, selection="random", seed=0)
    second = create([(1.0,)] * 1500, distance, selection="random", seed=0)
    shorter = create([(1.0,)] * 1499, distance, selection="random", seed=0)

    assert first.stats.depth == 1500
    assert "VPNode(vp=(1.0,)" in repr(first)
    assert first.root == second.root
    assert first.root != shorter.root
    assert first == second


def test_node_equality_compares_subtrees() -> None:
    left = VPNode.leaf((0.0,))
    node = VPNode(vp=(1.0,), lb_low=1.0, lb_high=1.0, middle=0.5, left=left)

    assert node == VPNode(vp=(1.0,), lb_low=1.0, lb_high=1.0, middle=0.5, left=VPNode.leaf((0.0,)))
    assert node != VPNode(vp=(1.0,), lb_low=1.0, lb_high=1.0, middle=0.5, left=VPNode.leaf((2.0,)))
    assert node != VPNode(vp=(1.0,), lb_low=1.0, lb_high=1.0, middle=0.5)
    assert node != "node"
