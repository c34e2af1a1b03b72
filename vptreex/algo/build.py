"""Near/far partitioning of a point set into a :class:`VPTree`."""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Optional, Tuple

from numpy.random import Generator, default_rng

from vptreex import config as vx_config
from vptreex.core.arrays import distances_from, min_max, partition
from vptreex.core.metrics import Metric, resolve_metric
from vptreex.core.tree import TreeStats, VPNode, VPTree
from vptreex.diagnostics import log_operation
from vptreex.logging import get_logger

from .select import SelectionStrategy, resolve_selection

LOGGER = get_logger("algo.build")

_EXPAND = 0
_ASSEMBLE = 1


def _resolve_rng(rng: Generator | None, seed: int | None) -> Generator:
    if rng is not None:
        return rng
    if seed is None:
        seed = vx_config.runtime_config().seed
    return default_rng(seed)


def build_nodes(
    points: List[Any],
    distance: Callable[[Any, Any], float],
    strategy: SelectionStrategy,
    rng: Generator,
) -> Optional[VPNode]:
    """Partition ``points`` into a VP tree and return its root (``None`` if empty).

    Subtrees are expanded depth-first, close side before far side, on an
    explicit stack; degenerate inputs (duplicates, constant metrics) produce
    chains as deep as the input is long.
    """

    built: List[Optional[VPNode]] = []
    tasks: List[Tuple[int, Any]] = [(_EXPAND, points)]
    while tasks:
        kind, payload = tasks.pop()
        if kind == _ASSEMBLE:
            vp, (lb_low, lb_high), (rb_low, rb_high) = payload
            right = built.pop()
            left = built.pop()
            built.append(
                VPNode(
                    vp=vp,
                    lb_low=lb_low,
                    lb_high=lb_high,
                    middle=0.5 * (lb_high + rb_low),
                    rb_low=rb_low,
                    rb_high=rb_high,
                    left=left,
                    right=right,
                )
            )
            continue

        node_points: List[Any] = payload
        if not node_points:
            built.append(None)
            continue
        if len(node_points) == 1:
            built.append(VPNode.leaf(node_points[0]))
            continue

        selection = strategy.select(node_points, distance, rng)
        dists = selection.distances
        if dists is None:
            dists = distances_from(selection.vp, selection.others, distance)
        close, close_dists, far, far_dists = partition(selection.others, dists, selection.mu)
        tasks.append((_ASSEMBLE, (selection.vp, min_max(close_dists), min_max(far_dists))))
        tasks.append((_EXPAND, far))
        tasks.append((_EXPAND, close))

    assert len(built) == 1, "builder stack must end with exactly the root"
    return built[0]


def create(
    points: Iterable[Any],
    metric: Metric | str | Callable[[Any, Any], float] | None = None,
    *,
    selection: SelectionStrategy | str | None = None,
    rng: Generator | None = None,
    seed: int | None = None,
) -> VPTree:
    """Build an immutable VP tree over ``points``.

    Parameters
    ----------
    points:
        Any finite iterable of points; zero points yield an empty tree.
    metric:
        A :class:`Metric`, a registered metric name or a plain
        ``distance(a, b)`` callable. Defaults to ``VPTREEX_METRIC``.
    selection:
        Vantage-point selection strategy or its string form
        (``"exhaustive"``, ``"sampled:64"``, ``"random"``). Defaults to
        ``VPTREEX_SELECTION``.
    rng, seed:
        Random source for the sampled and random strategies. ``rng`` wins over
        ``seed``; with neither, ``VPTREEX_SEED`` seeds a fresh generator.
    """

    resolved_metric = resolve_metric(metric)
    strategy = resolve_selection(selection)
    generator = _resolve_rng(rng, seed)
    point_list = list(points)

    with log_operation(LOGGER, "build") as op_log:
        root = build_nodes(point_list, resolved_metric, strategy, generator)
        stats = TreeStats.from_root(root)
        op_log.add_metadata(
            points=len(point_list),
            metric=resolved_metric.name,
            selection=strategy.name,
            depth=stats.depth,
        )
    return VPTree(root=root, metric=resolved_metric, stats=stats)


__all__ = ["build_nodes", "create"]
