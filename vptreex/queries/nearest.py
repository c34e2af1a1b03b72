"""Exact nearest-neighbour search over a built :class:`VPTree`."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence, Tuple

from vptreex.core.tree import OpenInterval, VPNode, VPTree
from vptreex.diagnostics import log_operation
from vptreex.errors import EmptyTreeError
from vptreex.logging import get_logger

LOGGER = get_logger("queries.nearest")

Candidate = Tuple[float, Any]


def find_nearest(
    root: Optional[VPNode],
    query: Any,
    distance: Callable[[Any, Any], float],
    best: Optional[Candidate] = None,
) -> Tuple[Optional[Candidate], int]:
    """Branch-and-bound descent from ``root``; returns ``(best, visited)``.

    At every node the current best distance ``tau`` widens each subtree's
    recorded distance range into an open interval. A subtree whose interval
    does not strictly contain ``d(vp, query)`` cannot hold a point closer than
    ``tau`` and is skipped. The side of ``middle`` the query falls on is
    searched first; the other side is searched afterwards starting from the
    improved best, and only strictly closer points replace it.

    The walk uses an explicit stack. Pushing the secondary child below the
    primary one means the primary subtree is exhausted before the secondary
    one starts, as in the recursive formulation.
    """

    stack: List[VPNode] = [root] if root is not None else []
    visited = 0
    while stack:
        node = stack.pop()
        visited += 1
        x = distance(node.vp, query)
        if best is None or x < best[0]:
            best = (x, node.vp)
        tau = best[0]

        in_left = x in OpenInterval(node.lb_low - tau, node.lb_high + tau)
        in_right = x in OpenInterval(node.rb_low - tau, node.rb_high + tau)
        if x < node.middle:
            primary, in_primary = node.left, in_left
            secondary, in_secondary = node.right, in_right
        else:
            primary, in_primary = node.right, in_right
            secondary, in_secondary = node.left, in_left

        if in_secondary and secondary is not None:
            stack.append(secondary)
        if in_primary and primary is not None:
            stack.append(primary)
    return best, visited


def nearest_neighbor(query: Any, tree: VPTree) -> Tuple[float, Any]:
    """Return ``(distance, point)`` for the stored point closest to ``query``.

    Raises
    ------
    EmptyTreeError
        If ``tree`` holds no points.
    """

    if tree.is_empty():
        raise EmptyTreeError()
    with log_operation(LOGGER, "nearest_neighbor") as op_log:
        best, visited = find_nearest(tree.root, query, tree.metric)
        op_log.add_metadata(visited=visited, size=tree.size)
    assert best is not None
    return best


def neighbors(query: Any, tolerance: float, tree: VPTree) -> Sequence[Any]:
    """Range query placeholder: every call raises ``NotImplementedError``."""

    raise NotImplementedError("Tolerance (range) queries are not implemented.")


__all__ = ["find_nearest", "nearest_neighbor", "neighbors"]
