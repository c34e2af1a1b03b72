"""Immutable VP-tree nodes, the tree wrapper and in-order traversal.

Trees degenerate into chains as deep as the input on duplicate points or
constant metrics, so every walk over nodes here, equality included, runs on an
explicit stack. ``left``/``right`` are left out of the generated ``repr``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Tuple

from .metrics import Metric


@dataclass(frozen=True, eq=False)
class VPNode:
    """One vantage point plus the distance ranges of its two subtrees.

    ``lb_low``/``lb_high`` bound the distances from ``vp`` to every point in
    ``left``; ``rb_low``/``rb_high`` do the same for ``right``. Both ranges are
    ``(0, 0)`` when the corresponding side is empty. ``middle`` sits halfway
    between ``lb_high`` and ``rb_low`` and only steers the search order.

    Equality is structural over the whole subtree.
    """

    vp: Any
    lb_low: float = 0.0
    lb_high: float = 0.0
    middle: float = 0.0
    rb_low: float = 0.0
    rb_high: float = 0.0
    left: Optional["VPNode"] = field(default=None, repr=False)
    right: Optional["VPNode"] = field(default=None, repr=False)

    @classmethod
    def leaf(cls, vp: Any) -> "VPNode":
        return cls(vp=vp)

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def _key(self) -> Tuple[Any, ...]:
        return (self.vp, self.lb_low, self.lb_high, self.middle, self.rb_low, self.rb_high)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VPNode):
            return NotImplemented
        stack: List[Tuple[Optional[VPNode], Optional[VPNode]]] = [(self, other)]
        while stack:
            lhs, rhs = stack.pop()
            if lhs is rhs:
                continue
            if lhs is None or rhs is None or lhs._key() != rhs._key():
                return False
            stack.append((lhs.left, rhs.left))
            stack.append((lhs.right, rhs.right))
        return True


@dataclass(frozen=True)
class TreeStats:
    size: int = 0
    depth: int = 0
    leaves: int = 0

    @classmethod
    def from_root(cls, root: Optional[VPNode]) -> "TreeStats":
        if root is None:
            return cls()
        size = 0
        depth = 0
        leaves = 0
        stack: List[Tuple[VPNode, int]] = [(root, 1)]
        while stack:
            node, level = stack.pop()
            size += 1
            depth = max(depth, level)
            if node.is_leaf():
                leaves += 1
            for child in (node.left, node.right):
                if child is not None:
                    stack.append((child, level + 1))
        return cls(size=size, depth=depth, leaves=leaves)


@dataclass(frozen=True)
class OpenInterval:
    lbound: float
    rbound: float

    def __contains__(self, x: float) -> bool:
        return self.lbound < x < self.rbound


@dataclass(frozen=True)
class VPTree:
    """Immutable vantage-point tree bound to the metric it was built with."""

    root: Optional[VPNode]
    metric: Metric
    stats: TreeStats = TreeStats()

    @property
    def size(self) -> int:
        return self.stats.size

    def is_empty(self) -> bool:
        return self.root is None

    def __len__(self) -> int:
        return self.stats.size

    def __iter__(self) -> Iterator[Any]:
        return iter_points(self.root)


def iter_points(root: Optional[VPNode]) -> Iterator[Any]:
    """Yield stored points in order: left subtree, vantage point, right subtree."""

    stack: List[VPNode] = []
    node = root
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        yield node.vp
        node = node.right


def to_list(tree: VPTree) -> List[Any]:
    return list(iter_points(tree.root))


def is_empty(tree: VPTree) -> bool:
    return tree.root is None


__all__ = [
    "OpenInterval",
    "TreeStats",
    "VPNode",
    "VPTree",
    "is_empty",
    "iter_points",
    "to_list",
]
