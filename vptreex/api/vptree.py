from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Sequence, Tuple

from numpy.random import Generator

from vptreex.algo.build import create
from vptreex.algo.select import SelectionStrategy
from vptreex.core.metrics import Metric
from vptreex.core.tree import TreeStats, VPTree, to_list
from vptreex.queries.nearest import nearest_neighbor, neighbors


@dataclass(frozen=True)
class VantagePointTree:
    """Thin façade bundling build options with query helpers.

    >>> tree = VantagePointTree(metric="levenshtein").fit(["kitten", "sitting", "mitten"])
    >>> tree.nearest("sittin")
    (1.0, 'sitting')
    """

    metric: Metric | str | Callable[[Any, Any], float] | None = None
    selection: SelectionStrategy | str | None = None
    seed: int | None = None
    tree: VPTree | None = None

    def fit(self, points: Iterable[Any], *, rng: Generator | None = None) -> "VantagePointTree":
        built = create(
            points,
            self.metric,
            selection=self.selection,
            rng=rng,
            seed=self.seed,
        )
        return VantagePointTree(
            metric=built.metric,
            selection=self.selection,
            seed=self.seed,
            tree=built,
        )

    def nearest(self, query: Any) -> Tuple[float, Any]:
        return nearest_neighbor(query, self._require_tree())

    def neighbors(self, query: Any, tolerance: float) -> Sequence[Any]:
        return neighbors(query, tolerance, self._require_tree())

    def to_list(self) -> List[Any]:
        return to_list(self._require_tree())

    def is_empty(self) -> bool:
        return self._require_tree().is_empty()

    @property
    def size(self) -> int:
        return self._require_tree().size

    @property
    def stats(self) -> TreeStats:
        return self._require_tree().stats

    def _require_tree(self) -> VPTree:
        if self.tree is None:
            raise ValueError("VantagePointTree requires an existing tree; call fit() first.")
        return self.tree
