"""Vantage-point selection strategies.

Each strategy picks one point of a node's candidate set as the vantage point
and returns the median distance from it to the remaining points; that median
becomes the near/far split threshold ``mu``.

=============  ==========================  ===============================
strategy       cost per node               use when
=============  ==========================  ===============================
exhaustive     O(n^2) distance calls       thousands of points
sampled:K      O(K^2) distance calls       tens to hundreds of thousands
random         O(n) distance calls         millions, or fastest build
=============  ==========================  ===============================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Protocol, Sequence

import numpy as np
from numpy.random import Generator

from vptreex import config as vx_config
from vptreex.core.arrays import (
    bootstrap_sample,
    distances_from,
    median,
    remove_at,
    spread,
)
from vptreex.logging import get_logger

LOGGER = get_logger("algo.select")

Distance = Callable[[Any, Any], float]


@dataclass(frozen=True)
class Selection:
    """Chosen vantage point, split threshold and the points left to place.

    ``distances`` holds ``distance(vp, p)`` for every ``p`` in ``others`` when
    the strategy already computed them, so the builder can skip a second pass.
    """

    vp: Any
    mu: float
    others: List[Any]
    distances: np.ndarray | None = None


class SelectionStrategy(Protocol):
    name: str

    def select(
        self, points: Sequence[Any], distance: Distance, rng: Generator
    ) -> Selection:
        ...


def _singleton(points: Sequence[Any]) -> Selection | None:
    assert len(points) > 0, "vantage-point selection needs at least one candidate"
    if len(points) == 1:
        return Selection(vp=points[0], mu=0.0, others=[], distances=np.empty(0))
    return None


@dataclass(frozen=True)
class ExhaustiveSelection:
    """Try every point; keep the one whose distances spread out the most.

    Candidates are scored one distance row at a time, so memory stays linear
    in the number of points.
    """

    name: str = "exhaustive"

    def select(
        self, points: Sequence[Any], distance: Distance, rng: Generator | None = None
    ) -> Selection:
        single = _singleton(points)
        if single is not None:
            return single

        best_index = 0
        best_mu = 0.0
        best_spread = -np.inf
        best_dists: np.ndarray | None = None
        for i, candidate in enumerate(points):
            dists = distances_from(candidate, remove_at(points, i), distance)
            mu = median(dists)
            candidate_spread = spread(mu, dists)
            if candidate_spread > best_spread:
                best_index = i
                best_mu = mu
                best_spread = candidate_spread
                best_dists = dists
        return Selection(
            vp=points[best_index],
            mu=best_mu,
            others=remove_at(points, best_index),
            distances=best_dists,
        )


@dataclass(frozen=True)
class SampledSelection:
    """Estimate the spread of ``sample_size`` bootstrap candidates.

    Each candidate is scored against its own bootstrap sample of the node's
    points instead of the full set. When the node holds no more points than
    ``sample_size`` the exhaustive strategy is used instead.
    """

    sample_size: int
    name: str = "sampled"

    def __post_init__(self) -> None:
        if self.sample_size <= 0:
            raise ValueError(f"Sample size must be positive, got {self.sample_size}.")

    def select(
        self, points: Sequence[Any], distance: Distance, rng: Generator
    ) -> Selection:
        single = _singleton(points)
        if single is not None:
            return single

        n = len(points)
        if self.sample_size >= n:
            LOGGER.debug(
                "Sample size %d >= %d candidates; using exhaustive selection.",
                self.sample_size,
                n,
            )
            return ExhaustiveSelection().select(points, distance, rng)

        candidates = bootstrap_sample(self.sample_size, n, rng)
        best_index = int(candidates[0])
        best_mu = 0.0
        best_spread = -np.inf
        for candidate in candidates:
            index = int(candidate)
            sample = bootstrap_sample(self.sample_size, n, rng)
            dists = distances_from(points[index], [points[int(j)] for j in sample], distance)
            mu = median(dists)
            candidate_spread = spread(mu, dists)
            if candidate_spread > best_spread:
                best_index = index
                best_mu = mu
                best_spread = candidate_spread
        return Selection(
            vp=points[best_index],
            mu=best_mu,
            others=remove_at(points, best_index),
        )


@dataclass(frozen=True)
class RandomSelection:
    """Pick the vantage point uniformly at random."""

    name: str = "random"

    def select(
        self, points: Sequence[Any], distance: Distance, rng: Generator
    ) -> Selection:
        single = _singleton(points)
        if single is not None:
            return single

        index = int(rng.integers(len(points)))
        vp = points[index]
        others = remove_at(points, index)
        dists = distances_from(vp, others, distance)
        return Selection(vp=vp, mu=median(dists), others=others, distances=dists)


def parse_selection(spec: str) -> SelectionStrategy:
    """Build a strategy from ``"exhaustive"``, ``"random"`` or ``"sampled[:K]"``."""

    name, _, size = spec.strip().lower().partition(":")
    if name == "exhaustive" and not size:
        return ExhaustiveSelection()
    if name == "random" and not size:
        return RandomSelection()
    if name == "sampled":
        if not size:
            return SampledSelection(sample_size=vx_config.runtime_config().sample_size)
        try:
            sample_size = int(size)
        except ValueError as exc:
            raise ValueError(f"Invalid sample size '{size}'") from exc
        return SampledSelection(sample_size=sample_size)
    raise ValueError(
        f"Unsupported selection strategy '{spec}'. "
        "Expected 'exhaustive', 'random' or 'sampled[:K]'."
    )


def resolve_selection(selection: SelectionStrategy | str | None) -> SelectionStrategy:
    if selection is None:
        return parse_selection(vx_config.runtime_config().selection_spec)
    if isinstance(selection, str):
        return parse_selection(selection)
    return selection


__all__ = [
    "ExhaustiveSelection",
    "RandomSelection",
    "SampledSelection",
    "Selection",
    "SelectionStrategy",
    "parse_selection",
    "resolve_selection",
]
