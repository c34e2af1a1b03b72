"""Small list/array helpers shared by the selector and the builder."""

from __future__ import annotations

from typing import Any, List, Sequence, Tuple, TypeVar

import numpy as np
from numpy.random import Generator

T = TypeVar("T")


def remove_at(items: Sequence[T], index: int) -> List[T]:
    """Return a copy of ``items`` without the element at ``index``."""

    assert 0 <= index < len(items), f"index {index} out of range for {len(items)} items"
    return [item for position, item in enumerate(items) if position != index]


def partition(
    points: Sequence[T], distances: np.ndarray, threshold: float
) -> Tuple[List[T], np.ndarray, List[T], np.ndarray]:
    """Split points into ``distance < threshold`` and ``distance >= threshold``.

    Relative input order is preserved on both sides.
    """

    mask = distances < threshold
    close = [point for point, keep in zip(points, mask) if keep]
    far = [point for point, keep in zip(points, mask) if not keep]
    return close, distances[mask], far, distances[~mask]


def min_max(values: np.ndarray, default: Tuple[float, float] = (0.0, 0.0)) -> Tuple[float, float]:
    if values.size == 0:
        return default
    return float(np.min(values)), float(np.max(values))


def bootstrap_sample(size: int, population: int, rng: Generator) -> np.ndarray:
    """Draw ``size`` indices from ``range(population)`` with replacement."""

    assert population > 0, "cannot sample from an empty population"
    return rng.integers(0, population, size=size)


def median(values: np.ndarray) -> float:
    # Even counts average the two middle values.
    return float(np.median(values))


def spread(mu: float, values: np.ndarray) -> float:
    """Sum of squared deviations from ``mu`` (unnormalised variance)."""

    diff = values - mu
    return float(np.sum(diff * diff))


def distances_from(origin: Any, points: Sequence[Any], distance: Any) -> np.ndarray:
    return np.fromiter(
        (distance(origin, point) for point in points),
        dtype=np.float64,
        count=len(points),
    )


__all__ = [
    "bootstrap_sample",
    "distances_from",
    "median",
    "min_max",
    "partition",
    "remove_at",
    "spread",
]
