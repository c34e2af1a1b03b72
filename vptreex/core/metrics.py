from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Protocol, Sequence, Tuple

import numpy as np

from vptreex import config as vx_config


class DistanceFn(Protocol):
    def __call__(self, lhs: Any, rhs: Any) -> float:
        ...


@dataclass(frozen=True)
class Metric:
    """Named distance function used by tree construction and search.

    The callable must behave as a true metric (non-negative, symmetric,
    ``d(a, a) == 0`` and the triangle inequality). Nothing checks this: a
    distance that breaks the triangle inequality still builds a tree, but
    pruning may then skip the true nearest neighbour.
    """

    name: str
    distance: DistanceFn

    def __call__(self, lhs: Any, rhs: Any) -> float:
        return float(self.distance(lhs, rhs))


class MetricRegistry:
    """Minimal registry for metrics selectable by name."""

    def __init__(self) -> None:
        self._metrics: Dict[str, Metric] = {}

    def register(self, metric: Metric, *, overwrite: bool = False) -> None:
        name = metric.name.lower()
        if not overwrite and name in self._metrics:
            raise ValueError(f"Metric '{metric.name}' already registered.")
        self._metrics[name] = metric

    def get(self, name: str) -> Metric:
        key = name.lower()
        if key not in self._metrics:
            raise KeyError(f"Metric '{name}' not registered.")
        return self._metrics[key]

    def names(self) -> Tuple[str, ...]:
        return tuple(sorted(self._metrics.keys()))


def _as_vectors(lhs: Any, rhs: Any) -> Tuple[np.ndarray, np.ndarray]:
    lhs_arr = np.asarray(lhs, dtype=np.float64)
    rhs_arr = np.asarray(rhs, dtype=np.float64)
    if lhs_arr.shape != rhs_arr.shape:
        raise ValueError("Metric operands must have identical shapes.")
    return lhs_arr, rhs_arr


def _euclidean(lhs: Any, rhs: Any) -> float:
    lhs_arr, rhs_arr = _as_vectors(lhs, rhs)
    diff = lhs_arr - rhs_arr
    return float(np.sqrt(np.sum(diff * diff)))


def _manhattan(lhs: Any, rhs: Any) -> float:
    lhs_arr, rhs_arr = _as_vectors(lhs, rhs)
    return float(np.sum(np.abs(lhs_arr - rhs_arr)))


def _chebyshev(lhs: Any, rhs: Any) -> float:
    lhs_arr, rhs_arr = _as_vectors(lhs, rhs)
    if lhs_arr.size == 0:
        return 0.0
    return float(np.max(np.abs(lhs_arr - rhs_arr)))


def _hamming(lhs: Sequence[Any], rhs: Sequence[Any]) -> float:
    if len(lhs) != len(rhs):
        raise ValueError("Hamming distance requires sequences of equal length.")
    return float(sum(1 for a, b in zip(lhs, rhs) if a != b))


def _levenshtein(lhs: Sequence[Any], rhs: Sequence[Any]) -> float:
    if len(lhs) < len(rhs):
        lhs, rhs = rhs, lhs
    previous = list(range(len(rhs) + 1))
    for i, left in enumerate(lhs, start=1):
        current = [i]
        for j, right in enumerate(rhs, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (left != right),
                )
            )
        previous = current
    return float(previous[-1])


def _load_registry() -> MetricRegistry:
    registry = MetricRegistry()
    registry.register(Metric(name="euclidean", distance=_euclidean))
    registry.register(Metric(name="manhattan", distance=_manhattan))
    registry.register(Metric(name="chebyshev", distance=_chebyshev))
    registry.register(Metric(name="hamming", distance=_hamming))
    registry.register(Metric(name="levenshtein", distance=_levenshtein))
    return registry


_REGISTRY = _load_registry()


def get_metric(name: str | None = None) -> Metric:
    """Return a registered metric, defaulting to the runtime-selected metric."""

    if name is None:
        name = vx_config.runtime_config().metric
    return _REGISTRY.get(name)


def register_metric(
    name: str, distance: Callable[[Any, Any], float], *, overwrite: bool = False
) -> Metric:
    metric = Metric(name=name, distance=distance)
    _REGISTRY.register(metric, overwrite=overwrite)
    return metric


def resolve_metric(metric: Metric | str | Callable[[Any, Any], float] | None) -> Metric:
    if metric is None or isinstance(metric, str):
        return get_metric(metric)
    if isinstance(metric, Metric):
        return metric
    if callable(metric):
        name = getattr(metric, "__name__", None) or type(metric).__name__
        return Metric(name=name, distance=metric)
    raise TypeError(f"Cannot interpret {metric!r} as a metric.")


def available_metrics() -> Tuple[str, ...]:
    return _REGISTRY.names()


__all__ = [
    "DistanceFn",
    "Metric",
    "MetricRegistry",
    "available_metrics",
    "get_metric",
    "register_metric",
    "resolve_metric",
]
