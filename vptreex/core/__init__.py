"""Core data structures and metric primitives for the VP tree."""

from .metrics import (
    DistanceFn,
    Metric,
    MetricRegistry,
    available_metrics,
    get_metric,
    register_metric,
    resolve_metric,
)
from .tree import OpenInterval, TreeStats, VPNode, VPTree, is_empty, iter_points, to_list

__all__ = [
    "DistanceFn",
    "Metric",
    "MetricRegistry",
    "OpenInterval",
    "TreeStats",
    "VPNode",
    "VPTree",
    "available_metrics",
    "get_metric",
    "is_empty",
    "iter_points",
    "register_metric",
    "resolve_metric",
    "to_list",
]
