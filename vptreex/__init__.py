"""vptreex: vantage-point trees for exact nearest-neighbour search in metric spaces.

Quick Start
-----------
>>> import numpy as np
>>> import vptreex
>>>
>>> points = list(np.random.default_rng(0).normal(size=(1000, 3)))
>>> tree = vptreex.create(points, "euclidean", selection="sampled:64", seed=0)
>>> distance, point = vptreex.nearest_neighbor(np.zeros(3), tree)

Custom metrics
--------------
Any ``distance(a, b)`` callable satisfying the metric axioms works:

>>> tree = vptreex.create(["kitten", "sitting", "mitten"], "levenshtein")
>>> vptreex.nearest_neighbor("sittin", tree)
(1.0, 'sitting')

Classes
-------
VantagePointTree : Façade bundling build options with query helpers.
VPTree : Immutable tree returned by :func:`create`.
Metric : Named distance function; see :func:`available_metrics`.
"""

from importlib.metadata import version as _pkg_version

try:
    __version__ = _pkg_version("vptreex")
except Exception:  # pragma: no cover - best effort during local development
    __version__ = "0.0.1"

from .algo import (
    ExhaustiveSelection,
    RandomSelection,
    SampledSelection,
    create,
    parse_selection,
)
from .api import VantagePointTree
from .core import (
    Metric,
    MetricRegistry,
    TreeStats,
    VPNode,
    VPTree,
    available_metrics,
    get_metric,
    is_empty,
    register_metric,
    to_list,
)
from .errors import EmptyTreeError
from .queries import nearest_neighbor, neighbors

__all__ = [
    "__version__",
    "VantagePointTree",
    "create",
    "nearest_neighbor",
    "neighbors",
    "to_list",
    "is_empty",
    "EmptyTreeError",
    "ExhaustiveSelection",
    "RandomSelection",
    "SampledSelection",
    "parse_selection",
    "Metric",
    "MetricRegistry",
    "TreeStats",
    "VPNode",
    "VPTree",
    "available_metrics",
    "get_metric",
    "register_metric",
]
