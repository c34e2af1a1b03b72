#!/usr/bin/env python
"""Quick-start guide for vptreex library usage.

Run with: python -m vptreex
"""

from __future__ import annotations

QUICKSTART = """\
================================================================================
                                  VPTREEX
        Vantage-point trees for exact nearest-neighbour search
================================================================================

BASIC USAGE (Euclidean)
-----------------------
    import numpy as np
    import vptreex

    points = list(np.random.default_rng(0).normal(size=(10000, 3)))
    tree = vptreex.create(points, "euclidean", selection="sampled:64", seed=0)
    distance, point = vptreex.nearest_neighbor(np.zeros(3), tree)

CUSTOM METRICS
--------------
Any distance(a, b) callable that is non-negative, symmetric and satisfies the
triangle inequality can be used:

    tree = vptreex.create(words, "levenshtein")
    tree = vptreex.create(items, my_distance)

VANTAGE-POINT SELECTION
-----------------------
    vptreex.create(points, selection="exhaustive")   # O(n^2) per node, best tree
    vptreex.create(points, selection="sampled:64")   # bootstrap estimate
    vptreex.create(points, selection="random", seed=7)

FACADE
------
    from vptreex import VantagePointTree

    tree = VantagePointTree(metric="manhattan", selection="random", seed=0).fit(points)
    tree.nearest(query)

ENVIRONMENT
-----------
    VPTREEX_METRIC              default metric name (euclidean)
    VPTREEX_SELECTION           exhaustive | sampled[:K] | random
    VPTREEX_SAMPLE_SIZE         sample size for "sampled" (64)
    VPTREEX_SEED                default generator seed
    VPTREEX_LOG_LEVEL           INFO
    VPTREEX_ENABLE_DIAGNOSTICS  CPU/RSS sampling in operation logs (1)

BENCHMARKING
------------
    python benchmarks/queries.py --tree-points 4096 --queries 512 --selection sampled:64

================================================================================
"""


def main() -> None:
    """Print quick-start guide."""
    print(QUICKSTART)


if __name__ == "__main__":
    main()
