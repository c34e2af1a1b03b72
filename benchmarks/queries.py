from __future__ import annotations

import argparse
import json
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, List

import numpy as np
from numpy.random import default_rng

from vptreex import create, get_metric
from vptreex.queries.nearest import find_nearest


@dataclass(frozen=True)
class QueryBenchmarkResult:
    selection: str
    metric: str
    tree_points: int
    queries: int
    depth: int
    build_seconds: float
    query_seconds: float
    linear_seconds: float
    mean_visited: float
    mismatches: int

    @property
    def speedup(self) -> float:
        if self.query_seconds <= 0:
            return float("inf")
        return self.linear_seconds / self.query_seconds


def _ms(value: float) -> float:
    return float(value) * 1e3


def _metric_summary(values: np.ndarray) -> Dict[str, float]:
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return {}
    summary: Dict[str, float] = {
        "samples": float(arr.size),
        "min": float(np.min(arr)),
        "max": float(np.max(arr)),
        "mean": float(np.mean(arr)),
    }
    for pct in (50, 90, 99):
        summary[f"p{pct}"] = float(np.percentile(arr, pct))
    return summary


def benchmark_nearest(
    *,
    dimension: int,
    tree_points: int,
    queries: int,
    selection: str,
    metric: str,
    seed: int,
) -> tuple[QueryBenchmarkResult, Dict[str, float]]:
    rng = default_rng(seed)
    points = list(rng.normal(size=(tree_points, dimension)))
    query_points = list(rng.normal(size=(queries, dimension)))
    distance = get_metric(metric)

    start = time.perf_counter()
    tree = create(points, distance, selection=selection, rng=rng)
    build_seconds = time.perf_counter() - start

    visited: List[int] = []
    tree_dists: List[float] = []
    start = time.perf_counter()
    for query in query_points:
        best, count = find_nearest(tree.root, query, distance)
        visited.append(count)
        tree_dists.append(best[0] if best is not None else float("nan"))
    query_seconds = time.perf_counter() - start

    start = time.perf_counter()
    linear_dists = [min(distance(p, query) for p in points) for query in query_points]
    linear_seconds = time.perf_counter() - start

    mismatches = int(
        np.count_nonzero(~np.isclose(np.asarray(tree_dists), np.asarray(linear_dists)))
    )
    result = QueryBenchmarkResult(
        selection=selection,
        metric=distance.name,
        tree_points=tree_points,
        queries=queries,
        depth=tree.stats.depth,
        build_seconds=build_seconds,
        query_seconds=query_seconds,
        linear_seconds=linear_seconds,
        mean_visited=float(np.mean(visited)) if visited else 0.0,
        mismatches=mismatches,
    )
    return result, _metric_summary(np.asarray(visited))


def _parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Benchmark VP-tree nearest-neighbour queries against a linear scan."
    )
    parser.add_argument("--dimension", type=int, default=8)
    parser.add_argument("--tree-points", type=int, default=2048)
    parser.add_argument("--queries", type=int, default=256)
    parser.add_argument(
        "--selection",
        default="sampled:64",
        help="exhaustive | sampled[:K] | random",
    )
    parser.add_argument("--metric", default="euclidean")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--json", action="store_true", help="Emit a JSON record instead of text.")
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> None:
    args = _parse_args(argv)
    result, visited_summary = benchmark_nearest(
        dimension=args.dimension,
        tree_points=args.tree_points,
        queries=args.queries,
        selection=args.selection,
        metric=args.metric,
        seed=args.seed,
    )
    if args.json:
        record: Dict[str, Any] = asdict(result)
        record["speedup"] = result.speedup
        record["visited"] = visited_summary
        print(json.dumps(record, indent=2, sort_keys=True))
        return

    print(
        f"vptreex {result.selection} | metric={result.metric} "
        f"points={result.tree_points} queries={result.queries} depth={result.depth}"
    )
    print(
        f"build={_ms(result.build_seconds):.2f}ms "
        f"query={_ms(result.query_seconds):.2f}ms "
        f"linear={_ms(result.linear_seconds):.2f}ms "
        f"speedup={result.speedup:.2f}x"
    )
    print(
        f"visited mean={result.mean_visited:.1f} "
        f"p90={visited_summary.get('p90', 0.0):.1f} mismatches={result.mismatches}"
    )


if __name__ == "__main__":
    main()
