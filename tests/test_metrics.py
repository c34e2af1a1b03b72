import numpy as np
import pytest

from vptreex import Metric, MetricRegistry, available_metrics, get_metric, register_metric
from vptreex.core.metrics import resolve_metric


def test_builtin_metrics_registered():
    assert set(available_metrics()) >= {
        "chebyshev",
        "euclidean",
        "hamming",
        "levenshtein",
        "manhattan",
    }


@pytest.mark.parametrize(
    "name, lhs, rhs, expected",
    [
        ("euclidean", (0.0, 0.0), (3.0, 4.0), 5.0),
        ("manhattan", (0.0, 0.0), (3.0, -4.0), 7.0),
        ("chebyshev", (1.0, 0.0), (3.0, -4.0), 4.0),
        ("hamming", "karolin", "kathrin", 3.0),
        ("levenshtein", "kitten", "sitting", 3.0),
        ("levenshtein", "", "abc", 3.0),
    ],
)
def test_builtin_metric_values(name: str, lhs, rhs, expected: float):
    metric = get_metric(name)

    assert metric(lhs, rhs) == pytest.approx(expected)
    assert metric(rhs, lhs) == pytest.approx(expected)
    assert metric(lhs, lhs) == 0.0


def test_vector_metrics_reject_shape_mismatch():
    with pytest.raises(ValueError):
        get_metric("euclidean")((0.0, 0.0), (0.0, 0.0, 0.0))


def test_hamming_rejects_length_mismatch():
    with pytest.raises(ValueError):
        get_metric("hamming")("abc", "ab")


def test_registry_rejects_duplicates_and_unknown_names():
    registry = MetricRegistry()
    metric = Metric(name="Taxi", distance=lambda a, b: 0.0)
    registry.register(metric)

    with pytest.raises(ValueError):
        registry.register(metric)
    registry.register(metric, overwrite=True)
    assert registry.get("taxi") is metric
    assert registry.names() == ("taxi",)
    with pytest.raises(KeyError):
        registry.get("missing")


def test_register_metric_makes_name_resolvable():
    def absolute(a, b):
        return abs(a - b)

    register_metric("absolute_test", absolute, overwrite=True)

    assert get_metric("absolute_test")(2, 5) == 3.0
    assert resolve_metric("absolute_test").name == "absolute_test"


def test_resolve_metric_accepts_callables():
    def scaled(a, b):
        return 2.0 * float(np.abs(a - b))

    metric = resolve_metric(scaled)

    assert metric.name == "scaled"
    assert metric(1.0, 2.0) == 2.0
    assert resolve_metric(metric) is metric


def test_resolve_metric_rejects_non_callables():
    with pytest.raises(TypeError):
        resolve_metric(3)


def test_metric_default_follows_env(monkeypatch: pytest.MonkeyPatch):
    from vptreex import config as vx_config

    monkeypatch.setenv("VPTREEX_METRIC", "Chebyshev")
    vx_config.reset_runtime_config_cache()

    assert get_metric().name == "chebyshev"
