import pytest

from vptreex import config as vx_config

_ENV_VARS = (
    "VPTREEX_METRIC",
    "VPTREEX_SELECTION",
    "VPTREEX_SAMPLE_SIZE",
    "VPTREEX_SEED",
    "VPTREEX_LOG_LEVEL",
    "VPTREEX_ENABLE_DIAGNOSTICS",
)


@pytest.fixture(autouse=True)
def reset_runtime_config(monkeypatch: pytest.MonkeyPatch):
    for key in _ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    vx_config.reset_runtime_config_cache()
    yield
    vx_config.reset_runtime_config_cache()
