import pytest

from perfboard.config import Config


def test_defaults():
    cfg = Config(environ={})
    assert cfg.API_PORT == 8000
    assert cfg.MAX_BATCH_SIZE == 500
    assert cfg.CHART_POINT_INTERVAL_MS == 100
    assert cfg.LOG_LEVEL == "INFO"


def test_environment_overrides():
    cfg = Config(environ={"MAX_BATCH_SIZE": "10", "LOG_LEVEL": "debug"})
    assert cfg.MAX_BATCH_SIZE == 10
    assert cfg.LOG_LEVEL == "DEBUG"


@pytest.mark.parametrize(
    "environ",
    [
        {"MAX_BATCH_SIZE": "0"},
        {"CHART_POINT_INTERVAL_MS": "-5"},
        {"API_PORT": "70000"},
        {"MAX_LATENCY_MS": "0"},
        {"LOG_LEVEL": "LOUD"},
    ],
)
def test_invalid_values_are_rejected(environ):
    with pytest.raises(ValueError):
        Config(environ=environ)
