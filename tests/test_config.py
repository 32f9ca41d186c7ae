"""Tests for configuration loading and validation."""
from pathlib import Path

import pytest

from nnfcm_exporter.config import Config, load_config

EXAMPLE = Path(__file__).parent.parent / "configs" / "example.yaml"


def test_example_config_loads():
    config = load_config(str(EXAMPLE))

    assert isinstance(config, Config)
    assert config.server.port == 9100
    assert config.statistics_categories == ["amf", "smf"]
    assert config.monitoring_categories == ["throughput"]
    assert config.query_params == "operator-1"
    assert config.statistics.is_active
    assert config.monitoring.server.base_url == "http://10.0.0.6:8080"


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        load_config("does/not/exist.yaml")


def test_legacy_metrics_category_key(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "RemoteStatisticServer: {address: 10.0.0.5, port: 8080}\n"
        "MetricsCategory: [amf]\n"
        "queryParams: op\n"
    )

    config = load_config(str(path))

    assert config.statistics_categories == ["amf"]
    assert not config.monitoring.is_active


def test_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("queryParams: from-file\n")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("QUERY_PARAMS", "from-env")

    config = load_config(str(path))

    assert config.global_.log_level == "DEBUG"
    assert config.query_params == "from-env"


def test_empty_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("QUERY_PARAMS", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text("")

    config = load_config(str(path))

    assert config.global_.log_level == "INFO"
    assert not config.statistics.is_active
    assert not config.monitoring.is_active


@pytest.mark.parametrize("body", [
    "MetricsStatisticsCategory: ['']\n",
    "global: {fetch_timeout_s: 0}\n",
    "Server: {port: not-a-port}\n",
    "- just\n- a list\n",
])
def test_invalid_config_rejected(tmp_path, body):
    path = tmp_path / "config.yaml"
    path.write_text(body)

    with pytest.raises(ValueError):
        load_config(str(path))
