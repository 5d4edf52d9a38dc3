"""
Unit tests for the environment configuration provider.
"""

import pytest

from markups.config import EnvConfigProvider, LoaderConfig


class TestEnvConfigProvider:

    def test_defaults(self, monkeypatch):
        for name in (
            "CDN_BASE_URL",
            "FETCH_TIMEOUT",
            "PRELOAD_ENABLED",
            "PRELOAD_CAPABILITIES",
            "PRELOAD_IDLE_TIMEOUT_MS",
            "IDLE_QUIET_PERIOD",
        ):
            monkeypatch.delenv(name, raising=False)

        config = EnvConfigProvider().get_loader_config()

        assert config == LoaderConfig()
        assert config.preload_capabilities == ["diagram-engine", "math-engine"]
        assert config.preload_idle_timeout == 5.0

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("CDN_BASE_URL", "https://mirror.example.com/npm/")
        monkeypatch.setenv("FETCH_TIMEOUT", "5")
        monkeypatch.setenv("PRELOAD_ENABLED", "false")
        monkeypatch.setenv("PRELOAD_CAPABILITIES", "math-engine, pdf-export")
        monkeypatch.setenv("PRELOAD_IDLE_TIMEOUT_MS", "1500")

        config = EnvConfigProvider().get_loader_config()

        assert config.cdn_base_url == "https://mirror.example.com/npm"
        assert config.fetch_timeout == 5.0
        assert config.preload_enabled is False
        assert config.preload_capabilities == ["math-engine", "pdf-export"]
        assert config.preload_idle_timeout == 1.5

    def test_unknown_preload_capability(self, monkeypatch):
        monkeypatch.setenv("PRELOAD_CAPABILITIES", "diagram-engine,chart-engine")

        with pytest.raises(ValueError, match="chart-engine"):
            EnvConfigProvider().get_loader_config()

    def test_api_config(self, monkeypatch):
        monkeypatch.setenv("API_PORT", "9090")
        monkeypatch.delenv("API_HOST", raising=False)
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = EnvConfigProvider().get_api_config()

        assert config.port == 9090
        assert config.host == "0.0.0.0"
        assert config.log_level == "debug"
