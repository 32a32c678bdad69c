"""Tests for environment configuration."""

import pytest

from module_deps.config import AnalyzerConfig
from module_deps.errors import ConfigError


class TestAnalyzerConfig:
    def test_defaults(self):
        config = AnalyzerConfig.from_env({})
        assert config.suffix == ".info.yml"
        assert config.load_workers == 8
        assert config.load_timeout is None
        assert config.log_level == "INFO"

    def test_from_environment(self):
        config = AnalyzerConfig.from_env({
            "MODULE_DEPS_SUFFIX": ".deps.yml",
            "MODULE_DEPS_LOAD_WORKERS": "2",
            "MODULE_DEPS_LOAD_TIMEOUT": "1.5",
            "MODULE_DEPS_LOG_LEVEL": "debug",
        })
        assert config.suffix == ".deps.yml"
        assert config.load_workers == 2
        assert config.load_timeout == 1.5
        assert config.log_level == "DEBUG"

    def test_process_environment(self, monkeypatch):
        monkeypatch.setenv("MODULE_DEPS_LOAD_WORKERS", "3")
        assert AnalyzerConfig.from_env().load_workers == 3

    def test_non_numeric(self):
        with pytest.raises(ConfigError):
            AnalyzerConfig.from_env({"MODULE_DEPS_LOAD_WORKERS": "many"})

    def test_zero_workers(self):
        with pytest.raises(ConfigError):
            AnalyzerConfig.from_env({"MODULE_DEPS_LOAD_WORKERS": "0"})

    def test_negative_timeout(self):
        with pytest.raises(ConfigError):
            AnalyzerConfig.from_env({"MODULE_DEPS_LOAD_TIMEOUT": "-1"})
