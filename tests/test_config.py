"""Tests for environment-based history configuration."""

import os

import pytest

from linehist.config import (
    DEFAULT_HISTORY_PATH,
    ConfigError,
    HistoryConfig,
    load_config,
    parse_bool,
    parse_capacity,
)
from linehist.format import DEFAULT_CAPACITY
from linehist.store import HistoryError


class TestLoadConfig:
    def test_defaults(self):
        config = load_config({})
        assert config == HistoryConfig()
        assert config.path == DEFAULT_HISTORY_PATH
        assert config.capacity == DEFAULT_CAPACITY
        assert config.unique is True

    def test_default_path_in_home(self):
        assert DEFAULT_HISTORY_PATH == os.path.expanduser("~/.linehist_history")

    def test_environment_overrides(self):
        config = load_config(
            {
                "LINEHIST_FILE": "/tmp/hist",
                "LINEHIST_SIZE": "50",
                "LINEHIST_UNIQUE": "no",
            }
        )
        assert config.path == "/tmp/hist"
        assert config.capacity == 50
        assert config.unique is False

    def test_path_expanded(self):
        config = load_config({"LINEHIST_FILE": "~/hist"})
        assert config.path == os.path.expanduser("~/hist")

    def test_empty_values_ignored(self):
        config = load_config({"LINEHIST_FILE": "", "LINEHIST_SIZE": "", "LINEHIST_UNIQUE": ""})
        assert config == HistoryConfig()

    def test_invalid_size(self):
        with pytest.raises(ConfigError, match="LINEHIST_SIZE"):
            load_config({"LINEHIST_SIZE": "lots"})

    def test_invalid_unique(self):
        with pytest.raises(ConfigError, match="LINEHIST_UNIQUE"):
            load_config({"LINEHIST_UNIQUE": "maybe"})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("LINEHIST_SIZE", "7")
        assert load_config().capacity == 7


class TestParsers:
    @pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
    def test_true_values(self, value):
        assert parse_bool(value, name="X") is True

    @pytest.mark.parametrize("value", ["0", "False", "no", "OFF"])
    def test_false_values(self, value):
        assert parse_bool(value, name="X") is False

    def test_capacity_zero_allowed(self):
        assert parse_capacity("0", name="X") == 0

    def test_negative_capacity(self):
        with pytest.raises(ConfigError, match="non-negative"):
            parse_capacity("-1", name="X")

    def test_config_error_hierarchy(self):
        assert issubclass(ConfigError, HistoryError)
        assert issubclass(ConfigError, ValueError)


class TestCreateStore:
    def test_store_uses_settings(self):
        store = HistoryConfig(capacity=3, unique=False).create_store()
        assert store.capacity == 3
        assert store.unique is False
        assert len(store) == 0
