"""Unit tests for configuration loading."""

import json

import pytest

from authorship.config import (
    Config,
    DEFAULT_API_URL,
    create_default_config,
    load_config,
    parse_config,
)


class TestLoadConfig:
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        with pytest.raises(ValueError):
            load_config(str(path))

    def test_default_config_round_trips(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test")
        path = tmp_path / "config.json"
        path.write_text(json.dumps(create_default_config()))

        config = load_config(str(path))

        provider = config.llm.get_provider_config()
        assert provider.api_key == "sk-test"
        assert provider.base_url == DEFAULT_API_URL
        assert provider.temperature == 0.4
        assert provider.max_tokens == 1000
        assert config.llm.max_retries == 5
        assert config.llm.base_delay == 2
        assert config.detector.app_title == "AI Authorship Verification"

    def test_unset_env_var_resolves_empty(self, monkeypatch):
        monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
        config = parse_config(create_default_config())
        assert config.llm.get_provider_config().api_key == ""


class TestDefaults:
    def test_empty_dict_uses_openrouter(self):
        config = parse_config({})
        assert config.llm.provider == "openrouter"
        assert config.llm.get_provider_config().base_url == DEFAULT_API_URL

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            Config().llm.get_provider_config("nope")

    def test_retry_config(self):
        assert Config().llm.retry_config() == {"max_retries": 5, "base_delay": 2.0, "max_delay": 60.0}

    def test_config_is_immutable(self):
        with pytest.raises(Exception):
            Config().log_level = "DEBUG"
