"""Tests for config_file module."""

import dataclasses
from pathlib import Path
from unittest.mock import patch

import pytest

from ai_cmd import config_file
from ai_cmd.history import DEFAULT_HISTORY_FILE


class TestDefaults:
    """Missing config uses sensible defaults."""

    def test_defaults_when_no_file(self):
        with patch.object(config_file, "CONFIG_PATH", Path("/nonexistent/config.toml")):
            settings = config_file.load_config()

        assert settings.provider == "anthropic"
        assert settings.max_tokens == 4000
        assert settings.temperature == 0.1
        assert settings.history_file == DEFAULT_HISTORY_FILE
        assert settings.max_history == 100
        assert settings.timeout == 60
        assert settings.debug is False

    def test_default_provider_endpoints_and_models(self):
        settings = config_file.load_config(Path("/nonexistent/config.toml"))

        anthropic = settings.provider_config("anthropic")
        openai = settings.provider_config("openai")
        assert anthropic.api_url == "https://api.anthropic.com/v1/messages"
        assert anthropic.model == "claude-3-5-sonnet-20241022"
        assert anthropic.api_key is None
        assert openai.api_url == "https://api.openai.com/v1/chat/completions"
        assert openai.model == "gpt-4"

    def test_settings_are_immutable(self):
        settings = config_file.load_config(Path("/nonexistent/config.toml"))

        with pytest.raises(dataclasses.FrozenInstanceError):
            settings.provider = "openai"
        with pytest.raises(TypeError):
            settings.providers["anthropic"] = None


class TestLoadsToml:
    """Reads ~/.config/ai-cmd/config.toml if it exists."""

    def test_reads_all_settings(self, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text(
            'provider = "openai"\nmax_tokens = 512\ntemperature = 0.5\n\n'
            '[providers.openai]\napi_key = "sk-file"\nmodel = "gpt-4o"\n'
            'api_url = "http://localhost:8080/v1/chat/completions"\n\n'
            '[history]\nfile = "/tmp/prompts.txt"\nmax_entries = 20\n\n'
            "[transport]\ntimeout = 15\n\n"
            "[debug]\nenabled = true\n"
        )
        settings = config_file.load_config(config)

        assert settings.provider == "openai"
        assert settings.max_tokens == 512
        assert settings.temperature == 0.5
        assert settings.history_file == Path("/tmp/prompts.txt")
        assert settings.max_history == 20
        assert settings.timeout == 15
        assert settings.debug is True
        openai = settings.provider_config("openai")
        assert openai.api_key == "sk-file"
        assert openai.model == "gpt-4o"
        assert openai.api_url == "http://localhost:8080/v1/chat/completions"

    def test_partial_provider_table_keeps_other_defaults(self, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text('[providers.anthropic]\nmodel = "claude-3-haiku-20240307"\n')
        settings = config_file.load_config(config)

        anthropic = settings.provider_config("anthropic")
        assert anthropic.model == "claude-3-haiku-20240307"
        assert anthropic.api_url == "https://api.anthropic.com/v1/messages"
        # Untouched provider keeps every default
        assert settings.provider_config("openai").model == "gpt-4"

    def test_partial_config_merges_with_defaults(self, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text("[history]\nmax_entries = 50\n")
        settings = config_file.load_config(config)

        assert settings.max_history == 50
        assert settings.provider == "anthropic"
        assert settings.max_tokens == 4000

    def test_history_file_expands_user(self, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text('[history]\nfile = "~/prompts.txt"\n')
        settings = config_file.load_config(config)

        assert settings.history_file == Path.home() / "prompts.txt"

    def test_empty_config_uses_defaults(self, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text("")
        settings = config_file.load_config(config)

        assert settings == config_file.load_config(tmp_path / "missing.toml")


class TestApiKeys:
    """Credentials come from the file first, then the environment."""

    def test_env_var_supplies_key(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-env")
        settings = config_file.load_config(tmp_path / "missing.toml")

        assert settings.provider_config("anthropic").api_key == "sk-env"
        assert settings.provider_config("openai").api_key is None

    def test_file_key_overrides_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        config = tmp_path / "config.toml"
        config.write_text('[providers.openai]\napi_key = "sk-file"\n')
        settings = config_file.load_config(config)

        assert settings.provider_config("openai").api_key == "sk-file"

    def test_empty_env_var_is_absent(self, tmp_path, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "")
        settings = config_file.load_config(tmp_path / "missing.toml")

        assert settings.provider_config("anthropic").api_key is None

    def test_dotenv_file_is_loaded(self, tmp_path, monkeypatch):
        from ai_cmd.llm import config as llm_config

        env_file = tmp_path / ".env"
        env_file.write_text("OPENAI_API_KEY=sk-dotenv\n")
        monkeypatch.setattr(llm_config, "_env_paths", [env_file])
        settings = config_file.load_config(tmp_path / "missing.toml")

        assert settings.provider_config("openai").api_key == "sk-dotenv"

    def test_key_hidden_from_repr(self, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text('[providers.anthropic]\napi_key = "sk-secret-value"\n')
        settings = config_file.load_config(config)

        assert "sk-secret-value" not in repr(settings)


class TestValidation:
    """Invalid values ignored with stderr warning."""

    def test_unknown_provider_is_kept(self, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text('provider = "cohere"\n')
        settings = config_file.load_config(config)

        # Surfaces as a configuration error at call time, not a silent fallback
        assert settings.provider == "cohere"
        assert settings.provider_config("cohere").api_url == ""

    def test_invalid_int_ignored(self, tmp_path, capsys):
        config = tmp_path / "config.toml"
        config.write_text('max_tokens = "lots"\n')
        settings = config_file.load_config(config)

        assert settings.max_tokens == 4000
        assert "must be an integer" in capsys.readouterr().err

    def test_zero_history_ignored(self, tmp_path, capsys):
        config = tmp_path / "config.toml"
        config.write_text("[history]\nmax_entries = 0\n")
        settings = config_file.load_config(config)

        assert settings.max_history == 100
        assert "must be >= 1" in capsys.readouterr().err

    def test_temperature_out_of_range_ignored(self, tmp_path, capsys):
        config = tmp_path / "config.toml"
        config.write_text("temperature = 1.5\n")
        settings = config_file.load_config(config)

        assert settings.temperature == 0.1
        assert "between 0 and 1" in capsys.readouterr().err

    def test_integer_temperature_accepted(self, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text("temperature = 1\n")
        settings = config_file.load_config(config)

        assert settings.temperature == 1.0

    def test_empty_model_ignored(self, tmp_path, capsys):
        config = tmp_path / "config.toml"
        config.write_text('[providers.openai]\nmodel = ""\n')
        settings = config_file.load_config(config)

        assert settings.provider_config("openai").model == "gpt-4"
        assert "non-empty string" in capsys.readouterr().err

    def test_corrupt_toml_uses_defaults(self, tmp_path, capsys):
        config = tmp_path / "config.toml"
        config.write_text("this is not valid toml {{{}}")
        settings = config_file.load_config(config)

        assert settings == config_file.load_config(tmp_path / "missing.toml")
        assert "error reading config" in capsys.readouterr().err

    def test_non_bool_debug_ignored(self, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text('[debug]\nenabled = "yes"\n')
        settings = config_file.load_config(config)

        assert settings.debug is False
