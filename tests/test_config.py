"""Tests for settings loading."""

from agent_network.utils.config import Settings, get_settings


class TestSettings:
    """Tests for Settings sources and precedence."""

    def test_defaults(self):
        settings = Settings()

        assert settings.network.default_model is None
        assert settings.network.fallback_model == "claude-sonnet-4-20250514"
        assert settings.network.inference_max_tokens == 50
        assert settings.generation.max_tokens == 4096
        assert settings.generation.temperature is None

    def test_loads_toml(self, tmp_path):
        (tmp_path / "settings.toml").write_text(
            'log_level = "DEBUG"\n'
            "[network]\n"
            'fallback_model = "toml-model"\n'
            "[generation]\n"
            "max_tokens = 1024\n"
        )

        settings = Settings()

        assert settings.log_level == "DEBUG"
        assert settings.network.fallback_model == "toml-model"
        assert settings.network.inference_max_tokens == 50
        assert settings.generation.max_tokens == 1024

    def test_environment_overrides_toml(self, tmp_path, monkeypatch):
        (tmp_path / "settings.toml").write_text('[network]\nfallback_model = "toml-model"\n')
        monkeypatch.setenv("NETWORK__FALLBACK_MODEL", "env-model")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")

        settings = Settings()

        assert settings.network.fallback_model == "env-model"
        assert settings.anthropic_api_key == "sk-test"

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
