"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from template_streaming.config.core import DEFAULT_FLUSH_BACKEND, StreamingSettings
from template_streaming.config.settings import Settings
from template_streaming.core.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ("CONFIG_FILE", "STREAMING__AUTOSWEEP_FLASH", "LOGGING__LEVEL"):
        monkeypatch.delenv(key, raising=False)


@pytest.mark.unit
class TestDefaults:
    def test_streaming_defaults(self):
        settings = Settings()

        assert settings.streaming.autosweep_flash is True
        assert settings.streaming.flush_backend == DEFAULT_FLUSH_BACKEND
        assert settings.templates.layout == "layouts/application"
        assert settings.templates.format == "html"
        assert settings.logging.level == "INFO"

    def test_environment_overrides_nested_value(self, monkeypatch):
        monkeypatch.setenv("STREAMING__AUTOSWEEP_FLASH", "false")

        assert Settings().streaming.autosweep_flash is False

    def test_invalid_flush_backend_rejected(self):
        with pytest.raises(ValidationError):
            StreamingSettings(flush_backend="not-a-dotted-path")

    def test_invalid_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("LOGGING__LEVEL", "chatty")

        with pytest.raises(ValidationError):
            Settings()


@pytest.mark.unit
class TestFromConfig:
    def test_loads_toml(self, tmp_path):
        config = tmp_path / "streaming.toml"
        config.write_text(
            "[streaming]\nautosweep_flash = false\n\n"
            '[templates]\ndirectory = "views"\nlayout = "layouts/site"\n'
        )

        settings = Settings.from_config(config)

        assert settings.streaming.autosweep_flash is False
        assert settings.templates.directory == "views"
        assert settings.templates.layout == "layouts/site"

    def test_environment_beats_toml(self, tmp_path, monkeypatch):
        config = tmp_path / "streaming.toml"
        config.write_text("[streaming]\nautosweep_flash = false\n")
        monkeypatch.setenv("STREAMING__AUTOSWEEP_FLASH", "true")

        assert Settings.from_config(config).streaming.autosweep_flash is True

    def test_config_file_from_environment(self, tmp_path, monkeypatch):
        config = tmp_path / "streaming.toml"
        config.write_text('[templates]\nformat = "xhtml"\n')
        monkeypatch.setenv("CONFIG_FILE", str(config))

        assert Settings.from_config().templates.format == "xhtml"

    def test_keyword_overrides(self):
        settings = Settings.from_config(streaming={"autosweep_flash": False})

        assert settings.streaming.autosweep_flash is False

    def test_invalid_toml(self, tmp_path):
        config = tmp_path / "broken.toml"
        config.write_text("[streaming\n")

        with pytest.raises(ConfigurationError, match="Invalid TOML"):
            Settings.from_config(config)

    def test_unsupported_format(self, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("streaming: {}\n")

        with pytest.raises(ConfigurationError, match="Unsupported config file format"):
            Settings.from_config(config)
