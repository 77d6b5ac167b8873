"""Tests for config loading."""

import pytest

from resume_builder.config import (
    AppConfig,
    AssistConfig,
    ExportConfig,
    PublishConfig,
    RegistrarConfig,
    StorageConfig,
    load_config,
)


class TestConfig:
    def test_defaults(self):
        config = AppConfig()
        assert config.registrar.api_url == "https://api.dev.name.com"
        assert config.assist.model == "claude-haiku-4-5-20251001"
        assert config.publish.extensions == (".me", ".cv")
        assert config.publish.default_extension == ".me"
        assert config.export.page_size == "A4"

    def test_load_config_defaults(self, tmp_path):
        """Loading from non-existent path returns defaults."""
        config = load_config(tmp_path / "nonexistent.yaml")
        assert config.registrar.timeout == 30

    def test_load_config_from_yaml(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text(
            "registrar:\n  api_url: https://api.name.com\n"
            "publish:\n  extensions: ['.me']\n  default_extension: .me\n"
            "export:\n  page_size: Letter\n"
        )
        config = load_config(yaml_path)
        assert config.registrar.api_url == "https://api.name.com"
        assert config.publish.extensions == (".me",)
        assert config.export.page_size == "Letter"
        # Defaults for unspecified
        assert config.assist.max_tokens == 1024

    def test_empty_yaml_uses_defaults(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("")
        assert load_config(yaml_path) == AppConfig()

    def test_storage_resolved_path(self):
        storage = StorageConfig(db_path="~/sites.db")
        assert "~" not in str(storage.resolved_db_path)

    def test_frozen_config(self):
        config = RegistrarConfig()
        with pytest.raises(AttributeError):
            config.timeout = 10


class TestConfigValidation:
    def test_registrar_timeout_range(self):
        with pytest.raises(ValueError, match="registrar.timeout"):
            RegistrarConfig(timeout=0)
        with pytest.raises(ValueError, match="registrar.timeout"):
            RegistrarConfig(timeout=301)

    def test_registrar_url_scheme(self):
        with pytest.raises(ValueError, match="registrar.api_url"):
            RegistrarConfig(api_url="ftp://api.name.com")

    def test_assist_limits(self):
        with pytest.raises(ValueError, match="assist.timeout"):
            AssistConfig(timeout=601)
        with pytest.raises(ValueError, match="assist.max_tokens"):
            AssistConfig(max_tokens=0)

    def test_default_extension_must_be_listed(self):
        with pytest.raises(ValueError, match="default_extension"):
            PublishConfig(extensions=(".me",), default_extension=".cv")

    def test_extension_format(self):
        with pytest.raises(ValueError, match="publish.extensions"):
            PublishConfig(extensions=("me",), default_extension="me")

    def test_empty_extensions(self):
        with pytest.raises(ValueError, match="must not be empty"):
            PublishConfig(extensions=(), default_extension=".me")

    def test_page_size(self):
        with pytest.raises(ValueError, match="export.page_size"):
            ExportConfig(page_size="A3")

    def test_invalid_yaml_value_raises(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("registrar:\n  timeout: 1000\n")
        with pytest.raises(ValueError):
            load_config(yaml_path)
