"""Tests for layered configuration loading."""

import pytest

from storefront.shared.core import configuration
from storefront.shared.core.configuration import (
    ConfigManager,
    DelayConfig,
    StorefrontConfig,
    ValidationLevel,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in configuration.ENV_OVERRIDES:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config_dir(tmp_path):
    return tmp_path


def _write(path, text):
    path.write_text(text, encoding="utf-8")


class TestDefaults:

    def test_bundled_defaults(self):
        config = ConfigManager().get_config()

        assert config.delays == DelayConfig()
        assert config.ui.title == "Serverless Store"

    def test_missing_directory_uses_model_defaults(self, config_dir):
        config = ConfigManager(config_dir / "absent").get_config()

        assert config == StorefrontConfig()

    def test_delays_in_seconds(self):
        delays = DelayConfig(catalog_load_ms=250, checkout_submit_ms=0, confirmation_ms=1500)

        assert delays.catalog_load == 0.25
        assert delays.checkout_submit == 0.0
        assert delays.confirmation == 1.5

    def test_negative_delay_is_invalid(self):
        with pytest.raises(ValueError):
            DelayConfig(catalog_load_ms=-1)


class TestPrecedence:

    def test_user_file_overrides_defaults(self, config_dir):
        _write(config_dir / "defaults.yaml", "delays:\n  catalog_load_ms: 500\n")
        _write(config_dir / "user.yaml", "delays:\n  catalog_load_ms: 50\nui:\n  title: Corner Shop\n")

        config = ConfigManager(config_dir).get_config()

        assert config.delays.catalog_load_ms == 50
        assert config.delays.checkout_submit_ms == 2000
        assert config.ui.title == "Corner Shop"

    def test_environment_overrides_user_file(self, config_dir, monkeypatch):
        _write(config_dir / "user.yaml", "delays:\n  confirmation_ms: 10\n")
        monkeypatch.setenv("STOREFRONT_CONFIRMATION_MS", "20")
        monkeypatch.setenv("STOREFRONT_CURRENCY", "EUR ")

        config = ConfigManager(config_dir).get_config()

        assert config.delays.confirmation_ms == 20
        assert config.ui.currency_symbol == "EUR "

    def test_unparseable_environment_value_is_skipped(self, config_dir, monkeypatch, caplog):
        monkeypatch.setenv("STOREFRONT_CATALOG_LOAD_MS", "soon")

        config = ConfigManager(config_dir).get_config()

        assert config.delays.catalog_load_ms == 1000
        assert "STOREFRONT_CATALOG_LOAD_MS" in caplog.text

    def test_broken_yaml_is_ignored(self, config_dir, caplog):
        _write(config_dir / "user.yaml", "delays: [unclosed\n")

        config = ConfigManager(config_dir).get_config()

        assert config.delays == DelayConfig()
        assert "Failed to load" in caplog.text

    def test_reload_picks_up_changes(self, config_dir):
        manager = ConfigManager(config_dir)
        assert manager.get_config().ui.grid_columns == 3

        _write(config_dir / "user.yaml", "ui:\n  grid_columns: 2\n")
        assert manager.get_config().ui.grid_columns == 3

        manager.reload_config()
        assert manager.get_config().ui.grid_columns == 2


class TestValidation:

    def test_strict_raises(self, config_dir):
        _write(config_dir / "user.yaml", "delays:\n  checkout_submit_ms: -5\n")

        with pytest.raises(ValueError, match="Configuration validation failed"):
            ConfigManager(config_dir).get_config(ValidationLevel.STRICT)

    def test_lenient_falls_back_to_defaults(self, config_dir):
        _write(config_dir / "user.yaml", "ui:\n  unknown_knob: 1\n")

        config = ConfigManager(config_dir).get_config(ValidationLevel.LENIENT)

        assert config == StorefrontConfig()


class TestGlobalManager:

    def test_explicit_directory_replaces_instance(self, config_dir, monkeypatch):
        monkeypatch.setattr(configuration, "_config_manager", None)

        first = configuration.get_config_manager()
        second = configuration.get_config_manager(config_dir)

        assert first is not second
        assert configuration.get_config_manager() is second
        assert configuration.get_config() == StorefrontConfig()
