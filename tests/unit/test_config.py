"""Unit tests for configuration management."""

import pytest
import structlog
from pathlib import Path

from mealfit_app.config.defaults import LoggingParams, PollerParams, get_default_config
from mealfit_app.config.loader import ConfigLoader
from mealfit_app.config.validation import ConfigValidator
from mealfit_app.logging.config import configure_logging_from_params


@pytest.fixture
def empty_config_dir(tmp_path) -> Path:
    return tmp_path


@pytest.fixture(autouse=True)
def clear_backend_env(monkeypatch):
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        config = get_default_config()

        assert config.poller.max_attempts == 10
        assert config.poller.retry_delay_ms == 3000
        assert config.backend.payment_function == "process-payment"
        assert config.nutrition.activity_multipliers["moderately_active"] == 1.55
        assert config.nutrition.goal_adjustments["lose_weight"] == -500


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        loader = ConfigLoader.create()
        assert isinstance(loader.config_dir, Path)

    def test_bundled_settings_are_valid(self) -> None:
        """The settings.yaml shipped in config/ validates cleanly."""
        config = ConfigLoader.create().merge_config()

        assert config["poller"]["max_attempts"] == 10
        assert ConfigValidator.validate_config(config) == []

    def test_merge_config_defaults_only(self, empty_config_dir) -> None:
        loader = ConfigLoader.create(empty_config_dir)
        config = loader.merge_config()

        assert config["poller"]["max_attempts"] == 10
        assert config["backend"]["url"] == ""

    def test_settings_file_overrides_defaults(self, empty_config_dir) -> None:
        (empty_config_dir / "settings.yaml").write_text(
            "poller:\n  retry_delay_ms: 1000\n"
            "nutrition:\n  goal_adjustments:\n    lose_weight: -300\n"
        )
        loader = ConfigLoader.create(empty_config_dir)
        config = loader.merge_config()

        assert config["poller"]["retry_delay_ms"] == 1000
        assert config["poller"]["max_attempts"] == 10
        assert config["nutrition"]["goal_adjustments"]["lose_weight"] == -300
        assert config["nutrition"]["goal_adjustments"]["gain_weight"] == 500

    def test_explicit_overrides_win(self, empty_config_dir) -> None:
        (empty_config_dir / "settings.yaml").write_text("poller:\n  max_attempts: 5\n")
        loader = ConfigLoader.create(empty_config_dir)

        params = loader.poller_params({"poller": {"max_attempts": 3}})

        assert params == PollerParams(max_attempts=3, retry_delay_ms=3000)

    def test_backend_credentials_from_environment(self, empty_config_dir, monkeypatch) -> None:
        monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
        monkeypatch.setenv("SUPABASE_ANON_KEY", "env-key")
        loader = ConfigLoader.create(empty_config_dir)

        backend = loader.backend_params()

        assert backend.url == "https://env.supabase.co"
        assert backend.anon_key == "env-key"

    def test_file_credentials_beat_environment(self, empty_config_dir, monkeypatch) -> None:
        monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
        (empty_config_dir / "settings.yaml").write_text(
            "backend:\n  url: https://file.supabase.co\n"
        )
        loader = ConfigLoader.create(empty_config_dir)

        assert loader.backend_params().url == "https://file.supabase.co"

    def test_empty_settings_file(self, empty_config_dir) -> None:
        (empty_config_dir / "settings.yaml").write_text("")
        loader = ConfigLoader.create(empty_config_dir)

        assert loader.nutrition_params().activity_multipliers["sedentary"] == 1.2

    def test_logging_params_applied(self, empty_config_dir) -> None:
        (empty_config_dir / "settings.yaml").write_text(
            "logging:\n  level: WARNING\n  format_json: true\n"
        )
        loader = ConfigLoader.create(empty_config_dir)

        params = loader.logging_params()
        assert params == LoggingParams(level="WARNING", format_json=True)

        configure_logging_from_params(params)
        assert isinstance(structlog.get_config()["processors"][-1],
                          structlog.processors.JSONRenderer)

        configure_logging_from_params(loader.logging_params({"logging": {"format_json": False}}))
        assert isinstance(structlog.get_config()["processors"][-1],
                          structlog.dev.ConsoleRenderer)


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_valid_poller_params(self) -> None:
        errors = ConfigValidator.validate_poller_params({"max_attempts": 10, "retry_delay_ms": 3000})
        assert errors == []

    @pytest.mark.parametrize("value", [0, -1, 2.5, True, "10"])
    def test_invalid_max_attempts(self, value) -> None:
        errors = ConfigValidator.validate_poller_params({"max_attempts": value})

        assert len(errors) == 1
        assert errors[0].field == "max_attempts"

    def test_invalid_backend_url(self) -> None:
        errors = ConfigValidator.validate_backend_params({"url": "not-a-url"})

        assert [error.field for error in errors] == ["url"]

    def test_empty_backend_url_allowed(self) -> None:
        assert ConfigValidator.validate_backend_params({"url": ""}) == []

    def test_invalid_nutrition_params(self) -> None:
        errors = ConfigValidator.validate_nutrition_params({
            "activity_multipliers": {"sedentary": 0},
            "goal_adjustments": {"lose_weight": "lots"},
        })

        assert {error.field for error in errors} == {
            "activity_multipliers.sedentary",
            "goal_adjustments.lose_weight",
        }

    def test_invalid_logging_level(self) -> None:
        errors = ConfigValidator.validate_config({"logging": {"level": "LOUD"}})

        assert errors[0].field == "level"
