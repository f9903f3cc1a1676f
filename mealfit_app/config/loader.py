"""Configuration loader with 3-tier parameter precedence."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import (
    BackendParams,
    DefaultConfig,
    LoggingParams,
    NutritionParams,
    PollerParams,
    get_default_config,
)

ENV_BACKEND_URL = "SUPABASE_URL"
ENV_BACKEND_KEY = "SUPABASE_ANON_KEY"


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_settings_file(self) -> dict[str, Any]:
        """Load overrides from settings.yaml, if present."""
        settings_file = self.config_dir / "settings.yaml"

        if not settings_file.exists():
            return {}

        with open(settings_file) as f:
            settings = yaml.safe_load(f)

        return settings or {}

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. settings.yaml
        3. Global defaults (lowest priority)

        Backend credentials missing from all three tiers are read from
        the SUPABASE_URL and SUPABASE_ANON_KEY environment variables.
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_settings_file())

        if overrides:
            config = self._deep_merge(config, overrides)

        backend = config["backend"]
        if not backend.get("url"):
            backend["url"] = os.environ.get(ENV_BACKEND_URL, "")
        if not backend.get("anon_key"):
            backend["anon_key"] = os.environ.get(ENV_BACKEND_KEY, "")

        return config

    def poller_params(self, overrides: Optional[dict[str, Any]] = None) -> PollerParams:
        """Build poller parameters from the merged configuration."""
        return PollerParams(**self.merge_config(overrides)["poller"])

    def backend_params(self, overrides: Optional[dict[str, Any]] = None) -> BackendParams:
        """Build backend parameters from the merged configuration."""
        return BackendParams(**self.merge_config(overrides)["backend"])

    def nutrition_params(self, overrides: Optional[dict[str, Any]] = None) -> NutritionParams:
        """Build nutrition parameters from the merged configuration."""
        return NutritionParams(**self.merge_config(overrides)["nutrition"])

    def logging_params(self, overrides: Optional[dict[str, Any]] = None) -> LoggingParams:
        """Build logging parameters from the merged configuration."""
        return LoggingParams(**self.merge_config(overrides)["logging"])

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                elif isinstance(value, dict):
                    result[field_name] = dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
