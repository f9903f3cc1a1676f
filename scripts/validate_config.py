#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

from mealfit_app.config.loader import ConfigLoader
from mealfit_app.config.validation import ConfigValidator, ValidationError
from mealfit_app.logging.config import configure_logging_from_params


def validate_merged_config(config_dir: Path = None) -> List[ValidationError]:
    """Validate defaults merged with settings.yaml and the environment."""
    loader = ConfigLoader.create(config_dir)
    config = loader.merge_config()
    return ConfigValidator.validate_config(config)


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None

    print("🔍 Validating MealFit configuration...")

    try:
        errors = validate_merged_config(config_dir)
    except Exception as e:
        print(f"❌ Error loading configuration: {e}")
        sys.exit(1)

    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    loader = ConfigLoader.create(config_dir)
    configure_logging_from_params(loader.logging_params())
    backend = loader.backend_params()
    if not backend.url:
        print("⚠️  Backend URL not set (settings.yaml or SUPABASE_URL)")

    print("✅ Configuration is valid")
    sys.exit(0)


if __name__ == "__main__":
    main()
