"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_poller_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate payment poller parameters."""
        errors = []

        if "max_attempts" in params:
            value = params["max_attempts"]
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                errors.append(ValidationError(
                    field="max_attempts",
                    message="Must be a positive integer",
                    value=value
                ))

        if "retry_delay_ms" in params:
            value = params["retry_delay_ms"]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                errors.append(ValidationError(
                    field="retry_delay_ms",
                    message="Must be a non-negative integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_backend_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate backend connection parameters."""
        errors = []

        # Empty url is allowed; it means the backend is not configured yet
        url = params.get("url")
        if url:
            parsed = urlparse(url)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                errors.append(ValidationError(
                    field="url",
                    message="Must be an http(s) URL",
                    value=url
                ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                errors.append(ValidationError(
                    field="timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "payment_function" in params:
            value = params["payment_function"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="payment_function",
                    message="Must be a non-empty string",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_nutrition_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate caloric target parameters."""
        errors = []

        multipliers = params.get("activity_multipliers", {})
        if not isinstance(multipliers, dict) or not multipliers:
            errors.append(ValidationError(
                field="activity_multipliers",
                message="Must be a non-empty mapping",
                value=multipliers
            ))
        else:
            for level, value in multipliers.items():
                if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                    errors.append(ValidationError(
                        field=f"activity_multipliers.{level}",
                        message="Must be a positive number",
                        value=value
                    ))

        adjustments = params.get("goal_adjustments", {})
        if not isinstance(adjustments, dict) or not adjustments:
            errors.append(ValidationError(
                field="goal_adjustments",
                message="Must be a non-empty mapping",
                value=adjustments
            ))
        else:
            for goal, value in adjustments.items():
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    errors.append(ValidationError(
                        field=f"goal_adjustments.{goal}",
                        message="Must be a number",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "poller" in config:
            errors.extend(ConfigValidator.validate_poller_params(config["poller"]))

        if "backend" in config:
            errors.extend(ConfigValidator.validate_backend_params(config["backend"]))

        if "nutrition" in config:
            errors.extend(ConfigValidator.validate_nutrition_params(config["nutrition"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
