"""Default configuration parameters for the MealFit app."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PollerParams:
    """Payment confirmation polling parameters."""
    max_attempts: int = 10                           # Readiness checks before giving up
    retry_delay_ms: int = 3000                       # Delay between readiness checks


@dataclass(frozen=True)
class BackendParams:
    """Hosted backend connection parameters."""
    url: str = ""
    anon_key: str = ""
    timeout_seconds: float = 15.0
    payment_function: str = "process-payment"        # Edge function recording payments


@dataclass(frozen=True)
class NutritionParams:
    """Caloric target calculation parameters."""
    activity_multipliers: dict = field(default_factory=lambda: {
        "sedentary": 1.2,
        "lightly_active": 1.375,
        "moderately_active": 1.55,
        "very_active": 1.725,
        "extra_active": 1.9,
    })
    goal_adjustments: dict = field(default_factory=lambda: {
        "lose_weight": -500,
        "maintain_weight": 0,
        "gain_weight": 500,
    })


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    poller: PollerParams
    backend: BackendParams
    nutrition: NutritionParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        poller=PollerParams(),
        backend=BackendParams(),
        nutrition=NutritionParams(),
        logging=LoggingParams(),
    )
