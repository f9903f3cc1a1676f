"""
Logging configuration and utilities for the MealFit app.
"""
from .config import (
    configure_logging,
    configure_logging_from_params,
    get_logger,
    get_poller_logger,
)

__all__ = ["configure_logging", "configure_logging_from_params", "get_logger", "get_poller_logger"]
