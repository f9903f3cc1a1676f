"""
Centralized logging configuration for the MealFit app.

All components log through structlog, bridged onto the standard library
logging module so that third-party log records share the same output.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger

from ..config.defaults import LoggingParams


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s"  # structlog will handle formatting
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging_from_params(params: LoggingParams) -> None:
    """Configure logging from the `logging` section of the merged config."""
    configure_logging(level=params.level, format_json=params.format_json)

def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_poller_logger(name: str) -> FilteringBoundLogger:
    """
    Get a logger bound with payment poller context.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger for the payment confirmation flow
    """
    logger = get_logger(name)

    return logger.bind(
        subsystem="payment_poller",
        audit_trail=True
    )


def log_state_transition(
    logger: FilteringBoundLogger,
    payment_id: Optional[str],
    from_state: str,
    to_state: str,
    trigger: str,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a payment screen state transition with standardized format.

    Args:
        logger: Structlog logger instance
        payment_id: Payment being confirmed, if known
        from_state: Current phase
        to_state: Target phase
        trigger: What triggered the transition
        context: Additional context data
    """
    bound_logger = logger.bind(
        payment_id=payment_id,
        from_state=from_state,
        to_state=to_state,
        trigger=trigger,
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("state_transition")


def log_readiness_check(
    logger: FilteringBoundLogger,
    payment_id: str,
    attempt: int,
    max_attempts: int,
    ready: bool,
    error: Optional[BaseException] = None
) -> None:
    """
    Log the outcome of a single plan readiness check.

    A failed check and a legitimate "not ready yet" answer are logged as
    different events even though the poller treats both as not ready.
    """
    bound_logger = logger.bind(
        payment_id=payment_id,
        attempt=attempt + 1,
        max_attempts=max_attempts,
    )

    if error is not None:
        bound_logger.warning(
            "readiness_check_failed",
            error=str(error),
            error_type=type(error).__name__
        )
    elif ready:
        bound_logger.info("plan_ready")
    else:
        bound_logger.debug("plan_not_ready")
