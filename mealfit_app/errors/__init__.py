"""
Error classification for the MealFit app.

Payment flow errors are terminal and surface on the payment status screen.
Recoverable errors are absorbed by the readiness polling loop.
"""

from .payment_failures import (
    PaymentFlowError,
    MissingParametersError,
    ConfirmationFailedError,
    PollTimeoutError,
    BackendError,
)
from .recovery import (
    RecoverableError,
    ReadinessCheckError,
    UnauthenticatedError,
)
from .validation import InvalidInputError

__all__ = [
    # Terminal payment flow errors
    "PaymentFlowError",
    "MissingParametersError",
    "ConfirmationFailedError",
    "PollTimeoutError",
    "BackendError",
    # Recoverable errors
    "RecoverableError",
    "ReadinessCheckError",
    "UnauthenticatedError",
    # Input validation
    "InvalidInputError",
]
