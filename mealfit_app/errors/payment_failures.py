"""
Unrecoverable failures of the payment confirmation flow.

Each of these ends the flow in a terminal, user-visible state.
"""

from typing import Any, Dict, Optional


class PaymentFlowError(Exception):
    """Base class for terminal payment flow failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class MissingParametersError(PaymentFlowError):
    """Required redirect parameters are absent."""

    def __init__(self, message: str = "Missing payment information",
                 missing_fields: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.missing_fields = missing_fields or []


class ConfirmationFailedError(PaymentFlowError):
    """The backend rejected or could not record the payment."""

    def __init__(self, message: str, payment_id: Optional[str] = None,
                 status_code: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.payment_id = payment_id
        self.status_code = status_code


class PollTimeoutError(PaymentFlowError):
    """Attempt budget exhausted before the plan became ready."""

    def __init__(self, message: str, attempts: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.attempts = attempts


class BackendError(Exception):
    """Persistence request to the hosted backend failed."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.operation = operation
        self.target = target
        self.status_code = status_code
        self.recoverable = False
