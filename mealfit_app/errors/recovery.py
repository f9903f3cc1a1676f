"""
Recoverable error classifications.

These errors never end the payment flow on their own; the polling loop
counts them as a normal non-ready attempt.
"""

from typing import Optional


class RecoverableError(Exception):
    """Errors that can be recovered from automatically."""

    def __init__(self, message: str):
        super().__init__(message)
        self.recoverable = True


class ReadinessCheckError(RecoverableError):
    """A single plan readiness query failed."""

    def __init__(self, message: str, query: Optional[str] = None):
        super().__init__(message)
        self.query = query


class UnauthenticatedError(ReadinessCheckError):
    """No active user session when querying the backend."""

    def __init__(self, message: str = "User not authenticated"):
        super().__init__(message, query="auth.user")
