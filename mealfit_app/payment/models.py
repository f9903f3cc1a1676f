"""
Data models for the payment confirmation flow.

Redirect parameters and poll state are immutable; the poller replaces its
current PollState on every step instead of mutating it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config.defaults import PollerParams

MAX_ATTEMPTS = PollerParams.max_attempts


class PaymentStatus(str, Enum):
    """Payment outcome reported by the provider redirect."""
    APPROVED = "approved"
    PENDING = "pending"
    OTHER = "other"

    @classmethod
    def from_raw(cls, raw: Optional[str]) -> "PaymentStatus":
        """Map a provider status string onto the three outcomes the app handles."""
        if raw == cls.APPROVED.value:
            return cls.APPROVED
        if raw == cls.PENDING.value:
            return cls.PENDING
        return cls.OTHER


class PollResult(str, Enum):
    """Outcome of the readiness polling loop."""
    PENDING = "pending"
    FOUND = "found"
    TIMED_OUT = "timed_out"
    ERROR = "error"


class ScreenPhase(str, Enum):
    """Phases of the payment status screen."""
    INITIALIZING = "initializing"
    CONFIRMING = "confirming"
    POLLING = "polling"
    DONE = "done"
    TIMED_OUT = "timed_out"
    ERROR = "error"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_PHASES


TERMINAL_PHASES = frozenset({
    ScreenPhase.DONE,
    ScreenPhase.TIMED_OUT,
    ScreenPhase.ERROR,
    ScreenPhase.CANCELLED,
})


@dataclass(frozen=True)
class PaymentRedirectParams:
    """Query-string values appended by the payment provider."""

    status: PaymentStatus
    payment_id: str
    external_reference: str
    raw_status: str                                  # Provider value, recorded verbatim

    @property
    def is_approved(self) -> bool:
        return self.status == PaymentStatus.APPROVED


@dataclass(frozen=True)
class PollState:
    """State of one readiness polling loop."""

    attempt: int = 0
    max_attempts: int = MAX_ATTEMPTS
    active: bool = True
    result: PollResult = PollResult.PENDING
    failed_checks: int = 0                           # Attempts whose query itself failed

    @property
    def is_last_attempt(self) -> bool:
        return self.attempt + 1 >= self.max_attempts

    def with_next_attempt(self, check_failed: bool = False) -> 'PollState':
        """Advance to the next attempt after a non-ready check."""
        return PollState(
            attempt=self.attempt + 1,
            max_attempts=self.max_attempts,
            active=self.active,
            result=self.result,
            failed_checks=self.failed_checks + (1 if check_failed else 0)
        )

    def with_result(self, result: PollResult, check_failed: bool = False) -> 'PollState':
        """Finish the loop with a terminal result."""
        return PollState(
            attempt=self.attempt,
            max_attempts=self.max_attempts,
            active=False,
            result=result,
            failed_checks=self.failed_checks + (1 if check_failed else 0)
        )

    def deactivated(self) -> 'PollState':
        """Stop the loop without recording a result."""
        return PollState(
            attempt=self.attempt,
            max_attempts=self.max_attempts,
            active=False,
            result=self.result,
            failed_checks=self.failed_checks
        )


@dataclass(frozen=True)
class StatusContent:
    """What the payment status screen displays."""

    title: str
    message: str
    button_text: str
    button_route: str
    error: Optional[str] = None
    progress: Optional[str] = None
    loading: bool = False
