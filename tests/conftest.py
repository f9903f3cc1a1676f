"""Pytest configuration and shared fixtures."""

import asyncio
from typing import Any, Callable, Dict, Optional
from unittest.mock import Mock

import pytest

from mealfit_app.backend.base import PlanBackend
from mealfit_app.errors import ReadinessCheckError
from mealfit_app.payment.effects import Notifier, RecordingNavigator


class FakeClock:
    """Simulated clock advanced only by the injected sleep."""

    def __init__(self):
        self.now_ms = 0
        self.sleeps = []

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now_ms += int(seconds * 1000)
        await asyncio.sleep(0)


class FakeBackend(PlanBackend):
    """Scripted backend recording every call against the fake clock."""

    def __init__(
        self,
        clock: FakeClock,
        ready_on: Optional[int] = None,
        failing_checks: tuple = (),
        confirm_error: Optional[Exception] = None,
        on_check: Optional[Callable[[int], None]] = None,
        on_confirm: Optional[Callable[[], None]] = None,
    ):
        self.clock = clock
        self.ready_on = ready_on
        self.failing_checks = failing_checks
        self.confirm_error = confirm_error
        self.on_check = on_check
        self.on_confirm = on_confirm
        self.confirm_calls = []
        self.check_times = []
        self.nutrition_records = []
        self.training_plans = []

    async def confirm_payment(self, external_reference, payment_id, status):
        self.confirm_calls.append((external_reference, payment_id, status))
        if self.on_confirm:
            self.on_confirm()
        if self.confirm_error:
            raise self.confirm_error

    async def check_plan_readiness(self):
        self.check_times.append(self.clock.now_ms)
        attempt = len(self.check_times)
        if self.on_check:
            self.on_check(attempt)
        if attempt in self.failing_checks:
            raise ReadinessCheckError("profiles query failed", query="profiles")
        return self.ready_on is not None and attempt >= self.ready_on

    async def save_nutrition_target(self, record):
        self.nutrition_records.append(record)

    async def save_training_plan(self, plan, days):
        self.training_plans.append((plan, days))
        return f"plan-{len(self.training_plans)}"


@pytest.fixture
def clock() -> FakeClock:
    """Simulated clock and sleep."""
    return FakeClock()


@pytest.fixture
def make_backend(clock) -> Callable[..., FakeBackend]:
    """Factory for scripted backends sharing the test clock."""
    def factory(**kwargs: Any) -> FakeBackend:
        return FakeBackend(clock, **kwargs)
    return factory


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def notifier() -> Mock:
    return Mock(spec=Notifier)


@pytest.fixture
def approved_query() -> Dict[str, str]:
    """Redirect parameters of an approved payment."""
    return {
        "collection_status": "approved",
        "collection_id": "1319273",
        "external_reference": "user-42:plan-premium",
    }
