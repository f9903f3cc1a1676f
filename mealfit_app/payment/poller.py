"""
Payment confirmation poller.

Runs once per visit to the payment result screen:
INITIALIZING → CONFIRMING → {POLLING | DONE | ERROR} and
POLLING → {DONE | TIMED_OUT | CANCELLED}.

The loop is a single asyncio task. Each tick issues exactly one readiness
check and schedules the next tick only after that check resolved. Teardown
clears the active flag and cancels the pending delay; the flag is checked at
the start of every tick and again after every awaited call, so a call that
resolves after teardown never mutates state or navigates.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Optional

from ..backend.base import PlanBackend
from ..config.defaults import PollerParams
from ..errors import (
    ConfirmationFailedError,
    MissingParametersError,
    PaymentFlowError,
    PollTimeoutError,
    ReadinessCheckError,
)
from ..logging.config import get_poller_logger, log_readiness_check, log_state_transition
from .effects import PLAN_ROUTE, LogNotifier, Navigator, Notifier
from .models import PaymentRedirectParams, PollResult, PollState, ScreenPhase
from .params import QueryInput, parse_redirect_params

PLAN_READY_TOAST = "Plano gerado com sucesso! Redirecionando..."
PROCESSING_ERROR_TOAST = "Erro ao processar pagamento"
PROCESSING_ERROR_MESSAGE = (
    "Erro ao processar status do pagamento. "
    "Por favor, entre em contato com o suporte."
)
TIMEOUT_TOAST = "Tempo esgotado para geração do plano. Por favor, contate o suporte."
TIMEOUT_MESSAGE = "Tempo esgotado para geração do plano."
ALREADY_STARTED_MESSAGE = "Payment confirmation already started for this screen"

poller_logger = get_poller_logger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class PaymentConfirmationPoller:
    """Confirms one payment and waits for the purchased plan to exist."""

    def __init__(
        self,
        backend: PlanBackend,
        navigator: Navigator,
        notifier: Optional[Notifier] = None,
        params: Optional[PollerParams] = None,
        sleep: SleepFunc = asyncio.sleep
    ) -> None:
        self.backend = backend
        self.navigator = navigator
        self.notifier = notifier or LogNotifier()
        self.params = params or PollerParams()
        self.logger = poller_logger
        self._sleep = sleep

        self.phase = ScreenPhase.INITIALIZING
        self.poll_state = PollState(max_attempts=self.params.max_attempts)
        self.redirect: Optional[PaymentRedirectParams] = None
        self.error: Optional[PaymentFlowError] = None
        self.readiness_checks = 0

        self._started = False
        self._task: Optional[asyncio.Task] = None
        self._timer: Optional[asyncio.Future] = None

    @property
    def active(self) -> bool:
        return self.poll_state.active

    @property
    def payment_id(self) -> Optional[str]:
        return self.redirect.payment_id if self.redirect else None

    def start(self, query: QueryInput) -> asyncio.Task:
        """Schedule the flow on the running event loop."""
        if self._started or self._task is not None:
            raise RuntimeError(ALREADY_STARTED_MESSAGE)

        self._task = asyncio.ensure_future(self.run(query))
        return self._task

    async def run(self, query: QueryInput) -> ScreenPhase:
        """
        Execute the whole flow and return the phase it ended in.

        Args:
            query: Redirect query string or mapping

        Returns:
            The final phase; CANCELLED if torn down before finishing

        Raises:
            RuntimeError: If the flow already ran on this instance
        """
        if self._started:
            raise RuntimeError(ALREADY_STARTED_MESSAGE)
        self._started = True

        if not self.active:
            return self.phase

        try:
            self.redirect = parse_redirect_params(query)
        except MissingParametersError as e:
            self._fail(e, trigger="missing_parameters")
            return self.phase

        self._transition(ScreenPhase.CONFIRMING, "mount", {
            "status": self.redirect.raw_status,
            "external_reference": self.redirect.external_reference,
        })

        try:
            await self.backend.confirm_payment(
                self.redirect.external_reference,
                self.redirect.payment_id,
                self.redirect.raw_status
            )
        except ConfirmationFailedError as e:
            if self.active:
                self._fail(e, trigger="confirmation_failed")
            return self.phase
        except Exception as e:
            if self.active:
                self._fail(
                    ConfirmationFailedError(str(e), payment_id=self.payment_id),
                    trigger="confirmation_failed"
                )
            return self.phase

        if not self.active:
            return self.phase

        if not self.redirect.is_approved:
            self.poll_state = self.poll_state.deactivated()
            self._transition(ScreenPhase.DONE, "payment_not_approved", {
                "status": self.redirect.raw_status,
            })
            return self.phase

        self._transition(ScreenPhase.POLLING, "payment_approved")
        await self._poll()
        return self.phase

    def teardown(self) -> None:
        """Stop the flow when the owning screen goes away. Idempotent."""
        if not self.active:
            return

        self.poll_state = self.poll_state.deactivated()
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()

        self._transition(ScreenPhase.CANCELLED, "teardown", {
            "attempt": self.poll_state.attempt,
            "readiness_checks": self.readiness_checks,
        })

    async def _poll(self) -> None:
        delay_seconds = self.params.retry_delay_ms / 1000.0

        while True:
            if not self.active:
                return

            ready, failure = await self._check_readiness()

            if not self.active:
                self.logger.debug("Readiness result discarded after teardown",
                                  payment_id=self.payment_id, ready=ready)
                return

            log_readiness_check(
                self.logger,
                payment_id=self.payment_id,
                attempt=self.poll_state.attempt,
                max_attempts=self.poll_state.max_attempts,
                ready=ready,
                error=failure
            )

            if ready:
                self.poll_state = self.poll_state.with_result(PollResult.FOUND)
                self._transition(ScreenPhase.DONE, "plan_ready", {
                    "readiness_checks": self.readiness_checks,
                })
                self.notifier.success(PLAN_READY_TOAST)
                self.navigator.navigate(PLAN_ROUTE, replace=True)
                return

            check_failed = failure is not None

            if self.poll_state.is_last_attempt:
                self.poll_state = self.poll_state.with_result(
                    PollResult.TIMED_OUT, check_failed=check_failed
                )
                self.error = PollTimeoutError(TIMEOUT_MESSAGE, attempts=self.readiness_checks)
                self._transition(ScreenPhase.TIMED_OUT, "attempts_exhausted", {
                    "readiness_checks": self.readiness_checks,
                    "failed_checks": self.poll_state.failed_checks,
                })
                self.notifier.error(TIMEOUT_TOAST)
                return

            self.poll_state = self.poll_state.with_next_attempt(check_failed=check_failed)

            self._timer = asyncio.ensure_future(self._sleep(delay_seconds))
            try:
                await self._timer
            except asyncio.CancelledError:
                if self.active:
                    raise
                return
            finally:
                self._timer = None

    async def _check_readiness(self) -> tuple[bool, Optional[Exception]]:
        """Issue one readiness check; failures count as not ready."""
        self.readiness_checks += 1

        try:
            return bool(await self.backend.check_plan_readiness()), None
        except ReadinessCheckError as e:
            return False, e
        except Exception as e:
            self.logger.exception("Unexpected readiness check error",
                                  payment_id=self.payment_id)
            return False, e

    def _fail(self, error: PaymentFlowError, trigger: str) -> None:
        self.error = error
        self.poll_state = self.poll_state.with_result(PollResult.ERROR)
        self._transition(ScreenPhase.ERROR, trigger, {"error": str(error)})
        self.logger.error("Error processing payment status",
                          payment_id=self.payment_id,
                          error=str(error),
                          error_type=type(error).__name__)
        self.notifier.error(PROCESSING_ERROR_TOAST)

    def _transition(self, to_phase: ScreenPhase, trigger: str,
                    context: Optional[dict] = None) -> None:
        from_phase = self.phase
        self.phase = to_phase
        log_state_transition(
            self.logger,
            payment_id=self.payment_id,
            from_state=from_phase.value,
            to_state=to_phase.value,
            trigger=trigger,
            context=context
        )
