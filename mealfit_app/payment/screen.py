"""
Payment status screen.

Owns exactly one PaymentConfirmationPoller for its lifetime and turns the
poller's state into display content.
"""

import asyncio
from typing import Optional

from ..backend.base import PlanBackend
from ..config.defaults import PollerParams
from ..errors import PollTimeoutError
from ..logging.config import get_logger
from .effects import HOME_ROUTE, PLAN_ROUTE, PLANS_ROUTE, Navigator, Notifier
from .models import PaymentStatus, ScreenPhase, StatusContent
from .params import QueryInput, peek_status
from .poller import PROCESSING_ERROR_MESSAGE, TIMEOUT_MESSAGE, PaymentConfirmationPoller

logger = get_logger(__name__)

LOADING_PHASES = frozenset({
    ScreenPhase.INITIALIZING,
    ScreenPhase.CONFIRMING,
    ScreenPhase.POLLING,
})


class PaymentStatusScreen:
    """The screen the payment provider redirects the user back to."""

    def __init__(
        self,
        query: QueryInput,
        backend: PlanBackend,
        navigator: Navigator,
        notifier: Optional[Notifier] = None,
        params: Optional[PollerParams] = None,
        **poller_kwargs
    ):
        self.query = query
        self.navigator = navigator
        self.poller = PaymentConfirmationPoller(
            backend=backend,
            navigator=navigator,
            notifier=notifier,
            params=params,
            **poller_kwargs
        )
        self.mounted = False

    def mount(self) -> asyncio.Task:
        """Start confirming the payment. Must run inside an event loop."""
        self.mounted = True
        logger.info("Payment status screen mounted")
        return self.poller.start(self.query)

    def unmount(self) -> None:
        """Tear down the screen, stopping any polling in progress."""
        self.poller.teardown()
        self.mounted = False
        logger.info("Payment status screen unmounted", phase=self.poller.phase.value)

    @property
    def loading(self) -> bool:
        return self.poller.phase in LOADING_PHASES

    def content(self) -> StatusContent:
        """Build what the screen should display right now."""
        status = peek_status(self.query)
        attempt = self.poller.poll_state.attempt
        max_attempts = self.poller.poll_state.max_attempts

        error = None
        if self.poller.error is not None:
            if isinstance(self.poller.error, PollTimeoutError):
                error = TIMEOUT_MESSAGE
            else:
                error = PROCESSING_ERROR_MESSAGE

        progress = None
        if 0 < attempt < max_attempts and self.poller.phase == ScreenPhase.POLLING:
            progress = f"Tentativa {attempt} de {max_attempts}..."

        if status == PaymentStatus.APPROVED:
            if attempt > 0:
                message = "Gerando seu plano personalizado... Por favor, aguarde."
            else:
                message = ("Seu plano está sendo gerado. "
                           "Você será redirecionado em alguns instantes...")
            return StatusContent(
                title="Pagamento Aprovado!",
                message=message,
                button_text="Ir para Meu Plano",
                button_route=PLAN_ROUTE,
                error=error,
                progress=progress,
                loading=self.loading
            )

        if status == PaymentStatus.PENDING:
            return StatusContent(
                title="Pagamento Pendente",
                message=("Seu pagamento está sendo processado. "
                         "Você receberá uma confirmação em breve."),
                button_text="Voltar para Home",
                button_route=HOME_ROUTE,
                error=error,
                loading=self.loading
            )

        return StatusContent(
            title="Pagamento não Aprovado",
            message="Houve um problema com seu pagamento. Por favor, tente novamente.",
            button_text="Tentar Novamente",
            button_route=PLANS_ROUTE,
            error=error,
            loading=self.loading
        )

    def press_button(self) -> None:
        """Follow the screen's call-to-action button."""
        self.navigator.navigate(self.content().button_route, replace=True)
