"""Tests for the payment status screen."""

import asyncio

from mealfit_app.errors import PollTimeoutError
from mealfit_app.payment.models import ScreenPhase
from mealfit_app.payment.poller import PROCESSING_ERROR_MESSAGE, TIMEOUT_MESSAGE
from mealfit_app.payment.screen import PaymentStatusScreen


def make_screen(query, backend, navigator, notifier, clock):
    return PaymentStatusScreen(query, backend, navigator, notifier, sleep=clock.sleep)


class TestStatusContent:
    """Display content per payment status."""

    def test_approved_before_mount(self, approved_query, make_backend, navigator, notifier, clock):
        screen = make_screen(approved_query, make_backend(ready_on=1), navigator, notifier, clock)
        content = screen.content()

        assert content.title == "Pagamento Aprovado!"
        assert content.message.startswith("Seu plano está sendo gerado.")
        assert content.button_route == "/plan"
        assert content.loading is True
        assert content.progress is None

    def test_approved_while_retrying(self, approved_query, make_backend, navigator, notifier, clock):
        screen = make_screen(approved_query, make_backend(ready_on=1), navigator, notifier, clock)
        screen.poller.phase = ScreenPhase.POLLING
        screen.poller.poll_state = screen.poller.poll_state.with_next_attempt().with_next_attempt()

        content = screen.content()

        assert content.message == "Gerando seu plano personalizado... Por favor, aguarde."
        assert content.progress == "Tentativa 2 de 10..."

    def test_pending(self, make_backend, navigator, notifier, clock):
        query = "status=pending&payment_id=1&external_reference=r"
        screen = make_screen(query, make_backend(), navigator, notifier, clock)

        asyncio.run(screen.poller.run(query))
        content = screen.content()

        assert content.title == "Pagamento Pendente"
        assert content.button_text == "Voltar para Home"
        assert content.button_route == "/"
        assert content.loading is False
        assert content.error is None

    def test_rejected(self, make_backend, navigator, notifier, clock):
        query = "status=rejected&payment_id=1&external_reference=r"
        screen = make_screen(query, make_backend(), navigator, notifier, clock)

        asyncio.run(screen.poller.run(query))
        content = screen.content()

        assert content.title == "Pagamento não Aprovado"
        assert content.button_text == "Tentar Novamente"
        assert content.button_route == "/plans"

    def test_missing_parameters_shows_support_message(self, make_backend, navigator, notifier, clock):
        query = "status=approved"
        screen = make_screen(query, make_backend(), navigator, notifier, clock)

        asyncio.run(screen.poller.run(query))
        content = screen.content()

        assert content.error == PROCESSING_ERROR_MESSAGE
        assert content.loading is False

    def test_timeout_message(self, approved_query, make_backend, navigator, notifier, clock):
        screen = make_screen(approved_query, make_backend(ready_on=None), navigator, notifier, clock)

        asyncio.run(screen.poller.run(approved_query))
        content = screen.content()

        assert isinstance(screen.poller.error, PollTimeoutError)
        assert content.error == TIMEOUT_MESSAGE
        assert content.progress is None


class TestScreenLifecycle:
    """Mount and unmount drive the poller."""

    def test_mount_runs_to_plan(self, approved_query, make_backend, navigator, notifier, clock):
        backend = make_backend(ready_on=2)
        screen = make_screen(approved_query, backend, navigator, notifier, clock)

        async def scenario():
            return await screen.mount()

        assert asyncio.run(scenario()) == ScreenPhase.DONE
        assert screen.mounted is True
        assert navigator.current_route == "/plan"

    def test_unmount_cancels(self, approved_query, make_backend, navigator, notifier, clock):
        backend = make_backend(ready_on=None)
        screen = make_screen(approved_query, backend, navigator, notifier, clock)

        async def scenario():
            task = screen.mount()
            screen.unmount()
            return await task

        assert asyncio.run(scenario()) == ScreenPhase.CANCELLED
        assert screen.mounted is False
        assert backend.confirm_calls == []
        assert navigator.history == []

    def test_press_button(self, make_backend, navigator, notifier, clock):
        query = "status=pending&payment_id=1&external_reference=r"
        screen = make_screen(query, make_backend(), navigator, notifier, clock)

        screen.press_button()

        assert navigator.history == [("/", True)]
