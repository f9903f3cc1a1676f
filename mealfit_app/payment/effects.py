"""User-facing side effects of the payment status screen."""

from abc import ABC, abstractmethod

from ..logging.config import get_logger

PLAN_ROUTE = "/plan"
HOME_ROUTE = "/"
PLANS_ROUTE = "/plans"

logger = get_logger(__name__)


class Navigator(ABC):
    """Moves the user to another route."""

    @abstractmethod
    def navigate(self, route: str, replace: bool = True) -> None:
        pass


class Notifier(ABC):
    """Shows transient toast notifications."""

    @abstractmethod
    def success(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass


class LogNotifier(Notifier):
    """Notifier that writes toasts to the structured log."""

    def __init__(self):
        self.logger = logger.bind(channel="toast")

    def success(self, message: str) -> None:
        self.logger.info("toast", level_hint="success", message=message)

    def error(self, message: str) -> None:
        self.logger.warning("toast", level_hint="error", message=message)


class RecordingNavigator(Navigator):
    """Navigator that only remembers where it was sent."""

    def __init__(self):
        self.history: list[tuple[str, bool]] = []

    def navigate(self, route: str, replace: bool = True) -> None:
        logger.info("navigate", route=route, replace=replace)
        self.history.append((route, replace))

    @property
    def current_route(self):
        return self.history[-1][0] if self.history else None
