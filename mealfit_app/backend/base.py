"""Base class for hosted backend collaborators."""

from abc import ABC, abstractmethod
from typing import Any


class PlanBackend(ABC):
    """Remote operations the app performs against its hosted backend."""

    @abstractmethod
    async def confirm_payment(self, external_reference: str, payment_id: str, status: str) -> None:
        """
        Record a payment returned by the payment provider.

        Raises:
            ConfirmationFailedError: On any transport or validation problem
        """

    @abstractmethod
    async def check_plan_readiness(self) -> bool:
        """
        Check whether the purchased plan exists for the current user.

        Ready means the account has an active paid plan AND at least one
        generated plan record exists for it. Has no side effects.

        Raises:
            ReadinessCheckError: If either query could not be answered
        """

    @abstractmethod
    async def save_nutrition_target(self, record: dict[str, Any]) -> None:
        """
        Upsert the caloric target record of the current user.

        Raises:
            UnauthenticatedError: Without an active user session
            BackendError: If the write fails
        """

    @abstractmethod
    async def save_training_plan(self, plan: dict[str, Any], days: list[dict[str, Any]]) -> str:
        """
        Insert a training plan and its workout days.

        Returns:
            The id of the stored training plan

        Raises:
            UnauthenticatedError: Without an active user session
            BackendError: If either write fails
        """

    async def aclose(self) -> None:
        """Release network resources."""
