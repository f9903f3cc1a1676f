"""Supabase implementation of the backend collaborator over httpx."""

from typing import Any, Optional

import httpx

from ..config.defaults import BackendParams
from ..errors import (
    BackendError,
    ConfirmationFailedError,
    ReadinessCheckError,
    UnauthenticatedError,
)
from ..logging.config import get_logger
from .base import PlanBackend

logger = get_logger(__name__)


class SupabaseBackend(PlanBackend):
    """
    Talks to Supabase auth, PostgREST tables and edge functions.

    Tables used:
    - profiles (id, has_paid_plan)
    - nutritional_plans (id, user_id, created_at)
    - user_nutrition (user_id unique)
    - training_plans / workout_days
    """

    def __init__(
        self,
        params: BackendParams,
        access_token: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        if not params.url:
            raise BackendError("Backend URL is not configured", operation="init")

        self.params = params
        self.base_url = params.url.rstrip("/")
        self.access_token = access_token
        self.logger = logger
        self.client = client or httpx.AsyncClient(
            timeout=params.timeout_seconds,
            limits=httpx.Limits(max_keepalive_connections=5, max_connections=10)
        )

    async def __aenter__(self) -> "SupabaseBackend":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    def _headers(self, **extra: str) -> dict[str, str]:
        token = self.access_token or self.params.anon_key
        headers = {
            "apikey": self.params.anon_key,
            "Authorization": f"Bearer {token}",
        }
        headers.update(extra)
        return headers

    async def get_user_id(self) -> str:
        """Resolve the id of the user owning the current session."""
        if not self.access_token:
            raise UnauthenticatedError()

        try:
            response = await self.client.get(
                f"{self.base_url}/auth/v1/user",
                headers=self._headers()
            )
        except httpx.HTTPError as e:
            raise ReadinessCheckError(f"Network error: {e}", query="auth.user") from e

        if response.status_code in (401, 403):
            raise UnauthenticatedError()
        if response.status_code >= 400:
            raise ReadinessCheckError(f"HTTP {response.status_code}", query="auth.user")

        user_id = response.json().get("id")
        if not user_id:
            raise UnauthenticatedError()
        return user_id

    async def _owner_id(self) -> str:
        """User id for writes; auth transport failures surface as BackendError."""
        try:
            return await self.get_user_id()
        except UnauthenticatedError:
            raise
        except ReadinessCheckError as e:
            raise BackendError(str(e), operation="auth", target="auth.user") from e

    async def _select(self, table: str, query: dict[str, str]) -> list[dict[str, Any]]:
        try:
            response = await self.client.get(
                f"{self.base_url}/rest/v1/{table}",
                params=query,
                headers=self._headers()
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ReadinessCheckError(f"HTTP {e.response.status_code}", query=table) from e
        except httpx.HTTPError as e:
            raise ReadinessCheckError(f"Network error: {e}", query=table) from e

        return response.json()

    async def check_plan_readiness(self) -> bool:
        user_id = await self.get_user_id()

        profiles = await self._select("profiles", {
            "select": "has_paid_plan",
            "id": f"eq.{user_id}",
        })
        plans = await self._select("nutritional_plans", {
            "select": "id",
            "user_id": f"eq.{user_id}",
            "order": "created_at.desc",
            "limit": "1",
        })

        has_paid_plan = bool(profiles and profiles[0].get("has_paid_plan"))
        has_plan = bool(plans and plans[0].get("id"))
        return has_paid_plan and has_plan

    async def confirm_payment(self, external_reference: str, payment_id: str, status: str) -> None:
        payload = {
            "external_reference": external_reference,
            "payment_id": payment_id,
            "status": status,
        }

        try:
            response = await self.client.post(
                f"{self.base_url}/functions/v1/{self.params.payment_function}",
                json=payload,
                headers=self._headers()
            )
        except httpx.HTTPError as e:
            self.logger.warning("Payment confirmation network error",
                                payment_id=payment_id, error=str(e))
            raise ConfirmationFailedError(f"Network error: {e}", payment_id=payment_id) from e

        if response.status_code >= 400:
            self.logger.warning("Payment confirmation rejected",
                                payment_id=payment_id,
                                response_code=response.status_code,
                                response_data=response.text[:200])
            raise ConfirmationFailedError(
                f"HTTP {response.status_code}: {response.text[:200]}",
                payment_id=payment_id,
                status_code=response.status_code
            )

        self.logger.info("Payment recorded", payment_id=payment_id, status=status)

    async def _insert(self, table: str, rows: Any, prefer: str,
                      query: Optional[dict[str, str]] = None) -> httpx.Response:
        try:
            response = await self.client.post(
                f"{self.base_url}/rest/v1/{table}",
                params=query,
                json=rows,
                headers=self._headers(Prefer=prefer)
            )
        except httpx.HTTPError as e:
            raise BackendError(f"Network error: {e}", operation="insert", target=table) from e

        if response.status_code >= 400:
            raise BackendError(
                f"HTTP {response.status_code}: {response.text[:200]}",
                operation="insert",
                target=table,
                status_code=response.status_code
            )
        return response

    async def save_nutrition_target(self, record: dict[str, Any]) -> None:
        user_id = await self._owner_id()

        await self._insert(
            "user_nutrition",
            {"user_id": user_id, **record},
            prefer="resolution=merge-duplicates,return=minimal",
            query={"on_conflict": "user_id"}
        )
        self.logger.info("Nutrition target saved", user_id=user_id,
                         meta_calorica=record.get("meta_calorica"))

    async def save_training_plan(self, plan: dict[str, Any], days: list[dict[str, Any]]) -> str:
        user_id = await self._owner_id()

        response = await self._insert(
            "training_plans",
            [{"user_id": user_id, **plan}],
            prefer="return=representation"
        )
        stored = response.json()
        plan_id = stored[0]["id"]

        await self._insert(
            "workout_days",
            [{"plan_id": plan_id, **day} for day in days],
            prefer="return=minimal"
        )
        self.logger.info("Training plan saved", user_id=user_id,
                         plan_id=plan_id, days=len(days))
        return plan_id
