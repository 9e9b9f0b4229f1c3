"""Entitlement resolver: is the profile owner's paid tier active right now."""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import select

from medtag.core.data_client import DataClient
from medtag.models.subscriptions import subscriptions

ACTIVE_SUBSCRIPTION_STATUS = "active"


def _as_utc(value: Any) -> datetime | None:
    """Coerce a stored period end to an aware UTC datetime, or None."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def is_subscription_active(subscription: dict[str, Any] | None, now: datetime) -> bool:
    """
    Evaluate entitlement from a subscription row.

    Paid only when status is exactly "active" and the period end exists and
    lies strictly after ``now``.
    """
    if not subscription:
        return False
    if subscription.get("status") != ACTIVE_SUBSCRIPTION_STATUS:
        return False

    period_end = _as_utc(subscription.get("current_period_end"))
    if period_end is None:
        return False
    return period_end > now


class EntitlementResolver:
    """Service for evaluating subscription entitlement at request time."""

    def __init__(self, client: DataClient):
        """Initialize resolver with a data-access client."""
        self.client = client

    async def get_subscription(self, account_id: UUID) -> dict[str, Any] | None:
        """Get the subscription row for an account."""
        query = select(
            subscriptions.c.status,
            subscriptions.c.current_period_end,
        ).where(subscriptions.c.user_id == account_id)
        return await self.client.fetch_one(query, store="subscriptions")

    async def is_entitled(self, account_id: UUID, now: datetime | None = None) -> bool:
        """Check whether an account's paid features are active right now."""
        subscription = await self.get_subscription(account_id)
        return is_subscription_active(subscription, now or datetime.now(UTC))
