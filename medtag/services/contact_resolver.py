"""Contact resolver: ordered emergency contacts for a profile."""

from typing import Any
from uuid import UUID

from sqlalchemy import select

from medtag.core.data_client import DataClient
from medtag.models.emergency_contacts import emergency_contacts

PRIMARY_PRIORITY = 1
SECONDARY_PRIORITY = 2


class ContactResolver:
    """Service for emergency contact lookups."""

    def __init__(self, client: DataClient):
        """Initialize resolver with a data-access client."""
        self.client = client

    async def list_contacts(self, profile_id: UUID) -> list[dict[str, Any]]:
        """Get a profile's contacts ordered by ascending priority (may be empty)."""
        query = (
            select(
                emergency_contacts.c.priority,
                emergency_contacts.c.name,
                emergency_contacts.c.phone,
            )
            .where(emergency_contacts.c.profile_id == profile_id)
            .order_by(
                emergency_contacts.c.priority,
                emergency_contacts.c.created_at,
                emergency_contacts.c.id,
            )
        )
        return await self.client.fetch_all(query, store="emergency_contacts")


def select_by_priority(contacts: list[dict[str, Any]], priority: int) -> dict[str, Any] | None:
    """Return the first contact with exactly the given priority, or None."""
    return next((c for c in contacts if c.get("priority") == priority), None)
