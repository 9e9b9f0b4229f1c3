"""Anonymous disclosure pipeline."""

import asyncio
from datetime import date, datetime

import structlog

from medtag.schemas.public_profile import DisclosurePayload
from medtag.services.contact_resolver import ContactResolver
from medtag.services.disclosure_assembler import assemble
from medtag.services.entitlement_resolver import EntitlementResolver
from medtag.services.token_resolver import TokenResolver

logger = structlog.get_logger(__name__)


class DisclosureService:
    """Resolve a public token into a tier-shaped disclosure payload."""

    def __init__(
        self,
        token_resolver: TokenResolver,
        contact_resolver: ContactResolver,
        entitlement_resolver: EntitlementResolver,
    ):
        """Initialize service with its three resolvers."""
        self.token_resolver = token_resolver
        self.contact_resolver = contact_resolver
        self.entitlement_resolver = entitlement_resolver

    async def disclose(
        self,
        token: str | None,
        now: datetime | None = None,
        today: date | None = None,
    ) -> DisclosurePayload:
        """
        Build the public payload for a token.

        Contacts and entitlement are fetched concurrently once the profile is
        known. Any resolver error propagates unchanged and cancels the other
        lookup; nothing is retried.
        """
        profile = await self.token_resolver.resolve(token)

        lookups = [
            asyncio.create_task(self.contact_resolver.list_contacts(profile["id"])),
            asyncio.create_task(
                self.entitlement_resolver.is_entitled(profile["user_id"], now=now)
            ),
        ]
        try:
            contacts, is_paid = await asyncio.gather(*lookups)
        except Exception:
            # A failed lookup ends the request; the other one must not outlive it
            for task in lookups:
                task.cancel()
            raise

        payload = assemble(profile, contacts, is_paid, today=today)
        logger.info("public_profile_resolved", is_paid=is_paid, contact_count=len(contacts))
        return payload
