"""Token resolver: public token to active profile."""

from typing import Any

import structlog
from sqlalchemy import select

from medtag.core.data_client import DataClient
from medtag.core.exceptions import BadRequestException, NotFoundException
from medtag.models.profiles import profiles
from medtag.models.qr_codes import qr_codes

logger = structlog.get_logger(__name__)

ACTIVE_STATUS = "active"


class TokenResolver:
    """Resolve an opaque public token to exactly one active profile."""

    def __init__(self, client: DataClient):
        """Initialize resolver with a data-access client."""
        self.client = client

    async def resolve(self, token: str | None) -> dict[str, Any]:
        """
        Fetch the full profile record bound to an active token.

        All profile fields are returned; tier filtering happens in the
        assembler.

        Raises:
            BadRequestException: If the token is missing or empty
            NotFoundException: If the token is unknown, revoked, ambiguous, or
                cannot be stored at all
        """
        if not token:
            raise BadRequestException("Missing token")

        # PostgreSQL text cannot hold NUL; such a token can never have been issued
        if "\x00" in token:
            logger.info("public_token_not_found", matches=0)
            raise NotFoundException("Profile not found")

        query = (
            select(profiles)
            .select_from(qr_codes.join(profiles, qr_codes.c.profile_id == profiles.c.id))
            .where(
                qr_codes.c.public_token == token,
                qr_codes.c.status == ACTIVE_STATUS,
            )
            .limit(2)
        )
        rows = await self.client.fetch_all(query, store="profiles")

        # Unknown, revoked and duplicated tokens are indistinguishable to the caller
        if len(rows) != 1:
            logger.info("public_token_not_found", matches=len(rows))
            raise NotFoundException("Profile not found")

        return rows[0]
