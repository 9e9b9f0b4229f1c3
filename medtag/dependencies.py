"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends

from medtag.config import settings
from medtag.core.data_client import DataClient
from medtag.database import AsyncSessionLocal
from medtag.services.contact_resolver import ContactResolver
from medtag.services.disclosure_service import DisclosureService
from medtag.services.entitlement_resolver import EntitlementResolver
from medtag.services.token_resolver import TokenResolver


def get_data_client() -> DataClient:
    """Build the data-access client for one request."""
    return DataClient(AsyncSessionLocal, timeout=settings.store_timeout_seconds)


def get_disclosure_service(
    client: Annotated[DataClient, Depends(get_data_client)],
) -> DisclosureService:
    """Get disclosure service wired to a single data-access client."""
    return DisclosureService(
        token_resolver=TokenResolver(client),
        contact_resolver=ContactResolver(client),
        entitlement_resolver=EntitlementResolver(client),
    )


# Type aliases for dependency injection
DataClientDep = Annotated[DataClient, Depends(get_data_client)]
DisclosureServiceDep = Annotated[DisclosureService, Depends(get_disclosure_service)]
