"""Public (anonymous) profile disclosure endpoint."""

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from medtag.dependencies import DisclosureServiceDep
from medtag.middleware.error_handler import NO_STORE_HEADERS
from medtag.schemas.public_profile import DisclosurePayload, ErrorResponse

router = APIRouter()


@router.get(
    "/public-profile",
    response_model=DisclosurePayload,
    status_code=status.HTTP_200_OK,
    summary="Disclose a profile by public token",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse},
    },
)
async def get_public_profile(
    disclosure_service: DisclosureServiceDep,
    token: str | None = Query(None, description="Opaque public token printed on the tag"),
) -> JSONResponse:
    """
    Resolve a public token to its tier-shaped disclosure.

    - Free tier: name, age, primary emergency contact
    - Paid tier: adds the `medical` block and the secondary contact

    Responses are never cacheable.
    """
    payload = await disclosure_service.disclose(token)
    return JSONResponse(content=payload.model_dump(mode="json"), headers=NO_STORE_HEADERS)
