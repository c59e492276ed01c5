"""API routes exposing the gateway operations."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from contacts_gateway.auth import GoogleRefreshTokenAuthenticator, StaticTokenAuthenticator
from contacts_gateway.config import PeopleAPIConfig, settings
from contacts_gateway.formatting import format_contact
from contacts_gateway.gateway import ContactsGateway
from contacts_gateway.options import ContactOptions
from contacts_gateway.results import OperationResult, Success
from contacts_gateway.schemas import OperationResponse
from contacts_gateway.transport import HttpxTransport

router = APIRouter(prefix="/v1/contacts")


def get_gateway() -> ContactsGateway:
    """Build a gateway from settings.

    Uses the static access token when GOOGLE_ACCESS_TOKEN is set, otherwise
    the OAuth2 refresh token grant.

    Raises:
        OAuthError: If no usable credentials are configured
    """
    if settings.google_access_token:
        authenticator = StaticTokenAuthenticator(settings.google_access_token)
    else:
        authenticator = GoogleRefreshTokenAuthenticator(
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            refresh_token=settings.google_refresh_token,
            timeout=settings.request_timeout,
        )
    return ContactsGateway(
        authenticator,
        transport=HttpxTransport(timeout=settings.request_timeout),
        api=PeopleAPIConfig.from_settings(settings),
    )


def _respond(result: OperationResult) -> JSONResponse:
    """Map a result onto an HTTP response.

    Local failures are 400; remote failures keep the upstream status.
    """
    if result.ok:
        status_code = 200
    elif result.is_local:
        status_code = 400
    else:
        status_code = result.status if result.status and result.status >= 400 else 502
    return JSONResponse(status_code=status_code, content=result.to_dict())


MAX_RESULTS = Query(None, ge=1, le=2000, description="Page size (provider default if omitted)")


@router.get("/", response_model=OperationResponse)
async def list_contacts(
    max_results: int | None = MAX_RESULTS,
    gateway: ContactsGateway = Depends(get_gateway),
) -> JSONResponse:
    """List the user's contacts."""
    return _respond(await gateway.list(max_results=max_results))


@router.get("/search", response_model=OperationResponse)
async def search_contacts(
    query: str = Query("", description="Prefix of a name, email or phone"),
    max_results: int | None = MAX_RESULTS,
    gateway: ContactsGateway = Depends(get_gateway),
) -> JSONResponse:
    """Search the user's contacts."""
    return _respond(await gateway.search(query=query, max_results=max_results))


@router.get("/lookup", response_model=OperationResponse)
async def get_contact(
    resource: str = Query("", alias="id", description="Resource name, otherContacts/ path, or email"),
    summary: bool = Query(False, description="Return a flattened contact summary"),
    gateway: ContactsGateway = Depends(get_gateway),
) -> JSONResponse:
    """Fetch one contact by resource name or email."""
    result = await gateway.get(resource_name_or_email=resource)
    if summary and result.ok and result.data:
        result = Success(data=format_contact(result.data), status=result.status)
    return _respond(result)


@router.get("/other", response_model=OperationResponse)
async def list_other_contacts(
    max_results: int | None = MAX_RESULTS,
    gateway: ContactsGateway = Depends(get_gateway),
) -> JSONResponse:
    """List "other contacts"."""
    return _respond(await gateway.other_list(max_results=max_results))


@router.get("/other/search", response_model=OperationResponse)
async def search_other_contacts(
    query: str = Query("", description="Prefix of a name, email or phone"),
    max_results: int | None = MAX_RESULTS,
    gateway: ContactsGateway = Depends(get_gateway),
) -> JSONResponse:
    """Search "other contacts"."""
    return _respond(await gateway.other_search(query=query, max_results=max_results))


@router.get("/directory", response_model=OperationResponse)
async def list_directory(
    max_results: int | None = MAX_RESULTS,
    gateway: ContactsGateway = Depends(get_gateway),
) -> JSONResponse:
    """List domain directory profiles."""
    return _respond(await gateway.directory_list(max_results=max_results))


@router.get("/directory/search", response_model=OperationResponse)
async def search_directory(
    query: str = Query("", description="Directory search query"),
    max_results: int | None = MAX_RESULTS,
    gateway: ContactsGateway = Depends(get_gateway),
) -> JSONResponse:
    """Search domain directory profiles."""
    return _respond(await gateway.directory_search(query=query, max_results=max_results))


@router.post("/", response_model=OperationResponse)
async def create_contact(
    contact: ContactOptions | None = None,
    gateway: ContactsGateway = Depends(get_gateway),
) -> JSONResponse:
    """Create a contact."""
    return _respond(await gateway.create(contact))


@router.patch("/{resource_name:path}", response_model=OperationResponse)
async def update_contact(
    resource_name: str,
    contact: ContactOptions | None = None,
    gateway: ContactsGateway = Depends(get_gateway),
) -> JSONResponse:
    """Update the supplied fields of a contact."""
    return _respond(await gateway.update(contact, resource_name=resource_name))


@router.delete("/{resource_name:path}", response_model=OperationResponse)
async def delete_contact(
    resource_name: str,
    gateway: ContactsGateway = Depends(get_gateway),
) -> JSONResponse:
    """Delete a contact."""
    return _respond(await gateway.remove(resource_name=resource_name))
