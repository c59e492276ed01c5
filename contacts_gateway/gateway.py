"""Contacts gateway over the Google People API.

Every operation maps its options onto exactly one People API request
(``get`` by email goes through ``search``) and returns a ``Success`` or
``Failure``. Missing input never reaches the network. Authentication and
transport errors are raised to the caller.
"""

import logging
from typing import Any, Mapping, Optional, TypeVar, Union

from contacts_gateway.auth import Authenticator
from contacts_gateway.config import PeopleAPIConfig, settings
from contacts_gateway.options import (
    ContactOptions,
    GetOptions,
    OperationOptions,
    PageOptions,
    QueryOptions,
    RemoveOptions,
    UpdateOptions,
)
from contacts_gateway.results import Failure, FailureKind, OperationResult, Success
from contacts_gateway.transport import HttpxTransport, Transport, encode_query

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", bound=OperationOptions)
OptionsArg = Union[Mapping[str, Any], OperationOptions, None]

# Top-level person fields, in field mask order
PERSON_FIELDS = ("names", "emailAddresses", "phoneNumbers")

OTHER_CONTACTS_PREFIX = "otherContacts/"


def build_contact(
    given_name: Optional[str] = None,
    family_name: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
) -> dict[str, Any]:
    """Build a sparse People API person from the supplied fields.

    Only supplied fields appear. ``names`` is present when either half of the
    name is given; the other half defaults to an empty string.
    """
    person: dict[str, Any] = {}
    if given_name or family_name:
        person["names"] = [{"givenName": given_name or "", "familyName": family_name or ""}]
    if email:
        person["emailAddresses"] = [{"value": str(email)}]
    if phone:
        person["phoneNumbers"] = [{"value": str(phone)}]
    return person


def changed_person_fields(person: Mapping[str, Any]) -> list[str]:
    """Top-level fields present in ``person``, for ``updatePersonFields``."""
    return [field for field in PERSON_FIELDS if person.get(field)]


def _parse_options(model: type[OptionsT], options: OptionsArg, overrides: dict) -> OptionsT:
    # Both sides are validated first so aliases resolve to field names
    # before the keyword arguments are applied on top.
    if isinstance(options, model):
        base = options
    elif isinstance(options, OperationOptions):
        base = model.model_validate(options.model_dump(exclude_none=True))
    else:
        base = model.model_validate(dict(options or {}))

    overrides = {key: value for key, value in overrides.items() if value is not None}
    if not overrides:
        return base

    update = model.model_validate(overrides)
    values = base.model_dump(exclude_none=True)
    values.update(update.model_dump(include=update.model_fields_set, exclude_none=True))
    return model.model_validate(values)


def _with_page_size(params: dict[str, Any], max_results: Optional[int]) -> dict[str, Any]:
    if max_results:
        params["pageSize"] = max_results
    return params


class ContactsGateway:
    """Contact operations backed by the Google People API.

    Handles:
    - Personal contacts (list, search, get, create, update, remove)
    - "Other contacts" (list, search)
    - Domain directory (list, search)

    Options may be passed as a mapping, an options model, or keyword
    arguments; keyword arguments win.
    """

    def __init__(
        self,
        authenticator: Authenticator,
        transport: Optional[Transport] = None,
        api: Optional[PeopleAPIConfig] = None,
    ):
        """Initialize gateway.

        Args:
            authenticator: Supplies bearer tokens per scope set
            transport: JSON HTTP transport (default: HttpxTransport)
            api: People API constants (default: built from settings)
        """
        self.authenticator = authenticator
        self.transport = transport or HttpxTransport(timeout=settings.request_timeout)
        self.api = api or PeopleAPIConfig.from_settings(settings)

    async def _request(
        self,
        path: str,
        method: str = "GET",
        params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        scopes: Optional[tuple[str, ...]] = None,
    ) -> OperationResult:
        """Issue one authenticated request and normalize the response.

        Raises:
            Whatever the authenticator or transport raise.
        """
        token = await self.authenticator.acquire_token(scopes or self.api.default_scopes)

        path = str(path or "").lstrip("/")
        url = f"{self.api.base_url}/{path}"
        query = encode_query(params)
        if query:
            url += "?" + query

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }

        logger.debug("People API request: %s %s", method, path)
        response = await self.transport.perform_json_request(url, method, headers, body)

        status = response.status
        ok = response.ok if isinstance(response.ok, bool) else status < 400
        data = response.json_body if response.json_body is not None else (response.raw or None)

        if ok:
            return Success(data=data, raw=response.raw, status=status)

        logger.warning("People API request failed: %s %s -> %s", method, path, status)
        return Failure(
            kind=FailureKind.REMOTE,
            message=f"{method} {path} failed with status {status}",
            status=status,
            data=data,
            raw=response.raw,
        )

    def _reject(self, message: str) -> Failure:
        logger.info("Rejected request: %s", message)
        return Failure.local(message)

    async def list(self, options: OptionsArg = None, **kwargs: Any) -> OperationResult:
        """List the user's connections."""
        opts = _parse_options(PageOptions, options, kwargs)
        params = _with_page_size({"personFields": self.api.default_read_mask}, opts.max_results)
        return await self._request("people/me/connections", params=params, scopes=opts.scopes)

    async def search(self, options: OptionsArg = None, **kwargs: Any) -> OperationResult:
        """Search the user's contacts by name, email or phone prefix."""
        opts = _parse_options(QueryOptions, options, kwargs)
        if not opts.query:
            return self._reject("search: query required")
        params = _with_page_size(
            {"query": opts.query, "readMask": self.api.default_read_mask}, opts.max_results
        )
        return await self._request("people:searchContacts", params=params, scopes=opts.scopes)

    async def get(self, options: OptionsArg = None, **kwargs: Any) -> OperationResult:
        """Fetch one contact by resource name, other-contact path, or email.

        An email is resolved through ``search`` and yields the first match,
        or ``None`` when nothing matches.
        """
        opts = _parse_options(GetOptions, options, kwargs)
        value = opts.resource_name_or_email
        if not value:
            return self._reject("get: resource_name_or_email required")

        if "@" in value:
            found = await self.search(query=value, max_results=1, scopes=opts.scopes)
            if not found.ok:
                return found
            results = found.data.get("results") if isinstance(found.data, dict) else None
            results = results or []
            return Success(data=results[0] if results else None, status=found.status)

        if value.startswith(OTHER_CONTACTS_PREFIX):
            params = {"readMask": self.api.default_read_mask}
        else:
            params = {"personFields": self.api.default_read_mask}
        return await self._request(value, params=params, scopes=opts.scopes)

    async def other_list(self, options: OptionsArg = None, **kwargs: Any) -> OperationResult:
        """List "other contacts" (people interacted with but not saved)."""
        opts = _parse_options(PageOptions, options, kwargs)
        params = _with_page_size({"readMask": self.api.default_read_mask}, opts.max_results)
        return await self._request("otherContacts", params=params, scopes=opts.scopes)

    async def other_search(self, options: OptionsArg = None, **kwargs: Any) -> OperationResult:
        """Search "other contacts"."""
        opts = _parse_options(QueryOptions, options, kwargs)
        if not opts.query:
            return self._reject("other_search: query required")
        params = _with_page_size(
            {"query": opts.query, "readMask": self.api.default_read_mask}, opts.max_results
        )
        return await self._request("otherContacts:search", params=params, scopes=opts.scopes)

    async def create(self, options: OptionsArg = None, **kwargs: Any) -> OperationResult:
        """Create a contact from name, email and phone."""
        opts = _parse_options(ContactOptions, options, kwargs)
        person = build_contact(opts.given_name, opts.family_name, opts.email, opts.phone)
        if not person:
            return self._reject("create: missing data")
        return await self._request(
            "people:createContact", method="POST", body=person, scopes=opts.scopes
        )

    async def update(self, options: OptionsArg = None, **kwargs: Any) -> OperationResult:
        """Update the supplied fields of a contact, leaving the others intact."""
        opts = _parse_options(UpdateOptions, options, kwargs)
        if not opts.resource_name:
            return self._reject("update: resource_name required")
        person = build_contact(opts.given_name, opts.family_name, opts.email, opts.phone)
        fields = changed_person_fields(person)
        if not fields:
            return self._reject("update: no fields provided")
        return await self._request(
            f"{opts.resource_name}:updateContact",
            method="PATCH",
            params={"updatePersonFields": ",".join(fields)},
            body=person,
            scopes=opts.scopes,
        )

    async def remove(self, options: OptionsArg = None, **kwargs: Any) -> OperationResult:
        """Delete a contact."""
        opts = _parse_options(RemoveOptions, options, kwargs)
        if not opts.resource_name:
            return self._reject("remove: resource_name required")
        return await self._request(
            f"{opts.resource_name}:deleteContact", method="DELETE", scopes=opts.scopes
        )

    async def directory_search(self, options: OptionsArg = None, **kwargs: Any) -> OperationResult:
        """Search the organization directory (domain profiles)."""
        opts = _parse_options(QueryOptions, options, kwargs)
        if not opts.query:
            return self._reject("directory_search: query required")
        params = _with_page_size(
            {
                "query": opts.query,
                "readMask": self.api.default_read_mask,
                "sources": self.api.directory_source,
            },
            opts.max_results,
        )
        return await self._request("people:searchDirectoryPeople", params=params, scopes=opts.scopes)

    async def directory_list(self, options: OptionsArg = None, **kwargs: Any) -> OperationResult:
        """List the organization directory (empty directory query)."""
        opts = _parse_options(PageOptions, options, kwargs)
        params = _with_page_size(
            {
                "query": "",
                "readMask": self.api.default_read_mask,
                "sources": self.api.directory_source,
            },
            opts.max_results,
        )
        return await self._request("people:searchDirectoryPeople", params=params, scopes=opts.scopes)
