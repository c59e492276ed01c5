"""Option models accepted by the gateway operations.

Each operation takes a loosely-typed mapping (or keyword arguments) that is
validated into one of these models at the boundary. Both snake_case and the
People API camelCase spellings are accepted (``max_results`` / ``maxResults``).

Scopes may be passed as ``scope``, ``scopes`` or ``services``; they are
collapsed into the single ``scopes`` field.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

SCOPE_ALIASES = ("scope", "scopes", "services")


def coerce_page_size(value: Any) -> Optional[int]:
    """Coerce a page size to a positive int, or None when unusable.

    Never raises: non-numeric, zero, negative and boolean input all mean
    "use the provider default".
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = value if isinstance(value, int) else int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
    return number if number > 0 else None


def normalize_scopes(value: Any) -> Optional[tuple[str, ...]]:
    """Normalize a scope string or sequence into a tuple, None when empty."""
    if not value:
        return None
    if isinstance(value, str):
        parts = value.replace(",", " ").split()
    else:
        parts = [str(item).strip() for item in value if item and str(item).strip()]
    return tuple(parts) or None


def _optional_text(value: Any) -> Optional[str]:
    if not value:
        return None
    return str(value)


class OperationOptions(BaseModel):
    """Options shared by every operation."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    scopes: Optional[tuple[str, ...]] = None

    @model_validator(mode="before")
    @classmethod
    def collapse_scope_aliases(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        values = dict(values)
        resolved = None
        for alias in SCOPE_ALIASES:
            candidate = normalize_scopes(values.pop(alias, None))
            if resolved is None and candidate:
                resolved = candidate
        values["scopes"] = resolved
        return values


class PageOptions(OperationOptions):
    """Options for listing operations."""

    max_results: Optional[int] = Field(None, alias="maxResults")

    @field_validator("max_results", mode="before")
    @classmethod
    def coerce_max_results(cls, value: Any) -> Optional[int]:
        return coerce_page_size(value)


class QueryOptions(PageOptions):
    """Options for search operations."""

    query: Optional[str] = None

    @field_validator("query", mode="before")
    @classmethod
    def coerce_query(cls, value: Any) -> Optional[str]:
        return _optional_text(value)


class GetOptions(OperationOptions):
    """Options for fetching a single contact by resource name or email."""

    resource_name_or_email: Optional[str] = Field(None, alias="resourceNameOrEmail")

    @field_validator("resource_name_or_email", mode="before")
    @classmethod
    def coerce_identifier(cls, value: Any) -> Optional[str]:
        return _optional_text(value)


class ContactOptions(OperationOptions):
    """Contact fields used by create and update."""

    given_name: Optional[str] = Field(None, alias="givenName")
    family_name: Optional[str] = Field(None, alias="familyName")
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("given_name", "family_name", "email", "phone", mode="before")
    @classmethod
    def coerce_fields(cls, value: Any) -> Optional[str]:
        return _optional_text(value)


class UpdateOptions(ContactOptions):
    """Options for updating an existing contact."""

    resource_name: Optional[str] = Field(None, alias="resourceName")

    @field_validator("resource_name", mode="before")
    @classmethod
    def coerce_resource_name(cls, value: Any) -> Optional[str]:
        return _optional_text(value)


class RemoveOptions(OperationOptions):
    """Options for deleting a contact."""

    resource_name: Optional[str] = Field(None, alias="resourceName")

    @field_validator("resource_name", mode="before")
    @classmethod
    def coerce_resource_name(cls, value: Any) -> Optional[str]:
        return _optional_text(value)
