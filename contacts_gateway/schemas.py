"""Pydantic schemas for the Contacts Gateway HTTP surface."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class HealthCheckResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., json_schema_extra={"example": "healthy"})
    service: str = Field(..., json_schema_extra={"example": "contacts-gateway"})


class OperationResponse(BaseModel):
    """Serialized operation result.

    Mirrors ``Success.to_dict()`` / ``Failure.to_dict()``.
    """

    model_config = {
        "json_schema_extra": {
            "example": {
                "ok": True,
                "status": 200,
                "data": {
                    "resourceName": "people/c1001",
                    "names": [{"displayName": "Alice Dupont"}],
                    "emailAddresses": [{"value": "alice.dupont@example.com"}],
                },
            }
        }
    }

    ok: bool
    status: Optional[int] = None
    data: Any = None
    raw: Optional[str] = None
    error: Optional[str] = None
