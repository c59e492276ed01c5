"""Result types returned by every gateway operation.

A call either succeeds (``Success``) or fails (``Failure``). Failures are
split by kind:

- ``LOCAL``: input validation failed, no request was sent
- ``REMOTE``: the People API answered with an error status

Authentication and transport errors are not results; they are raised.
"""

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict


class FailureKind(str, Enum):
    """Where a failure originated."""

    LOCAL = "local"
    REMOTE = "remote"


class Success(BaseModel):
    """Successful operation."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    data: Any = None
    raw: Optional[str] = None
    status: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the ``{ok, status, data, raw}`` mapping."""
        result: dict[str, Any] = {"ok": True, "data": self.data}
        if self.status is not None:
            result["status"] = self.status
        if self.raw is not None:
            result["raw"] = self.raw
        return result


class Failure(BaseModel):
    """Failed operation, either rejected locally or by the remote API."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    kind: FailureKind
    message: str
    status: Optional[int] = None
    data: Any = None
    raw: Optional[str] = None

    @classmethod
    def local(cls, message: str) -> "Failure":
        """Validation failure; no request was issued."""
        return cls(kind=FailureKind.LOCAL, message=message)

    @property
    def is_local(self) -> bool:
        return self.kind is FailureKind.LOCAL

    def to_dict(self) -> dict[str, Any]:
        """Return the ``{ok, status, data, raw, error}`` mapping."""
        result: dict[str, Any] = {"ok": False, "error": self.message}
        if self.kind is FailureKind.REMOTE:
            result["status"] = self.status
            result["data"] = self.data
            result["raw"] = self.raw
        return result


OperationResult = Union[Success, Failure]
