"""Contacts Gateway - contact operations over the Google People API."""

__version__ = "1.0.0"

from contacts_gateway.gateway import ContactsGateway, build_contact  # noqa: E402
from contacts_gateway.results import Failure, FailureKind, Success  # noqa: E402

__all__ = [
    "ContactsGateway",
    "Failure",
    "FailureKind",
    "Success",
    "__version__",
    "build_contact",
]
