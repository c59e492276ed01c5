"""Flatten People API person records into simple summaries."""

from typing import Any, Mapping, Optional


def _primary(entries: Optional[list]) -> dict:
    """Return the entry flagged primary, else the first one, else {}."""
    if not entries:
        return {}
    for entry in entries:
        if entry.get("metadata", {}).get("primary"):
            return entry
    return entries[0]


def format_contact(contact: Optional[Mapping[str, Any]]) -> dict[str, str]:
    """Format a raw People API person into a flat summary.

    Search responses wrap each match as ``{"person": {...}}``; both shapes
    are accepted.

    Args:
        contact: Raw person (or search result) from the People API

    Returns:
        Dictionary with id, display_name, given_name, family_name, email, phone
    """
    if not contact:
        contact = {}
    if "person" in contact:
        contact = contact["person"] or {}

    name = _primary(contact.get("names"))
    email = _primary(contact.get("emailAddresses"))
    phone = _primary(contact.get("phoneNumbers"))

    display_name = name.get("displayName") or " ".join(
        part for part in (name.get("givenName"), name.get("familyName")) if part
    )

    return {
        "id": contact.get("resourceName", ""),
        "display_name": display_name,
        "given_name": name.get("givenName", ""),
        "family_name": name.get("familyName", ""),
        "email": email.get("value", ""),
        "phone": phone.get("value", ""),
    }
