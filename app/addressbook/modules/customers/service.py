from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

NAME_RE = re.compile(r"^[A-Za-z]+$")
PHONE_RE = re.compile(r"^[0-9]{10}$")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MSG_NAMES = "Names should only contain alphabetical characters."
MSG_PHONE = "Phone number should be exactly 10 digits."
MSG_EMAIL = "Invalid email format."
MSG_ADDRESSES = "Addresses must be a list of objects."


@dataclass(frozen=True)
class CustomerFields:
    first_name: str
    last_name: str
    phone: str
    email: str


@dataclass(frozen=True)
class AddressFields:
    street: Any = None
    city: Any = None
    state: Any = None
    zip: Any = None
    is_primary: bool = False


def _phone_text(value: Any) -> Any:
    # JSON numbers are accepted as their digit string; bool is an int subclass, keep it out
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _matches(pattern: re.Pattern[str], value: Any) -> bool:
    # fullmatch: `$` alone would accept a trailing newline
    return isinstance(value, str) and pattern.fullmatch(value) is not None


def validate_customer_payload(payload: dict[str, Any]) -> str | None:
    """
    Returns the first violated rule's message, or None when the payload is valid.
    Order: names, phone, email, addresses shape.
    """
    if not _matches(NAME_RE, payload.get("firstName")) or not _matches(NAME_RE, payload.get("lastName")):
        return MSG_NAMES
    if not _matches(PHONE_RE, _phone_text(payload.get("phone"))):
        return MSG_PHONE
    if not _matches(EMAIL_RE, payload.get("email")):
        return MSG_EMAIL
    addresses = payload.get("addresses")
    if addresses is not None:
        if not isinstance(addresses, list) or not all(isinstance(a, dict) for a in addresses):
            return MSG_ADDRESSES
    return None


def customer_fields_from_payload(payload: dict[str, Any]) -> CustomerFields:
    return CustomerFields(
        first_name=payload["firstName"],
        last_name=payload["lastName"],
        phone=_phone_text(payload["phone"]),
        email=payload["email"],
    )


def addresses_from_payload(payload: dict[str, Any]) -> list[AddressFields]:
    """Missing `addresses` means an empty address set."""
    return [
        AddressFields(
            street=a.get("street"),
            city=a.get("city"),
            state=a.get("state"),
            zip=a.get("zip"),
            is_primary=a.get("isPrimary") is True,
        )
        for a in (payload.get("addresses") or [])
    ]
