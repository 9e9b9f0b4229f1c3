"""Disclosure assembler: shape a profile into a tier-specific payload."""

from datetime import UTC, date, datetime
from typing import Any

from medtag.models.profiles import PAID_TIER_FIELDS
from medtag.schemas.public_profile import (
    BasicDisclosure,
    ContactInfo,
    DisclosurePayload,
    FullDisclosure,
    MedicalDetails,
)
from medtag.services.contact_resolver import (
    PRIMARY_PRIORITY,
    SECONDARY_PRIORITY,
    select_by_priority,
)


def _parse_birth_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            return None
    return None


def calculate_age(date_of_birth: Any, today: date | None = None) -> int | None:
    """
    Compute whole years elapsed since a birth date.

    Args:
        date_of_birth: A date, datetime or ISO 8601 string
        today: Reference date (defaults to the current UTC date)

    Returns:
        Age in years, or None when the birth date is missing, unparseable or
        in the future
    """
    birth = _parse_birth_date(date_of_birth)
    if birth is None:
        return None

    today = today or datetime.now(UTC).date()
    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1

    return age if age >= 0 else None


def _contact_info(contact: dict[str, Any] | None) -> ContactInfo | None:
    if contact is None:
        return None
    return ContactInfo(name=contact.get("name"), phone=contact.get("phone"))


def assemble(
    profile: dict[str, Any],
    contacts: list[dict[str, Any]],
    is_paid: bool,
    today: date | None = None,
) -> DisclosurePayload:
    """
    Build the public payload for a resolved profile.

    The free tier carries name, age and the primary contact. The paid tier
    adds the medical block with every paid-tier field and the secondary
    contact. Contacts with priority above 2 are never disclosed.
    """
    basic = {
        "first_name": profile.get("first_name"),
        "last_name": profile.get("last_name"),
        "age": calculate_age(profile.get("date_of_birth"), today),
        "emergency_contact": _contact_info(select_by_priority(contacts, PRIMARY_PRIORITY)),
    }

    if not is_paid:
        return BasicDisclosure(**basic)

    medical = MedicalDetails(
        **{field: profile.get(field) for field in PAID_TIER_FIELDS},
        emergency_contact_2=_contact_info(select_by_priority(contacts, SECONDARY_PRIORITY)),
    )
    return FullDisclosure(**basic, medical=medical)
