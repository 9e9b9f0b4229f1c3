"""Database models."""

from sqlalchemy import MetaData

from medtag.models.emergency_contacts import emergency_contacts
from medtag.models.profiles import PAID_TIER_FIELDS, profiles
from medtag.models.qr_codes import qr_codes
from medtag.models.subscriptions import subscriptions

__all__ = [
    "PAID_TIER_FIELDS",
    "build_metadata",
    "emergency_contacts",
    "profiles",
    "qr_codes",
    "subscriptions",
]


def build_metadata() -> MetaData:
    """Combine every table into one MetaData so foreign keys resolve for create_all."""
    metadata = MetaData()
    for table in (profiles, qr_codes, emergency_contacts, subscriptions):
        table.to_metadata(metadata)
    return metadata
