"""Profile model definition using SQLAlchemy Core."""

from uuid import uuid4

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    MetaData,
    String,
    Table,
    Text,
    Uuid,
    func,
)

metadata = MetaData()

# Fields disclosed only to viewers of a profile whose owner has an active subscription
PAID_TIER_FIELDS = (
    "allergies",
    "conditions",
    "medications",
    "blood_type",
    "gender",
    "physical_description",
    "special_notes",
    "medical_aid_provider",
    "medical_aid_policy_number",
    "primary_language",
    "religion",
    "additional_notes",
)

profiles = Table(
    "profiles",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    # Owning account; subscriptions are keyed on the same identity
    Column("user_id", Uuid, nullable=False, unique=True, index=True),
    # Free tier
    Column("first_name", String(100)),
    Column("last_name", String(100)),
    Column("date_of_birth", Date),
    # Paid tier
    Column("allergies", Text),
    Column("conditions", Text),
    Column("medications", Text),
    Column("blood_type", String(10)),
    Column("gender", String(20)),
    Column("physical_description", Text),
    Column("special_notes", Text),
    Column("medical_aid_provider", Text),
    Column("medical_aid_policy_number", String(100)),
    Column("primary_language", String(50)),
    Column("religion", String(50)),
    Column("additional_notes", Text),
    # Metadata
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)
