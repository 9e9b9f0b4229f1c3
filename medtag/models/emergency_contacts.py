"""Emergency contact model definition using SQLAlchemy Core."""

from uuid import uuid4

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)

metadata = MetaData()

emergency_contacts = Table(
    "emergency_contacts",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column(
        "profile_id",
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    # 1 = primary, 2 = secondary, higher values are stored but not disclosed
    Column("priority", Integer, nullable=False),
    Column("name", Text),
    Column("phone", String(30)),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    CheckConstraint("priority > 0", name="emergency_contacts_priority_check"),
    UniqueConstraint("profile_id", "priority", name="unique_profile_contact_priority"),
)
