"""QR code (public token) model definition using SQLAlchemy Core."""

from uuid import uuid4

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    MetaData,
    String,
    Table,
    Text,
    Uuid,
    func,
)

metadata = MetaData()

qr_codes = Table(
    "qr_codes",
    metadata,
    Column("id", Uuid, primary_key=True, default=uuid4),
    Column(
        "profile_id",
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column("public_token", Text, nullable=False, unique=True, index=True),
    Column("status", String(10), nullable=False, server_default="active"),
    Column("created_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
    Column("revoked_at", DateTime(timezone=True), nullable=True),
    CheckConstraint("status IN ('active', 'revoked')", name="qr_codes_status_check"),
)
