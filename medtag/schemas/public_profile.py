"""Public disclosure payload schemas.

The payload is a tagged union discriminated by ``is_paid``: a basic variant
for unentitled owners and a basic+medical variant for entitled ones. The
``medical`` key exists only on the paid variant, so the JSON shape itself
enforces the tier.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ContactInfo(BaseModel):
    """Emergency contact as shown to an anonymous viewer."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    phone: str | None = None


class MedicalDetails(BaseModel):
    """Paid-tier medical block."""

    model_config = ConfigDict(extra="forbid")

    allergies: str | None = None
    conditions: str | None = None
    medications: str | None = None
    blood_type: str | None = None
    gender: str | None = None
    physical_description: str | None = None
    special_notes: str | None = None
    medical_aid_provider: str | None = None
    medical_aid_policy_number: str | None = None
    primary_language: str | None = None
    religion: str | None = None
    additional_notes: str | None = None
    emergency_contact_2: ContactInfo | None = None


class BasicDisclosure(BaseModel):
    """Free-tier disclosure: name, age and primary contact only."""

    model_config = ConfigDict(extra="forbid")

    first_name: str | None = None
    last_name: str | None = None
    age: int | None = Field(None, ge=0, description="Whole years, null when unknown")
    emergency_contact: ContactInfo | None = None
    is_paid: Literal[False] = False


class FullDisclosure(BaseModel):
    """Paid-tier disclosure: the basic fields plus the medical block."""

    model_config = ConfigDict(extra="forbid")

    first_name: str | None = None
    last_name: str | None = None
    age: int | None = Field(None, ge=0, description="Whole years, null when unknown")
    emergency_contact: ContactInfo | None = None
    is_paid: Literal[True] = True
    medical: MedicalDetails


DisclosurePayload = BasicDisclosure | FullDisclosure


class ErrorResponse(BaseModel):
    """Error body returned on the public path."""

    error: str
