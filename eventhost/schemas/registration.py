# eventhost/schemas/registration.py
from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator

from eventhost.utils.validators import is_valid_email


class Address(BaseModel):
    street: str = Field(..., min_length=1, description="Street address is required")
    city: str = Field(..., min_length=1, description="City is required")
    state: str = Field(..., min_length=1, description="State is required")
    postal_code: str = Field(..., min_length=1, description="Postal code is required")


class RegistrationCreate(BaseModel):
    full_name: str = Field(..., min_length=2, json_schema_extra={"example": "Ada Lovelace"})
    email: str = Field(..., json_schema_extra={"example": "ada@example.com"})
    phone: str = Field(..., min_length=10, json_schema_extra={"example": "+15551234567"})
    address: Address
    company: str = Field(..., min_length=1)
    # Keyed by question index as a string: {"0": "M", "1": "Vegan"}
    custom_answers: Dict[str, str] = Field(default_factory=dict)
    notify_before: bool = False

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, value: str) -> str:
        value = value.strip().lower()
        if not is_valid_email(value):
            raise ValueError("Invalid email address")
        return value


class Registration(BaseModel):
    id: str
    event_id: str
    full_name: str
    email: str
    phone: str
    company: str
    address: Address
    custom_answers: Dict[str, str]
    notify_before: bool
    registered_at: datetime
    reminder_sent_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class Attendee(Registration):
    event_title: str
