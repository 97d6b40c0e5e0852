from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from eventhost.utils.validators import is_valid_email


class UserUpdate(BaseModel):
    email: str
    display_name: Optional[str] = None

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, value: str) -> str:
        if not is_valid_email(value):
            raise ValueError("Invalid email address")
        return value


class User(BaseModel):
    id: str
    email: str
    display_name: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}
