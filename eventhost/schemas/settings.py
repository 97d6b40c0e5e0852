from enum import Enum
from typing import Optional

from pydantic import BaseModel


class EmailProvider(str, Enum):
    sendgrid = "sendgrid"
    emailjs = "emailjs"


class EmailSettingsUpdate(BaseModel):
    email_provider: EmailProvider = EmailProvider.sendgrid
    sendgrid_api_key: Optional[str] = None
    sendgrid_from_email: Optional[str] = None
    emailjs_service_id: Optional[str] = None
    emailjs_template_id: Optional[str] = None
    emailjs_public_key: Optional[str] = None
    emailjs_private_key: Optional[str] = None


MASK_PREFIX = "****"


def mask_secret(value: Optional[str]) -> Optional[str]:
    """SG.abcdef123456 -> ****3456"""
    if not value:
        return None
    if len(value) <= 4:
        return MASK_PREFIX
    return MASK_PREFIX + value[-4:]


class EmailSettingsPublic(BaseModel):
    """Stored settings with secrets masked."""
    email_provider: EmailProvider
    sendgrid_api_key: Optional[str] = None
    sendgrid_from_email: Optional[str] = None
    emailjs_service_id: Optional[str] = None
    emailjs_template_id: Optional[str] = None
    emailjs_public_key: Optional[str] = None
    emailjs_private_key: Optional[str] = None
    configured: bool = False

    @classmethod
    def from_row(cls, row) -> "EmailSettingsPublic":
        return cls(
            email_provider=row.email_provider,
            sendgrid_api_key=mask_secret(row.sendgrid_api_key),
            sendgrid_from_email=row.sendgrid_from_email,
            emailjs_service_id=row.emailjs_service_id,
            emailjs_template_id=row.emailjs_template_id,
            emailjs_public_key=row.emailjs_public_key,
            emailjs_private_key=mask_secret(row.emailjs_private_key),
            configured=True,
        )
