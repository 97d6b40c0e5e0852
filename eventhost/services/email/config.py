# eventhost/services/email/config.py
from dataclasses import dataclass
from typing import Optional

from eventhost.core.config import settings


@dataclass
class EmailProviderConfig:
    """
    Everything a transport needs, resolved once per request from the host's
    stored settings or the environment defaults.
    """
    provider: str
    from_email: Optional[str] = None
    sendgrid_api_key: Optional[str] = None
    emailjs_service_id: Optional[str] = None
    emailjs_template_id: Optional[str] = None
    emailjs_public_key: Optional[str] = None
    emailjs_private_key: Optional[str] = None
    sendgrid_api_url: str = settings.SENDGRID_API_URL
    emailjs_api_url: str = settings.EMAILJS_API_URL
    timeout: float = settings.EMAIL_HTTP_TIMEOUT

    @classmethod
    def from_env(cls) -> "EmailProviderConfig":
        return cls(
            provider=settings.DEFAULT_EMAIL_PROVIDER,
            from_email=settings.DEFAULT_FROM_EMAIL,
            sendgrid_api_key=settings.SENDGRID_API_KEY,
            emailjs_service_id=settings.EMAILJS_SERVICE_ID,
            emailjs_template_id=settings.EMAILJS_TEMPLATE_ID,
            emailjs_public_key=settings.EMAILJS_PUBLIC_KEY,
            emailjs_private_key=settings.EMAILJS_PRIVATE_KEY,
            sendgrid_api_url=settings.SENDGRID_API_URL,
            emailjs_api_url=settings.EMAILJS_API_URL,
            timeout=settings.EMAIL_HTTP_TIMEOUT,
        )

    @classmethod
    def from_host_settings(cls, row) -> "EmailProviderConfig":
        """
        Stored host settings win; a host without a settings row uses the
        environment defaults. The sender address falls back to
        DEFAULT_FROM_EMAIL when the host left it empty.
        """
        if row is None:
            return cls.from_env()
        return cls(
            provider=row.email_provider,
            from_email=row.sendgrid_from_email or settings.DEFAULT_FROM_EMAIL,
            sendgrid_api_key=row.sendgrid_api_key,
            emailjs_service_id=row.emailjs_service_id,
            emailjs_template_id=row.emailjs_template_id,
            emailjs_public_key=row.emailjs_public_key,
            emailjs_private_key=row.emailjs_private_key,
            sendgrid_api_url=settings.SENDGRID_API_URL,
            emailjs_api_url=settings.EMAILJS_API_URL,
            timeout=settings.EMAIL_HTTP_TIMEOUT,
        )
