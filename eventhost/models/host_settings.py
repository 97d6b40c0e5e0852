from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String

from eventhost.db.base_class import Base


class HostSettings(Base):
    """Per-host email provider selection and credentials."""

    __tablename__ = "settings"

    host_id = Column(String, primary_key=True)
    email_provider = Column(String(20), nullable=False, default="sendgrid")

    sendgrid_api_key = Column(String, nullable=True)
    sendgrid_from_email = Column(String, nullable=True)

    emailjs_service_id = Column(String, nullable=True)
    emailjs_template_id = Column(String, nullable=True)
    emailjs_public_key = Column(String, nullable=True)
    emailjs_private_key = Column(String, nullable=True)

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
