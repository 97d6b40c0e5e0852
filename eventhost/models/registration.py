import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    JSON,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from eventhost.db.base_class import Base


class Registration(Base):
    __tablename__ = "registrations"

    id = Column(
        String, primary_key=True, default=lambda: f"reg_{uuid.uuid4().hex[:12]}"
    )
    event_id = Column(
        String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )

    full_name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=False)
    company = Column(String, nullable=False)
    # {"street", "city", "state", "postal_code"}
    address = Column(JSON, nullable=False)
    # Answers keyed by the question's index in Event.custom_questions
    custom_answers = Column(JSON, nullable=False, default=dict)

    notify_before = Column(Boolean, nullable=False, default=False)
    registered_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    reminder_sent_at = Column(DateTime(timezone=True), nullable=True)

    event = relationship("Event", back_populates="registrations")

    __table_args__ = (
        # One registration per email per event, enforced by the store itself
        UniqueConstraint("event_id", "email", name="uq_registration_event_email"),
    )
