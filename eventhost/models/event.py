# eventhost/models/event.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, JSON, Numeric, String, Text
from sqlalchemy.orm import relationship

from eventhost.db.base_class import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Event(Base):
    __tablename__ = "events"

    id = Column(
        String, primary_key=True, default=lambda: f"evt_{uuid.uuid4().hex[:12]}"
    )
    host_id = Column(String, nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False, index=True)
    end_date = Column(DateTime(timezone=True), nullable=False)
    location = Column(String, nullable=False)
    cover_image_url = Column(String, nullable=True)
    agenda = Column(JSON, nullable=False, default=list)
    custom_questions = Column(JSON, nullable=False, default=list)
    theme = Column(String, nullable=False, default="modern")
    # None means the event is free
    price = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow
    )

    registrations = relationship(
        "Registration",
        back_populates="event",
        cascade="all, delete-orphan",
    )
