# eventhost/models/email_tracking.py
"""
One row per email send call made on behalf of a host.
The rows in the trailing window are what the send quota counts.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, JSON, String, Text

from eventhost.db.base_class import Base


class EmailTracking(Base):
    __tablename__ = "email_tracking"

    id = Column(
        String, primary_key=True, default=lambda: f"eml_{uuid.uuid4().hex[:12]}"
    )
    email_id = Column(String(255), nullable=True)  # provider message reference
    recipient = Column(Text, nullable=False)  # comma-joined recipients of the call
    # 'sent', 'delivered', 'opened', 'clicked', 'bounced'
    status = Column(String(20), nullable=False, default="sent")
    timestamp = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    user_id = Column(String, nullable=False, index=True)
    details = Column(JSON, nullable=True)

    __table_args__ = (
        Index("idx_email_tracking_user_timestamp", "user_id", "timestamp"),
    )
