# eventhost/crud/crud_email_tracking.py
"""
CRUD operations for email send tracking and the per-host send quota.
"""
import logging
import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, JSON, String, func, insert, literal, select, text
from sqlalchemy.orm import Session

from eventhost.models.email_tracking import EmailTracking
from eventhost.schemas.email import EmailStats, EmailStatus
from eventhost.utils.time import utcnow

logger = logging.getLogger(__name__)


class CRUDEmailTracking:
    def __init__(self, model=EmailTracking):
        self.model = model

    def get(self, db: Session, id: str) -> Optional[EmailTracking]:
        return db.get(self.model, id)

    def count_in_window(
        self,
        db: Session,
        *,
        user_id: str,
        window: timedelta,
        now: Optional[datetime] = None,
    ) -> int:
        """Tracked sends for the host inside the trailing window."""
        window_start = (now or utcnow()) - window
        return (
            db.query(func.count(self.model.id))
            .filter(
                self.model.user_id == user_id,
                self.model.timestamp >= window_start,
            )
            .scalar()
            or 0
        )

    def reserve_send_slot(
        self,
        db: Session,
        *,
        user_id: str,
        recipient: str,
        quota: int,
        window: timedelta,
        details: Optional[Dict[str, Any]] = None,
        now: Optional[datetime] = None,
    ) -> Optional[EmailTracking]:
        """
        Insert a 'sent' tracking row only if the host is under quota.

        Check and write are one INSERT ... SELECT ... WHERE count < quota, so
        two concurrent senders cannot both take the last slot. On PostgreSQL
        the statement also runs under a per-host transaction advisory lock.

        Returns the new row, or None when the quota is used up.
        """
        now = now or utcnow()
        window_start = now - window
        tracking_id = f"eml_{uuid.uuid4().hex[:12]}"

        if db.get_bind().dialect.name == "postgresql":
            db.execute(
                text("SELECT pg_advisory_xact_lock(hashtext(:key))"),
                {"key": f"email-quota:{user_id}"},
            )

        sends_in_window = (
            select(func.count(self.model.id))
            .where(
                self.model.user_id == user_id,
                self.model.timestamp >= window_start,
            )
            .correlate(None)
            .scalar_subquery()
        )

        stmt = insert(self.model.__table__).from_select(
            ["id", "recipient", "status", "timestamp", "user_id", "details"],
            select(
                literal(tracking_id, String),
                literal(recipient, String),
                literal(EmailStatus.sent.value, String),
                literal(now, DateTime(timezone=True)),
                literal(user_id, String),
                literal(details or {}, JSON),
            ).where(sends_in_window < quota),
        )

        result = db.connection().execute(stmt)
        db.commit()

        if result.rowcount != 1:
            logger.warning(
                f"Email quota exhausted for host {user_id} ({quota} per {window})"
            )
            return None
        return self.get(db, tracking_id)

    def release_send_slot(self, db: Session, *, tracking: EmailTracking) -> None:
        """Drop a reserved row whose send never went out."""
        db.delete(tracking)
        db.commit()

    def set_email_id(
        self, db: Session, *, tracking: EmailTracking, email_id: Optional[str]
    ) -> EmailTracking:
        tracking.email_id = email_id
        db.add(tracking)
        db.commit()
        db.refresh(tracking)
        return tracking

    def get_stats(self, db: Session, *, user_id: str) -> EmailStats:
        """Counts of the host's tracked emails, total and per delivery status."""
        rows = (
            db.query(self.model.status, func.count(self.model.id))
            .filter(self.model.user_id == user_id)
            .group_by(self.model.status)
            .all()
        )
        counts = {status: count for status, count in rows}
        return EmailStats(
            total=sum(counts.values()),
            delivered=counts.get(EmailStatus.delivered.value, 0),
            opened=counts.get(EmailStatus.opened.value, 0),
            clicked=counts.get(EmailStatus.clicked.value, 0),
            bounced=counts.get(EmailStatus.bounced.value, 0),
        )


email_tracking = CRUDEmailTracking(EmailTracking)
