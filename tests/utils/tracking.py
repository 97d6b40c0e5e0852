from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from eventhost.models.email_tracking import EmailTracking


def seed_sends(
    db: Session,
    user_id: str,
    count: int,
    *,
    age: timedelta = timedelta(hours=1),
    status: str = "sent",
) -> None:
    """Insert `count` tracking rows for the host, all `age` old."""
    timestamp = datetime.now(timezone.utc) - age
    db.add_all(
        [
            EmailTracking(
                email_id=f"seed_{i}",
                recipient=f"seed{i}@example.com",
                status=status,
                timestamp=timestamp,
                user_id=user_id,
                details={"subject": "Seed"},
            )
            for i in range(count)
        ]
    )
    db.commit()
