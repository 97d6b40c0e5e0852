"""
Pre-event reminder emails for attendees who opted in at registration.

Runs on an interval via APScheduler. Each reminder goes out through the
event host's own email provider and counts against the host's send quota.
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Dict, Optional

from sqlalchemy.orm import Session

from eventhost.core.config import settings
from eventhost.core.email import reminder_email
from eventhost.crud.crud_registration import registration as crud_registration
from eventhost.db.session import SessionLocal
from eventhost.services.email import EmailProviderConfig, send_email
from eventhost.services.notifications import provider_config_for_host

logger = logging.getLogger(__name__)


async def process_due_reminders(db: Session, *, now: Optional[datetime] = None) -> int:
    """
    Send reminders for events starting within REMINDER_LEAD_HOURS.

    A registration is stamped only after its reminder was sent, so a failed
    send is picked up again on the next run.

    Returns:
        Number of reminders sent
    """
    pending = await asyncio.to_thread(
        crud_registration.get_pending_reminders,
        db,
        lead=timedelta(hours=settings.REMINDER_LEAD_HOURS),
        now=now,
    )
    if not pending:
        return 0

    logger.info(f"Found {len(pending)} pending pre-event reminder(s)")
    configs: Dict[str, EmailProviderConfig] = {}
    sent = 0

    for registration in pending:
        event = registration.event
        if event.host_id not in configs:
            configs[event.host_id] = await asyncio.to_thread(
                provider_config_for_host, db, event.host_id
            )

        rendered = reminder_email(event)
        result = await send_email(
            db,
            request=rendered.to_request(registration.email),
            user_id=event.host_id,
            config=configs[event.host_id],
        )
        if not result.success:
            logger.warning(
                f"Reminder for registration {registration.id} not sent: {result.error}"
            )
            continue

        await asyncio.to_thread(
            crud_registration.mark_reminder_sent, db, db_obj=registration
        )
        sent += 1

    logger.info(f"Sent {sent} of {len(pending)} pre-event reminder(s)")
    return sent


def send_due_reminders():
    """
    Scheduler entry point. Runs in an APScheduler worker thread with its
    own database session and event loop.
    """
    db = SessionLocal()
    try:
        asyncio.run(process_due_reminders(db))
    except Exception as e:
        logger.error(f"Error sending pre-event reminders: {e}", exc_info=True)
    finally:
        db.close()
