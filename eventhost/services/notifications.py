# eventhost/services/notifications.py
"""
Host-facing notifications sent on behalf of the host's own email provider.
"""
import asyncio
import logging
from typing import Optional

from sqlalchemy.orm import Session

from eventhost.core.email import host_registration_email
from eventhost.crud import crud_host_settings, crud_user
from eventhost.models.event import Event
from eventhost.models.registration import Registration
from eventhost.schemas.email import EmailSendResult
from eventhost.services.email import EmailProviderConfig, send_email

logger = logging.getLogger(__name__)


def provider_config_for_host(db: Session, host_id: str) -> EmailProviderConfig:
    row = crud_host_settings.host_settings.get_by_host(db, host_id=host_id)
    return EmailProviderConfig.from_host_settings(row)


async def notify_host_of_registration(
    db: Session, *, event: Event, registration: Registration
) -> Optional[EmailSendResult]:
    """
    Tell the host about a new registration. Best effort: a failure is
    logged and never reaches the registrant.
    """
    try:
        host_email = await asyncio.to_thread(
            crud_user.user.get_email, db, id=event.host_id
        )
        if not host_email:
            logger.info(
                f"Host {event.host_id} has no profile email; skipping registration notice"
            )
            return None

        config = await asyncio.to_thread(provider_config_for_host, db, event.host_id)
        rendered = host_registration_email(event, registration)
        result = await send_email(
            db,
            request=rendered.to_request(host_email),
            user_id=event.host_id,
            config=config,
        )
    except Exception as e:
        logger.error(
            f"Registration notice for event {event.id} failed: {e}", exc_info=True
        )
        return None

    if not result.success:
        logger.warning(
            f"Registration notice for event {event.id} not sent: {result.error}"
        )
    return result
