# eventhost/services/email/dispatcher.py
"""
Single entry point for every email the service sends on behalf of a host.

A call goes through recipient validation, the per-host quota, and one
transport. Failures never raise out of send_email; they come back as an
EmailSendResult with an error code.
"""
import asyncio
import logging
from datetime import timedelta
from typing import Optional

import httpx
from sqlalchemy.orm import Session

from eventhost.crud import crud_email_tracking
from eventhost.core.config import settings
from eventhost.core.exceptions import (
    AppError,
    EmailProviderNotConfigured,
    EmailTransportError,
    InvalidRecipientError,
    QuotaExceededError,
    ValidationError,
)
from eventhost.schemas.email import EmailRequest, EmailSendResult, EmailStats
from eventhost.utils.validators import (
    dedupe_preserving_order,
    find_invalid_emails,
    is_valid_email,
)
from .config import EmailProviderConfig
from .provider_factory import build_email_transport
from .provider_interface import EmailBatch

logger = logging.getLogger(__name__)

TEST_EMAIL_SUBJECT = "Test Email"
TEST_EMAIL_MESSAGE = "This is a test email to verify your email configuration."


def _error_code(error: AppError) -> str:
    if isinstance(error, QuotaExceededError):
        return "quota_exceeded"
    if isinstance(error, EmailProviderNotConfigured):
        return "provider_not_configured"
    if isinstance(error, EmailTransportError):
        return "provider_error"
    if isinstance(error, ValidationError):
        return "invalid_recipient"
    return "provider_error"


def _quota_window() -> timedelta:
    return timedelta(hours=settings.EMAIL_QUOTA_WINDOW_HOURS)


async def send_email(
    db: Session,
    *,
    request: EmailRequest,
    user_id: str,
    config: EmailProviderConfig,
    client: Optional[httpx.AsyncClient] = None,
) -> EmailSendResult:
    """
    Validate, reserve quota, send, and track one email call.

    The tracking row is written before the send as the quota reservation and
    deleted again if the send fails, so only successful calls count.
    Database steps run in a worker thread so the event loop is not blocked.
    """
    recipients = dedupe_preserving_order(request.recipients)
    tracking = None

    try:
        if not recipients:
            raise ValidationError("At least one recipient is required", field="to")
        invalid = find_invalid_emails(recipients)
        if invalid:
            raise InvalidRecipientError(invalid)

        tracking = await asyncio.to_thread(
            crud_email_tracking.email_tracking.reserve_send_slot,
            db,
            user_id=user_id,
            recipient=",".join(recipients),
            quota=settings.EMAIL_QUOTA_MAX,
            window=_quota_window(),
            details={"subject": request.subject},
        )
        if tracking is None:
            raise QuotaExceededError()

        transport = build_email_transport(config, client=client)
        receipt = await transport.send_batch(
            EmailBatch(
                recipients=recipients,
                subject=request.subject,
                html=request.html,
                text=request.text,
                from_email=request.from_email,
                template_id=request.template_id,
                template_params=request.template_params,
            )
        )
    except AppError as e:
        if tracking is not None:
            await asyncio.to_thread(
                crud_email_tracking.email_tracking.release_send_slot,
                db,
                tracking=tracking,
            )
        logger.error(f"Email send for host {user_id} failed: {e.message}")
        return EmailSendResult(
            success=False,
            error=e.message,
            error_code=_error_code(e),
            recipients=len(recipients),
        )
    except Exception as e:
        if tracking is not None:
            await asyncio.to_thread(
                crud_email_tracking.email_tracking.release_send_slot,
                db,
                tracking=tracking,
            )
        logger.error(
            f"Unexpected error sending email for host {user_id}: {e}", exc_info=True
        )
        return EmailSendResult(
            success=False,
            error="An unexpected error occurred while sending emails",
            error_code="provider_error",
            recipients=len(recipients),
        )

    await asyncio.to_thread(
        crud_email_tracking.email_tracking.set_email_id,
        db,
        tracking=tracking,
        email_id=receipt.message_id,
    )
    logger.info(
        f"Host {user_id} sent '{request.subject}' to {len(recipients)} recipient(s) "
        f"via {receipt.provider}"
    )
    return EmailSendResult(
        success=True, tracking_id=tracking.id, recipients=len(recipients)
    )


def get_email_stats(db: Session, *, user_id: str) -> EmailStats:
    return crud_email_tracking.email_tracking.get_stats(db, user_id=user_id)


async def send_test_email(
    config: EmailProviderConfig,
    to_email: str,
    client: Optional[httpx.AsyncClient] = None,
) -> EmailSendResult:
    """
    Send a configuration check message. Not tracked and not counted
    against the quota.
    """
    try:
        if not is_valid_email(to_email):
            raise InvalidRecipientError([to_email])
        transport = build_email_transport(config, client=client)
        await transport.send_batch(
            EmailBatch(
                recipients=[to_email],
                subject=TEST_EMAIL_SUBJECT,
                text=TEST_EMAIL_MESSAGE,
            )
        )
    except AppError as e:
        logger.warning(f"Email configuration test failed: {e.message}")
        return EmailSendResult(
            success=False, error=e.message, error_code=_error_code(e), recipients=1
        )
    except Exception as e:
        logger.error(f"Unexpected error testing email configuration: {e}", exc_info=True)
        return EmailSendResult(
            success=False,
            error="Failed to test email configuration",
            error_code="provider_error",
            recipients=1,
        )
    return EmailSendResult(success=True, recipients=1)
