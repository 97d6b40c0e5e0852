# eventhost/api/v1/endpoints/emails.py
import asyncio

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from eventhost.api import deps
from eventhost.api.v1.endpoints.events import get_owned_event
from eventhost.core.email import render_bulk_email
from eventhost.crud import crud_registration
from eventhost.db.session import get_db
from eventhost.schemas.email import (
    BulkEmailRequest,
    EmailRequest,
    EmailSendResult,
    EmailStats,
)
from eventhost.schemas.token import TokenPayload
from eventhost.services.email import EmailProviderConfig, get_email_stats, send_email

router = APIRouter(tags=["Emails"])

# Dispatcher error codes -> HTTP status of the endpoint response
ERROR_STATUS = {
    "invalid_recipient": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "quota_exceeded": status.HTTP_429_TOO_MANY_REQUESTS,
    "provider_not_configured": status.HTTP_400_BAD_REQUEST,
    "provider_error": status.HTTP_502_BAD_GATEWAY,
}


def raise_for_send_result(result: EmailSendResult) -> EmailSendResult:
    if result.success:
        return result
    raise HTTPException(
        status_code=ERROR_STATUS.get(result.error_code, status.HTTP_502_BAD_GATEWAY),
        detail=result.error,
    )


@router.post("/emails", response_model=EmailSendResult)
async def send_host_email(
    email_in: EmailRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
    config: EmailProviderConfig = Depends(deps.get_email_provider_config),
):
    """Send an email on behalf of the current host."""
    result = await send_email(
        db, request=email_in, user_id=current_user.sub, config=config
    )
    return raise_for_send_result(result)


@router.post("/events/{event_id}/emails", response_model=EmailSendResult)
async def send_bulk_event_email(
    event_id: str,
    email_in: BulkEmailRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
    config: EmailProviderConfig = Depends(deps.get_email_provider_config),
):
    """
    Email every registrant of the event with one of the event templates.
    The default `update` template wraps the host's subject and body.
    """
    event = await asyncio.to_thread(get_owned_event, db, event_id, current_user.sub)
    registrations = await asyncio.to_thread(
        crud_registration.registration.get_multi_by_event, db, event_id=event.id
    )
    if not registrations:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="This event has no registrations to email",
        )

    rendered = render_bulk_email(event, email_in)
    result = await send_email(
        db,
        request=rendered.to_request([r.email for r in registrations]),
        user_id=current_user.sub,
        config=config,
    )
    return raise_for_send_result(result)


@router.get("/emails/stats", response_model=EmailStats)
def read_email_stats(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    return get_email_stats(db, user_id=current_user.sub)
