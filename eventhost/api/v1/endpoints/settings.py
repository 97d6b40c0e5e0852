# eventhost/api/v1/endpoints/settings.py
import asyncio

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from eventhost.api import deps
from eventhost.core.config import settings as app_settings
from eventhost.core.exceptions import ValidationError
from eventhost.crud import crud_host_settings, crud_user
from eventhost.db.session import get_db
from eventhost.schemas.email import EmailConfigCheckRequest, EmailSendResult
from eventhost.schemas.settings import EmailProvider, EmailSettingsPublic, EmailSettingsUpdate
from eventhost.schemas.token import TokenPayload
from eventhost.services.email import EmailProviderConfig, send_test_email

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("/email", response_model=EmailSettingsPublic)
def get_email_settings(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Stored provider settings with secrets masked."""
    row = crud_host_settings.host_settings.get_by_host(db, host_id=current_user.sub)
    if row is None:
        return EmailSettingsPublic(
            email_provider=EmailProvider(app_settings.DEFAULT_EMAIL_PROVIDER),
            configured=False,
        )
    return EmailSettingsPublic.from_row(row)


@router.put("/email", response_model=EmailSettingsPublic)
def update_email_settings(
    settings_in: EmailSettingsUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """
    Store the host's provider choice and credentials. Every send after this
    goes through the selected provider.
    """
    row = crud_host_settings.host_settings.upsert(
        db, host_id=current_user.sub, obj_in=settings_in
    )
    return EmailSettingsPublic.from_row(row)


@router.post("/email/test", response_model=EmailSendResult)
async def test_email_settings(
    check_in: EmailConfigCheckRequest,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
    config: EmailProviderConfig = Depends(deps.get_email_provider_config),
):
    """
    Sends a test message through the configured provider, to the given
    address or the host's own. Not counted against the send quota.
    """
    to_email = check_in.to_email or current_user.email
    if not to_email:
        to_email = await asyncio.to_thread(
            crud_user.user.get_email, db, id=current_user.sub
        )
    if not to_email:
        raise ValidationError(
            "No address to send the test email to", field="to_email"
        )
    return await send_test_email(config, to_email)
