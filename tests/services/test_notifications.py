from unittest.mock import AsyncMock, patch

import pytest

from eventhost.crud import crud_user
from eventhost.schemas.email import EmailSendResult
from eventhost.schemas.user import UserUpdate
from eventhost.services.notifications import notify_host_of_registration
from tests.utils.event import create_random_event, create_registration


@pytest.mark.asyncio
async def test_skips_host_without_profile(db):
    event = create_random_event(db, host_id="host_n")
    registration = create_registration(db, event)

    with patch(
        "eventhost.services.notifications.send_email", new_callable=AsyncMock
    ) as mock_send:
        result = await notify_host_of_registration(
            db, event=event, registration=registration
        )

    assert result is None
    mock_send.assert_not_called()


@pytest.mark.asyncio
async def test_notifies_host_address(db):
    crud_user.user.upsert(db, id="host_n", obj_in=UserUpdate(email="owner@example.com"))
    event = create_random_event(db, host_id="host_n", title="Launch Party")
    registration = create_registration(db, event)

    with patch(
        "eventhost.services.notifications.send_email",
        new_callable=AsyncMock,
        return_value=EmailSendResult(success=True, recipients=1),
    ) as mock_send:
        result = await notify_host_of_registration(
            db, event=event, registration=registration
        )

    assert result.success is True
    kwargs = mock_send.await_args.kwargs
    assert kwargs["user_id"] == "host_n"
    assert kwargs["request"].recipients == ["owner@example.com"]
    assert kwargs["request"].subject == "New Registration for Launch Party"


@pytest.mark.asyncio
async def test_unexpected_error_is_swallowed(db):
    crud_user.user.upsert(db, id="host_n", obj_in=UserUpdate(email="owner@example.com"))
    event = create_random_event(db, host_id="host_n")
    registration = create_registration(db, event)

    with patch(
        "eventhost.services.notifications.send_email",
        new_callable=AsyncMock,
        side_effect=RuntimeError("boom"),
    ):
        result = await notify_host_of_registration(
            db, event=event, registration=registration
        )

    assert result is None
