# tests/services/test_email_providers.py

import json

import httpx
import pytest

from eventhost.core.config import settings
from eventhost.core.exceptions import EmailProviderNotConfigured, EmailTransportError
from eventhost.crud import crud_host_settings
from eventhost.models.email_tracking import EmailTracking
from eventhost.schemas.email import EmailRequest
from eventhost.schemas.settings import EmailSettingsUpdate
from eventhost.services.email import (
    EmailBatch,
    EmailProviderConfig,
    build_email_transport,
    send_email,
)
from eventhost.services.email.providers import EmailJSTransport, SendGridTransport

SENDGRID = EmailProviderConfig(
    provider="sendgrid", sendgrid_api_key="SG.secret", from_email="host@example.com"
)
EMAILJS = EmailProviderConfig(
    provider="emailjs",
    emailjs_service_id="service_1",
    emailjs_template_id="template_1",
    emailjs_public_key="public_1",
)


class Recorder:
    """httpx.MockTransport handler that records requests."""

    def __init__(self, status_code=None, fail_for=None):
        self.requests = []
        self.status_code = status_code
        self.fail_for = fail_for

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = json.loads(request.content)
        if str(request.url) == settings.SENDGRID_API_URL:
            return httpx.Response(
                self.status_code or 202, headers={"X-Message-Id": "sg-msg-1"}
            )
        recipient = body["template_params"]["to_email"]
        if recipient == self.fail_for:
            return httpx.Response(400, text="The recipients address is empty")
        return httpx.Response(self.status_code or 200, text="OK")

    @property
    def bodies(self):
        return [json.loads(r.content) for r in self.requests]


def mock_client(recorder):
    return httpx.AsyncClient(transport=httpx.MockTransport(recorder))


@pytest.mark.asyncio
async def test_sendgrid_sends_one_request_with_personalization_per_recipient():
    recorder = Recorder()
    async with mock_client(recorder) as client:
        transport = build_email_transport(SENDGRID, client=client)
        receipt = await transport.send_batch(
            EmailBatch(
                recipients=["a@example.com", "b@example.com"],
                subject="Hello",
                html="<p>Hi</p>",
            )
        )

    assert isinstance(transport, SendGridTransport)
    assert receipt.message_id == "sg-msg-1"
    assert receipt.accepted == 2
    assert len(recorder.requests) == 1
    assert recorder.requests[0].headers["Authorization"] == "Bearer SG.secret"

    body = recorder.bodies[0]
    assert body["personalizations"] == [
        {"to": [{"email": "a@example.com"}]},
        {"to": [{"email": "b@example.com"}]},
    ]
    assert body["from"] == {"email": "host@example.com"}
    assert body["subject"] == "Hello"
    assert body["content"] == [{"type": "text/html", "value": "<p>Hi</p>"}]


@pytest.mark.asyncio
async def test_sendgrid_falls_back_to_default_text():
    recorder = Recorder()
    async with mock_client(recorder) as client:
        await SendGridTransport(SENDGRID, client=client).send_batch(
            EmailBatch(recipients=["a@example.com"], subject="Hello")
        )

    assert recorder.bodies[0]["content"] == [
        {
            "type": "text/plain",
            "value": "This is an automated message from the Events Application.",
        }
    ]


@pytest.mark.asyncio
async def test_sendgrid_non_202_is_a_transport_error():
    recorder = Recorder(status_code=401)
    async with mock_client(recorder) as client:
        with pytest.raises(EmailTransportError) as exc_info:
            await SendGridTransport(SENDGRID, client=client).send_batch(
                EmailBatch(recipients=["a@example.com"], subject="Hello", text="x")
            )

    assert exc_info.value.provider == "sendgrid"
    assert exc_info.value.provider_status == 401


@pytest.mark.asyncio
async def test_emailjs_sends_one_request_per_recipient():
    recorder = Recorder()
    async with mock_client(recorder) as client:
        transport = build_email_transport(EMAILJS, client=client)
        receipt = await transport.send_batch(
            EmailBatch(
                recipients=["ada@example.com", "grace@example.com"],
                subject="Hello",
                text="Plain body",
                template_params={"event_title": "PyData"},
            )
        )

    assert isinstance(transport, EmailJSTransport)
    assert receipt.accepted == 2
    assert receipt.message_id == "OK"

    bodies = sorted(recorder.bodies, key=lambda b: b["template_params"]["to_email"])
    assert [b["template_params"]["to_email"] for b in bodies] == [
        "ada@example.com",
        "grace@example.com",
    ]
    first = bodies[0]
    assert first["service_id"] == "service_1"
    assert first["template_id"] == "template_1"
    assert first["user_id"] == "public_1"
    assert "accessToken" not in first
    assert first["template_params"] == {
        "to_email": "ada@example.com",
        "name": "ada",
        "subject": "Hello",
        "message": "Plain body",
        "event_title": "PyData",
    }


@pytest.mark.asyncio
async def test_emailjs_caller_params_and_template_override_defaults():
    config = EmailProviderConfig(
        provider="emailjs",
        emailjs_service_id="service_1",
        emailjs_template_id="template_1",
        emailjs_public_key="public_1",
        emailjs_private_key="private_1",
    )
    recorder = Recorder()
    async with mock_client(recorder) as client:
        await EmailJSTransport(config, client=client).send_batch(
            EmailBatch(
                recipients=["ada@example.com"],
                subject="Hello",
                html="<b>html wins</b>",
                text="text loses",
                template_id="template_custom",
                template_params={"name": "Ada Lovelace"},
            )
        )

    body = recorder.bodies[0]
    assert body["template_id"] == "template_custom"
    assert body["accessToken"] == "private_1"
    assert body["template_params"]["name"] == "Ada Lovelace"
    assert body["template_params"]["message"] == "<b>html wins</b>"


@pytest.mark.asyncio
async def test_emailjs_one_failed_recipient_fails_the_batch():
    recorder = Recorder(fail_for="grace@example.com")
    async with mock_client(recorder) as client:
        with pytest.raises(EmailTransportError) as exc_info:
            await EmailJSTransport(EMAILJS, client=client).send_batch(
                EmailBatch(
                    recipients=["ada@example.com", "grace@example.com"], subject="Hi"
                )
            )

    # The other send was still issued
    assert len(recorder.requests) == 2
    assert "grace@example.com" in exc_info.value.message
    assert exc_info.value.provider_status == 400


def test_unknown_provider_is_not_configured():
    with pytest.raises(EmailProviderNotConfigured):
        build_email_transport(EmailProviderConfig(provider="mailgun"))


def test_sendgrid_without_key_is_not_configured():
    config = EmailProviderConfig(provider="sendgrid", from_email="host@example.com")
    with pytest.raises(EmailProviderNotConfigured) as exc_info:
        build_email_transport(config)
    assert "sendgrid_api_key" in exc_info.value.message


def test_config_without_host_settings_uses_environment():
    config = EmailProviderConfig.from_host_settings(None)
    assert config.provider == settings.DEFAULT_EMAIL_PROVIDER
    assert config.from_email == settings.DEFAULT_FROM_EMAIL


@pytest.mark.asyncio
async def test_switching_stored_provider_routes_sends_through_emailjs(db):
    host_id = "host_switch"
    crud_host_settings.host_settings.upsert(
        db,
        host_id=host_id,
        obj_in=EmailSettingsUpdate(
            email_provider="sendgrid",
            sendgrid_api_key="SG.secret",
            sendgrid_from_email="host@example.com",
            emailjs_service_id="service_1",
            emailjs_template_id="template_1",
            emailjs_public_key="public_1",
        ),
    )
    request = EmailRequest(to="ada@example.com", subject="Hello", text="Hi")
    recorder = Recorder()

    async with mock_client(recorder) as client:
        row = crud_host_settings.host_settings.get_by_host(db, host_id=host_id)
        first = await send_email(
            db,
            request=request,
            user_id=host_id,
            config=EmailProviderConfig.from_host_settings(row),
            client=client,
        )

        crud_host_settings.host_settings.upsert(
            db, host_id=host_id, obj_in=EmailSettingsUpdate(email_provider="emailjs")
        )
        row = crud_host_settings.host_settings.get_by_host(db, host_id=host_id)
        second = await send_email(
            db,
            request=request,
            user_id=host_id,
            config=EmailProviderConfig.from_host_settings(row),
            client=client,
        )

    assert first.success and second.success
    assert [str(r.url) for r in recorder.requests] == [
        settings.SENDGRID_API_URL,
        settings.EMAILJS_API_URL,
    ]
    tracked = db.query(EmailTracking).filter(EmailTracking.user_id == host_id)
    assert sorted(t.email_id for t in tracked) == ["OK", "sg-msg-1"]
