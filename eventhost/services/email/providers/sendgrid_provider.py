# eventhost/services/email/providers/sendgrid_provider.py
"""
SendGrid v3 Mail Send over HTTPS.

One request carries the whole batch; each recipient gets a separate
personalization so addresses are not disclosed to each other.
"""
import logging
from typing import Any, Dict, List

import httpx

from eventhost.core.exceptions import EmailTransportError
from ..config import EmailProviderConfig
from ..provider_interface import EmailBatch, EmailTransport, SendReceipt

logger = logging.getLogger(__name__)


class SendGridTransport(EmailTransport):

    @property
    def code(self) -> str:
        return "sendgrid"

    @property
    def name(self) -> str:
        return "SendGrid"

    @classmethod
    def missing_settings(cls, config: EmailProviderConfig) -> List[str]:
        missing = []
        if not config.sendgrid_api_key:
            missing.append("sendgrid_api_key")
        if not config.from_email:
            missing.append("sendgrid_from_email")
        return missing

    def build_payload(self, batch: EmailBatch) -> Dict[str, Any]:
        personalizations = []
        for recipient in batch.recipients:
            personalization: Dict[str, Any] = {"to": [{"email": recipient}]}
            if batch.template_id:
                personalization["dynamic_template_data"] = {
                    "subject": batch.subject,
                    **batch.template_params,
                }
            personalizations.append(personalization)

        payload: Dict[str, Any] = {
            "personalizations": personalizations,
            "from": {"email": batch.from_email or self.config.from_email},
            "subject": batch.subject,
        }

        if batch.template_id:
            payload["template_id"] = batch.template_id
        else:
            # text/plain has to precede text/html
            content = []
            if batch.text or not batch.html:
                content.append({"type": "text/plain", "value": batch.text or batch.message})
            if batch.html:
                content.append({"type": "text/html", "value": batch.html})
            payload["content"] = content
        return payload

    async def _send(self, client: httpx.AsyncClient, batch: EmailBatch) -> SendReceipt:
        try:
            response = await client.post(
                self.config.sendgrid_api_url,
                json=self.build_payload(batch),
                headers={"Authorization": f"Bearer {self.config.sendgrid_api_key}"},
            )
        except httpx.HTTPError as e:
            raise EmailTransportError(
                f"SendGrid request failed: {e}", provider=self.code
            ) from e

        if response.status_code != 202:
            logger.error(
                f"SendGrid rejected send to {len(batch.recipients)} recipient(s): "
                f"HTTP {response.status_code} {response.text}"
            )
            raise EmailTransportError(
                f"SendGrid rejected the request (HTTP {response.status_code})",
                provider=self.code,
                status_code=response.status_code,
            )

        message_id = response.headers.get("X-Message-Id")
        logger.info(
            f"SendGrid accepted {len(batch.recipients)} recipient(s), message id {message_id}"
        )
        return SendReceipt(
            provider=self.code, message_id=message_id, accepted=len(batch.recipients)
        )
