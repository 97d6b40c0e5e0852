# eventhost/services/email/providers/emailjs_provider.py
"""
EmailJS REST API. One template send per recipient, all issued at once.
"""
import asyncio
import logging
from typing import Any, Dict, List

import httpx

from eventhost.core.exceptions import EmailTransportError
from ..config import EmailProviderConfig
from ..provider_interface import EmailBatch, EmailTransport, SendReceipt

logger = logging.getLogger(__name__)


class EmailJSTransport(EmailTransport):

    @property
    def code(self) -> str:
        return "emailjs"

    @property
    def name(self) -> str:
        return "EmailJS"

    @classmethod
    def missing_settings(cls, config: EmailProviderConfig) -> List[str]:
        required = {
            "emailjs_service_id": config.emailjs_service_id,
            "emailjs_template_id": config.emailjs_template_id,
            "emailjs_public_key": config.emailjs_public_key,
        }
        return [key for key, value in required.items() if not value]

    def template_params(self, batch: EmailBatch, recipient: str) -> Dict[str, Any]:
        """Default params for a recipient; the caller's params take precedence."""
        return {
            "to_email": recipient,
            "name": recipient.split("@")[0],
            "subject": batch.subject,
            "message": batch.message,
            **batch.template_params,
        }

    def build_payload(self, batch: EmailBatch, recipient: str) -> Dict[str, Any]:
        payload = {
            "service_id": self.config.emailjs_service_id,
            "template_id": batch.template_id or self.config.emailjs_template_id,
            "user_id": self.config.emailjs_public_key,
            "template_params": self.template_params(batch, recipient),
        }
        if self.config.emailjs_private_key:
            payload["accessToken"] = self.config.emailjs_private_key
        return payload

    async def _send_one(self, client: httpx.AsyncClient, batch: EmailBatch, recipient: str) -> str:
        try:
            response = await client.post(
                self.config.emailjs_api_url, json=self.build_payload(batch, recipient)
            )
        except httpx.HTTPError as e:
            raise EmailTransportError(
                f"EmailJS request for {recipient} failed: {e}", provider=self.code
            ) from e

        if response.status_code != 200:
            raise EmailTransportError(
                f"Failed to send email to {recipient}: {response.text or response.status_code}",
                provider=self.code,
                status_code=response.status_code,
            )
        return response.text

    async def _send(self, client: httpx.AsyncClient, batch: EmailBatch) -> SendReceipt:
        # Sends already accepted stay sent when a sibling fails.
        results = await asyncio.gather(
            *(self._send_one(client, batch, recipient) for recipient in batch.recipients),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            logger.error(
                f"EmailJS: {len(failures)} of {len(results)} send(s) failed: {failures[0]}"
            )
            raise failures[0]

        return SendReceipt(
            provider=self.code,
            message_id=results[0] if results else None,
            accepted=len(results),
        )
