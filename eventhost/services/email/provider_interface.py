# eventhost/services/email/provider_interface.py
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from .config import EmailProviderConfig

DEFAULT_MESSAGE = "This is an automated message from the Events Application."


@dataclass
class EmailBatch:
    """One dispatch call, already validated and de-duplicated."""
    recipients: List[str]
    subject: str
    html: Optional[str] = None
    text: Optional[str] = None
    from_email: Optional[str] = None
    template_id: Optional[str] = None
    template_params: Dict[str, Any] = field(default_factory=dict)

    @property
    def message(self) -> str:
        return self.html or self.text or DEFAULT_MESSAGE


@dataclass
class SendReceipt:
    """Result of a successful batch send."""
    provider: str
    message_id: Optional[str]
    accepted: int


class EmailTransport(ABC):
    """
    Abstract interface for email providers.

    Implementations send the whole batch or raise EmailTransportError.
    They never retry.
    """

    def __init__(
        self,
        config: EmailProviderConfig,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self._client = client

    @property
    @abstractmethod
    def code(self) -> str:
        """Provider code stored in host settings, e.g. 'sendgrid'."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @classmethod
    @abstractmethod
    def missing_settings(cls, config: EmailProviderConfig) -> List[str]:
        """Names of the configuration values this provider needs but lacks."""
        pass

    @abstractmethod
    async def _send(self, client: httpx.AsyncClient, batch: EmailBatch) -> SendReceipt:
        pass

    async def send_batch(self, batch: EmailBatch) -> SendReceipt:
        """
        Send one batch. Uses the injected client when there is one,
        otherwise a short-lived client with the configured timeout.
        """
        if self._client is not None:
            return await self._send(self._client, batch)
        async with httpx.AsyncClient(timeout=self.config.timeout) as client:
            return await self._send(client, batch)
