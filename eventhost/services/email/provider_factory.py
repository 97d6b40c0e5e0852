# eventhost/services/email/provider_factory.py
import logging
from typing import Dict, Optional, Type

import httpx

from eventhost.core.exceptions import EmailProviderNotConfigured
from .config import EmailProviderConfig
from .provider_interface import EmailTransport
from .providers.emailjs_provider import EmailJSTransport
from .providers.sendgrid_provider import SendGridTransport

logger = logging.getLogger(__name__)

# Provider code (as stored in host settings) -> transport implementation
TRANSPORT_REGISTRY: Dict[str, Type[EmailTransport]] = {
    "sendgrid": SendGridTransport,
    "emailjs": EmailJSTransport,
}


def build_email_transport(
    config: EmailProviderConfig, client: Optional[httpx.AsyncClient] = None
) -> EmailTransport:
    """
    Build the transport selected by config.provider.

    There is no fallback between providers: an unknown provider or one
    missing required values raises EmailProviderNotConfigured.
    """
    transport_cls = TRANSPORT_REGISTRY.get(config.provider)
    if transport_cls is None:
        raise EmailProviderNotConfigured(
            f"Unknown email provider '{config.provider}'"
        )

    missing = transport_cls.missing_settings(config)
    if missing:
        logger.warning(
            f"Email provider '{config.provider}' missing settings: {', '.join(missing)}"
        )
        raise EmailProviderNotConfigured(
            f"Email provider '{config.provider}' is not configured "
            f"(missing {', '.join(missing)}). Please configure it in settings."
        )

    return transport_cls(config, client=client)
