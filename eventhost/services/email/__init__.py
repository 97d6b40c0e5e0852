# eventhost/services/email/__init__.py
from .config import EmailProviderConfig
from .dispatcher import get_email_stats, send_email, send_test_email
from .provider_factory import build_email_transport
from .provider_interface import EmailBatch, EmailTransport, SendReceipt

__all__ = [
    "EmailBatch",
    "EmailProviderConfig",
    "EmailTransport",
    "SendReceipt",
    "build_email_transport",
    "get_email_stats",
    "send_email",
    "send_test_email",
]
