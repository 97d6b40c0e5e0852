from .emailjs_provider import EmailJSTransport
from .sendgrid_provider import SendGridTransport
