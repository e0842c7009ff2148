import logging
from typing import Optional

from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection
from django.utils.html import strip_tags

from clinic.exceptions import TransportError

logger = logging.getLogger(__name__)


class EmailSender:
    """Sends HTML mail through the configured Django mail backend."""

    def __init__(self, *, from_address: Optional[str] = None, backend: Optional[str] = None):
        self.from_address = from_address or settings.DEFAULT_FROM_EMAIL
        self.backend = backend

    def is_configured(self) -> bool:
        if self.backend or not settings.EMAIL_BACKEND.endswith('smtp.EmailBackend'):
            return True
        return bool(settings.EMAIL_HOST_USER and settings.EMAIL_HOST_PASSWORD)

    def send_email(self, to_address: str, subject: str, message_html: str) -> dict:
        if not to_address:
            raise TransportError('email', 'missing destination address')
        if not self.is_configured():
            raise TransportError('email', 'Email configuration is missing. Check EMAIL_USER and EMAIL_PASS.')

        message = EmailMultiAlternatives(
            subject=subject,
            body=strip_tags(message_html),
            from_email=self.from_address,
            to=[to_address],
            connection=get_connection(self.backend) if self.backend else None,
        )
        message.attach_alternative(message_html, 'text/html')
        try:
            sent = message.send()
        except Exception as e:
            logger.error('Email to %s failed: %s', to_address, e)
            raise TransportError('email', str(e)) from e
        if not sent:
            raise TransportError('email', 'mail backend accepted no messages')
        logger.info('Email "%s" sent to %s', subject, to_address)
        return {'success': True, 'to': to_address}
