import logging
import re
from typing import Optional

from django.conf import settings
from twilio.base.exceptions import TwilioException
from twilio.rest import Client

logger = logging.getLogger(__name__)

COUNTRY_CODE = '91'


class PhoneNumberError(ValueError):
    pass


def format_phone_number(phone: str) -> str:
    """Normalize a phone number to Indian E.164 (``+91`` and ten digits).

    ``"09876543210"`` and ``"9876543210"`` become ``"+919876543210"``;
    a number already in that format is returned unchanged.
    """
    cleaned = re.sub(r'\D', '', phone or '')
    if cleaned.startswith('0'):
        cleaned = cleaned[1:]
    if len(cleaned) == 10:
        cleaned = COUNTRY_CODE + cleaned
    formatted = '+' + cleaned
    if not re.fullmatch(rf'\+{COUNTRY_CODE}\d{{10}}', formatted):
        raise PhoneNumberError(f'Invalid Indian phone number: {phone!r}')
    return formatted


class SmsSender:
    """Thin wrapper around the Twilio messages API.

    ``send_sms`` never raises: on a bad number, missing configuration
    or a gateway error it logs and returns ``None``.
    """

    def __init__(self, client: Optional[Client] = None, *, from_number: Optional[str] = None):
        self.from_number = from_number if from_number is not None else settings.TWILIO_PHONE_NUMBER
        self.client = client

    @classmethod
    def from_settings(cls) -> 'SmsSender':
        client = None
        if settings.TWILIO_ACCOUNT_SID and settings.TWILIO_AUTH_TOKEN:
            client = Client(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN)
        return cls(client)

    def send_sms(self, to: str, body: str):
        try:
            formatted = format_phone_number(to)
        except PhoneNumberError as e:
            logger.warning('SMS not sent: %s', e)
            return None
        if self.client is None or not self.from_number:
            logger.warning('SMS not sent to %s: Twilio configuration is incomplete', formatted)
            return None
        try:
            result = self.client.messages.create(body=body, from_=self.from_number, to=formatted)
        except TwilioException as e:
            logger.error('SMS to %s rejected by Twilio: %s', formatted, e)
            return None
        except Exception as e:
            logger.error('SMS to %s failed: %s', formatted, e)
            return None
        if getattr(result, 'error_code', None) or getattr(result, 'status', None) == 'failed':
            logger.error('SMS to %s failed: %s %s', formatted, getattr(result, 'error_code', None),
                         getattr(result, 'error_message', None))
            return None
        logger.info('SMS %s to %s: %s', getattr(result, 'sid', '?'), formatted, getattr(result, 'status', '?'))
        return result
