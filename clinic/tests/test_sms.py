import pytest
from twilio.base.exceptions import TwilioException

from clinic.services.sms import PhoneNumberError, SmsSender, format_phone_number


@pytest.mark.parametrize('raw', ['09876543210', '9876543210', '+919876543210', '+91 98765-43210'])
def test_format_phone_number(raw):
    assert format_phone_number(raw) == '+919876543210'


def test_ten_digit_number_starting_with_91_gets_country_code():
    assert format_phone_number('9198765432') == '+919198765432'


@pytest.mark.parametrize('raw', ['', '12345', '+1 415 555 2671', '+92 300 1234567'])
def test_format_phone_number_rejects(raw):
    with pytest.raises(PhoneNumberError):
        format_phone_number(raw)


def test_send_sms_uses_normalized_number(twilio):
    sender = SmsSender(twilio, from_number='+15005550006')
    result = sender.send_sms('09876543210', 'hello')
    assert result.sid == 'SM1'
    assert twilio.messages.sent == [{'body': 'hello', 'from_': '+15005550006', 'to': '+919876543210'}]


def test_send_sms_returns_none_for_invalid_number(twilio):
    sender = SmsSender(twilio, from_number='+15005550006')
    assert sender.send_sms('12345', 'hello') is None
    assert twilio.messages.sent == []


def test_send_sms_returns_none_without_configuration():
    assert SmsSender(None, from_number='').send_sms('9876543210', 'hello') is None


def test_send_sms_swallows_gateway_errors(twilio):
    sender = SmsSender(twilio, from_number='+15005550006')
    twilio.messages.error = TwilioException('unverified number')
    assert sender.send_sms('9876543210', 'hello') is None
    twilio.messages.error = RuntimeError('socket closed')
    assert sender.send_sms('9876543210', 'hello') is None


def test_send_sms_treats_failed_status_as_failure():
    class FailedMessages:
        def create(self, **kwargs):
            return type('Msg', (), {'sid': 'SM9', 'status': 'failed', 'error_code': 21610, 'error_message': 'blocked'})()

    client = type('Client', (), {'messages': FailedMessages()})()
    assert SmsSender(client, from_number='+15005550006').send_sms('9876543210', 'hello') is None
