from types import SimpleNamespace

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from clinic.models import User
from clinic.services.accounts import issue_token
from clinic.services.email import EmailSender
from clinic.services.notifier import NotificationDispatcher, Notifier, set_notifier
from clinic.services.sms import SmsSender


class FakeMessages:
    """Stands in for ``twilio.rest.Client().messages``."""

    def __init__(self):
        self.sent = []
        self.error = None

    def create(self, body, from_, to):
        if self.error is not None:
            raise self.error
        self.sent.append({'body': body, 'from_': from_, 'to': to})
        return SimpleNamespace(sid=f'SM{len(self.sent)}', status='queued', error_code=None)


class FakeTwilioClient:
    def __init__(self):
        self.messages = FakeMessages()


@pytest.fixture(autouse=True)
def _clear_throttle_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def twilio():
    return FakeTwilioClient()


@pytest.fixture(autouse=True)
def notifier(twilio):
    n = Notifier(
        email=EmailSender(),
        sms=SmsSender(twilio, from_number='+15005550006'),
        dispatcher=NotificationDispatcher(run_async=False),
    )
    previous = set_notifier(n)
    yield n
    set_notifier(previous)


@pytest.fixture(autouse=True)
def _media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / 'uploads'


@pytest.fixture
def admin_user(db):
    return User.objects.create_superuser('admin@healthcare.com', 'Admin@123', name='Admin User', phone='9000000000')


@pytest.fixture
def doctor(db):
    return User.objects.create_user(
        'house@example.com', 'doctor123', name='Gregory House', phone='9000000001',
        role=User.ROLE_DOCTOR, specialization='Diagnostics', department='General Medicine',
        is_approved=True,
    )


@pytest.fixture
def pending_doctor(db):
    return User.objects.create_user(
        'wilson@example.com', 'doctor123', name='James Wilson', phone='9000000002',
        role=User.ROLE_DOCTOR, specialization='Oncology', department='General Medicine',
    )


@pytest.fixture
def patient(db):
    return User.objects.create_user('jane@example.com', 'patient123', name='Jane Roe', phone='09876543210')


@pytest.fixture
def other_patient(db):
    return User.objects.create_user('john@example.com', 'patient123', name='John Doe', phone='9876500000')


def client_for(user):
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f'Bearer {issue_token(user)}')
    return c


@pytest.fixture
def api():
    return APIClient()


@pytest.fixture
def make_client():
    return client_for


@pytest.fixture
def admin_client(admin_user):
    return client_for(admin_user)


@pytest.fixture
def doctor_client(doctor):
    return client_for(doctor)


@pytest.fixture
def patient_client(patient):
    return client_for(patient)
