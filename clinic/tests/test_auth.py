import pytest
from django.core import mail

from clinic.models import AuditEvent, User
from clinic.services.accounts import DEACTIVATED_MESSAGE, PENDING_APPROVAL_MESSAGE

pytestmark = pytest.mark.django_db

PATIENT = {
    'name': 'Mary Major',
    'email': 'Mary@Example.com',
    'password': 'secret123',
    'phone': '9876543210',
}
DOCTOR = {
    'name': 'Allison Cameron',
    'email': 'cameron@example.com',
    'password': 'secret123',
    'phone': '9876543211',
    'role': 'doctor',
    'specialization': 'Immunology',
    'department': 'General Medicine',
    'experience': 6,
}


def login(api, email, password):
    return api.post('/api/auth/login', {'email': email, 'password': password}, format='json')


def test_patient_registration_returns_token(api):
    r = api.post('/api/auth/register', PATIENT, format='json')
    assert r.status_code == 201
    data = r.json()['data']
    assert data['email'] == 'mary@example.com'
    assert data['role'] == 'patient'
    assert data['token']

    user = User.objects.get(email='mary@example.com')
    assert user.is_approved
    assert user.check_password('secret123')
    assert [m.subject for m in mail.outbox] == ['Welcome to Healthcare System']


def test_doctor_registration_is_pending(api):
    r = api.post('/api/auth/register', DOCTOR, format='json')
    assert r.status_code == 201
    body = r.json()
    assert 'pending admin approval' in body['message']
    assert body['data']['isApproved'] is False
    assert 'token' not in body['data']

    doctor = User.objects.get(email='cameron@example.com')
    assert doctor.is_doctor and not doctor.is_approved
    assert doctor.experience == 6
    assert [m.subject for m in mail.outbox] == ['Registration Received - Pending Approval']


def test_registration_survives_mail_failure(api, notifier):
    def broken_mail(*args, **kwargs):
        raise ConnectionError('relay unreachable')

    notifier.email.send_email = broken_mail
    r = api.post('/api/auth/register', PATIENT, format='json')
    assert r.status_code == 201
    assert User.objects.filter(email='mary@example.com').exists()


def test_registration_survives_notifier_error(api, notifier, monkeypatch):
    def broken(user):
        raise RuntimeError('template missing')

    monkeypatch.setattr(notifier, 'patient_registered', broken)
    r = api.post('/api/auth/register', PATIENT, format='json')
    assert r.status_code == 201
    assert r.json()['data']['token']
    assert User.objects.filter(email='mary@example.com').exists()


def test_duplicate_email_is_rejected(api, patient):
    r = api.post('/api/auth/register', dict(PATIENT, email=patient.email.upper()), format='json')
    assert r.status_code == 400
    assert r.json()['message'] == 'email: User with this email already exists'


def test_admin_self_registration_is_refused(api):
    r = api.post('/api/auth/register', dict(PATIENT, role='admin'), format='json')
    assert r.status_code == 400
    assert not User.objects.filter(role=User.ROLE_ADMIN).exists()


def test_doctor_registration_requires_specialization(api):
    body = dict(DOCTOR)
    del body['specialization']
    r = api.post('/api/auth/register', body, format='json')
    assert r.status_code == 400
    assert r.json()['message'] == 'Specialization and department are required for doctors'


def test_short_password_is_rejected(api):
    r = api.post('/api/auth/register', dict(PATIENT, password='123'), format='json')
    assert r.status_code == 400
    assert 'password' in r.json()['errors']


def test_login_returns_token_and_summary(api, patient):
    r = login(api, 'JANE@example.com', 'patient123')
    assert r.status_code == 200
    data = r.json()['data']
    assert data['id'] == patient.id
    assert data['role'] == 'patient'
    assert data['token']
    assert AuditEvent.objects.filter(action='login', user=patient, detail__result='ok').exists()


def test_login_with_bad_password(api, patient):
    r = login(api, patient.email, 'wrong-password')
    assert r.status_code == 401
    assert r.json() == {'success': False, 'message': 'Invalid credentials'}


def test_login_with_unknown_email(api):
    r = login(api, 'ghost@example.com', 'whatever')
    assert r.status_code == 401
    assert r.json()['message'] == 'Invalid credentials'


def test_login_requires_both_fields(api):
    r = api.post('/api/auth/login', {'email': 'jane@example.com'}, format='json')
    assert r.status_code == 400


def test_unapproved_doctor_cannot_login_until_approved(api, admin_client, pending_doctor):
    r = login(api, pending_doctor.email, 'doctor123')
    assert r.status_code == 403
    assert r.json()['message'] == PENDING_APPROVAL_MESSAGE

    r = admin_client.put(f'/api/admin/doctors/{pending_doctor.id}/approve')
    assert r.status_code == 200

    r = login(api, pending_doctor.email, 'doctor123')
    assert r.status_code == 200
    assert r.json()['data']['isApproved'] is True


def test_unapproved_doctor_with_wrong_password_gets_401(api, pending_doctor):
    r = login(api, pending_doctor.email, 'not-it')
    assert r.status_code == 401


def test_deactivated_user_cannot_login(api, patient):
    patient.is_active = False
    patient.save()
    r = login(api, patient.email, 'patient123')
    assert r.status_code == 403
    assert r.json()['message'] == DEACTIVATED_MESSAGE


def test_profile_requires_token(api):
    r = api.get('/api/auth/profile')
    assert r.status_code == 401
    assert r.json()['success'] is False


def test_profile_returns_current_user(patient_client, patient):
    r = patient_client.get('/api/auth/profile')
    assert r.status_code == 200
    data = r.json()['data']
    assert data['email'] == patient.email
    assert data['isApproved'] is True
    assert 'password' not in data


def test_login_token_authenticates(api, patient):
    token = login(api, patient.email, 'patient123').json()['data']['token']
    api.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    assert api.get('/api/auth/profile').json()['data']['id'] == patient.id


def test_token_stops_working_when_doctor_approval_is_withdrawn(doctor_client, doctor):
    doctor.is_approved = False
    doctor.save()
    r = doctor_client.get('/api/auth/profile')
    assert r.status_code == 401


def test_garbage_token_is_rejected(api):
    api.credentials(HTTP_AUTHORIZATION='Bearer not-a-jwt')
    r = api.get('/api/auth/profile')
    assert r.status_code == 401
