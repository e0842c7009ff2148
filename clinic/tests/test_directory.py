import pytest
from django.core.management import call_command

from clinic.models import User

pytestmark = pytest.mark.django_db


def test_doctor_directory_lists_approved_doctors(patient_client, doctor, pending_doctor):
    neuro = User.objects.create_user(
        'chase@example.com', 'doctor123', name='Robert Chase', role=User.ROLE_DOCTOR,
        specialization='Neurosurgery', department='Neurology', is_approved=True,
    )
    r = patient_client.get('/api/users/doctors')
    assert r.status_code == 200
    assert {d['id'] for d in r.json()['data']} == {doctor.id, neuro.id}

    r = patient_client.get('/api/users/doctors', {'department': 'Neurology'})
    assert [d['id'] for d in r.json()['data']] == [neuro.id]


def test_patient_directory_is_for_staff(patient_client, doctor_client, patient, other_patient):
    assert patient_client.get('/api/users/patients').status_code == 403
    r = doctor_client.get('/api/users/patients')
    assert r.status_code == 200
    assert r.json()['count'] == 2


def test_user_stats_is_admin_only(doctor_client):
    assert doctor_client.get('/api/users/stats').status_code == 403


def test_health(api):
    r = api.get('/api/health')
    assert r.status_code == 200
    assert r.json()['success'] is True
    assert r.json()['db'] is True
    assert 'X-Process-Time' in r


def test_unexpected_error_envelope(admin_client, monkeypatch):
    def explode():
        raise RuntimeError('stats backend exploded')

    monkeypatch.setattr('clinic.views.approvals.dashboard_stats', explode)
    r = admin_client.get('/api/admin/stats')
    assert r.status_code == 500
    assert r.json() == {'success': False, 'message': 'Server error'}


def test_unexpected_error_detail_in_debug(admin_client, monkeypatch, settings):
    def explode():
        raise RuntimeError('stats backend exploded')

    settings.DEBUG = True
    monkeypatch.setattr('clinic.views.approvals.dashboard_stats', explode)
    r = admin_client.get('/api/admin/stats')
    assert r.status_code == 500
    assert r.json()['error'] == 'stats backend exploded'


def test_seed_users_is_idempotent():
    call_command('seed_users')
    call_command('seed_users', admin_password='changed-later')

    admin = User.objects.get(email='admin@healthcare.com')
    assert admin.role == User.ROLE_ADMIN
    assert admin.is_superuser and admin.is_approved
    assert admin.check_password('Admin@123')
    assert User.objects.get(email='patient@healthcare.com').role == User.ROLE_PATIENT
    assert User.objects.count() == 2


def test_seeded_admin_can_login(api):
    call_command('seed_users', admin_password='s3cret-admin')
    r = api.post('/api/auth/login', {'email': 'admin@healthcare.com', 'password': 's3cret-admin'}, format='json')
    assert r.status_code == 200
    assert r.json()['data']['role'] == 'admin'
