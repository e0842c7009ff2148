import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone

from clinic.models import Record, User

pytestmark = pytest.mark.django_db


def make_record(patient, doctor, diagnosis='Seasonal flu'):
    return Record.objects.create(patient=patient, doctor=doctor, diagnosis=diagnosis, visit_date=timezone.now())


def pdf(name='scan.pdf', content=b'%PDF-1.4 test document'):
    return SimpleUploadedFile(name, content, content_type='application/pdf')


def test_doctor_creates_record(doctor_client, doctor, patient):
    r = doctor_client.post('/api/users/records', {
        'patient': patient.id,
        'diagnosis': 'Bronchitis',
        'prescription': 'Rest and fluids',
        'testResults': 'Chest X-ray clear',
    }, format='json')
    assert r.status_code == 201
    data = r.json()['data']
    assert data['patient']['id'] == patient.id
    assert data['doctor']['id'] == doctor.id
    assert data['testResults'] == 'Chest X-ray clear'
    assert data['documents'] == []
    assert Record.objects.filter(patient=patient, doctor=doctor, diagnosis='Bronchitis').exists()


def test_record_requires_existing_patient(doctor_client, doctor):
    r = doctor_client.post('/api/users/records', {'patient': doctor.id, 'diagnosis': 'x'}, format='json')
    assert r.status_code == 404
    assert r.json()['message'] == 'Patient not found'


def test_record_requires_diagnosis(doctor_client, patient):
    r = doctor_client.post('/api/users/records', {'patient': patient.id}, format='json')
    assert r.status_code == 400
    assert r.json()['message'] == 'diagnosis: Patient ID and diagnosis are required'


def test_patient_cannot_create_record(patient_client, patient):
    r = patient_client.post('/api/users/records', {'patient': patient.id, 'diagnosis': 'x'}, format='json')
    assert r.status_code == 403


def test_patient_sees_only_own_records(patient_client, patient, other_patient, doctor):
    mine = make_record(patient, doctor)
    make_record(other_patient, doctor)
    r = patient_client.get('/api/users/records')
    assert [rec['id'] for rec in r.json()['data']] == [mine.id]


def test_doctor_reads_patient_history(doctor_client, patient, other_patient, doctor):
    first = make_record(patient, doctor, 'Flu')
    second = make_record(patient, doctor, 'Follow-up')
    make_record(other_patient, doctor)

    r = doctor_client.get(f'/api/users/records/{patient.id}')
    assert r.status_code == 200
    assert [rec['id'] for rec in r.json()['data']] == [second.id, first.id]
    assert doctor_client.get('/api/users/records').json()['count'] == 3


def test_patient_cannot_read_other_history(patient_client, other_patient, doctor):
    make_record(other_patient, doctor)
    assert patient_client.get(f'/api/users/records/{other_patient.id}').status_code == 403


def test_author_uploads_document(doctor_client, patient, doctor):
    record = make_record(patient, doctor)
    r = doctor_client.post(f'/api/users/records/{record.id}/upload', {'document': pdf()}, format='multipart')
    assert r.status_code == 200
    docs = r.json()['data']['documents']
    assert len(docs) == 1
    assert docs[0]['filename'] == 'scan.pdf'
    assert docs[0]['contentType'] == 'application/pdf'
    assert docs[0]['path'].startswith('records/')
    assert record.documents.count() == 1


def test_only_author_may_upload(make_client, patient, doctor):
    record = make_record(patient, doctor)
    other = User.objects.create_user(
        'foreman@example.com', 'doctor123', name='Eric Foreman', role=User.ROLE_DOCTOR,
        specialization='Neurology', department='Neurology', is_approved=True,
    )
    r = make_client(other).post(f'/api/users/records/{record.id}/upload', {'document': pdf()}, format='multipart')
    assert r.status_code == 403
    assert r.json()['message'] == 'Not authorized to update this record'


def test_upload_rejects_unsupported_type(doctor_client, patient, doctor):
    record = make_record(patient, doctor)
    bad = SimpleUploadedFile('notes.txt', b'plain text', content_type='text/plain')
    r = doctor_client.post(f'/api/users/records/{record.id}/upload', {'document': bad}, format='multipart')
    assert r.status_code == 400
    assert record.documents.count() == 0


def test_upload_rejects_large_files(doctor_client, patient, doctor, settings):
    settings.UPLOAD_MAX_MB = 0
    record = make_record(patient, doctor)
    r = doctor_client.post(f'/api/users/records/{record.id}/upload', {'document': pdf()}, format='multipart')
    assert r.status_code == 400


def test_upload_requires_file(doctor_client, patient, doctor):
    record = make_record(patient, doctor)
    r = doctor_client.post(f'/api/users/records/{record.id}/upload', {}, format='multipart')
    assert r.status_code == 400
    assert r.json()['message'] == 'document: Please upload a file'


def test_upload_to_missing_record(doctor_client):
    r = doctor_client.post('/api/users/records/999/upload', {'document': pdf()}, format='multipart')
    assert r.status_code == 404
