import pytest

from clinic.models import Message

pytestmark = pytest.mark.django_db


def send(client, receiver, content):
    return client.post('/api/messages', {'receiver': receiver.id, 'content': content}, format='json')


def test_send_message_strips_markup(patient_client, patient, doctor):
    r = send(patient_client, doctor, '<b>Hello</b> doctor')
    assert r.status_code == 201
    data = r.json()['data']
    assert data['content'] == 'Hello doctor'
    assert data['sender']['id'] == patient.id
    assert data['receiver']['id'] == doctor.id
    assert data['isRead'] is False


def test_markup_only_message_is_rejected(patient_client, doctor):
    r = send(patient_client, doctor, '<b></b>')
    assert r.status_code == 400
    assert r.json()['message'] == 'Message cannot be empty'
    assert Message.objects.count() == 0


def test_unknown_receiver(patient_client):
    r = patient_client.post('/api/messages', {'receiver': 4242, 'content': 'hi'}, format='json')
    assert r.status_code == 400
    assert r.json()['message'] == 'receiver: Receiver not found'


def test_thread_is_oldest_first(make_client, patient, doctor, other_patient):
    p, d = make_client(patient), make_client(doctor)
    send(p, doctor, 'first')
    send(d, patient, 'second')
    send(make_client(other_patient), doctor, 'unrelated')
    send(p, doctor, 'third')

    r = p.get(f'/api/messages/{doctor.id}')
    assert r.status_code == 200
    assert [m['content'] for m in r.json()['data']] == ['first', 'second', 'third']


def test_conversations_show_latest_message_per_counterpart(make_client, patient, doctor, other_patient):
    d = make_client(doctor)
    send(make_client(patient), doctor, 'from jane')
    send(make_client(other_patient), doctor, 'from john')
    send(d, patient, 'reply to jane')

    r = d.get('/api/messages/conversations')
    body = r.json()
    assert body['count'] == 2
    assert [(c['user']['id'], c['lastMessage']['content']) for c in body['data']] == [
        (patient.id, 'reply to jane'),
        (other_patient.id, 'from john'),
    ]


def test_mark_read(make_client, patient, doctor):
    p = make_client(patient)
    send(p, doctor, 'one')
    send(p, doctor, 'two')
    send(make_client(doctor), patient, 'not mine to mark')

    r = make_client(doctor).put(f'/api/messages/{patient.id}/read')
    assert r.status_code == 200
    assert r.json()['count'] == 2
    assert Message.objects.filter(receiver=doctor, is_read=False).count() == 0
    assert Message.objects.filter(receiver=patient, is_read=False).count() == 1


def test_messages_require_authentication(api, doctor):
    assert send(api, doctor, 'hi').status_code == 401
    assert api.get('/api/messages/conversations').status_code == 401
