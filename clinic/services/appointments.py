"""
Appointment lifecycle: booking, role-scoped listing and status changes.

Status changes are not checked against a transition graph; any
authorized caller may move an appointment to any status.  Confirming
or cancelling fans out an SMS and an e-mail to the patient through the
notifier; those deliveries run off the request path and their failures
are only logged.
"""
import logging
from typing import Optional

from clinic.exceptions import NotFoundError
from clinic.models import Appointment, User
from clinic.services.audit import log_action
from clinic.services.notifier import Notifier

logger = logging.getLogger(__name__)


def _with_parties():
    return Appointment.objects.select_related('patient', 'doctor')


def create_appointment(patient: User, *, doctor: User, appointment_date, appointment_time: str,
                       department: str, reason: str, notifier: Notifier) -> Appointment:
    appointment = Appointment.objects.create(
        patient=patient,
        doctor=doctor,
        appointment_date=appointment_date,
        appointment_time=appointment_time,
        department=department,
        reason=reason,
    )
    appointment = _with_parties().get(pk=appointment.pk)
    logger.info('Appointment %s requested by patient %s with doctor %s',
                appointment.pk, patient.pk, doctor.pk)
    try:
        notifier.appointment_requested(appointment)
    except Exception:
        logger.exception('Could not dispatch request notifications for appointment %s', appointment.pk)
    return appointment


def list_appointments(user: User):
    qs = _with_parties()
    if user.is_patient:
        qs = qs.filter(patient=user)
    elif user.is_doctor:
        qs = qs.filter(doctor=user)
    elif not user.is_admin:
        qs = qs.none()
    return qs.order_by('-appointment_date')


def list_all_appointments():
    return _with_parties().order_by('-appointment_date')


def update_status(appointment_id, status: str, notes: Optional[str] = None, *,
                  actor: Optional[User] = None, notifier: Notifier) -> Appointment:
    appointment = _with_parties().filter(pk=appointment_id).first()
    if appointment is None:
        raise NotFoundError('Appointment not found')

    previous = appointment.status
    appointment.status = status
    if notes:
        appointment.notes = notes
    appointment.save()
    log_action(user=actor, action='appointment_status', object_type='appointment', object_id=appointment.pk,
               detail={'from': previous, 'to': status})
    logger.info('Appointment %s status %s -> %s', appointment.pk, previous, status)

    try:
        if status == Appointment.STATUS_CONFIRMED:
            notifier.appointment_confirmed(appointment)
        elif status == Appointment.STATUS_CANCELLED:
            notifier.appointment_cancelled(appointment)
    except Exception:
        logger.exception('Could not dispatch %s notifications for appointment %s', status, appointment.pk)
    return appointment
