"""
Notification fan-out for account and appointment events.

A :class:`Notifier` renders e-mail/SMS bodies and hands each delivery
to a :class:`NotificationDispatcher`.  The dispatcher runs jobs on a
thread pool (or inline when ``NOTIFICATIONS_ASYNC`` is off) and logs
every failure instead of raising it, so a broken mail relay or SMS
gateway can never fail the request that triggered the notification.

One notifier is built per process by ``ClinicConfig.ready()``; views
obtain it with :func:`get_notifier`.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

from django.conf import settings
from django.db import close_old_connections
from django.template.loader import render_to_string
from django.utils import timezone

from clinic.services.email import EmailSender
from clinic.services.sms import SmsSender

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    def __init__(self, *, run_async: bool = True, max_workers: int = 4):
        self.run_async = run_async
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='notify') if run_async else None

    def submit(self, label: str, fn: Callable[..., Any], *args, **kwargs) -> Future:
        """Schedule ``fn``; the returned future resolves to ``(ok, result_or_error)``."""
        job = lambda: self._run(label, fn, *args, **kwargs)  # noqa: E731
        if self._executor is not None:
            return self._executor.submit(job)
        future: Future = Future()
        future.set_result(job())
        return future

    def _run(self, label, fn, *args, **kwargs):
        try:
            result = fn(*args, **kwargs)
        except Exception as e:
            logger.error('Notification %s failed: %s', label, e)
            return False, e
        finally:
            if self._executor is not None:
                close_old_connections()
        if result is None:
            logger.warning('Notification %s was not delivered', label)
            return False, None
        return True, result

    def shutdown(self, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)


def failure_of(future: Future) -> Optional[str]:
    """Return the error text of a finished, failed job without blocking."""
    if not future.done():
        return None
    ok, outcome = future.result()
    if ok:
        return None
    return str(outcome) if outcome is not None else 'not delivered'


def _render(template: str, **context) -> str:
    context.setdefault('year', timezone.now().year)
    context.setdefault('frontend_url', settings.FRONTEND_URL)
    return render_to_string(f'emails/{template}.html', context)


class Notifier:
    """High level notifications; every method returns the submitted futures."""

    def __init__(self, email: EmailSender, sms: SmsSender, dispatcher: NotificationDispatcher):
        self.email = email
        self.sms = sms
        self.dispatcher = dispatcher

    def send_email(self, to: str, subject: str, html: str) -> Future:
        return self.dispatcher.submit(f'email:{subject}', self.email.send_email, to, subject, html)

    def send_sms(self, to: str, body: str) -> Future:
        return self.dispatcher.submit('sms', self.sms.send_sms, to, body)

    # ------------------------------------------------------------------
    # Appointments
    # ------------------------------------------------------------------
    def appointment_requested(self, appointment) -> list[Future]:
        patient, doctor = appointment.patient, appointment.doctor
        futures = []
        if patient.phone:
            futures.append(self.send_sms(
                patient.phone,
                f"Appointment request received. Date: {appointment.appointment_date}, "
                f"Time: {appointment.appointment_time}. Awaiting doctor confirmation.",
            ))
        futures.append(self.send_email(
            patient.email,
            'Appointment Request Submitted',
            _render('appointment_requested', patient=patient, doctor=doctor, appointment=appointment),
        ))
        return futures

    def appointment_confirmed(self, appointment) -> list[Future]:
        patient, doctor = appointment.patient, appointment.doctor
        futures = []
        if not patient.phone:
            logger.warning('Patient phone number is missing for appointment %s', appointment.pk)
        else:
            futures.append(self.send_sms(
                patient.phone,
                f"Your appointment with Dr. {doctor.name} on {appointment.appointment_date} "
                f"at {appointment.appointment_time} is CONFIRMED.",
            ))
        futures.append(self.send_email(
            patient.email,
            'Appointment Confirmed',
            _render('appointment_confirmed', patient=patient, doctor=doctor, appointment=appointment),
        ))
        return futures

    def appointment_cancelled(self, appointment) -> list[Future]:
        patient, doctor = appointment.patient, appointment.doctor
        futures = []
        if not patient.phone:
            logger.warning('Patient phone number is missing for appointment %s', appointment.pk)
        else:
            futures.append(self.send_sms(
                patient.phone,
                f"Your appointment with Dr. {doctor.name} has been cancelled. "
                f"Please contact us for rescheduling.",
            ))
        futures.append(self.send_email(
            patient.email,
            'Appointment Cancelled',
            _render('appointment_cancelled', patient=patient, doctor=doctor, appointment=appointment),
        ))
        return futures

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    def doctor_registered(self, doctor) -> Future:
        return self.send_email(
            doctor.email,
            'Registration Received - Pending Approval',
            _render('doctor_registered', doctor=doctor),
        )

    def patient_registered(self, user) -> Future:
        return self.send_email(
            user.email,
            'Welcome to Healthcare System',
            _render('patient_registered', user=user),
        )

    def doctor_approved(self, doctor) -> Future:
        return self.send_email(
            doctor.email,
            'Account Approved - Welcome to Healthcare System',
            _render('doctor_approved', doctor=doctor),
        )

    def doctor_rejected(self, *, name: str, email: str, reason: str) -> Future:
        return self.send_email(
            email,
            'Application Status Update',
            _render('doctor_rejected', name=name, reason=reason),
        )


_notifier: Optional[Notifier] = None


def build_notifier() -> Notifier:
    return Notifier(
        email=EmailSender(),
        sms=SmsSender.from_settings(),
        dispatcher=NotificationDispatcher(
            run_async=settings.NOTIFICATIONS_ASYNC,
            max_workers=settings.NOTIFICATIONS_WORKERS,
        ),
    )


def set_notifier(notifier: Optional[Notifier]) -> Optional[Notifier]:
    """Install ``notifier`` process-wide and return the previous one."""
    global _notifier
    previous, _notifier = _notifier, notifier
    return previous


def get_notifier() -> Notifier:
    if _notifier is None:
        set_notifier(build_notifier())
    return _notifier  # type: ignore[return-value]
