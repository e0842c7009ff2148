import logging
from typing import Optional

from django.db import transaction
from django.utils import timezone
from rest_framework_simplejwt.tokens import AccessToken

from clinic.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from clinic.models import User
from clinic.services.audit import log_action
from clinic.services.notifier import Notifier

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_REASON = 'Your application did not meet our requirements'
PENDING_APPROVAL_MESSAGE = (
    'Your account is pending admin approval. You will receive an email once your account is approved.'
)
DEACTIVATED_MESSAGE = 'Your account has been deactivated. Please contact support.'


def issue_token(user: User) -> str:
    return str(AccessToken.for_user(user))


def register_user(data: dict, *, notifier: Notifier) -> tuple[User, Optional[str]]:
    """Create an account from validated registration data.

    Doctors are created unapproved and get no token; everyone else is
    approved immediately and receives one.
    """
    role = data.get('role') or User.ROLE_PATIENT
    fields = {
        'name': data['name'],
        'phone': data['phone'],
        'role': role,
        'date_of_birth': data.get('dateOfBirth'),
        'gender': data.get('gender') or '',
        'address': data.get('address') or '',
    }
    if role == User.ROLE_DOCTOR:
        fields.update(
            specialization=data['specialization'],
            department=data['department'],
            experience=data.get('experience'),
            is_approved=False,
        )
    user = User.objects.create_user(data['email'], data['password'], **fields)
    logger.info('Registered %s %s', role, user.email)

    try:
        if user.is_doctor:
            notifier.doctor_registered(user)
        else:
            notifier.patient_registered(user)
    except Exception:
        logger.exception('Could not dispatch registration notification for %s', user.email)

    if user.is_doctor:
        return user, None
    return user, issue_token(user)


def authenticate_user(email: str, password: str, *, ip: Optional[str] = None) -> User:
    """Check credentials, then approval and activity, in that order."""
    user = User.objects.filter(email=email.lower()).first()
    if user is None:
        # Run the hasher anyway so unknown e-mails take as long as bad passwords.
        User().set_password(password)
        _login_failed(email, ip, 'unknown email')
        raise AuthenticationError('Invalid credentials')
    if not user.check_password(password):
        _login_failed(email, ip, 'bad password', user=user)
        raise AuthenticationError('Invalid credentials')
    if user.is_doctor and not user.is_approved:
        _login_failed(email, ip, 'pending approval', user=user)
        raise AuthorizationError(PENDING_APPROVAL_MESSAGE)
    if not user.is_active:
        _login_failed(email, ip, 'inactive', user=user)
        raise AuthorizationError(DEACTIVATED_MESSAGE)
    log_action(user=user, action='login', object_type='user', object_id=user.id,
               detail={'result': 'ok', 'ip': ip})
    return user


def _login_failed(email, ip, why, user=None):
    logger.info('Login failed for %s: %s', email, why)
    log_action(user=user, action='login', object_type='user', object_id=getattr(user, 'id', None),
               detail={'result': 'fail', 'reason': why, 'email': email, 'ip': ip})


def get_doctor(doctor_id) -> User:
    doctor = User.objects.filter(id=doctor_id).first()
    if doctor is None:
        raise NotFoundError('Doctor not found')
    if not doctor.is_doctor:
        raise ValidationError('User is not a doctor')
    return doctor


def approve_doctor(doctor_id, admin: User, *, notifier: Notifier):
    """Approve a pending doctor; returns the doctor and the e-mail future."""
    doctor = get_doctor(doctor_id)
    if doctor.is_approved:
        raise ValidationError('Doctor is already approved')

    doctor.is_approved = True
    doctor.approved_by = admin
    doctor.approved_at = timezone.now()
    doctor.save(update_fields=['is_approved', 'approved_by', 'approved_at', 'updated_at'])
    log_action(user=admin, action='doctor_approve', object_type='user', object_id=doctor.id,
               detail={'email': doctor.email})
    logger.info('Doctor %s approved by %s, sending email notification', doctor.email, admin.email)

    return doctor, notifier.doctor_approved(doctor)


def reject_doctor(doctor_id, admin: User, reason: Optional[str] = None, *, notifier: Notifier):
    """Reject a pending doctor application.

    The account is deleted outright, so the reason survives only in the
    rejection e-mail and the audit trail.  Appointments, records and
    messages that reference the doctor are kept with the reference
    cleared.
    """
    doctor = get_doctor(doctor_id)
    if doctor.is_approved:
        raise ValidationError('Only pending applications can be rejected')
    reason = (reason or '').strip() or DEFAULT_REJECTION_REASON
    name, email, doctor_pk = doctor.name, doctor.email, doctor.pk

    with transaction.atomic():
        doctor.rejection_reason = reason
        doctor.save(update_fields=['rejection_reason', 'updated_at'])
        log_action(user=admin, action='doctor_reject', object_type='user', object_id=doctor_pk,
                   detail={'email': email, 'name': name, 'reason': reason})
        doctor.delete()
    logger.warning('Doctor application %s rejected and account deleted', email)

    return notifier.doctor_rejected(name=name, email=email, reason=reason)
