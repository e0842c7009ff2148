import logging
from typing import Optional

from django.conf import settings
from django.utils import timezone

from clinic.exceptions import AuthorizationError, NotFoundError, ValidationError
from clinic.models import Record, RecordDocument, User

logger = logging.getLogger(__name__)


def _with_parties():
    return Record.objects.select_related('patient', 'doctor').prefetch_related('documents')


def create_record(doctor: User, *, patient_id: int, diagnosis: str, prescription: str = '',
                  test_results: str = '', notes: str = '') -> Record:
    patient = User.objects.filter(id=patient_id, role=User.ROLE_PATIENT).first()
    if patient is None:
        raise NotFoundError('Patient not found')
    record = Record.objects.create(
        patient=patient,
        doctor=doctor,
        diagnosis=diagnosis,
        prescription=prescription or '',
        test_results=test_results or '',
        notes=notes or '',
        visit_date=timezone.now(),
    )
    logger.info('Record %s created for patient %s by doctor %s', record.pk, patient.pk, doctor.pk)
    return _with_parties().get(pk=record.pk)


def list_records(user: User, patient_id: Optional[int] = None):
    qs = _with_parties()
    if user.is_patient:
        qs = qs.filter(patient=user)
    elif patient_id:
        qs = qs.filter(patient_id=patient_id)
    return qs.order_by('-created_at', '-id')


def attach_document(doctor: User, record_id, upload) -> Record:
    record = Record.objects.filter(pk=record_id).first()
    if record is None:
        raise NotFoundError('Record not found')
    if record.doctor_id != doctor.id:
        raise AuthorizationError('Not authorized to update this record')

    size_mb = (upload.size or 0) / (1024 * 1024)
    if size_mb > settings.UPLOAD_MAX_MB:
        raise ValidationError(f'File too large (max {settings.UPLOAD_MAX_MB} MB)')
    ctype = getattr(upload, 'content_type', '') or ''
    if not any(ctype.startswith(prefix) for prefix in settings.ALLOWED_UPLOAD_TYPES):
        raise ValidationError('Unsupported file type')

    RecordDocument.objects.create(
        record=record, filename=upload.name, file=upload, content_type=ctype, size=upload.size or 0,
    )
    logger.info('Document %s attached to record %s', upload.name, record.pk)
    return _with_parties().get(pk=record.pk)
