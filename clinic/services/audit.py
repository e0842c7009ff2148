import logging
from typing import Optional, Any, Dict
from django.contrib.auth import get_user_model
from clinic.models import AuditEvent

User = get_user_model()
logger = logging.getLogger(__name__)


def log_action(*, user: Optional[User], action: str, object_type: Optional[str]=None, object_id: Optional[int]=None, detail: Optional[Dict[str, Any]]=None) -> Optional[AuditEvent]:
    """Record an audit event; failures are logged and never interrupt the caller."""
    try:
        return AuditEvent.objects.create(
            user=user if isinstance(user, User) and user.pk else None,
            action=action,
            object_type=object_type, object_id=object_id,
            detail=detail or {},
        )
    except Exception:
        logger.exception('Could not record audit event %s', action)
        return None
