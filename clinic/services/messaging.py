from django.db.models import Q
import bleach

from clinic.exceptions import ValidationError
from clinic.models import Message, User


def _with_parties():
    return Message.objects.select_related('sender', 'receiver')


def send_message(sender: User, receiver: User, content: str) -> Message:
    content = bleach.clean((content or '').strip(), tags=[], strip=True)
    if not content:
        raise ValidationError('Message cannot be empty')
    msg = Message.objects.create(sender=sender, receiver=receiver, content=content)
    return _with_parties().get(pk=msg.pk)


def thread_with(user: User, other_id):
    """All messages between ``user`` and ``other_id``, oldest first."""
    return _with_parties().filter(
        Q(sender=user, receiver_id=other_id) | Q(sender_id=other_id, receiver=user)
    ).order_by('created_at', 'id')


def conversations(user: User) -> list[dict]:
    """Latest message per counterpart, most recent conversation first."""
    latest: dict[int, dict] = {}
    msgs = _with_parties().filter(Q(sender=user) | Q(receiver=user)).order_by('-created_at', '-id')
    for msg in msgs:
        other = msg.receiver if msg.sender_id == user.id else msg.sender
        # Counterpart account was deleted.
        if other is None:
            continue
        if other.id not in latest:
            latest[other.id] = {'user': other, 'lastMessage': msg}
    return list(latest.values())


def mark_read(user: User, other_id) -> int:
    return Message.objects.filter(receiver=user, sender_id=other_id, is_read=False).update(is_read=True)
