# campusconnect/notifications/services.py
import logging
from typing import Optional

from django.db import transaction

from campusconnect.common.realtime import group_send, user_group
from .models import Notification
from .serializers import NotificationSerializer

logger = logging.getLogger(__name__)


def notify(
    user,
    *,
    type: str,
    message: str = "",
    actor=None,
    meta: Optional[dict] = None,
    ref=None,
) -> Optional[Notification]:
    """
    Persist a notification and push it to the recipient's user room.

    Best-effort: failures are logged and None is returned, the caller's
    operation is never failed because of a notification.
    """
    try:
        # savepoint keeps an enclosing transaction usable if this fails
        with transaction.atomic():
            notification = Notification.objects.create(
                user=user,
                actor=actor,
                type=type,
                message=message or "",
                meta=meta or {},
                ref_model=ref.__class__.__name__ if ref is not None else "",
                ref_id=getattr(ref, "pk", None),
            )
    except Exception:
        logger.exception("could not store %s notification for user %s", type, getattr(user, "pk", user))
        return None

    payload = NotificationSerializer(notification).data
    group_send(
        user_group(notification.user_id),
        {"type": "notification.push", "notification": dict(payload)},
    )
    return notification


def unread_count(user) -> int:
    return Notification.objects.filter(user=user, read=False).count()


def mark_read(user, notification_id: int) -> Optional[Notification]:
    notification = Notification.objects.filter(id=notification_id, user=user).first()
    if notification and not notification.read:
        notification.read = True
        notification.save(update_fields=["read", "updated_at"])
    return notification


def mark_all_read(user) -> int:
    return Notification.objects.filter(user=user, read=False).update(read=True)
