# campusconnect/chats/services.py
import logging

from django.db import transaction
from django.utils import timezone

from campusconnect.common.exceptions import ServiceError
from campusconnect.common.realtime import chat_group, group_send
from campusconnect.notifications.models import Notification
from campusconnect.notifications.services import notify
from campusconnect.users.models import User
from .models import Chat, Message
from .serializers import MessageSerializer

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 5000
PREVIEW_LENGTH = 200


def get_or_create_chat(user1, user2):
    """
    Find the chat for an unordered pair of users, creating it if needed.
    Returns (chat, created). The unique pair constraint makes this idempotent.
    """
    if user1.pk == user2.pk:
        raise ServiceError("INVALID_CHAT", "cannot chat with yourself")

    a_id, b_id = Chat.normalize_pair(user1.pk, user2.pk)
    chat, created = Chat.objects.get_or_create(user_a_id=a_id, user_b_id=b_id)
    if created:
        logger.info("created chat %s for users %s/%s", chat.id, a_id, b_id)
    return chat, created


def get_chat_for_participant(chat_id, user) -> Chat:
    chat = Chat.objects.filter(id=chat_id).first()
    if not chat:
        raise ServiceError("CHAT_NOT_FOUND", "Chat not found", 404)
    if not chat.has_participant(user.pk):
        raise ServiceError("NOT_PARTICIPANT", "Not a chat participant", 403)
    return chat


def serialize_message(message: Message) -> dict:
    return dict(MessageSerializer(message).data)


def post_message(chat: Chat, sender, text) -> Message:
    """
    Persist a message, fan it out to the chat room and notify the other
    participant. Broadcast and notification are best-effort.
    """
    if text is not None and not isinstance(text, str):
        raise ServiceError("VALIDATION_ERROR", "text must be a string")
    text = (text or "").strip()
    if not text:
        raise ServiceError("VALIDATION_ERROR", "text is required")
    if len(text) > MAX_MESSAGE_LENGTH:
        raise ServiceError(
            "VALIDATION_ERROR", f"text must be at most {MAX_MESSAGE_LENGTH} characters"
        )
    if not chat.has_participant(sender.pk):
        raise ServiceError("NOT_PARTICIPANT", "Not a chat participant", 403)

    with transaction.atomic():
        message = Message.objects.create(chat=chat, sender=sender, text=text)
        last = {
            "last_message": text[:PREVIEW_LENGTH],
            "last_message_sender": sender,
            "last_message_at": message.created_at,
        }
        # a concurrent send may already have stored a newer message
        moved = Chat.objects.filter(
            pk=chat.pk, last_message_at__lte=message.created_at
        ).update(updated_at=timezone.now(), **last)
        if moved:
            for field, value in last.items():
                setattr(chat, field, value)

    payload = serialize_message(message)
    group_send(chat_group(chat.id), {"type": "chat.message", "message": payload})

    recipient = User.objects.filter(id=chat.partner_id(sender.pk)).first()
    if recipient is not None:
        notify(
            recipient,
            type=Notification.Type.MESSAGE,
            actor=sender,
            message=f"New message from {sender.name or sender.email}",
            meta={"chatId": chat.id, "messageId": message.id},
            ref=message,
        )
    return message
