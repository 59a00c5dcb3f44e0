# campusconnect/help_requests/services.py
import logging

from django.db import transaction
from django.utils import timezone

from campusconnect.chats.services import get_or_create_chat
from campusconnect.common.exceptions import ServiceError
from campusconnect.notifications.models import Notification
from campusconnect.notifications.services import notify
from campusconnect.users.models import User
from .models import HelpRequest

logger = logging.getLogger(__name__)

MAX_REQUEST_MESSAGE_LENGTH = 1000

ACCEPT = "accept"
DECLINE = "decline"


def _display_name(user) -> str:
    return user.name or user.email


def create_request(from_user, *, to_user_id, message="") -> HelpRequest:
    """A junior asks a mentor for help."""
    if from_user.role != User.Role.JUNIOR:
        raise ServiceError("ONLY_JUNIORS", "only juniors can send requests", 403)

    if not to_user_id:
        raise ServiceError("VALIDATION_ERROR", "toUserId is required")

    try:
        to_user_id = int(to_user_id)
    except (TypeError, ValueError):
        raise ServiceError("VALIDATION_ERROR", "toUserId must be an integer")

    message = str(message or "").strip()
    if len(message) > MAX_REQUEST_MESSAGE_LENGTH:
        raise ServiceError(
            "VALIDATION_ERROR",
            f"message must be at most {MAX_REQUEST_MESSAGE_LENGTH} characters",
        )

    to_user = User.objects.filter(id=to_user_id, is_active=True).first()
    if not to_user or not to_user.is_mentor:
        raise ServiceError("TARGET_NOT_MENTOR", "target not a senior")

    with transaction.atomic():
        # lock the mentor row so concurrent requests to them are serialized
        User.objects.select_for_update().filter(pk=to_user.pk).first()
        already_pending = (
            HelpRequest.objects.filter(
                from_user=from_user,
                to_user=to_user,
                status=HelpRequest.Status.PENDING,
            )
            .exists()
        )
        if already_pending:
            raise ServiceError(
                "REQUEST_ALREADY_PENDING",
                "a pending request to this mentor already exists",
                409,
            )
        help_request = HelpRequest.objects.create(
            from_user=from_user, to_user=to_user, message=message
        )

    logger.info(
        "help request %s: %s -> %s", help_request.id, from_user.id, to_user.id
    )
    notify(
        to_user,
        type=Notification.Type.REQUEST,
        actor=from_user,
        message=f"{_display_name(from_user)} sent you a help request",
        meta={"requestId": help_request.id},
        ref=help_request,
    )
    return help_request


@transaction.atomic
def _apply_response(user, request_id, action) -> HelpRequest:
    help_request = (
        HelpRequest.objects.select_for_update()
        .select_related("from_user", "to_user")
        .filter(id=request_id)
        .first()
    )
    if not help_request:
        raise ServiceError("REQUEST_NOT_FOUND", "request not found", 404)

    # only the mentor the request was sent to can respond
    if help_request.to_user_id != user.id:
        raise ServiceError("FORBIDDEN", "not allowed", 403)

    if not help_request.is_pending:
        raise ServiceError(
            "REQUEST_ALREADY_RESPONDED",
            f"request is already {help_request.status}",
            409,
        )

    help_request.responded_at = timezone.now()
    if action == ACCEPT:
        chat, _ = get_or_create_chat(help_request.from_user, help_request.to_user)
        help_request.chat = chat
        help_request.status = HelpRequest.Status.ACCEPTED
    else:
        help_request.status = HelpRequest.Status.DECLINED

    help_request.save(update_fields=["status", "chat", "responded_at", "updated_at"])
    return help_request


def respond_to_request(user, request_id, action) -> HelpRequest:
    """
    PENDING -> ACCEPTED (with a chat for the pair) or PENDING -> DECLINED.
    The row is locked for the transition so it happens at most once.
    """
    action = str(action or "").strip().lower()
    if action not in (ACCEPT, DECLINE):
        raise ServiceError("VALIDATION_ERROR", "action must be accept or decline")

    help_request = _apply_response(user, request_id, action)
    logger.info(
        "help request %s %s by %s", help_request.id, help_request.status, user.id
    )

    if help_request.status == HelpRequest.Status.ACCEPTED:
        notify(
            help_request.from_user,
            type=Notification.Type.REQUEST_ACCEPTED,
            actor=user,
            message=f"{_display_name(user)} accepted your request",
            meta={"requestId": help_request.id, "chatId": help_request.chat_id},
            ref=help_request,
        )
    else:
        notify(
            help_request.from_user,
            type=Notification.Type.REQUEST_DECLINED,
            actor=user,
            message=f"{_display_name(user)} declined your request",
            meta={"requestId": help_request.id},
            ref=help_request,
        )
    return help_request


def cancel_request(user, request_id) -> HelpRequest:
    """The junior withdraws a request that nobody has answered yet."""
    with transaction.atomic():
        help_request = (
            HelpRequest.objects.select_for_update()
            .select_related("from_user", "to_user")
            .filter(id=request_id)
            .first()
        )
        if not help_request:
            raise ServiceError("REQUEST_NOT_FOUND", "request not found", 404)
        if help_request.from_user_id != user.id:
            raise ServiceError("FORBIDDEN", "not allowed", 403)
        if not help_request.is_pending:
            raise ServiceError(
                "REQUEST_ALREADY_RESPONDED",
                f"request is already {help_request.status}",
                409,
            )

        help_request.status = HelpRequest.Status.CANCELLED
        help_request.save(update_fields=["status", "updated_at"])

    notify(
        help_request.to_user,
        type=Notification.Type.REQUEST_CANCELLED,
        actor=user,
        message=f"{_display_name(user)} cancelled their request",
        meta={"requestId": help_request.id},
        ref=help_request,
    )
    return help_request


def list_requests(user, *, status=None):
    incoming = HelpRequest.objects.filter(to_user=user)
    outgoing = HelpRequest.objects.filter(from_user=user)
    if status:
        incoming = incoming.filter(status=status)
        outgoing = outgoing.filter(status=status)

    related = ("from_user", "to_user")
    return (
        incoming.select_related(*related).order_by("-created_at", "-id"),
        outgoing.select_related(*related).order_by("-created_at", "-id"),
    )
