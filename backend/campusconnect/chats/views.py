# campusconnect/chats/views.py
from django.db.models import Q
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from campusconnect.common.responses import fail, ok
from campusconnect.users.models import User
from campusconnect.users.serializers import UserPublicSerializer
from .models import Chat
from .serializers import ChatSerializer, MessageSerializer
from .services import get_chat_for_participant, get_or_create_chat, post_message


def _partner_payload(request, chat: Chat, partners=None):
    partner_id = chat.partner_id(request.user.id)
    if partners is not None:
        partner = partners.get(partner_id)
    else:
        partner = User.objects.filter(id=partner_id).first()
    if not partner:
        return None
    return UserPublicSerializer(partner, context={"request": request}).data


class ChatListView(APIView):
    permission_classes = [IsAuthenticated]

    # GET /api/chats
    def get(self, request):
        uid = request.user.id
        chats = list(
            Chat.objects.filter(Q(user_a_id=uid) | Q(user_b_id=uid)).order_by(
                "-last_message_at", "-id"
            )
        )

        partner_ids = {c.partner_id(uid) for c in chats}
        partners = {u.id: u for u in User.objects.filter(id__in=partner_ids)}

        items = []
        for c in chats:
            last = None
            if c.last_message:
                last = {
                    "text": c.last_message,
                    "senderId": c.last_message_sender_id,
                    "createdAt": c.last_message_at.isoformat(),
                }
            items.append(
                {
                    "id": c.id,
                    "partner": _partner_payload(request, c, partners),
                    "lastMessage": last,
                    "updatedAt": (c.last_message_at or c.updated_at).isoformat(),
                }
            )

        return ok({"chats": items})


class ChatCreateView(APIView):
    """
    POST /api/chats/create
    body: { "fromUser": 1, "toUser": 2 }
    Returns the existing chat for the pair or a new one.
    """

    permission_classes = [IsAuthenticated]

    def post(self, request):
        try:
            from_id = int(request.data.get("fromUser"))
            to_id = int(request.data.get("toUser"))
        except (TypeError, ValueError):
            return fail("VALIDATION_ERROR", "fromUser and toUser required")

        if request.user.id not in (from_id, to_id):
            return fail("FORBIDDEN", "not allowed", 403)

        users = {u.id: u for u in User.objects.filter(id__in=[from_id, to_id], is_active=True)}
        if from_id not in users or to_id not in users:
            return fail("USER_NOT_FOUND", "user not found", 404)

        chat, created = get_or_create_chat(users[from_id], users[to_id])
        return ok(
            {
                "chat": ChatSerializer(chat).data,
                "partner": _partner_payload(request, chat),
                "created": created,
            }
        )


class ChatMessagesView(APIView):
    permission_classes = [IsAuthenticated]

    # GET /api/chats/<id>/messages
    def get(self, request, chat_id: int):
        chat = get_chat_for_participant(chat_id, request.user)
        messages = chat.messages.order_by("created_at", "id")
        return ok(
            {
                "chatId": chat.id,
                "partner": _partner_payload(request, chat),
                "messages": MessageSerializer(messages, many=True).data,
            }
        )

    # POST /api/chats/<id>/messages  body: { "text": "..." }
    def post(self, request, chat_id: int):
        chat = get_chat_for_participant(chat_id, request.user)
        message = post_message(chat, request.user, request.data.get("text"))
        return ok({"message": MessageSerializer(message).data}, http_status=201)
