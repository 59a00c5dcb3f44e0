import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer

from campusconnect.common.exceptions import ServiceError
from campusconnect.common.realtime import chat_group, user_group
from .services import get_chat_for_participant, post_message

logger = logging.getLogger(__name__)


def _as_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class ChatConsumer(AsyncJsonWebsocketConsumer):
    """
    WS chat protocol
      - URL: ws://<host>/ws/chat/?token=<jwt>
      - client -> server:
          {"type": "joinChat", "chatId": 1}
          {"type": "leaveChat", "chatId": 1}
          {"type": "sendMessage", "chatId": 1, "text": "hi"}
      - server -> client:
          {"type": "joinedChat" | "leftChat" | "newMessage" | "notification" | "error",
           "payload": {...}}

    Every socket sits in its user room (notifications) and in the rooms of
    the chats it joined. A message is echoed to its sender too; clients
    de-duplicate by message id.
    """

    async def connect(self):
        user = self.scope.get("user")
        if user is None or not user.is_authenticated:
            # 4401 Unauthorized
            await self.close(code=4401)
            return

        self.user_id = user.id
        self.user_room = user_group(user.id)
        self.chat_rooms = set()

        await self.channel_layer.group_add(self.user_room, self.channel_name)
        await self.accept()

    async def disconnect(self, close_code):
        # connect may have been rejected
        user_room = getattr(self, "user_room", None)
        if not user_room:
            return

        for room in list(self.chat_rooms):
            await self.channel_layer.group_discard(room, self.channel_name)
        self.chat_rooms.clear()
        await self.channel_layer.group_discard(user_room, self.channel_name)

    async def receive(self, text_data=None, bytes_data=None):
        if not text_data:
            return

        try:
            data = json.loads(text_data)
        except ValueError:
            await self._send_error("BAD_FRAME", "frame must be JSON")
            return
        if not isinstance(data, dict):
            await self._send_error("BAD_FRAME", "frame must be a JSON object")
            return

        msg_type = data.get("type")

        if msg_type == "joinChat":
            await self._join_chat(data.get("chatId"))
        elif msg_type == "leaveChat":
            await self._leave_chat(data.get("chatId"))
        elif msg_type == "sendMessage":
            await self._send_message(data.get("chatId"), data.get("text"))
        else:
            await self._send_error("UNKNOWN_EVENT", f"unknown event type: {msg_type}")

    # ---- client events ----

    async def _join_chat(self, raw_chat_id):
        chat_id = await self._checked_chat_id(raw_chat_id)
        if chat_id is None:
            return

        await self._ensure_joined(chat_id)
        await self.send_json({"type": "joinedChat", "payload": {"chatId": chat_id}})

    async def _leave_chat(self, raw_chat_id):
        chat_id = _as_int(raw_chat_id)
        if chat_id is None:
            await self._send_error("VALIDATION_ERROR", "chatId is required")
            return

        room = chat_group(chat_id)
        if room in self.chat_rooms:
            await self.channel_layer.group_discard(room, self.channel_name)
            self.chat_rooms.discard(room)
        await self.send_json({"type": "leftChat", "payload": {"chatId": chat_id}})

    async def _send_message(self, raw_chat_id, text):
        if not str(text or "").strip():
            await self._send_error("VALIDATION_ERROR", "text is required")
            return

        chat_id = await self._checked_chat_id(raw_chat_id)
        if chat_id is None:
            return

        # join first so the sender gets its own newMessage
        await self._ensure_joined(chat_id)

        try:
            await self._post(chat_id, text)
        except ServiceError as exc:
            await self._send_error(exc.code, exc.message)
        except Exception:
            logger.exception("socket sendMessage failed for chat %s", chat_id)
            await self._send_error("SEND_FAILED", "send failed")

    # ---- group handlers ----

    async def chat_message(self, event):
        await self.send_json({"type": "newMessage", "payload": event.get("message") or {}})

    async def notification_push(self, event):
        await self.send_json(
            {"type": "notification", "payload": event.get("notification") or {}}
        )

    # ---- helpers ----

    async def _checked_chat_id(self, raw_chat_id):
        chat_id = _as_int(raw_chat_id)
        if chat_id is None:
            await self._send_error("VALIDATION_ERROR", "chatId is required")
            return None
        try:
            await self._load_chat(chat_id)
        except ServiceError as exc:
            await self._send_error(exc.code, exc.message)
            return None
        return chat_id

    async def _ensure_joined(self, chat_id: int):
        room = chat_group(chat_id)
        if room not in self.chat_rooms:
            await self.channel_layer.group_add(room, self.channel_name)
            self.chat_rooms.add(room)

    async def _send_error(self, code: str, message: str):
        await self.send_json({"type": "error", "payload": {"code": code, "message": message}})

    @database_sync_to_async
    def _load_chat(self, chat_id: int):
        return get_chat_for_participant(chat_id, self.scope["user"])

    @database_sync_to_async
    def _post(self, chat_id: int, text):
        chat = get_chat_for_participant(chat_id, self.scope["user"])
        return post_message(chat, self.scope["user"], text).id
