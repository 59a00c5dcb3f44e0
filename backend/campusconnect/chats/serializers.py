# campusconnect/chats/serializers.py
from rest_framework import serializers

from .models import Chat, Message


class MessageSerializer(serializers.ModelSerializer):
    chatId = serializers.IntegerField(source="chat_id", read_only=True)
    senderId = serializers.IntegerField(source="sender_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Message
        fields = ["id", "chatId", "senderId", "text", "createdAt"]


class ChatSerializer(serializers.ModelSerializer):
    participants = serializers.SerializerMethodField()
    lastMessage = serializers.CharField(source="last_message", read_only=True)
    lastMessageAt = serializers.DateTimeField(source="last_message_at", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Chat
        fields = ["id", "participants", "lastMessage", "lastMessageAt", "createdAt"]

    def get_participants(self, obj: Chat):
        return [obj.user_a_id, obj.user_b_id]
