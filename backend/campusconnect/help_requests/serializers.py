# campusconnect/help_requests/serializers.py
from rest_framework import serializers

from campusconnect.users.serializers import normalize_avatar_url
from .models import HelpRequest


def _brief_user(user, request=None):
    if user is None:
        return None
    data = {
        "id": user.id,
        "name": user.name,
        "role": user.role,
        "avatarUrl": normalize_avatar_url(user.avatar_url, request),
    }
    if user.show_email:
        data["email"] = user.email
    return data


class HelpRequestSerializer(serializers.ModelSerializer):
    fromUser = serializers.SerializerMethodField()
    toUser = serializers.SerializerMethodField()
    chatId = serializers.IntegerField(source="chat_id", read_only=True)
    respondedAt = serializers.DateTimeField(source="responded_at", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = HelpRequest
        fields = [
            "id",
            "fromUser",
            "toUser",
            "message",
            "status",
            "chatId",
            "respondedAt",
            "createdAt",
            "updatedAt",
        ]

    def get_fromUser(self, obj: HelpRequest):
        return _brief_user(obj.from_user, self.context.get("request"))

    def get_toUser(self, obj: HelpRequest):
        return _brief_user(obj.to_user, self.context.get("request"))
