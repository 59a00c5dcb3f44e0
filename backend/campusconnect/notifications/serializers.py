# campusconnect/notifications/serializers.py
from rest_framework import serializers

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="user_id", read_only=True)
    actor = serializers.SerializerMethodField()
    refModel = serializers.CharField(source="ref_model", read_only=True)
    refId = serializers.IntegerField(source="ref_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Notification
        fields = [
            "id",
            "userId",
            "actor",
            "type",
            "message",
            "meta",
            "refModel",
            "refId",
            "read",
            "createdAt",
        ]

    def get_actor(self, obj: Notification):
        if not obj.actor_id or obj.actor is None:
            return None
        return {"id": obj.actor.id, "name": obj.actor.name}
