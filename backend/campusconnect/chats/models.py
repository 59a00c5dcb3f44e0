# campusconnect/chats/models.py
from django.conf import settings
from django.db import models
from django.utils import timezone


class Chat(models.Model):
    # participant pair, stored with the lower user id in user_a
    user_a = models.ForeignKey(
        settings.AUTH_USER_MODEL, related_name="chats_as_a", on_delete=models.CASCADE
    )
    user_b = models.ForeignKey(
        settings.AUTH_USER_MODEL, related_name="chats_as_b", on_delete=models.CASCADE
    )

    # denormalized for list views
    last_message = models.TextField(blank=True, default="")
    last_message_sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="+",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
    )
    last_message_at = models.DateTimeField(default=timezone.now, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-last_message_at"]
        constraints = [
            models.UniqueConstraint(fields=["user_a", "user_b"], name="uniq_chat_pair"),
        ]

    @staticmethod
    def normalize_pair(user1_id: int, user2_id: int):
        return (user1_id, user2_id) if user1_id <= user2_id else (user2_id, user1_id)

    def has_participant(self, user_id) -> bool:
        return user_id in (self.user_a_id, self.user_b_id)

    def partner_id(self, user_id):
        return self.user_b_id if user_id == self.user_a_id else self.user_a_id

    def __str__(self):
        return f"Chat {self.id} ({self.user_a_id}, {self.user_b_id})"


class Message(models.Model):
    chat = models.ForeignKey(Chat, related_name="messages", on_delete=models.CASCADE)
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL, related_name="chat_messages", on_delete=models.CASCADE
    )
    text = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self):
        return f"{self.sender_id} in {self.chat_id}: {self.text[:50]}"
