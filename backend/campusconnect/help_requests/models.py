# campusconnect/help_requests/models.py
from django.conf import settings
from django.db import models


class HelpRequest(models.Model):
    class Status(models.TextChoices):
        PENDING = "PENDING", "PENDING"
        ACCEPTED = "ACCEPTED", "ACCEPTED"
        DECLINED = "DECLINED", "DECLINED"
        CANCELLED = "CANCELLED", "CANCELLED"

    from_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="sent_help_requests",
        on_delete=models.CASCADE,
    )
    to_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="received_help_requests",
        on_delete=models.CASCADE,
    )
    message = models.TextField(blank=True, default="")
    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.PENDING, db_index=True
    )
    # set once the request is accepted
    chat = models.ForeignKey(
        "chats.Chat",
        related_name="help_requests",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
    )
    responded_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    @property
    def is_pending(self) -> bool:
        return self.status == self.Status.PENDING

    def __str__(self):
        return f"{self.from_user_id} -> {self.to_user_id} ({self.status})"
