# campusconnect/notifications/models.py
from django.conf import settings
from django.db import models


class Notification(models.Model):
    class Type(models.TextChoices):
        REQUEST = "request", "request"
        REQUEST_ACCEPTED = "request-accepted", "request-accepted"
        REQUEST_DECLINED = "request-declined", "request-declined"
        REQUEST_CANCELLED = "request-cancelled", "request-cancelled"
        MESSAGE = "message", "message"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, related_name="notifications", on_delete=models.CASCADE
    )
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="notifications_sent",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
    )
    type = models.CharField(max_length=40, blank=True, default="")
    message = models.TextField(blank=True, default="")
    meta = models.JSONField(default=dict, blank=True)

    # what the notification points at, e.g. ("HelpRequest", 12)
    ref_model = models.CharField(max_length=40, blank=True, default="")
    ref_id = models.PositiveBigIntegerField(null=True, blank=True)

    read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "-created_at"], name="notif_user_created_idx"),
        ]

    def __str__(self):
        return f"Notification to {self.user_id}: {self.type}"
