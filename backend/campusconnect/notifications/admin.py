from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "actor", "type", "read", "created_at")
    list_filter = ("type", "read")
    raw_id_fields = ("user", "actor")
