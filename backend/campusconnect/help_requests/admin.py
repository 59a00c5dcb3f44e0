from django.contrib import admin

from .models import HelpRequest


@admin.register(HelpRequest)
class HelpRequestAdmin(admin.ModelAdmin):
    list_display = ("id", "from_user", "to_user", "status", "chat", "created_at")
    list_filter = ("status",)
    raw_id_fields = ("from_user", "to_user", "chat")
