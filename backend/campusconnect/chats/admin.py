from django.contrib import admin

from .models import Chat, Message


@admin.register(Chat)
class ChatAdmin(admin.ModelAdmin):
    list_display = ("id", "user_a", "user_b", "last_message_at", "created_at")
    raw_id_fields = ("user_a", "user_b", "last_message_sender")


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ("id", "chat", "sender", "created_at")
    raw_id_fields = ("chat", "sender")
