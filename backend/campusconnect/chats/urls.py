# campusconnect/chats/urls.py
from django.urls import re_path
from .views import ChatCreateView, ChatListView, ChatMessagesView

urlpatterns = [
    re_path(r"^chats/?$", ChatListView.as_view()),
    re_path(r"^chats/create/?$", ChatCreateView.as_view()),
    re_path(r"^chats/(?P<chat_id>\d+)/messages/?$", ChatMessagesView.as_view()),
]
