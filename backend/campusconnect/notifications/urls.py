# campusconnect/notifications/urls.py
from django.urls import re_path
from .views import (
    NotificationListView,
    NotificationReadAllView,
    NotificationReadView,
    UnreadCountView,
)

urlpatterns = [
    re_path(r"^notifications/?$", NotificationListView.as_view()),
    re_path(r"^notifications/unread-count/?$", UnreadCountView.as_view()),
    re_path(r"^notifications/read-all/?$", NotificationReadAllView.as_view()),
    re_path(
        r"^notifications/(?P<notification_id>\d+)/read/?$",
        NotificationReadView.as_view(),
    ),
]
