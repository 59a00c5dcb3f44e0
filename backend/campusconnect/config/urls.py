# campusconnect/config/urls.py
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static


urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/auth/", include("campusconnect.authentication.urls")),
    path("api/", include("campusconnect.users.urls")),  # /users/me, /seniors
    path("api/", include("campusconnect.help_requests.urls")),
    path("api/", include("campusconnect.chats.urls")),
    path("api/", include("campusconnect.notifications.urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
