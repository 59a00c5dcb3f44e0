"""
ASGI entrypoint. HTTP goes to Django, WebSocket to the chat consumer.
Serve `campusconnect.config.asgi:application` with an ASGI server.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "campusconnect.config.settings")

# app registry must be ready before the consumers (and their models) import
http_application = get_asgi_application()

from channels.routing import ProtocolTypeRouter  # noqa: E402

from campusconnect.chats.routing import websocket_application  # noqa: E402

application = ProtocolTypeRouter(
    {"http": http_application, "websocket": websocket_application()}
)
