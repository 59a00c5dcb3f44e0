from channels.routing import URLRouter
from django.urls import re_path

from campusconnect.config.jwt_auth_middleware import JwtAuthMiddlewareStack
from .consumers import ChatConsumer

websocket_urlpatterns = [
    re_path(r"^ws/chat/?$", ChatConsumer.as_asgi()),
]


def websocket_application():
    """Chat sockets, authenticated from the handshake's JWT."""
    return JwtAuthMiddlewareStack(URLRouter(websocket_urlpatterns))
