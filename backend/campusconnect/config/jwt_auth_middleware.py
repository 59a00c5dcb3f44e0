# campusconnect/config/jwt_auth_middleware.py
import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from django.contrib.auth.models import AnonymousUser

from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework.exceptions import AuthenticationFailed

logger = logging.getLogger(__name__)


@database_sync_to_async
def get_user_from_token(token: str):
    """
    Validate a SimpleJWT access token and return its user.
    Returns AnonymousUser when the token is invalid or the user is gone.
    """
    try:
        jwt_auth = JWTAuthentication()
        validated = jwt_auth.get_validated_token(token)
        return jwt_auth.get_user(validated)
    except (InvalidToken, TokenError, AuthenticationFailed) as exc:
        logger.info("websocket token rejected: %s", exc)
        return AnonymousUser()


def _token_from_scope(scope):
    query_string = scope.get("query_string", b"").decode()
    token = (parse_qs(query_string).get("token") or [None])[0]
    if token:
        return token

    for name, value in scope.get("headers") or []:
        if name == b"authorization":
            parts = value.decode().strip().split(" ")
            # "Bearer <token>" or a bare token
            return parts[-1] if parts and parts[-1] else None
    return None


class JwtAuthMiddleware:
    """
    Authenticates ws://.../?token=xxx (or an Authorization header) and sets scope['user'].
    """

    def __init__(self, inner):
        self.inner = inner

    async def __call__(self, scope, receive, send):
        scope = dict(scope)
        token = _token_from_scope(scope)

        if token:
            scope["user"] = await get_user_from_token(token)
        else:
            scope["user"] = AnonymousUser()

        return await self.inner(scope, receive, send)


def JwtAuthMiddlewareStack(inner):
    return JwtAuthMiddleware(inner)
