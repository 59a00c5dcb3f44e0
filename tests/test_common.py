import pytest
from django.http import QueryDict
from rest_framework import serializers, status
from rest_framework.permissions import AllowAny
from rest_framework.test import APIRequestFactory
from rest_framework.views import APIView

from campusconnect.common.exceptions import ServiceError
from campusconnect.common.pagination import next_offset, parse_offset_limit
from campusconnect.common.realtime import chat_group, group_send, user_group


class _RaisingView(APIView):
    authentication_classes = []
    permission_classes = [AllowAny]
    error = None

    def get(self, request):
        raise self.error


def _call(error):
    view = _RaisingView.as_view(error=error)
    return view(APIRequestFactory().get("/boom"))


def test_service_error_envelope():
    res = _call(ServiceError("CHAT_NOT_FOUND", "Chat not found", 404))
    assert res.status_code == status.HTTP_404_NOT_FOUND
    assert res.data == {
        "success": False,
        "data": None,
        "error": {"code": "CHAT_NOT_FOUND", "message": "Chat not found"},
    }


def test_validation_error_envelope():
    res = _call(serializers.ValidationError({"name": ["This field is required."]}))
    assert res.status_code == status.HTTP_400_BAD_REQUEST
    assert res.data["error"]["code"] == "VALIDATION_ERROR"
    assert res.data["error"]["message"] == "name: This field is required."
    assert "name" in res.data["error"]["details"]


def test_unexpected_error_becomes_server_error():
    res = _call(RuntimeError("kaboom"))
    assert res.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert res.data["error"] == {"code": "SERVER_ERROR", "message": "server error"}


@pytest.mark.parametrize(
    "query,expected",
    [
        ("", (0, 20)),
        ("offset=40&limit=10", (40, 10)),
        ("offset=-5&limit=0", (0, 20)),
        ("limit=1000", (0, 100)),
        ("offset=abc&limit=xyz", (0, 20)),
    ],
)
def test_parse_offset_limit(query, expected):
    assert parse_offset_limit(QueryDict(query), default_limit=20, max_limit=100) == expected


def test_next_offset():
    assert next_offset(total=50, offset=0, limit=20) == 20
    assert next_offset(total=40, offset=20, limit=20) is None


def test_group_names():
    assert chat_group("12") == "chat_12"
    assert user_group(3) == "user_3"


def test_group_send_without_listeners():
    assert group_send(chat_group(1), {"type": "chat.message", "message": {}}) is True


def test_group_send_failure_is_reported(monkeypatch):
    class BrokenLayer:
        async def group_send(self, group, event):
            raise ConnectionError("redis down")

    monkeypatch.setattr("campusconnect.common.realtime.get_channel_layer", lambda: BrokenLayer())
    assert group_send(user_group(1), {"type": "notification.push"}) is False
