import pytest
from rest_framework import status

from campusconnect.notifications import services as notification_services
from campusconnect.notifications.models import Notification
from campusconnect.notifications.services import mark_all_read, notify, unread_count

pytestmark = pytest.mark.django_db


def _notify_many(user, count, actor=None):
    return [
        notify(user, type=Notification.Type.MESSAGE, message=f"n{i}", actor=actor)
        for i in range(count)
    ]


def test_notify_persists_and_pushes_to_user_room(monkeypatch, junior, senior):
    pushed = []
    monkeypatch.setattr(
        notification_services, "group_send", lambda group, event: pushed.append((group, event)) or True
    )

    notification = notify(
        junior,
        type=Notification.Type.REQUEST_ACCEPTED,
        actor=senior,
        message="accepted",
        meta={"chatId": 7},
    )

    assert notification.user_id == junior.id
    assert notification.read is False
    group, event = pushed[0]
    assert group == f"user_{junior.id}"
    assert event["type"] == "notification.push"
    assert event["notification"]["id"] == notification.id
    assert event["notification"]["actor"] == {"id": senior.id, "name": senior.name}
    assert event["notification"]["meta"] == {"chatId": 7}


def test_notify_is_best_effort(monkeypatch, junior):
    def boom(*args, **kwargs):
        raise RuntimeError("database is on fire")

    monkeypatch.setattr(Notification.objects, "create", boom)

    assert notify(junior, type=Notification.Type.MESSAGE, message="hi") is None


def test_notify_survives_push_failure(monkeypatch, junior):
    monkeypatch.setattr(notification_services, "group_send", lambda group, event: False)

    notification = notify(junior, type=Notification.Type.MESSAGE, message="hi")

    assert Notification.objects.filter(id=notification.id).exists()


def test_list_notifications_newest_first(client_for, junior):
    created = _notify_many(junior, 3)

    res = client_for(junior).get("/api/notifications")
    assert res.status_code == status.HTTP_200_OK
    data = res.data["data"]
    assert [n["id"] for n in data["notifications"]] == [n.id for n in reversed(created)]
    assert data["total"] == 3
    assert data["unreadCount"] == 3
    assert data["nextOffset"] is None


def test_list_notifications_pagination(client_for, junior):
    _notify_many(junior, 5)
    client = client_for(junior)

    data = client.get("/api/notifications", {"limit": 2}).data["data"]
    assert len(data["notifications"]) == 2
    assert data["nextOffset"] == 2

    data = client.get("/api/notifications", {"offset": 4, "limit": 2}).data["data"]
    assert len(data["notifications"]) == 1
    assert data["nextOffset"] is None


def test_list_only_unread(client_for, junior):
    first, second = _notify_many(junior, 2)
    notification_services.mark_read(junior, first.id)

    data = client_for(junior).get("/api/notifications", {"unread": "1"}).data["data"]
    assert [n["id"] for n in data["notifications"]] == [second.id]
    assert data["unreadCount"] == 1


def test_notifications_are_private(client_for, junior, senior):
    _notify_many(senior, 2)
    data = client_for(junior).get("/api/notifications").data["data"]
    assert data["notifications"] == []
    assert data["total"] == 0


def test_mark_read(client_for, junior):
    (notification,) = _notify_many(junior, 1)
    client = client_for(junior)

    res = client.post(f"/api/notifications/{notification.id}/read")
    assert res.status_code == status.HTTP_200_OK
    assert res.data["data"]["notification"]["read"] is True

    res = client.get("/api/notifications/unread-count")
    assert res.data["data"]["unreadCount"] == 0


def test_cannot_mark_someone_elses_notification(client_for, junior, senior):
    (notification,) = _notify_many(senior, 1)

    res = client_for(junior).post(f"/api/notifications/{notification.id}/read")
    assert res.status_code == status.HTTP_404_NOT_FOUND
    assert res.data["error"]["code"] == "NOTIFICATION_NOT_FOUND"
    notification.refresh_from_db()
    assert notification.read is False


def test_read_all(client_for, junior, senior):
    _notify_many(junior, 3)
    _notify_many(senior, 1)

    res = client_for(junior).post("/api/notifications/read-all")
    assert res.status_code == status.HTTP_200_OK
    assert res.data["data"]["updated"] == 3
    assert unread_count(junior) == 0
    assert unread_count(senior) == 1
    assert mark_all_read(junior) == 0
