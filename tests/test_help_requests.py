import pytest
from rest_framework import status

from campusconnect.chats.models import Chat
from campusconnect.common.exceptions import ServiceError
from campusconnect.help_requests.models import HelpRequest
from campusconnect.help_requests.services import create_request, respond_to_request
from campusconnect.notifications.models import Notification

pytestmark = pytest.mark.django_db


def _send(client, to_user, message="Can you review my resume?"):
    return client.post(
        "/api/requests", {"toUserId": to_user.id, "message": message}, format="json"
    )


def test_junior_sends_request_to_senior(client_for, junior, senior):
    res = _send(client_for(junior), senior)
    assert res.status_code == status.HTTP_201_CREATED, res.content

    data = res.data["data"]["request"]
    assert data["status"] == "PENDING"
    assert data["fromUser"]["id"] == junior.id
    assert data["toUser"]["id"] == senior.id
    assert data["chatId"] is None

    notification = Notification.objects.get(user=senior)
    assert notification.type == Notification.Type.REQUEST
    assert notification.actor_id == junior.id
    assert notification.meta == {"requestId": data["id"]}


def test_alumni_can_receive_requests(client_for, junior, alumni):
    res = _send(client_for(junior), alumni)
    assert res.status_code == status.HTTP_201_CREATED


def test_only_juniors_can_send(client_for, senior, alumni):
    res = _send(client_for(senior), alumni)
    assert res.status_code == status.HTTP_403_FORBIDDEN
    assert res.data["error"]["code"] == "ONLY_JUNIORS"
    assert not HelpRequest.objects.exists()


def test_target_must_be_a_mentor(client_for, junior, make_user):
    other_junior = make_user()
    res = _send(client_for(junior), other_junior)
    assert res.status_code == status.HTTP_400_BAD_REQUEST
    assert res.data["error"]["code"] == "TARGET_NOT_MENTOR"


@pytest.mark.parametrize("to_user_id", [None, "", "abc"])
def test_target_id_is_validated(client_for, junior, to_user_id):
    res = client_for(junior).post("/api/requests", {"toUserId": to_user_id}, format="json")
    assert res.status_code == status.HTTP_400_BAD_REQUEST
    assert res.data["error"]["code"] == "VALIDATION_ERROR"


def test_unknown_target(client_for, junior):
    res = client_for(junior).post("/api/requests", {"toUserId": 99999}, format="json")
    assert res.status_code == status.HTTP_400_BAD_REQUEST
    assert res.data["error"]["code"] == "TARGET_NOT_MENTOR"


def test_message_length_limit(client_for, junior, senior):
    res = _send(client_for(junior), senior, message="x" * 1001)
    assert res.status_code == status.HTTP_400_BAD_REQUEST


def test_duplicate_pending_request_rejected(client_for, junior, senior):
    client = client_for(junior)
    assert _send(client, senior).status_code == status.HTTP_201_CREATED

    res = _send(client, senior)
    assert res.status_code == status.HTTP_409_CONFLICT
    assert res.data["error"]["code"] == "REQUEST_ALREADY_PENDING"
    assert HelpRequest.objects.count() == 1


def test_accept_creates_chat_and_notifies_junior(client_for, junior, senior):
    req = create_request(junior, to_user_id=senior.id, message="hi")

    res = client_for(senior).post(
        f"/api/requests/{req.id}/respond", {"action": "accept"}, format="json"
    )
    assert res.status_code == status.HTTP_200_OK, res.content

    chat_id = res.data["data"]["chatId"]
    assert chat_id is not None
    assert res.data["data"]["request"]["status"] == "ACCEPTED"

    req.refresh_from_db()
    assert req.status == HelpRequest.Status.ACCEPTED
    assert req.chat_id == chat_id
    assert req.responded_at is not None

    chat = Chat.objects.get(id=chat_id)
    assert chat.has_participant(junior.id)
    assert chat.has_participant(senior.id)

    accepted = Notification.objects.get(user=junior)
    assert accepted.type == Notification.Type.REQUEST_ACCEPTED
    assert accepted.meta == {"requestId": req.id, "chatId": chat_id}


def test_second_accept_reuses_existing_chat(junior, senior):
    first = create_request(junior, to_user_id=senior.id)
    first = respond_to_request(senior, first.id, "accept")

    second = create_request(junior, to_user_id=senior.id)
    second = respond_to_request(senior, second.id, "ACCEPT")

    assert second.chat_id == first.chat_id
    assert Chat.objects.count() == 1


def test_decline(client_for, junior, senior):
    req = create_request(junior, to_user_id=senior.id)
    res = client_for(senior).post(
        f"/api/requests/{req.id}/respond/", {"action": "decline"}, format="json"
    )
    assert res.status_code == status.HTTP_200_OK
    assert res.data["data"]["chatId"] is None

    req.refresh_from_db()
    assert req.status == HelpRequest.Status.DECLINED
    assert not Chat.objects.exists()
    assert Notification.objects.get(user=junior).type == Notification.Type.REQUEST_DECLINED


def test_cannot_respond_twice(client_for, junior, senior):
    req = create_request(junior, to_user_id=senior.id)
    client = client_for(senior)
    client.post(f"/api/requests/{req.id}/respond", {"action": "decline"}, format="json")

    res = client.post(f"/api/requests/{req.id}/respond", {"action": "accept"}, format="json")
    assert res.status_code == status.HTTP_409_CONFLICT
    assert res.data["error"]["code"] == "REQUEST_ALREADY_RESPONDED"
    req.refresh_from_db()
    assert req.status == HelpRequest.Status.DECLINED
    assert not Chat.objects.exists()


def test_only_recipient_can_respond(client_for, junior, senior, alumni):
    req = create_request(junior, to_user_id=senior.id)

    for user in (junior, alumni):
        res = client_for(user).post(
            f"/api/requests/{req.id}/respond", {"action": "accept"}, format="json"
        )
        assert res.status_code == status.HTTP_403_FORBIDDEN

    req.refresh_from_db()
    assert req.is_pending


def test_respond_with_unknown_action(senior, junior):
    req = create_request(junior, to_user_id=senior.id)
    with pytest.raises(ServiceError) as excinfo:
        respond_to_request(senior, req.id, "maybe")
    assert excinfo.value.code == "VALIDATION_ERROR"


def test_respond_to_missing_request(client_for, senior):
    res = client_for(senior).post("/api/requests/12345/respond", {"action": "accept"}, format="json")
    assert res.status_code == status.HTTP_404_NOT_FOUND
    assert res.data["error"]["code"] == "REQUEST_NOT_FOUND"


def test_sender_can_cancel_pending_request(client_for, junior, senior):
    req = create_request(junior, to_user_id=senior.id)

    res = client_for(junior).delete(f"/api/requests/{req.id}")
    assert res.status_code == status.HTTP_200_OK
    assert res.data["data"]["request"]["status"] == "CANCELLED"

    types = set(Notification.objects.filter(user=senior).values_list("type", flat=True))
    assert Notification.Type.REQUEST_CANCELLED in types

    # a cancelled request no longer blocks a new one
    assert _send(client_for(junior), senior).status_code == status.HTTP_201_CREATED


def test_cancel_rules(client_for, junior, senior):
    req = create_request(junior, to_user_id=senior.id)

    res = client_for(senior).delete(f"/api/requests/{req.id}")
    assert res.status_code == status.HTTP_403_FORBIDDEN

    respond_to_request(senior, req.id, "accept")
    res = client_for(junior).delete(f"/api/requests/{req.id}")
    assert res.status_code == status.HTTP_409_CONFLICT


def test_list_incoming_and_outgoing(client_for, junior, senior, alumni):
    to_senior = create_request(junior, to_user_id=senior.id)
    to_alumni = create_request(junior, to_user_id=alumni.id)
    respond_to_request(alumni, to_alumni.id, "decline")

    mine = client_for(junior).get("/api/requests").data["data"]
    assert mine["incoming"] == []
    assert [r["id"] for r in mine["outgoing"]] == [to_alumni.id, to_senior.id]

    incoming = client_for(senior).get("/api/requests").data["data"]["incoming"]
    assert [r["id"] for r in incoming] == [to_senior.id]

    pending = client_for(junior).get("/api/requests", {"status": "pending"}).data["data"]
    assert [r["id"] for r in pending["outgoing"]] == [to_senior.id]


def test_list_rejects_unknown_status(client_for, junior):
    res = client_for(junior).get("/api/requests", {"status": "WHATEVER"})
    assert res.status_code == status.HTTP_400_BAD_REQUEST


def test_requests_require_auth(api_client):
    assert api_client.get("/api/requests").status_code == status.HTTP_401_UNAUTHORIZED
