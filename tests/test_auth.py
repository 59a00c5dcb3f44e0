import pytest
from rest_framework import status
from rest_framework_simplejwt.tokens import AccessToken

from campusconnect.users.models import User

from .conftest import PASSWORD

pytestmark = pytest.mark.django_db


def test_signup_returns_token_and_owner_profile(api_client):
    res = api_client.post(
        "/api/auth/signup",
        {"name": "Priya", "email": "Priya@Example.com ", "password": "secret123", "role": "senior"},
        format="json",
    )
    assert res.status_code == status.HTTP_201_CREATED, res.content
    body = res.data["data"]
    assert body["tokenType"] == "Bearer"
    assert body["user"]["email"] == "priya@example.com"
    assert body["user"]["role"] == "SENIOR"
    assert "password" not in body["user"]

    token = AccessToken(body["token"])
    assert token["role"] == "SENIOR"
    assert str(token["user_id"]) == str(body["user"]["id"])


def test_signup_defaults_to_junior(api_client):
    res = api_client.post(
        "/api/auth/signup",
        {"name": "J", "email": "j@example.com", "password": "secret123"},
        format="json",
    )
    assert res.status_code == status.HTTP_201_CREATED
    assert User.objects.get(email="j@example.com").role == User.Role.JUNIOR


def test_signup_requires_email_and_password(api_client):
    res = api_client.post("/api/auth/signup", {"name": "x"}, format="json")
    assert res.status_code == status.HTTP_400_BAD_REQUEST
    assert res.data["success"] is False
    assert res.data["error"]["code"] == "VALIDATION_ERROR"


def test_signup_rejects_admin_role(api_client):
    res = api_client.post(
        "/api/auth/signup",
        {"email": "boss@example.com", "password": "secret123", "role": "ADMIN"},
        format="json",
    )
    assert res.status_code == status.HTTP_400_BAD_REQUEST
    assert not User.objects.filter(email="boss@example.com").exists()


def test_signup_duplicate_email(api_client, junior):
    res = api_client.post(
        "/api/auth/signup",
        {"email": junior.email.upper(), "password": "secret123"},
        format="json",
    )
    assert res.status_code == status.HTTP_409_CONFLICT
    assert res.data["error"]["code"] == "EMAIL_ALREADY_USED"


def test_login_success(api_client, junior):
    res = api_client.post(
        "/api/auth/login", {"email": junior.email, "password": PASSWORD}, format="json"
    )
    assert res.status_code == status.HTTP_200_OK
    assert res.data["data"]["user"]["id"] == junior.id
    assert res.data["data"]["token"]


@pytest.mark.parametrize(
    "email,password",
    [(None, "wrong-password"), ("nobody@example.com", PASSWORD)],
)
def test_login_invalid_credentials(api_client, junior, email, password):
    email = email or junior.email
    res = api_client.post("/api/auth/login", {"email": email, "password": password}, format="json")
    assert res.status_code == status.HTTP_400_BAD_REQUEST
    assert res.data["error"]["code"] == "INVALID_CREDENTIALS"


def test_login_rejects_inactive_user(api_client, junior):
    junior.is_active = False
    junior.save(update_fields=["is_active"])
    res = api_client.post(
        "/api/auth/login", {"email": junior.email, "password": PASSWORD}, format="json"
    )
    assert res.status_code == status.HTTP_400_BAD_REQUEST


def test_auth_me_requires_token(api_client):
    res = api_client.get("/api/auth/me")
    assert res.status_code == status.HTTP_401_UNAUTHORIZED
    assert res.data["error"]["code"] == "UNAUTHORIZED"


def test_auth_me_rejects_bad_token(api_client):
    api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
    res = api_client.get("/api/auth/me")
    assert res.status_code == status.HTTP_401_UNAUTHORIZED
    assert res.data["error"]["code"] == "INVALID_TOKEN"


def test_auth_me_returns_current_user(client_for, senior):
    res = client_for(senior).get("/api/auth/me")
    assert res.status_code == status.HTTP_200_OK
    user = res.data["data"]["user"]
    assert user["id"] == senior.id
    # owners always see their own email
    assert user["email"] == senior.email
    assert user["profileVisibility"]["showEmail"] is False


@pytest.mark.parametrize(
    "body",
    [
        {"email": "n@example.com", "password": 12345678},
        {"email": ["n@example.com"], "password": "secret123"},
        {"email": "n@example.com", "password": "secret123", "name": 42},
        {"email": "n@example.com", "password": "secret123", "role": 1},
    ],
)
def test_signup_rejects_non_string_fields(api_client, body):
    res = api_client.post("/api/auth/signup", body, format="json")
    assert res.status_code == status.HTTP_400_BAD_REQUEST
    assert res.data["error"]["code"] == "VALIDATION_ERROR"
    assert not User.objects.filter(email="n@example.com").exists()


@pytest.mark.parametrize("password", [123, 12.5, ["TestPass123!"], {"p": 1}])
def test_login_rejects_non_string_password(api_client, junior, password):
    res = api_client.post(
        "/api/auth/login", {"email": junior.email, "password": password}, format="json"
    )
    assert res.status_code == status.HTTP_400_BAD_REQUEST
    assert res.data["error"]["code"] == "INVALID_CREDENTIALS"


def test_login_rejects_non_string_email(api_client):
    res = api_client.post("/api/auth/login", {"email": 7, "password": PASSWORD}, format="json")
    assert res.status_code == status.HTTP_400_BAD_REQUEST
    assert res.data["error"]["code"] == "INVALID_CREDENTIALS"
