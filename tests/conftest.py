import pytest
from rest_framework.test import APIClient

from campusconnect.authentication.services import issue_jwt_for_user
from campusconnect.users.models import User

PASSWORD = "TestPass123!"  # noqa: S105


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role=User.Role.JUNIOR, **extra):
        counter["n"] += 1
        email = extra.pop("email", f"user{counter['n']}@example.com")
        extra.setdefault("name", f"User {counter['n']}")
        return User.objects.create_user(
            email=email, password=PASSWORD, role=role, **extra
        )

    return _make


@pytest.fixture
def junior(make_user):
    return make_user(User.Role.JUNIOR, name="Jay Junior")


@pytest.fixture
def senior(make_user):
    return make_user(User.Role.SENIOR, name="Sam Senior")


@pytest.fixture
def alumni(make_user):
    return make_user(User.Role.ALUMNI, name="Alex Alumni")


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for():
    def _client(user):
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_jwt_for_user(user)}")
        return client

    return _client
