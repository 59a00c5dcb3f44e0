# campusconnect/authentication/services.py
import logging

from django.contrib.auth import authenticate
from django.db import IntegrityError, transaction
from rest_framework_simplejwt.tokens import AccessToken

from campusconnect.common.exceptions import ServiceError
from campusconnect.users.models import User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
SIGNUP_ROLES = (User.Role.JUNIOR, User.Role.SENIOR, User.Role.ALUMNI)


def normalize_email(email) -> str:
    if not isinstance(email, str):
        return ""
    return email.strip().lower()


def _is_text(*values) -> bool:
    # request.data is parsed JSON, so numbers and lists can show up here
    return all(v is None or isinstance(v, str) for v in values)


def issue_jwt_for_user(user: User) -> str:
    token = AccessToken.for_user(user)
    token["role"] = user.role
    return str(token)


def signup(*, name: str, email: str, password: str, role: str = None) -> User:
    if not _is_text(name, email, password, role):
        raise ServiceError("VALIDATION_ERROR", "name, email, password and role must be strings")

    email = normalize_email(email)
    if not email or not password:
        raise ServiceError("VALIDATION_ERROR", "email+password required")

    if len(password) < MIN_PASSWORD_LENGTH:
        raise ServiceError(
            "VALIDATION_ERROR",
            f"password must be at least {MIN_PASSWORD_LENGTH} characters",
        )

    role = (role or User.Role.JUNIOR.value).strip().upper()
    if role not in SIGNUP_ROLES:
        raise ServiceError("VALIDATION_ERROR", "role must be JUNIOR, SENIOR or ALUMNI")

    if User.objects.filter(email=email).exists():
        raise ServiceError("EMAIL_ALREADY_USED", "email exists", 409)

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                name=(name or "").strip(),
                role=role,
            )
    except IntegrityError:
        # lost a race with a concurrent signup
        raise ServiceError("EMAIL_ALREADY_USED", "email exists", 409)

    logger.info("user %s signed up as %s", user.id, user.role)
    return user


def login(*, email: str, password: str) -> User:
    if not _is_text(email, password):
        raise ServiceError("INVALID_CREDENTIALS", "invalid credentials")

    email = normalize_email(email)
    if not email or not password:
        raise ServiceError("INVALID_CREDENTIALS", "invalid credentials")

    # ModelBackend rejects inactive users
    user = authenticate(username=email, password=password)
    if user is None:
        raise ServiceError("INVALID_CREDENTIALS", "invalid credentials")
    return user
