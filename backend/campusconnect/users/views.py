# campusconnect/users/views.py
import logging
import os
import re

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.db.models import Q
from django.utils import timezone
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from campusconnect.common.responses import ok, fail
from .models import User
from .serializers import ProfileUpdateSerializer, UserMeSerializer, UserPublicSerializer

logger = logging.getLogger(__name__)

AVATAR_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")
AVATAR_DIR = "avatars"


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    # GET /api/users/me
    def get(self, request):
        serializer = UserMeSerializer(request.user, context={"request": request})
        return ok({"user": serializer.data})

    # PUT /api/users/me
    def put(self, request):
        serializer = ProfileUpdateSerializer(
            request.user, data=request.data, partial=True
        )
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return ok({"user": UserMeSerializer(user, context={"request": request}).data})

    def patch(self, request):
        return self.put(request)


def _avatar_filename(user_id: int, original: str) -> str:
    base, ext = os.path.splitext(original or "")
    ext = ext.lower()
    base = re.sub(r"\s+", "-", base.strip()) or "avatar"
    stamp = int(timezone.now().timestamp() * 1000)
    return f"{AVATAR_DIR}/{user_id}-{stamp}-{base}{ext}"


def _media_path(avatar_url: str):
    """Storage-relative path for an avatar url we issued, or None."""
    media_url = settings.MEDIA_URL if settings.MEDIA_URL.endswith("/") else settings.MEDIA_URL + "/"
    if avatar_url and avatar_url.startswith(media_url + AVATAR_DIR + "/"):
        return avatar_url[len(media_url):]
    return None


def _delete_stored_avatar(avatar_url: str):
    path = _media_path(avatar_url)
    if path and default_storage.exists(path):
        try:
            default_storage.delete(path)
        except OSError:
            logger.warning("could not delete avatar file %s", path, exc_info=True)


class AvatarView(APIView):
    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    # POST /api/users/me/avatar (form-data: avatar)
    def post(self, request):
        img = request.FILES.get("avatar") or request.FILES.get("image")
        if not img:
            return fail("VALIDATION_ERROR", "No file uploaded")

        if img.size > settings.AVATAR_MAX_BYTES:
            return fail("FILE_TOO_LARGE", "avatar exceeds size limit")

        _, ext = os.path.splitext(img.name or "")
        if ext.lower() not in AVATAR_EXTENSIONS:
            return fail("UNSUPPORTED_FILE_TYPE", "avatar must be an image")

        saved_path = default_storage.save(
            _avatar_filename(request.user.id, img.name), ContentFile(img.read())
        )

        media_url = settings.MEDIA_URL
        if not media_url.endswith("/"):
            media_url += "/"
        avatar_url = media_url + saved_path

        user: User = request.user
        previous = user.avatar_url
        user.avatar_url = avatar_url
        user.save(update_fields=["avatar_url", "updated_at"])
        _delete_stored_avatar(previous)

        logger.info("user %s uploaded avatar %s", user.id, saved_path)
        data = UserMeSerializer(user, context={"request": request}).data
        return ok({"user": data, "avatarUrl": data["avatarUrl"]})

    # DELETE /api/users/me/avatar
    def delete(self, request):
        user: User = request.user
        _delete_stored_avatar(user.avatar_url)
        user.avatar_url = ""
        user.save(update_fields=["avatar_url", "updated_at"])
        return ok({"user": UserMeSerializer(user, context={"request": request}).data})


class UserDetailView(APIView):
    permission_classes = [IsAuthenticated]

    # GET /api/users/<id>
    def get(self, request, user_id: int):
        user = User.objects.filter(id=user_id, is_active=True).first()
        if not user:
            return fail("USER_NOT_FOUND", "user not found", 404)
        if user.id == request.user.id:
            return ok({"user": UserMeSerializer(user, context={"request": request}).data})
        return ok({"user": UserPublicSerializer(user, context={"request": request}).data})


class SeniorListView(APIView):
    """
    GET /api/seniors?q=&tag=
    Public mentor directory, sorted by name.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        qs = User.objects.filter(is_active=True, role__in=User.MENTOR_ROLES)

        q = (request.query_params.get("q") or "").strip()
        if q:
            qs = qs.filter(
                Q(name__icontains=q) | Q(bio__icontains=q) | Q(department__icontains=q)
            )

        seniors = list(qs.order_by("name", "id"))

        # tags live in a JSON list; filter here so it works on every backend
        tag = (request.query_params.get("tag") or "").strip().lower()
        if tag:
            seniors = [
                s for s in seniors if tag in [str(t).lower() for t in (s.tags or [])]
            ]

        data = UserPublicSerializer(seniors, many=True, context={"request": request}).data
        return ok({"seniors": data})
