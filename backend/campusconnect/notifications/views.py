# campusconnect/notifications/views.py
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from campusconnect.common.pagination import next_offset, parse_offset_limit
from campusconnect.common.responses import fail, ok
from .models import Notification
from .serializers import NotificationSerializer
from .services import mark_all_read, mark_read, unread_count

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class NotificationListView(APIView):
    permission_classes = [IsAuthenticated]

    # GET /api/notifications?unread=1&offset=0&limit=20
    def get(self, request):
        offset, limit = parse_offset_limit(
            request.query_params, default_limit=DEFAULT_LIMIT, max_limit=MAX_LIMIT
        )

        qs = Notification.objects.filter(user=request.user).select_related("actor")
        if request.query_params.get("unread") in ("1", "true", "True"):
            qs = qs.filter(read=False)

        total = qs.count()
        page = list(qs.order_by("-created_at", "-id")[offset : offset + limit])

        return ok(
            {
                "notifications": NotificationSerializer(page, many=True).data,
                "offset": offset,
                "limit": limit,
                "nextOffset": next_offset(total, offset, limit),
                "total": total,
                "unreadCount": unread_count(request.user),
            }
        )


class UnreadCountView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return ok({"unreadCount": unread_count(request.user)})


class NotificationReadView(APIView):
    permission_classes = [IsAuthenticated]

    # POST /api/notifications/<id>/read
    def post(self, request, notification_id: int):
        notification = mark_read(request.user, notification_id)
        if not notification:
            return fail("NOTIFICATION_NOT_FOUND", "notification not found", 404)
        return ok({"notification": NotificationSerializer(notification).data})


class NotificationReadAllView(APIView):
    permission_classes = [IsAuthenticated]

    # POST /api/notifications/read-all
    def post(self, request):
        return ok({"updated": mark_all_read(request.user)})
