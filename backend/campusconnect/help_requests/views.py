# campusconnect/help_requests/views.py
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from campusconnect.common.responses import fail, ok
from .models import HelpRequest
from .serializers import HelpRequestSerializer
from .services import cancel_request, create_request, list_requests, respond_to_request


class HelpRequestListView(APIView):
    permission_classes = [IsAuthenticated]

    # GET /api/requests?status=PENDING
    def get(self, request):
        status = (request.query_params.get("status") or "").strip().upper() or None
        if status and status not in HelpRequest.Status.values:
            return fail("VALIDATION_ERROR", "unknown status")

        incoming, outgoing = list_requests(request.user, status=status)
        ctx = {"request": request}
        return ok(
            {
                "incoming": HelpRequestSerializer(incoming, many=True, context=ctx).data,
                "outgoing": HelpRequestSerializer(outgoing, many=True, context=ctx).data,
            }
        )

    # POST /api/requests
    # body: { "toUserId": 42, "message": "..." }
    def post(self, request):
        help_request = create_request(
            request.user,
            to_user_id=request.data.get("toUserId"),
            message=request.data.get("message"),
        )
        data = HelpRequestSerializer(help_request, context={"request": request}).data
        return ok({"request": data}, http_status=201)


class HelpRequestRespondView(APIView):
    permission_classes = [IsAuthenticated]

    # POST /api/requests/<id>/respond
    # body: { "action": "accept" | "decline" }
    def post(self, request, request_id: int):
        help_request = respond_to_request(
            request.user, request_id, request.data.get("action")
        )
        data = HelpRequestSerializer(help_request, context={"request": request}).data
        return ok({"request": data, "chatId": help_request.chat_id})


class HelpRequestDetailView(APIView):
    permission_classes = [IsAuthenticated]

    # DELETE /api/requests/<id>  (sender cancels)
    def delete(self, request, request_id: int):
        help_request = cancel_request(request.user, request_id)
        data = HelpRequestSerializer(help_request, context={"request": request}).data
        return ok({"request": data})
