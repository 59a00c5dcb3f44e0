# campusconnect/authentication/views.py
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from campusconnect.common.responses import ok
from campusconnect.users.serializers import UserMeSerializer
from .services import issue_jwt_for_user, login, signup


def _auth_payload(request, user):
    return {
        "token": issue_jwt_for_user(user),
        "tokenType": "Bearer",
        "user": UserMeSerializer(user, context={"request": request}).data,
    }


class SignupView(APIView):
    authentication_classes = []
    permission_classes = []

    # POST /api/auth/signup
    # body: { "name", "email", "password", "role" }
    def post(self, request):
        user = signup(
            name=request.data.get("name"),
            email=request.data.get("email"),
            password=request.data.get("password"),
            role=request.data.get("role"),
        )
        return ok(_auth_payload(request, user), http_status=201)


class LoginView(APIView):
    authentication_classes = []
    permission_classes = []

    # POST /api/auth/login
    # body: { "email", "password" }
    def post(self, request):
        user = login(
            email=request.data.get("email"),
            password=request.data.get("password"),
        )
        return ok(_auth_payload(request, user))


class AuthMeView(APIView):
    permission_classes = [IsAuthenticated]

    # GET /api/auth/me
    def get(self, request):
        return ok({"user": UserMeSerializer(request.user, context={"request": request}).data})
