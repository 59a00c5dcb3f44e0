# campusconnect/users/urls.py
from django.urls import re_path
from .views import AvatarView, MeView, SeniorListView, UserDetailView

urlpatterns = [
    re_path(r"^users/me/?$", MeView.as_view()),  # GET|PUT|PATCH /api/users/me
    re_path(r"^users/me/avatar/?$", AvatarView.as_view()),  # POST|DELETE
    re_path(r"^users/(?P<user_id>\d+)/?$", UserDetailView.as_view()),
    re_path(r"^seniors/?$", SeniorListView.as_view()),  # GET /api/seniors
]
