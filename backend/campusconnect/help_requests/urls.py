# campusconnect/help_requests/urls.py
from django.urls import re_path
from .views import HelpRequestDetailView, HelpRequestListView, HelpRequestRespondView

urlpatterns = [
    re_path(r"^requests/?$", HelpRequestListView.as_view()),
    re_path(r"^requests/(?P<request_id>\d+)/?$", HelpRequestDetailView.as_view()),
    re_path(
        r"^requests/(?P<request_id>\d+)/respond/?$", HelpRequestRespondView.as_view()
    ),
]
