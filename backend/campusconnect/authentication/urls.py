from django.urls import re_path
from .views import AuthMeView, LoginView, SignupView

urlpatterns = [
    re_path(r"^signup/?$", SignupView.as_view()),
    re_path(r"^login/?$", LoginView.as_view()),
    re_path(r"^me/?$", AuthMeView.as_view()),
]
