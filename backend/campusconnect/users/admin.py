from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    ordering = ("email",)
    list_display = ("id", "email", "name", "role", "is_active", "date_joined")
    list_filter = ("role", "is_active", "is_staff")
    search_fields = ("email", "name")
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("name", "role", "bio", "tags", "avatar_url", "department")}),
        (
            "Academic / career",
            {
                "fields": (
                    "enrollment_year",
                    "graduation_year",
                    "current_year_of_study",
                    "current_company",
                    "job_title",
                    "linked_in",
                    "location",
                )
            },
        ),
        ("Visibility", {"fields": ("show_email", "show_enrollment_years", "show_career_info")}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("email", "name", "role", "password1", "password2")}),
    )
