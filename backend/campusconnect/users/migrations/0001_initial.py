import django.utils.timezone
from django.db import migrations, models

import campusconnect.users.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                (
                    "last_login",
                    models.DateTimeField(
                        blank=True, null=True, verbose_name="last login"
                    ),
                ),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions without explicitly assigning them.",
                        verbose_name="superuser status",
                    ),
                ),
                (
                    "first_name",
                    models.CharField(
                        blank=True, max_length=150, verbose_name="first name"
                    ),
                ),
                (
                    "last_name",
                    models.CharField(
                        blank=True, max_length=150, verbose_name="last name"
                    ),
                ),
                (
                    "is_staff",
                    models.BooleanField(
                        default=False,
                        help_text="Designates whether the user can log into this admin site.",
                        verbose_name="staff status",
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        default=True,
                        help_text="Designates whether this user should be treated as active. Unselect this instead of deleting accounts.",
                        verbose_name="active",
                    ),
                ),
                (
                    "date_joined",
                    models.DateTimeField(
                        default=django.utils.timezone.now, verbose_name="date joined"
                    ),
                ),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("name", models.CharField(blank=True, default="", max_length=100)),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("JUNIOR", "Junior"),
                            ("SENIOR", "Senior"),
                            ("ALUMNI", "Alumni"),
                            ("ADMIN", "Admin"),
                        ],
                        db_index=True,
                        default="JUNIOR",
                        max_length=10,
                    ),
                ),
                ("bio", models.TextField(blank=True, default="")),
                ("tags", models.JSONField(blank=True, default=list)),
                ("avatar_url", models.CharField(blank=True, default="", max_length=500)),
                ("department", models.CharField(blank=True, default="", max_length=100)),
                ("enrollment_year", models.PositiveIntegerField(blank=True, null=True)),
                ("graduation_year", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "current_year_of_study",
                    models.CharField(blank=True, default="", max_length=30),
                ),
                (
                    "current_company",
                    models.CharField(blank=True, default="", max_length=150),
                ),
                ("job_title", models.CharField(blank=True, default="", max_length=150)),
                ("linked_in", models.CharField(blank=True, default="", max_length=300)),
                ("location", models.CharField(blank=True, default="", max_length=150)),
                ("show_email", models.BooleanField(default=False)),
                ("show_enrollment_years", models.BooleanField(default=True)),
                ("show_career_info", models.BooleanField(default=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "groups",
                    models.ManyToManyField(
                        blank=True,
                        help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.group",
                        verbose_name="groups",
                    ),
                ),
                (
                    "user_permissions",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Specific permissions for this user.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.permission",
                        verbose_name="user permissions",
                    ),
                ),
            ],
            options={
                "verbose_name": "user",
                "verbose_name_plural": "users",
                "abstract": False,
            },
            managers=[
                ("objects", campusconnect.users.models.UserManager()),
            ],
        ),
    ]
