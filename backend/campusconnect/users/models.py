# campusconnect/users/models.py
from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager


class UserManager(BaseUserManager):
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("email must be set")

        email = self.normalize_email(str(email).strip()).lower()
        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, email, password, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)
        extra_fields.setdefault("role", User.Role.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password=password, **extra_fields)


class User(AbstractUser):
    class Role(models.TextChoices):
        JUNIOR = "JUNIOR", "Junior"
        SENIOR = "SENIOR", "Senior"
        ALUMNI = "ALUMNI", "Alumni"
        ADMIN = "ADMIN", "Admin"

    MENTOR_ROLES = (Role.SENIOR, Role.ALUMNI)

    # email login, no username
    username = None
    email = models.EmailField(unique=True)

    name = models.CharField(max_length=100, blank=True, default="")
    role = models.CharField(
        max_length=10, choices=Role.choices, default=Role.JUNIOR, db_index=True
    )
    bio = models.TextField(blank=True, default="")
    tags = models.JSONField(default=list, blank=True)  # ["python", "ml"]
    avatar_url = models.CharField(max_length=500, blank=True, default="")

    # academic
    department = models.CharField(max_length=100, blank=True, default="")
    enrollment_year = models.PositiveIntegerField(null=True, blank=True)
    graduation_year = models.PositiveIntegerField(null=True, blank=True)
    current_year_of_study = models.CharField(max_length=30, blank=True, default="")

    # career
    current_company = models.CharField(max_length=150, blank=True, default="")
    job_title = models.CharField(max_length=150, blank=True, default="")
    linked_in = models.CharField(max_length=300, blank=True, default="")
    location = models.CharField(max_length=150, blank=True, default="")

    # profile visibility
    show_email = models.BooleanField(default=False)
    show_enrollment_years = models.BooleanField(default=True)
    show_career_info = models.BooleanField(default=True)

    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    @property
    def is_mentor(self) -> bool:
        return self.role in self.MENTOR_ROLES

    def __str__(self):
        return f"{self.id} {self.email}"
