# campusconnect/users/serializers.py
from rest_framework import serializers
from django.utils import timezone
from .models import User

YEAR_LABELS = {1: "First Year", 2: "Second Year", 3: "Third Year", 4: "Final Year"}

EMAIL_FIELDS = ("email",)
ENROLLMENT_FIELDS = ("enrollmentYear", "graduationYear", "currentYearOfStudy", "yearOfStudy")
CAREER_FIELDS = ("currentCompany", "jobTitle", "linkedIn", "location")


def compute_year_of_study(graduation_year, now_year=None):
    """Four-year programme assumed: enrollment = graduation - 4."""
    if not graduation_year:
        return None
    now_year = now_year or timezone.now().year
    enrollment_year = int(graduation_year) - 4
    if now_year < enrollment_year or now_year > int(graduation_year):
        return None
    return YEAR_LABELS.get(now_year - enrollment_year + 1)


def normalize_avatar_url(value, request=None):
    if not value:
        return None
    value = str(value)
    if value.startswith("http://") or value.startswith("https://"):
        return value
    if not value.startswith("/"):
        value = "/" + value
    if request is not None:
        return request.build_absolute_uri(value)
    return value


def normalize_tags(value):
    # accepts ["a", "b"] or "a, b"
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        raise serializers.ValidationError("tags must be a list or a comma-separated string")
    return [str(t).strip() for t in items if str(t).strip()]


class TagListField(serializers.Field):
    def to_internal_value(self, data):
        return normalize_tags(data)

    def to_representation(self, value):
        return list(value or [])


class UserPublicSerializer(serializers.ModelSerializer):
    """Profile as other users see it, with visibility flags applied."""

    avatarUrl = serializers.SerializerMethodField()
    enrollmentYear = serializers.IntegerField(source="enrollment_year", read_only=True)
    graduationYear = serializers.IntegerField(source="graduation_year", read_only=True)
    currentYearOfStudy = serializers.CharField(source="current_year_of_study", read_only=True)
    yearOfStudy = serializers.SerializerMethodField()
    currentCompany = serializers.CharField(source="current_company", read_only=True)
    jobTitle = serializers.CharField(source="job_title", read_only=True)
    linkedIn = serializers.CharField(source="linked_in", read_only=True)
    tags = TagListField(read_only=True)
    createdAt = serializers.DateTimeField(source="date_joined", read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "name",
            "email",
            "role",
            "bio",
            "tags",
            "avatarUrl",
            "department",
            "enrollmentYear",
            "graduationYear",
            "currentYearOfStudy",
            "yearOfStudy",
            "currentCompany",
            "jobTitle",
            "linkedIn",
            "location",
            "createdAt",
        ]
        read_only_fields = fields

    def get_avatarUrl(self, obj: User):
        return normalize_avatar_url(obj.avatar_url, self.context.get("request"))

    def get_yearOfStudy(self, obj: User):
        return obj.current_year_of_study or compute_year_of_study(obj.graduation_year)

    def hidden_fields(self, obj: User):
        hidden = []
        if not obj.show_email:
            hidden.extend(EMAIL_FIELDS)
        if not obj.show_enrollment_years:
            hidden.extend(ENROLLMENT_FIELDS)
        if not obj.show_career_info:
            hidden.extend(CAREER_FIELDS)
        return hidden

    def to_representation(self, obj):
        data = super().to_representation(obj)
        for field in self.hidden_fields(obj):
            data.pop(field, None)
        return data


class UserMeSerializer(UserPublicSerializer):
    """The owner's own profile: nothing hidden, visibility settings included."""

    profileVisibility = serializers.SerializerMethodField()

    class Meta(UserPublicSerializer.Meta):
        fields = UserPublicSerializer.Meta.fields + ["profileVisibility"]
        read_only_fields = fields

    def get_profileVisibility(self, obj: User):
        return {
            "showEmail": obj.show_email,
            "showEnrollmentYears": obj.show_enrollment_years,
            "showCareerInfo": obj.show_career_info,
        }

    def hidden_fields(self, obj: User):
        return []


class ProfileVisibilitySerializer(serializers.Serializer):
    showEmail = serializers.BooleanField(source="show_email", required=False)
    showEnrollmentYears = serializers.BooleanField(
        source="show_enrollment_years", required=False
    )
    showCareerInfo = serializers.BooleanField(source="show_career_info", required=False)


class ProfileUpdateSerializer(serializers.ModelSerializer):
    tags = TagListField(required=False, allow_null=True)
    enrollmentYear = serializers.IntegerField(
        source="enrollment_year", required=False, allow_null=True, min_value=1900, max_value=2200
    )
    graduationYear = serializers.IntegerField(
        source="graduation_year", required=False, allow_null=True, min_value=1900, max_value=2200
    )
    currentYearOfStudy = serializers.CharField(
        source="current_year_of_study", required=False, allow_blank=True, allow_null=True, max_length=30
    )
    currentCompany = serializers.CharField(
        source="current_company", required=False, allow_blank=True, max_length=150
    )
    jobTitle = serializers.CharField(source="job_title", required=False, allow_blank=True, max_length=150)
    linkedIn = serializers.CharField(source="linked_in", required=False, allow_blank=True, max_length=300)
    profileVisibility = ProfileVisibilitySerializer(source="*", required=False)

    class Meta:
        model = User
        fields = [
            "name",
            "bio",
            "tags",
            "department",
            "enrollmentYear",
            "graduationYear",
            "currentYearOfStudy",
            "currentCompany",
            "jobTitle",
            "linkedIn",
            "location",
            "profileVisibility",
        ]
        extra_kwargs = {
            "name": {"required": False, "allow_blank": True},
            "bio": {"required": False, "allow_blank": True},
            "department": {"required": False, "allow_blank": True},
            "location": {"required": False, "allow_blank": True},
        }

    def validate_name(self, value):
        return value.strip()

    def validate_bio(self, value):
        return value.strip()

    def validate_currentYearOfStudy(self, value):
        return (value or "").strip()

    def validate(self, attrs):
        # null tags means "leave them alone", an empty list clears them
        if attrs.get("tags", []) is None:
            attrs.pop("tags")
        return attrs

    def update(self, instance, validated_data):
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        return instance
