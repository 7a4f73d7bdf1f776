"""Serializers for users, courses, memberships, courseworks and personal deadlines."""

from rest_framework import serializers
from django.contrib.auth import get_user_model
from django.utils import timezone

from CourseworkApp.courses.models import Course
from CourseworkApp.coursework.models import Coursework, PersonalDeadline
from CourseworkApp.core.choices import MemberRole
from CourseworkApp.core.text import seconds_to_string

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public, safe representation of a user."""

    class Meta:
        model = User
        fields = ["id", "email", "first_name", "last_name", "role"]


class CourseWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Course
        fields = ["title"]


class CourseReadSerializer(serializers.ModelSerializer):
    """Serializer for reading course details including owner."""
    owner = UserSerializer()

    class Meta:
        model = Course
        fields = ["id", "title", "owner", "created_at", "updated_at"]


class MembershipWriteSerializer(serializers.Serializer):
    """Serializer to assign a course role to a user."""

    user_id = serializers.IntegerField()
    role = serializers.ChoiceField(choices=MemberRole.choices)


class CourseworkWriteSerializer(serializers.ModelSerializer):
    """Serializer for creating/updating a coursework's settings and deadlines."""

    submission_notification = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        required=False,
        help_text="Ids of users notified about new submissions.",
    )

    class Meta:
        model = Coursework
        fields = [
            "name",
            "intro",
            "deadline",
            "general_feedback",
            "individual_feedback",
            "grade",
            "allocation_enabled",
            "sampling_enabled",
            "personal_deadlines_enabled",
            "submission_notification",
        ]
        extra_kwargs = {
            "deadline": {"help_text": "Submission deadline; null for none."},
            "general_feedback": {"help_text": "General feedback release date."},
            "individual_feedback": {"help_text": "Base individual feedback release date."},
            "grade": {"help_text": "Max grade (>0), negated scale id (<0) or 0 for text only."},
        }


class CourseworkReadSerializer(serializers.ModelSerializer):
    grade_type = serializers.CharField(read_only=True)
    submission_notification = serializers.ListField(
        source="submission_notification_ids", child=serializers.IntegerField(), read_only=True
    )

    class Meta:
        model = Coursework
        fields = [
            "id",
            "course",
            "name",
            "intro",
            "deadline",
            "general_feedback",
            "individual_feedback",
            "grade",
            "grade_type",
            "allocation_enabled",
            "sampling_enabled",
            "personal_deadlines_enabled",
            "submission_notification",
            "time_created",
            "time_modified",
        ]


class PersonalDeadlineWriteSerializer(serializers.Serializer):
    student_id = serializers.IntegerField()
    personal_deadline = serializers.DateTimeField()


class PersonalDeadlineReadSerializer(serializers.ModelSerializer):
    time_remaining = serializers.SerializerMethodField(help_text="Time left until the personal deadline; empty once passed.")

    class Meta:
        model = PersonalDeadline
        fields = ["id", "coursework", "student", "personal_deadline", "time_remaining"]

    def get_time_remaining(self, obj: PersonalDeadline) -> str:
        left = (obj.personal_deadline - timezone.now()).total_seconds()
        return seconds_to_string(max(0, int(left)))


class NavLinkSerializer(serializers.Serializer):
    label = serializers.CharField()
    url = serializers.CharField()
