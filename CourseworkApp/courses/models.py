"""Course domain models: Course and CourseMembership."""

from django.db import models
from django.conf import settings

from simple_history.models import HistoricalRecords

from CourseworkApp.core.choices import MemberRole
from CourseworkApp.courses.querysets import CourseQuerySet


User = settings.AUTH_USER_MODEL

class Course(models.Model):
    """A course owned by a user that hosts coursework activities.

    Fields:
        title: Human readable course title.
        owner: FK to user who owns/administers the course.
        created_at / updated_at: Timestamps.
        history: Audit history (django-simple-history).
    """
    title = models.CharField(max_length=200)
    owner = models.ForeignKey(User, on_delete=models.PROTECT, related_name="owned_courses")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    history = HistoricalRecords()

    objects = CourseQuerySet.as_manager()

    def __str__(self) -> str:
        return f"{self.title} (#{self.pk})"

class CourseMembership(models.Model):
    """Role assignment of a user in a course (teacher or student).

    Creating a row is a role assignment and deleting it a role unassignment;
    both trigger marker re-allocation for the course's courseworks.

    Constraints:
        uq_course_user: Prevent duplicate membership rows.
    """
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="memberships")
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="course_memberships")
    role = models.CharField(max_length=16, choices=MemberRole.choices)
    created_at = models.DateTimeField(auto_now_add=True)
    history = HistoricalRecords()

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["course", "user"], name="uq_course_user"),
        ]

    def __str__(self) -> str:
        return f"{self.user} -> {self.course} ({self.role})"
