"""Coursework domain models: Coursework, Submission, Feedback, PersonalDeadline, CalendarEvent, GradeItem, GradebookGrade."""

import os

from django.conf import settings
from django.db import models

from simple_history.models import HistoricalRecords

from CourseworkApp.core.choices import CalendarEventType, GradeType, MemberRole
from CourseworkApp.core.validators import validate_file_size, validate_submission_mime, validate_feedback_mime
from CourseworkApp.courses.models import Course
from CourseworkApp.courses.querysets import CourseworkQuerySet, SubmissionQuerySet, FeedbackQuerySet

User = settings.AUTH_USER_MODEL


class Coursework(models.Model):
    """An assessed activity in a course with submission and feedback deadlines.

    Fields:
        deadline: Submission deadline (null when no deadline is set).
        general_feedback: Date general feedback is released to the cohort.
        individual_feedback: Base date for releasing individual feedback;
            students with a personal deadline get it shifted by their extension.
        grade: >0 numeric maximum grade, <0 negated scale id, 0 text-only feedback.
        submission_notification: Comma-separated ids of users told about new submissions.
    """
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="courseworks")
    name = models.CharField(max_length=255)
    intro = models.TextField(blank=True)
    deadline = models.DateTimeField(null=True, blank=True)
    general_feedback = models.DateTimeField(null=True, blank=True)
    individual_feedback = models.DateTimeField(null=True, blank=True)
    grade = models.IntegerField(default=100)
    allocation_enabled = models.BooleanField(default=False)
    sampling_enabled = models.BooleanField(default=False)
    personal_deadlines_enabled = models.BooleanField(default=False)
    submission_notification = models.CharField(max_length=255, blank=True, default="")
    time_created = models.DateTimeField(auto_now_add=True)
    time_modified = models.DateTimeField(auto_now=True)
    history = HistoricalRecords()

    objects = CourseworkQuerySet.as_manager()

    def __str__(self) -> str:
        return f"{self.name} (#{self.pk})"

    @property
    def grade_type(self) -> str:
        if self.grade > 0:
            return GradeType.VALUE
        if self.grade < 0:
            return GradeType.SCALE
        return GradeType.TEXT

    @property
    def submission_notification_ids(self) -> list[int]:
        return [int(uid) for uid in self.submission_notification.split(",") if uid.strip()]

    def students(self) -> models.QuerySet:
        """Users enrolled as students in the coursework's course."""
        from django.contrib.auth import get_user_model
        return get_user_model().objects.filter(
            course_memberships__course_id=self.course_id,
            course_memberships__role=MemberRole.STUDENT,
        )

    def teachers(self) -> models.QuerySet:
        from django.contrib.auth import get_user_model
        return get_user_model().objects.filter(
            course_memberships__course_id=self.course_id,
            course_memberships__role=MemberRole.TEACHER,
        )


class Submission(models.Model):
    """A student's submission for a coursework (unique per coursework+student).

    `finalised` submissions are locked and can no longer be altered by the student.
    """
    coursework = models.ForeignKey(Coursework, on_delete=models.CASCADE, related_name="submissions")
    student = models.ForeignKey(User, on_delete=models.CASCADE, related_name="coursework_submissions")
    attachment = models.FileField(
        upload_to="coursework/submissions/", blank=True, null=True,
        validators=[validate_file_size, validate_submission_mime]
    )
    finalised = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    history = HistoricalRecords()

    objects = SubmissionQuerySet.as_manager()

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["coursework", "student"], name="uq_coursework_student"),
        ]

    @property
    def filename(self) -> str | None:
        return os.path.basename(self.attachment.name) if self.attachment else None


class Feedback(models.Model):
    """A marker's feedback on a submission.

    `stage_identifier` names the marking stage (assessor_1, assessor_2, final_agreed_1, ...).
    """
    submission = models.ForeignKey(Submission, on_delete=models.CASCADE, related_name="feedbacks")
    assessor = models.ForeignKey(User, on_delete=models.PROTECT, related_name="coursework_feedbacks")
    grade = models.IntegerField(null=True, blank=True)
    comment = models.TextField(blank=True)
    attachment = models.FileField(
        upload_to="coursework/feedback/", blank=True, null=True,
        validators=[validate_file_size, validate_feedback_mime]
    )
    is_moderation = models.BooleanField(default=False)
    is_final_grade = models.BooleanField(default=False)
    stage_identifier = models.CharField(max_length=32, default="assessor_1")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    history = HistoricalRecords()

    objects = FeedbackQuerySet.as_manager()

    @property
    def filename(self) -> str | None:
        return os.path.basename(self.attachment.name) if self.attachment else None


class PersonalDeadline(models.Model):
    """A student-specific submission deadline replacing the coursework one."""
    coursework = models.ForeignKey(Coursework, on_delete=models.CASCADE, related_name="personal_deadlines")
    student = models.ForeignKey(User, on_delete=models.CASCADE, related_name="personal_deadlines")
    personal_deadline = models.DateTimeField()
    created_by = models.ForeignKey(User, on_delete=models.PROTECT, related_name="+", null=True, blank=True)
    history = HistoricalRecords()

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["coursework", "student"], name="uq_personal_deadline"),
        ]


class CalendarEvent(models.Model):
    """Course calendar entry for a coursework deadline."""
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="calendar_events")
    coursework = models.ForeignKey(Coursework, on_delete=models.CASCADE, related_name="calendar_events")
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    event_type = models.CharField(max_length=16, choices=CalendarEventType.choices, default=CalendarEventType.DUE)
    time_start = models.DateTimeField()
    duration = models.PositiveIntegerField(default=0)


class GradeItem(models.Model):
    """Gradebook column for a coursework."""
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="grade_items")
    coursework = models.OneToOneField(Coursework, on_delete=models.CASCADE, related_name="grade_item")
    item_name = models.CharField(max_length=255)
    id_number = models.CharField(max_length=64, blank=True)
    grade_type = models.CharField(max_length=8, choices=GradeType.choices)
    grade_max = models.IntegerField(null=True, blank=True)
    grade_min = models.IntegerField(null=True, blank=True)
    scale_id = models.IntegerField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)


class GradebookGrade(models.Model):
    """A student's grade in a gradebook column."""
    item = models.ForeignKey(GradeItem, on_delete=models.CASCADE, related_name="grades")
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="gradebook_grades")
    value = models.FloatField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["item", "user"], name="uq_gradebook_item_user"),
        ]
