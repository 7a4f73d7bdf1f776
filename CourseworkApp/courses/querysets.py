"""Custom querysets encapsulating role-based filtering for courses, courseworks, submissions and feedback."""

from django.db.models import QuerySet, Q, Count
from typing import Self


class CourseQuerySet(QuerySet):
    """QuerySet with helpers for course membership."""

    def visible_to(self, user) -> Self:
        """Courses the user owns or is a member of (nothing for anonymous users)."""
        if not user or not user.is_authenticated:
            return self.none()
        return self.filter(Q(owner=user) | Q(memberships__user=user)).distinct()


class CourseworkQuerySet(QuerySet):
    """QuerySet helpers for coursework visibility."""

    def visible_to(self, user) -> Self:
        """Courseworks of courses the user owns or belongs to."""
        if not user or not user.is_authenticated:
            return self.none()
        return self.filter(
            Q(course__owner=user) |
            Q(course__memberships__user=user)
        ).distinct()


class SubmissionQuerySet(QuerySet):
    def for_student(self, user) -> Self:
        return self.filter(student=user)


class FeedbackQuerySet(QuerySet):
    def assessor_stage(self) -> Self:
        """Initial assessor feedbacks (excludes moderations and agreed final grades)."""
        return self.filter(
            is_moderation=False,
            is_final_grade=False,
            stage_identifier__startswith="assessor",
        )

    def counts_per_submission(self) -> Self:
        """One row per submission annotated with `feedback_count`."""
        return self.values("submission").annotate(feedback_count=Count("id"))
