"""Role & object access helpers."""

from typing import Any

from django.core.cache import cache
from django.utils import timezone

from CourseworkApp.core.choices import MemberRole
from CourseworkApp.core.conf import coursework_settings
from CourseworkApp.courses.models import Course, CourseMembership
from CourseworkApp.coursework.models import Coursework, Submission, Feedback
from CourseworkApp.domain.deadlines.adapters import PersonalDeadlineReleaseResolver


def course_from(obj: Any) -> Course | None:
    if obj is None:
        return None
    if isinstance(obj, Course):
        return obj
    if isinstance(obj, Coursework):
        return obj.course
    if isinstance(obj, Submission):
        return obj.coursework.course
    if isinstance(obj, Feedback):
        return obj.submission.coursework.course
    return getattr(obj, "course", None)


def teachers_cache_key(coursework_id: int) -> str:
    return f"coursework:{coursework_id}:teachers"


def coursework_teacher_ids(coursework: Coursework) -> list[int]:
    """Ids of the coursework's teachers, cached until the next role change."""
    return cache.get_or_set(
        teachers_cache_key(coursework.pk),
        lambda: list(coursework.teachers().values_list("id", flat=True)),
        coursework_settings().teachers_cache_timeout,
    )


def is_owner(user, course: Course | None) -> bool:
    return bool(user and course and course.owner_id == user.id)


def is_teacher(user, course: Course | None) -> bool:
    if not (user and course):
        return False
    return CourseMembership.objects.filter(
        course=course, user=user, role=MemberRole.TEACHER
    ).exists()


def is_student(user, course: Course | None) -> bool:
    if not (user and course):
        return False
    return CourseMembership.objects.filter(
        course=course, user=user, role=MemberRole.STUDENT
    ).exists()


def is_coursework_teacher(user, coursework: Coursework) -> bool:
    return bool(user and user.is_authenticated and user.id in coursework_teacher_ids(coursework))


def can_submit(user, coursework: Coursework) -> bool:
    return is_student(user, coursework.course)


def can_show_submission(user, submission: Submission) -> bool:
    """Authors see their own submission; teachers see every submission."""
    if submission.student_id == user.id:
        return True
    return is_coursework_teacher(user, submission.coursework)


def feedback_released(submission: Submission, now: int | None = None) -> bool:
    """True once the student's individual feedback release date has passed."""
    now = int(timezone.now().timestamp()) if now is None else now
    release = PersonalDeadlineReleaseResolver().effective_individual_feedback_date(
        submission.coursework_id, submission.student_id
    )
    return release is not None and release <= now


def can_show_feedback(user, feedback: Feedback) -> bool:
    """Teachers and the assessor always; the student only for released, non-moderation feedback."""
    if feedback.assessor_id == user.id:
        return True
    submission = feedback.submission
    if is_coursework_teacher(user, submission.coursework):
        return True
    if submission.student_id != user.id or feedback.is_moderation:
        return False
    return feedback_released(submission)
