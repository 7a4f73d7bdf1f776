"""Domain service functions for the coursework activity lifecycle.

Only course teachers create, update or delete courseworks. Updating a
coursework compares its three deadlines before and after the save; when any
of them moved a `DeadlineChanged` event is published once the transaction
commits, and enrolled students are told about the new dates.
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone as dt_timezone
from typing import Any

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied, ValidationError

from CourseworkApp.core.choices import CalendarEventType, MemberRole
from CourseworkApp.courses.models import Course, CourseMembership, User
from CourseworkApp.coursework.models import CalendarEvent, Coursework, Feedback, PersonalDeadline
from CourseworkApp.domain.deadlines.adapters import DEADLINE_FIELDS, OrmAssignmentStore
from CourseworkApp.domain.deadlines.changes import detect_changes, normalize
from CourseworkApp.domain.deadlines.events import DeadlineChanged, deadline_changed
from CourseworkApp.domain.services import gradebook_service

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({
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
})


def _ensure_teacher(user: User, course: Course) -> None:
    """Ensure user is a teacher of course."""
    if not CourseMembership.objects.filter(course=course, user=user, role=MemberRole.TEACHER).exists():
        raise PermissionDenied("Teacher role required")


def _as_datetime(value: Any) -> datetime | None:
    """Deadlines arrive as datetimes or epoch seconds; 0 and None both mean unset."""
    if isinstance(value, datetime):
        return value
    seconds = normalize(value)
    return None if seconds is None else datetime.fromtimestamp(seconds, tz=dt_timezone.utc)


def _join_ids(value: Any) -> str:
    """Store notified users as a comma-separated id list."""
    if not value:
        return ""
    if isinstance(value, str):
        return value
    return ",".join(str(getattr(item, "pk", item)) for item in value)


def _clean_fields(data: dict[str, Any]) -> dict[str, Any]:
    unknown = set(data) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError({name: "Unknown coursework field." for name in sorted(unknown)})
    fields = dict(data)
    for name in DEADLINE_FIELDS:
        if name in fields:
            fields[name] = _as_datetime(fields[name])
    if "submission_notification" in fields:
        fields["submission_notification"] = _join_ids(fields["submission_notification"])
    return fields


def _sync_calendar_event(coursework: Coursework) -> None:
    """Keep a single "due" calendar event matching the submission deadline."""
    events = CalendarEvent.objects.filter(coursework=coursework, event_type=CalendarEventType.DUE)
    if not coursework.deadline:
        events.delete()
        return
    CalendarEvent.objects.update_or_create(
        coursework=coursework,
        event_type=CalendarEventType.DUE,
        defaults={
            "course": coursework.course,
            "name": coursework.name,
            "description": coursework.intro,
            "time_start": coursework.deadline,
            "duration": 0,
        },
    )


@transaction.atomic
def create_coursework(teacher: User, course: Course, data: dict[str, Any]) -> Coursework:
    """Create a coursework (teacher only) with its calendar event and grade item.

    Args:
        teacher: Initiating user (must be a teacher of the course).
        course: Course hosting the activity.
        data: Coursework fields; see EDITABLE_FIELDS.

    Returns:
        The newly created Coursework.
    """
    _ensure_teacher(teacher, course)
    fields = _clean_fields(data)
    coursework = Coursework.objects.create(course=course, **fields)
    _sync_calendar_event(coursework)
    gradebook_service.grade_item_update(coursework)
    logger.info("Coursework %s created in course %s by user %s", coursework.pk, course.pk, teacher.pk)
    return coursework


@transaction.atomic
def update_coursework(actor: User, coursework_id: int, data: dict[str, Any]) -> Coursework:
    """Update a coursework (teacher only) and announce any deadline change.

    The old deadlines are read under a row lock in the same transaction that
    writes the new ones. Deadlines missing from `data` keep their value.

    Raises:
        Coursework.DoesNotExist: If there is no such coursework.
        PermissionDenied: If actor is not a teacher of the course.
    """
    store = OrmAssignmentStore()
    old = store.get_deadlines(coursework_id)
    coursework = Coursework.objects.select_related("course").get(pk=coursework_id)
    _ensure_teacher(actor, coursework.course)

    fields = _clean_fields(data)
    new = tuple(fields.get(name, current) for name, current in zip(DEADLINE_FIELDS, old))
    change_set = detect_changes(old, new)

    store.update(coursework_id, fields)
    coursework.refresh_from_db()
    _sync_calendar_event(coursework)
    gradebook_service.grade_item_update(coursework)

    if change_set.any_changed:
        event = DeadlineChanged(
            coursework_id=coursework.pk,
            coursework_name=coursework.name,
            course_id=coursework.course_id,
            change_set=change_set,
            user_from=actor.pk,
        )
        logger.info("Deadlines changed for coursework %s: %s", coursework.pk, change_set.as_dict())
        transaction.on_commit(lambda: deadline_changed.send(sender=Coursework, event=event))
    return coursework


@transaction.atomic
def delete_coursework(actor: User, coursework_id: int) -> bool:
    """Delete a coursework and everything depending on it.

    Returns:
        False when the coursework does not exist, True once deleted.
    """
    coursework = Coursework.objects.select_related("course").filter(pk=coursework_id).first()
    if coursework is None:
        return False
    _ensure_teacher(actor, coursework.course)
    gradebook_service.grade_item_delete(coursework)
    coursework.delete()
    logger.info("Coursework %s deleted by user %s", coursework_id, actor.pk)
    return True


def scale_used(coursework_id: int, scale_id: int) -> bool:
    """Whether the given coursework is graded with the scale."""
    return bool(scale_id) and Coursework.objects.filter(pk=coursework_id, grade=-scale_id).exists()


def scale_used_anywhere(scale_id: int) -> bool:
    return bool(scale_id) and Coursework.objects.filter(grade=-scale_id).exists()


def plagiarism_dates(coursework: Coursework) -> dict[str, Any]:
    """Dates a plagiarism checker needs, as epoch seconds (0 when unset)."""
    return {
        "timeavailable": normalize(coursework.time_created) or 0,
        "timedue": normalize(coursework.deadline) or 0,
        "feedback": str(normalize(coursework.individual_feedback) or 0),
    }


def personal_deadline_passed(coursework: Coursework) -> bool:
    """True if any student's personal deadline for the coursework is already over."""
    return PersonalDeadline.objects.filter(
        coursework=coursework, personal_deadline__lt=timezone.now()
    ).exists()


def current_max_feedbacks(coursework: Coursework) -> int:
    """Largest number of initial assessor feedbacks on any single submission.

    Used to stop the number of markers being set below what already exists.
    """
    rows: Iterable[dict] = (
        Feedback.objects.filter(submission__coursework=coursework)
        .assessor_stage()
        .counts_per_submission()
    )
    return max((row["feedback_count"] for row in rows), default=0)


@transaction.atomic
def set_personal_deadline(actor: User, coursework: Coursework, student: User, personal_deadline: Any) -> PersonalDeadline:
    """Create or move a student's personal deadline (teacher only)."""
    _ensure_teacher(actor, coursework.course)
    if not coursework.personal_deadlines_enabled:
        raise ValidationError("Personal deadlines are not enabled for this coursework.")
    if not CourseMembership.objects.filter(course=coursework.course, user=student, role=MemberRole.STUDENT).exists():
        raise ValidationError("User is not a student of the course.")
    when = _as_datetime(personal_deadline)
    if when is None:
        raise ValidationError("A personal deadline is required.")
    deadline, _ = PersonalDeadline.objects.update_or_create(
        coursework=coursework,
        student=student,
        defaults={"personal_deadline": when, "created_by": actor},
    )
    return deadline
