"""Deadline-changed event schema and the signal it is published on."""

from dataclasses import dataclass

from django.dispatch import Signal

from CourseworkApp.domain.deadlines.changes import DeadlineChangeSet


@dataclass(frozen=True)
class DeadlineChanged:
    coursework_id: int
    coursework_name: str
    course_id: int
    change_set: DeadlineChangeSet
    user_from: int | None


# Sent with sender=Coursework and event=DeadlineChanged.
deadline_changed = Signal()
