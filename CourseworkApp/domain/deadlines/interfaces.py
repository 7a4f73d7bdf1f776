"""Collaborator contracts used by the deadline-change notification engine."""

from dataclasses import dataclass
from typing import Any, Protocol

from CourseworkApp.domain.deadlines.changes import Deadline


@dataclass(frozen=True)
class Recipient:
    """A student enrolled in the coursework."""
    user_id: int


@dataclass(frozen=True)
class SubmissionState:
    finalised: bool


@dataclass(frozen=True)
class NotificationPayload:
    """Message handed to the messaging gateway for one recipient."""
    sender_id: int | None
    recipient_id: int
    subject: str
    body: str
    course_id: int
    notification: bool = True
    name: str = "deadlinechanged"


class AssignmentStore(Protocol):
    def get_deadlines(self, assignment_id: int) -> tuple[Deadline, Deadline, Deadline]: ...

    def update(self, assignment_id: int, fields: dict[str, Any]) -> None: ...


class RosterService(Protocol):
    def list_enrolled_students(self, assignment_id: int) -> list[Recipient]: ...


class SubmissionLookup(Protocol):
    def find_submission(self, assignment_id: int, user_id: int) -> SubmissionState | None: ...


class ReleaseDateResolver(Protocol):
    def effective_individual_feedback_date(self, assignment_id: int, user_id: int) -> int | None: ...


class Localization(Protocol):
    def label(self, key: str) -> str: ...

    def format_date(self, timestamp: int) -> str: ...


class MessagingGateway(Protocol):
    def send(self, payload: NotificationPayload) -> bool: ...
