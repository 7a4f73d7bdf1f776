"""ORM-backed implementations of the deadline engine's collaborators."""

from datetime import datetime, timezone as dt_timezone
from typing import Any

from django.utils import dateformat, timezone
from django.utils.translation import gettext, gettext_lazy as _

from CourseworkApp.core.conf import coursework_settings
from CourseworkApp.coursework.models import Coursework, PersonalDeadline, Submission
from CourseworkApp.domain.deadlines.changes import Deadline, normalize
from CourseworkApp.domain.deadlines.interfaces import Recipient, SubmissionState

DEADLINE_FIELDS = ("deadline", "general_feedback", "individual_feedback")

LABELS = {
    "submission": _("Submission"),
    "general_feedback": _("General feedback"),
    "individual_feedback": _("Individual feedback"),
    "deadline_changed": _("The %(type)s deadline for %(name)s has changed to %(date)s."),
    "deadline_changed_subject": _("A deadline has changed for %(name)s"),
    "no_deadline": _("no deadline"),
}


class OrmAssignmentStore:
    """Reads and writes coursework deadlines; callers hold the transaction."""

    def get_deadlines(self, assignment_id: int) -> tuple[Deadline, Deadline, Deadline]:
        return Coursework.objects.select_for_update().values_list(*DEADLINE_FIELDS).get(pk=assignment_id)

    def update(self, assignment_id: int, fields: dict[str, Any]) -> None:
        coursework = Coursework.objects.get(pk=assignment_id)
        for name, value in fields.items():
            setattr(coursework, name, value)
        coursework.save()


class OrmRosterService:
    def list_enrolled_students(self, assignment_id: int) -> list[Recipient]:
        coursework = Coursework.objects.get(pk=assignment_id)
        return [
            Recipient(user_id=user_id)
            for user_id in coursework.students().order_by("id").values_list("id", flat=True)
        ]


class OrmSubmissionLookup:
    def find_submission(self, assignment_id: int, user_id: int) -> SubmissionState | None:
        finalised = (
            Submission.objects.for_student(user_id).filter(coursework_id=assignment_id)
            .values_list("finalised", flat=True)
            .first()
        )
        if finalised is None:
            return None
        return SubmissionState(finalised=finalised)


class PersonalDeadlineReleaseResolver:
    """Individual feedback date pushed back by a student's deadline extension.

    With personal deadlines enabled, a student whose personal deadline falls
    after the coursework deadline gets individual feedback that much later.
    """

    def __init__(self) -> None:
        self._courseworks: dict[int, Coursework] = {}

    def _coursework(self, assignment_id: int) -> Coursework:
        if assignment_id not in self._courseworks:
            self._courseworks[assignment_id] = Coursework.objects.get(pk=assignment_id)
        return self._courseworks[assignment_id]

    def effective_individual_feedback_date(self, assignment_id: int, user_id: int) -> int | None:
        coursework = self._coursework(assignment_id)
        release = normalize(coursework.individual_feedback)
        deadline = normalize(coursework.deadline)
        if release is None or deadline is None or not coursework.personal_deadlines_enabled:
            return release
        personal = (
            PersonalDeadline.objects.filter(coursework_id=assignment_id, student_id=user_id)
            .values_list("personal_deadline", flat=True)
            .first()
        )
        if personal is None:
            return release
        return release + max(0, normalize(personal) - deadline)


class DjangoLocalization:
    def __init__(self, date_format: str | None = None) -> None:
        self.date_format = date_format or coursework_settings().date_format

    def label(self, key: str) -> str:
        if key not in LABELS:
            return gettext(key)
        return str(LABELS[key])

    def format_date(self, timestamp: int) -> str:
        moment = timezone.localtime(datetime.fromtimestamp(timestamp, tz=dt_timezone.utc))
        return dateformat.format(moment, self.date_format)
