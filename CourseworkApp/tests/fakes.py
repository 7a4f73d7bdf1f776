"""In-memory collaborators for exercising the deadline engine without a database."""

from CourseworkApp.domain.deadlines.interfaces import NotificationPayload, Recipient, SubmissionState

LABELS = {
    "submission": "Submission",
    "general_feedback": "General feedback",
    "individual_feedback": "Individual feedback",
    "deadline_changed": "The %(type)s deadline for %(name)s has changed to %(date)s.",
    "deadline_changed_subject": "A deadline has changed for %(name)s",
    "no_deadline": "no deadline",
}


class FakeLocalization:
    def label(self, key: str) -> str:
        return LABELS[key]

    def format_date(self, timestamp: int) -> str:
        return f"@{timestamp}"


class FakeRoster:
    def __init__(self, *user_ids: int) -> None:
        self.recipients = [Recipient(user_id=uid) for uid in user_ids]

    def list_enrolled_students(self, assignment_id: int) -> list[Recipient]:
        return list(self.recipients)


class FakeSubmissions:
    def __init__(self, states: dict[int, SubmissionState]) -> None:
        self.states = states

    def find_submission(self, assignment_id: int, user_id: int) -> SubmissionState | None:
        return self.states.get(user_id)


class FakeReleaseDates:
    def __init__(self, dates: dict[int, int | None], default: int | None = None) -> None:
        self.dates = dates
        self.default = default

    def effective_individual_feedback_date(self, assignment_id: int, user_id: int) -> int | None:
        return self.dates.get(user_id, self.default)


class RecordingGateway:
    def __init__(self, fail_for=(), reject_for=()) -> None:
        self.sent: list[NotificationPayload] = []
        self.fail_for = set(fail_for)
        self.reject_for = set(reject_for)

    def send(self, payload: NotificationPayload) -> bool:
        if payload.recipient_id in self.fail_for:
            raise RuntimeError("mail server down")
        if payload.recipient_id in self.reject_for:
            return False
        self.sent.append(payload)
        return True

    def recipients(self) -> list[int]:
        return [payload.recipient_id for payload in self.sent]
