"""Per-recipient decision on whether a deadline change is worth telling them about."""

from dataclasses import dataclass

from CourseworkApp.domain.deadlines.changes import DeadlineChangeSet, DeadlineKind
from CourseworkApp.domain.deadlines.interfaces import SubmissionState


@dataclass(frozen=True)
class NotificationDecision:
    suppressed: bool
    kinds: tuple[DeadlineKind, ...] = ()

    @classmethod
    def suppress(cls) -> "NotificationDecision":
        return cls(suppressed=True)


def decide(
    change_set: DeadlineChangeSet,
    submission: SubmissionState | None,
    release_date: int | None,
    now: int,
) -> NotificationDecision:
    """Apply the suppression rules in order, first match wins.

    1. The recipient's individual feedback release date has passed: every
       deadline is moot for them.
    2. Only the submission deadline moved and the recipient has an open
       (not finalised) submission.
    3. Otherwise mention every changed deadline.

    An unset release date counts as passed.
    """
    if release_date is None or release_date <= now:
        return NotificationDecision.suppress()

    # "Has submitted" here means a submission exists and is not yet finalised.
    has_open_submission = submission is not None and not submission.finalised
    if change_set.only_submission_changed and has_open_submission:
        return NotificationDecision.suppress()

    return NotificationDecision(suppressed=False, kinds=change_set.changed_kinds)
