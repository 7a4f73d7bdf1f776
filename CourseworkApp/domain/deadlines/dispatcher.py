"""Fan-out of deadline-change notifications to enrolled students."""

import logging
import time
from collections.abc import Callable

from CourseworkApp.domain.deadlines.composer import compose_body, compose_subject
from CourseworkApp.domain.deadlines.eligibility import decide
from CourseworkApp.domain.deadlines.events import DeadlineChanged
from CourseworkApp.domain.deadlines.interfaces import (
    Localization,
    MessagingGateway,
    NotificationPayload,
    Recipient,
    ReleaseDateResolver,
    RosterService,
    SubmissionLookup,
)

logger = logging.getLogger(__name__)


class DeadlineChangeDispatcher:
    """Tells every eligible student which deadlines of a coursework moved.

    Each recipient is handled on its own: a failure for one student is logged
    and the loop carries on with the rest.
    """

    def __init__(
        self,
        roster: RosterService,
        submissions: SubmissionLookup,
        release_dates: ReleaseDateResolver,
        localization: Localization,
        gateway: MessagingGateway,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.roster = roster
        self.submissions = submissions
        self.release_dates = release_dates
        self.localization = localization
        self.gateway = gateway
        self.clock = clock

    def dispatch(self, event: DeadlineChanged) -> bool:
        """Send one message per eligible recipient; always returns True once done."""
        if not event.change_set.any_changed:
            return True

        now = int(self.clock())
        sent = 0
        for recipient in self.roster.list_enrolled_students(event.coursework_id):
            try:
                if self._notify(event, recipient, now):
                    sent += 1
            except Exception:
                logger.exception(
                    "Deadline change notice for coursework %s failed for user %s",
                    event.coursework_id, recipient.user_id,
                )
        logger.info("Sent %d deadline change notices for coursework %s", sent, event.coursework_id)
        return True

    def _notify(self, event: DeadlineChanged, recipient: Recipient, now: int) -> bool:
        submission = self.submissions.find_submission(event.coursework_id, recipient.user_id)
        if submission is None:
            return False

        release_date = self.release_dates.effective_individual_feedback_date(event.coursework_id, recipient.user_id)
        decision = decide(event.change_set, submission, release_date, now)
        if decision.suppressed:
            logger.debug("Deadline change notice suppressed for user %s", recipient.user_id)
            return False

        body = compose_body(decision.kinds, event.change_set, event.coursework_name, release_date, self.localization)
        if not body:
            return False

        payload = NotificationPayload(
            sender_id=event.user_from,
            recipient_id=recipient.user_id,
            subject=compose_subject(event.coursework_name, self.localization),
            body=body,
            course_id=event.course_id,
        )
        if self.gateway.send(payload) is False:
            logger.warning("Messaging gateway rejected deadline change notice for user %s", recipient.user_id)
            return False
        return True
