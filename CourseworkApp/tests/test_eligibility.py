import pytest

from CourseworkApp.domain.deadlines.changes import DeadlineKind, detect_changes
from CourseworkApp.domain.deadlines.eligibility import decide
from CourseworkApp.domain.deadlines.interfaces import SubmissionState

NOW = 1_000_000
OPEN = SubmissionState(finalised=False)
FINALISED = SubmissionState(finalised=True)

ONLY_SUBMISSION = detect_changes((10, 20, 30), (11, 20, 30))
ALL_THREE = detect_changes((10, 20, 30), (11, 21, 31))


@pytest.mark.parametrize("submission", [None, OPEN, FINALISED])
@pytest.mark.parametrize("release", [NOW - 1, NOW])
def test_passed_release_date_suppresses_everything(submission, release):
    assert decide(ALL_THREE, submission, release, NOW).suppressed


def test_unset_release_date_counts_as_passed():
    assert decide(ALL_THREE, FINALISED, None, NOW).suppressed
    assert decide(ONLY_SUBMISSION, FINALISED, None, NOW).suppressed


def test_future_release_date_mentions_every_changed_deadline():
    decision = decide(ALL_THREE, FINALISED, NOW + 1, NOW)
    assert not decision.suppressed
    assert decision.kinds == (
        DeadlineKind.SUBMISSION,
        DeadlineKind.GENERAL_FEEDBACK,
        DeadlineKind.INDIVIDUAL_FEEDBACK,
    )


def test_open_submission_suppressed_when_only_submission_deadline_moved():
    assert decide(ONLY_SUBMISSION, OPEN, NOW + 10, NOW).suppressed


def test_finalised_submission_notified_when_only_submission_deadline_moved():
    decision = decide(ONLY_SUBMISSION, FINALISED, NOW + 10, NOW)
    assert not decision.suppressed
    assert decision.kinds == (DeadlineKind.SUBMISSION,)


def test_open_submission_notified_when_other_deadlines_moved_too():
    change_set = detect_changes((10, 20, 30), (11, 21, 30))
    decision = decide(change_set, OPEN, NOW + 10, NOW)
    assert decision.kinds == (DeadlineKind.SUBMISSION, DeadlineKind.GENERAL_FEEDBACK)
