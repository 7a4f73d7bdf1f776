import logging

from CourseworkApp.domain.deadlines.changes import detect_changes
from CourseworkApp.domain.deadlines.dispatcher import DeadlineChangeDispatcher
from CourseworkApp.domain.deadlines.events import DeadlineChanged
from CourseworkApp.domain.deadlines.interfaces import SubmissionState

from fakes import FakeLocalization, FakeReleaseDates, FakeRoster, FakeSubmissions, RecordingGateway

NOW = 1_700_000_000
FUTURE = NOW + 86400
PAST = NOW - 86400
T1, T2 = NOW + 3600, NOW + 7200


def make_event(old, new):
    return DeadlineChanged(
        coursework_id=7,
        coursework_name="Essay",
        course_id=3,
        change_set=detect_changes(old, new),
        user_from=1,
    )


def make_dispatcher(roster, submissions, release_dates, gateway):
    return DeadlineChangeDispatcher(
        roster=roster,
        submissions=submissions,
        release_dates=release_dates,
        localization=FakeLocalization(),
        gateway=gateway,
        clock=lambda: NOW,
    )


def test_nothing_changed_sends_nothing():
    gateway = RecordingGateway()
    dispatcher = make_dispatcher(
        FakeRoster(10), FakeSubmissions({10: SubmissionState(True)}), FakeReleaseDates({}, FUTURE), gateway
    )
    assert dispatcher.dispatch(make_event((T1, 0, None), (T1, None, 0))) is True
    assert gateway.sent == []


def test_payload_contents():
    gateway = RecordingGateway()
    dispatcher = make_dispatcher(
        FakeRoster(10), FakeSubmissions({10: SubmissionState(True)}), FakeReleaseDates({}, FUTURE), gateway
    )
    dispatcher.dispatch(make_event((T1, T1, None), (T2, T2, None)))

    [payload] = gateway.sent
    assert payload.sender_id == 1
    assert payload.recipient_id == 10
    assert payload.course_id == 3
    assert payload.notification is True
    assert payload.name == "deadlinechanged"
    assert payload.subject == "A deadline has changed for Essay"
    assert payload.body.split("\n") == [
        f"The submission deadline for Essay has changed to @{T2}.",
        f"The general feedback deadline for Essay has changed to @{T2}.",
    ]


def test_missing_submission_is_skipped():
    gateway = RecordingGateway()
    dispatcher = make_dispatcher(FakeRoster(10, 11), FakeSubmissions({11: SubmissionState(True)}), FakeReleaseDates({}, FUTURE), gateway)
    dispatcher.dispatch(make_event((T1, T1, T1), (T2, T2, T2)))
    assert gateway.recipients() == [11]


def test_failure_for_one_recipient_does_not_stop_the_rest(caplog):
    gateway = RecordingGateway(fail_for={11}, reject_for={12})
    states = {uid: SubmissionState(True) for uid in (10, 11, 12, 13)}
    dispatcher = make_dispatcher(FakeRoster(10, 11, 12, 13), FakeSubmissions(states), FakeReleaseDates({}, FUTURE), gateway)

    with caplog.at_level(logging.WARNING, logger="CourseworkApp.domain.deadlines.dispatcher"):
        assert dispatcher.dispatch(make_event((T1, None, None), (T2, None, None))) is True

    assert gateway.recipients() == [10, 13]
    assert "failed for user 11" in caplog.text
    assert "rejected deadline change notice for user 12" in caplog.text


def test_end_to_end_submission_deadline_moved():
    # S1 (20) has no submission record, S2 (21) is finalised, S3 (22) is past release.
    gateway = RecordingGateway()
    submissions = FakeSubmissions({21: SubmissionState(True), 22: SubmissionState(True)})
    release_dates = FakeReleaseDates({20: FUTURE, 21: FUTURE, 22: PAST})
    dispatcher = make_dispatcher(FakeRoster(20, 21, 22), submissions, release_dates, gateway)

    dispatcher.dispatch(make_event((T1, None, None), (T2, None, None)))

    assert gateway.recipients() == [21]
    assert gateway.sent[0].body == f"The submission deadline for Essay has changed to @{T2}."


def test_open_submission_told_when_feedback_date_moves_too():
    gateway = RecordingGateway()
    dispatcher = make_dispatcher(
        FakeRoster(10), FakeSubmissions({10: SubmissionState(False)}), FakeReleaseDates({}, FUTURE), gateway
    )
    dispatcher.dispatch(make_event((T1, None, None), (T2, None, None)))
    assert gateway.sent == []

    dispatcher.dispatch(make_event((T1, T1, None), (T2, T2, None)))
    assert gateway.recipients() == [10]


def test_unset_release_date_sends_nothing():
    gateway = RecordingGateway()
    dispatcher = make_dispatcher(
        FakeRoster(10), FakeSubmissions({10: SubmissionState(True)}), FakeReleaseDates({}, None), gateway
    )
    assert dispatcher.dispatch(make_event((T1, None, None), (T2, None, None))) is True
    assert gateway.sent == []
