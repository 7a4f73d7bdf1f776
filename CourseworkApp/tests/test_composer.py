from CourseworkApp.domain.deadlines.changes import DeadlineKind, detect_changes
from CourseworkApp.domain.deadlines.composer import compose_body, compose_lines, compose_subject

from fakes import FakeLocalization

L10N = FakeLocalization()


def test_lines_follow_fixed_order_whatever_the_input_order():
    change_set = detect_changes((1, 2, 3), (10, 20, 3))
    kinds = [DeadlineKind.GENERAL_FEEDBACK, DeadlineKind.SUBMISSION]
    body = compose_body(kinds, change_set, "Essay", None, L10N)
    assert body.split("\n") == [
        "The submission deadline for Essay has changed to @10.",
        "The general feedback deadline for Essay has changed to @20.",
    ]


def test_individual_feedback_line_uses_recipient_release_date():
    change_set = detect_changes((1, 2, 3), (1, 2, 30))
    lines = compose_lines([DeadlineKind.INDIVIDUAL_FEEDBACK], change_set, "Essay", 45, L10N)
    assert lines == ["The individual feedback deadline for Essay has changed to @45."]


def test_removed_deadline_reads_as_no_deadline():
    change_set = detect_changes((1, None, None), (None, None, None))
    lines = compose_lines([DeadlineKind.SUBMISSION], change_set, "Essay", None, L10N)
    assert lines == ["The submission deadline for Essay has changed to no deadline."]


def test_no_kinds_gives_empty_body():
    change_set = detect_changes((1, 2, 3), (10, 20, 30))
    assert compose_body([], change_set, "Essay", None, L10N) == ""


def test_subject():
    assert compose_subject("Essay", L10N) == "A deadline has changed for Essay"
