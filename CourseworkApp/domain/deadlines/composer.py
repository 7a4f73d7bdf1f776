"""Builds the plain-text body of a deadline-change message."""

from collections.abc import Iterable

from CourseworkApp.domain.deadlines.changes import DeadlineChangeSet, DeadlineKind
from CourseworkApp.domain.deadlines.interfaces import Localization

LINE_TEMPLATE_KEY = "deadline_changed"
SUBJECT_TEMPLATE_KEY = "deadline_changed_subject"
NO_DEADLINE_KEY = "no_deadline"


def _new_date(kind: DeadlineKind, change_set: DeadlineChangeSet, release_date: int | None) -> int | None:
    if kind is DeadlineKind.INDIVIDUAL_FEEDBACK and release_date is not None:
        return release_date
    return change_set.get(kind).new


def compose_lines(
    kinds: Iterable[DeadlineKind],
    change_set: DeadlineChangeSet,
    assignment_name: str,
    release_date: int | None,
    localization: Localization,
) -> list[str]:
    """One line per included kind, always in submission, general, individual order.

    The individual feedback line reports the recipient's own release date.
    """
    included = set(kinds)
    lines = []
    for kind in DeadlineKind:
        if kind not in included:
            continue
        date = _new_date(kind, change_set, release_date)
        lines.append(localization.label(LINE_TEMPLATE_KEY) % {
            "type": localization.label(kind.value).lower(),
            "name": assignment_name,
            "date": localization.format_date(date) if date is not None else localization.label(NO_DEADLINE_KEY),
        })
    return lines


def compose_body(
    kinds: Iterable[DeadlineKind],
    change_set: DeadlineChangeSet,
    assignment_name: str,
    release_date: int | None,
    localization: Localization,
) -> str:
    return "\n".join(compose_lines(kinds, change_set, assignment_name, release_date, localization))


def compose_subject(assignment_name: str, localization: Localization) -> str:
    return localization.label(SUBJECT_TEMPLATE_KEY) % {"name": assignment_name}
