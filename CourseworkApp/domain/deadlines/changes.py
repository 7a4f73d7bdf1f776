"""Deadline-change detection for coursework updates.

A coursework carries three deadlines (submission, general feedback and the
base individual feedback date). When an update is saved the old and new
values are compared and the result is packed into an immutable
`DeadlineChangeSet`. Unset deadlines may arrive as ``None`` or ``0``; both
normalise to ``None`` so switching between them is never a change.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

Deadline = datetime | int | float | None


class DeadlineKind(str, Enum):
    """The three deadline kinds, declared in the order messages mention them."""
    SUBMISSION = "submission"
    GENERAL_FEEDBACK = "general_feedback"
    INDIVIDUAL_FEEDBACK = "individual_feedback"


def normalize(value: Deadline) -> int | None:
    """Return epoch seconds for a deadline value, or None when it is unset."""
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.timestamp()
    seconds = int(value)
    return seconds or None


@dataclass(frozen=True)
class DeadlineChange:
    kind: DeadlineKind
    old: int | None
    new: int | None

    @property
    def changed(self) -> bool:
        return self.old != self.new


@dataclass(frozen=True)
class DeadlineChangeSet:
    """Old/new values of every deadline kind for one coursework update."""
    submission: DeadlineChange
    general_feedback: DeadlineChange
    individual_feedback: DeadlineChange

    def __iter__(self):
        return iter((self.submission, self.general_feedback, self.individual_feedback))

    def get(self, kind: DeadlineKind) -> DeadlineChange:
        return getattr(self, kind.value)

    @property
    def changed_kinds(self) -> tuple[DeadlineKind, ...]:
        return tuple(change.kind for change in self if change.changed)

    @property
    def any_changed(self) -> bool:
        return bool(self.changed_kinds)

    @property
    def only_submission_changed(self) -> bool:
        return self.changed_kinds == (DeadlineKind.SUBMISSION,)

    def as_dict(self) -> dict[str, dict[str, int | None]]:
        """Plain representation used in event payloads and logs."""
        return {change.kind.value: {"old": change.old, "new": change.new} for change in self}


def detect_changes(
    old: tuple[Deadline, Deadline, Deadline],
    new: tuple[Deadline, Deadline, Deadline],
) -> DeadlineChangeSet:
    """Compare (submission, general feedback, individual feedback) before and after an update."""
    changes = [
        DeadlineChange(kind=kind, old=normalize(before), new=normalize(after))
        for kind, before, after in zip(DeadlineKind, old, new, strict=True)
    ]
    return DeadlineChangeSet(*changes)
