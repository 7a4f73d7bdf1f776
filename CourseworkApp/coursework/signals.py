"""Signal handlers for coursework: marker re-allocation on role changes and deadline change notices."""

from typing import Any

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from CourseworkApp.courses.models import CourseMembership
from CourseworkApp.coursework.models import Coursework
from CourseworkApp.domain.deadlines.adapters import (
    DjangoLocalization,
    OrmRosterService,
    OrmSubmissionLookup,
    PersonalDeadlineReleaseResolver,
)
from CourseworkApp.domain.deadlines.dispatcher import DeadlineChangeDispatcher
from CourseworkApp.domain.deadlines.events import DeadlineChanged, deadline_changed
from CourseworkApp.domain.services import allocation_service
from CourseworkApp.messaging.gateway import NotificationGateway


@receiver(post_save, sender=CourseMembership)
def reallocate_on_role_assigned(
    sender: type[CourseMembership],
    instance: CourseMembership,
    created: bool,
    **kwargs: Any,
) -> None:
    """A new or changed course role may alter who marks what."""
    allocation_service.role_assigned(instance)


@receiver(post_delete, sender=CourseMembership)
def reallocate_on_role_unassigned(sender: type[CourseMembership], instance: CourseMembership, **kwargs: Any) -> None:
    allocation_service.role_unassigned(instance)


@receiver(post_save, sender=Coursework)
def reallocate_on_coursework_updated(
    sender: type[Coursework],
    instance: Coursework,
    created: bool,
    **kwargs: Any,
) -> None:
    if created:
        return
    allocation_service.coursework_updated(instance)


def build_dispatcher() -> DeadlineChangeDispatcher:
    return DeadlineChangeDispatcher(
        roster=OrmRosterService(),
        submissions=OrmSubmissionLookup(),
        release_dates=PersonalDeadlineReleaseResolver(),
        localization=DjangoLocalization(),
        gateway=NotificationGateway(),
    )


@receiver(deadline_changed)
def send_deadline_changed_notices(sender: Any, event: DeadlineChanged, **kwargs: Any) -> bool:
    """Message enrolled students about the deadlines that moved."""
    return build_dispatcher().dispatch(event)
