"""Triggers for automatic assessor/moderator allocation.

The allocation algorithm is supplied by the class named in the
`COURSEWORK_ALLOCATOR` setting. It is constructed with a coursework and asked
to `process_allocations()` whenever the people or settings it depends on
change: a role is assigned or unassigned in the course, or the coursework is
updated.
"""

import logging
from typing import Any, Protocol

from django.core.cache import cache
from django.utils.module_loading import import_string

from CourseworkApp.core.access import teachers_cache_key
from CourseworkApp.core.conf import coursework_settings
from CourseworkApp.courses.models import Course, CourseMembership
from CourseworkApp.coursework.models import Coursework

logger = logging.getLogger(__name__)


class Allocator(Protocol):
    def __init__(self, coursework: Coursework) -> None: ...

    def process_allocations(self) -> None: ...


def allocator_class() -> type[Allocator] | None:
    path = coursework_settings().allocator
    return import_string(path) if path else None


def coursework_ids_for_context(obj: Any) -> list[int]:
    """Courseworks affected by a role change at coursework or course level."""
    if isinstance(obj, Coursework):
        return [obj.pk]
    if isinstance(obj, Course):
        return list(Coursework.objects.filter(course=obj).order_by("id").values_list("id", flat=True))
    return []


def process_allocations(coursework: Coursework) -> bool:
    """Run the configured allocator for one coursework; False when none is configured."""
    cls = allocator_class()
    if cls is None:
        logger.debug("No allocator configured, skipping allocation for coursework %s", coursework.pk)
        return False
    cls(coursework).process_allocations()
    logger.info("Allocations processed for coursework %s", coursework.pk)
    return True


def _reallocate(context: Any, clear_teachers: bool) -> list[int]:
    processed = []
    for coursework_id in coursework_ids_for_context(context):
        coursework = Coursework.objects.filter(pk=coursework_id).first()
        if coursework is None:
            continue
        if clear_teachers:
            cache.delete(teachers_cache_key(coursework_id))
        process_allocations(coursework)
        processed.append(coursework_id)
    return processed


def role_assigned(membership: CourseMembership) -> list[int]:
    """Re-allocate every coursework in the course after someone joins it."""
    return _reallocate(Course.objects.filter(pk=membership.course_id).first(), clear_teachers=True)


def role_unassigned(membership: CourseMembership) -> list[int]:
    """Re-allocate after someone leaves the course.

    The cached teacher list is dropped too so a removed teacher loses access.
    """
    return _reallocate(Course.objects.filter(pk=membership.course_id).first(), clear_teachers=True)


def coursework_updated(coursework: Coursework) -> list[int]:
    return _reallocate(coursework, clear_teachers=False)
