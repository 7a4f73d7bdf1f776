"""Settings navigation links shown for a coursework."""

from dataclasses import dataclass

from django.urls import reverse
from django.utils.translation import gettext as _

from CourseworkApp.core.access import is_coursework_teacher
from CourseworkApp.coursework.models import Coursework


@dataclass(frozen=True)
class NavLink:
    label: str
    url: str


def settings_navigation(user, coursework: Coursework) -> list[NavLink]:
    """Links to the marker allocation and personal deadline screens, for teachers only.

    Allocation is only offered when allocation or sampling is in use.
    """
    links: list[NavLink] = []
    if not is_coursework_teacher(user, coursework):
        return links
    if coursework.allocation_enabled or coursework.sampling_enabled:
        links.append(NavLink(
            _("Allocate assessors and moderators"),
            reverse("course-courseworks-allocate", kwargs={"course_pk": coursework.course_id, "pk": coursework.pk}),
        ))
    if coursework.personal_deadlines_enabled:
        links.append(NavLink(
            _("Set personal deadlines"),
            reverse("course-courseworks-personal-deadlines", kwargs={"course_pk": coursework.course_id, "pk": coursework.pk}),
        ))
    return links
