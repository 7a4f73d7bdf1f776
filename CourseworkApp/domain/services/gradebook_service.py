"""Gradebook synchronisation for courseworks.

The grading configuration is encoded in `Coursework.grade`:
    > 0  numeric grade out of `grade` (minimum 0)
    < 0  scale whose id is `-grade`
      0  text feedback only
"""

import logging
from collections.abc import Mapping

from django.db import transaction

from CourseworkApp.core.choices import GradeType
from CourseworkApp.coursework.models import Coursework, GradeItem, GradebookGrade

logger = logging.getLogger(__name__)

RESET = "reset"


def grade_item_params(coursework: Coursework) -> dict:
    """Gradebook column settings derived from the coursework's grade configuration."""
    params = {
        "course": coursework.course,
        "item_name": coursework.name,
        "id_number": str(coursework.pk),
        "grade_type": coursework.grade_type,
        "grade_max": None,
        "grade_min": None,
        "scale_id": None,
    }
    if coursework.grade_type == GradeType.VALUE:
        params["grade_max"] = coursework.grade
        params["grade_min"] = 0
    elif coursework.grade_type == GradeType.SCALE:
        params["scale_id"] = -coursework.grade
    return params


@transaction.atomic
def grade_item_update(coursework: Coursework, grades: Mapping[int, float | None] | str | None = None) -> GradeItem:
    """Create or refresh the coursework's grade item.

    Args:
        coursework: Source of the item name and grade configuration.
        grades: Optional `{user_id: value}` to store, or "reset" to clear every stored grade.

    Returns:
        The up to date GradeItem.
    """
    item, created = GradeItem.objects.update_or_create(
        coursework=coursework, defaults=grade_item_params(coursework)
    )
    if grades == RESET:
        item.grades.all().delete()
    elif grades:
        for user_id, value in grades.items():
            GradebookGrade.objects.update_or_create(item=item, user_id=user_id, defaults={"value": value})
    logger.debug("Grade item %s for coursework %s %s", item.pk, coursework.pk, "created" if created else "updated")
    return item


def grade_item_delete(coursework: Coursework) -> bool:
    """Remove the coursework's grade item (and its grades); False if there was none."""
    deleted, _ = GradeItem.objects.filter(coursework=coursework).delete()
    return bool(deleted)
