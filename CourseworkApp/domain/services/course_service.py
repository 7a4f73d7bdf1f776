"""Domain service functions for courses and role assignments.

Adding or removing a member is a role assignment/unassignment; the
coursework app listens to those membership changes to re-run marker
allocation. All mutating operations run inside atomic transactions.
"""
import logging

from django.db import transaction
from rest_framework.exceptions import PermissionDenied

from CourseworkApp.courses.models import Course, CourseMembership, User
from CourseworkApp.core.choices import MemberRole

logger = logging.getLogger(__name__)

@transaction.atomic
def create_course(owner: User, title: str) -> Course:
    """Create a course and enroll the owner as a teacher."""
    course = Course.objects.create(owner=owner, title=title)
    CourseMembership.objects.create(course=course, user=owner, role=MemberRole.TEACHER)
    return course

def _ensure_course_teacher(user: User, course: Course) -> None:
    """Raise PermissionDenied if user is not a teacher of the course."""
    if not CourseMembership.objects.filter(course=course, user=user, role=MemberRole.TEACHER).exists():
        raise PermissionDenied("Teacher role required")

@transaction.atomic
def assign_role(actor: User, course: Course, member: User, role: str) -> CourseMembership:
    """Give a user a role in the course, creating or changing their membership.

    Args:
        actor: Initiating user (must already be a teacher).
        course: Target course.
        member: User receiving the role.
        role: MemberRole value.

    Returns:
        The CourseMembership for the user.
    """
    _ensure_course_teacher(actor, course)
    membership, created = CourseMembership.objects.get_or_create(
        course=course,
        user=member,
        defaults={"role": role},
    )
    if not created and membership.role != role:
        membership.role = role
        membership.save(update_fields=["role"])
    logger.info("User %s assigned %s in course %s", member.pk, role, course.pk)
    return membership

@transaction.atomic
def unassign_role(actor: User, course: Course, member: User) -> bool:
    """Remove the user's membership; False if they had none.

    Rows are deleted one by one so post_delete handlers see each unassignment.
    """
    _ensure_course_teacher(actor, course)
    membership = CourseMembership.objects.filter(course=course, user=member).first()
    if membership is None:
        return False
    membership.delete()
    logger.info("User %s removed from course %s", member.pk, course.pk)
    return True
