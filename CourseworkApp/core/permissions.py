"""Custom DRF permission classes for course and coursework access control."""

from rest_framework.permissions import BasePermission, SAFE_METHODS
from rest_framework.request import Request
from django.shortcuts import get_object_or_404
from typing import Any

from CourseworkApp.courses.models import Course
from CourseworkApp.core.access import course_from, is_teacher, is_owner


class IsCourseTeacher(BasePermission):
    """
    Grants write access if the user is a teacher of the target course.
    Supports nested routes by resolving the course from the `course_pk` kwarg.
    Read (SAFE_METHODS) always allowed (object filtering handled separately).
    """
    def _course_from_view(self, view: Any) -> Course | None:
        if hasattr(view, "_resolved_course"):
            return view._resolved_course
        course = None
        if "course_pk" in view.kwargs:
            course = get_object_or_404(Course, pk=view.kwargs["course_pk"])
            view._resolved_course = course
        return course

    def has_permission(self, request: Request, view: Any) -> bool:
        if request.method in SAFE_METHODS:
            return True
        course = self._course_from_view(view)
        if course:
            return is_teacher(request.user, course)
        # If course not inferable (e.g. top-level detail), defer to object checks
        return True

    def has_object_permission(self, request: Request, view: Any, obj: Any) -> bool:
        return is_teacher(request.user, course_from(obj))


class IsCourseTeacherOrOwner(BasePermission):
    def has_object_permission(self, request: Request, view: Any, obj: Any) -> bool:
        course = course_from(obj)
        if not course:
            return False
        return is_owner(request.user, course) or is_teacher(request.user, course)
