import pytest
from django.core.cache import cache
from model_bakery import baker

from CourseworkApp.core.choices import MemberRole
from CourseworkApp.domain.services import course_service


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def teacher(db):
    u = baker.make("users.User", email="teacher@example.com", role="TEACHER", first_name="Tess", last_name="Teacher")
    u.set_password("pass1234")
    u.save()
    return u


@pytest.fixture
def student(db):
    u = baker.make("users.User", email="student@example.com", role="STUDENT")
    u.set_password("pass1234")
    u.save()
    return u


@pytest.fixture
def course(teacher):
    return course_service.create_course(teacher, "Algorithms")


@pytest.fixture
def enrol():
    def _enrol(course, user, role=MemberRole.STUDENT):
        return baker.make("courses.CourseMembership", course=course, user=user, role=role)
    return _enrol
