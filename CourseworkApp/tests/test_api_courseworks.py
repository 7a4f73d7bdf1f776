from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient
from model_bakery import baker

from CourseworkApp.coursework.models import Coursework
from CourseworkApp.messaging.models import Notification

pytestmark = pytest.mark.django_db

TOKEN_URL = "/api/v1/auth/token/"
COURSES_URL = "/api/v1/courses/"


def auth_client(user):
    client = APIClient()
    token_resp = client.post(TOKEN_URL, {"email": user.email, "password": "pass1234"}, format="json")
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {token_resp.data['access']}")
    return client


def courseworks_url(course_id):
    return f"{COURSES_URL}{course_id}/courseworks/"


def results(resp):
    data = resp.data
    return data["results"] if isinstance(data, dict) and "results" in data else data


def test_anonymous_requests_are_rejected():
    assert APIClient().get(COURSES_URL).status_code == 401


def test_course_create_and_membership(teacher, student):
    t_client = auth_client(teacher)
    resp = t_client.post(COURSES_URL, {"title": "Databases"}, format="json")
    assert resp.status_code == 201
    course_id = resp.data["id"]

    add = t_client.post(f"{COURSES_URL}{course_id}/members/", {"user_id": student.id, "role": "STUDENT"}, format="json")
    assert add.status_code == 200

    s_client = auth_client(student)
    assert [c["id"] for c in results(s_client.get(COURSES_URL))] == [course_id]
    denied = s_client.post(f"{COURSES_URL}{course_id}/members/", {"user_id": student.id, "role": "TEACHER"}, format="json")
    assert denied.status_code == 403

    removed = t_client.delete(f"{COURSES_URL}{course_id}/members/{student.id}/")
    assert removed.status_code == 204
    assert results(s_client.get(COURSES_URL)) == []


def test_teacher_manages_coursework_and_students_are_notified(
    teacher, student, course, enrol, django_capture_on_commit_callbacks
):
    enrol(course, student)
    t_client = auth_client(teacher)
    due = timezone.now() + timedelta(days=3)
    created = t_client.post(
        courseworks_url(course.pk),
        {
            "name": "Essay",
            "deadline": due.isoformat(),
            "individual_feedback": (due + timedelta(days=14)).isoformat(),
            "submission_notification": [teacher.pk],
        },
        format="json",
    )
    assert created.status_code == 201
    cw_id = created.data["id"]
    assert created.data["grade_type"] == "VALUE"
    assert created.data["submission_notification"] == [teacher.pk]
    baker.make("coursework.Submission", coursework=Coursework.objects.get(pk=cw_id), student=student, finalised=True)

    with django_capture_on_commit_callbacks(execute=True):
        updated = t_client.patch(
            f"{courseworks_url(course.pk)}{cw_id}/",
            {"deadline": (due + timedelta(days=2)).isoformat()},
            format="json",
        )
    assert updated.status_code == 200
    assert Notification.objects.filter(recipient=student).count() == 1

    s_client = auth_client(student)
    listed = s_client.get(courseworks_url(course.pk))
    assert [cw["id"] for cw in results(listed)] == [cw_id]
    assert s_client.patch(f"{courseworks_url(course.pk)}{cw_id}/", {"name": "Hack"}, format="json").status_code == 403

    assert t_client.delete(f"{courseworks_url(course.pk)}{cw_id}/").status_code == 204


def test_navigation_and_personal_deadlines(teacher, student, course, enrol):
    enrol(course, student)
    cw = baker.make("coursework.Coursework", course=course, personal_deadlines_enabled=True)
    t_client = auth_client(teacher)
    base = f"{courseworks_url(course.pk)}{cw.pk}/"

    nav = t_client.get(f"{base}navigation/")
    assert nav.status_code == 200
    assert [link["url"] for link in nav.data] == [f"{base}personal-deadlines/"]

    when = (timezone.now() + timedelta(days=9)).isoformat()
    set_resp = t_client.post(f"{base}personal-deadlines/", {"student_id": student.pk, "personal_deadline": when}, format="json")
    assert set_resp.status_code == 201
    listed = t_client.get(f"{base}personal-deadlines/")
    assert [row["student"] for row in listed.data] == [student.pk]
    assert listed.data[0]["time_remaining"].startswith("1 week, 1 day")

    s_client = auth_client(student)
    assert s_client.get(f"{base}navigation/").data == []
    assert s_client.get(f"{base}personal-deadlines/").status_code == 403


def test_allocate_without_allocator(settings, teacher, course):
    settings.COURSEWORK_ALLOCATOR = None
    cw = baker.make("coursework.Coursework", course=course, allocation_enabled=True)
    resp = auth_client(teacher).post(f"{courseworks_url(course.pk)}{cw.pk}/allocate/")
    assert resp.status_code == 200
    assert resp.data == {"processed": False}


def test_missing_file_is_404(teacher, course):
    cw = baker.make("coursework.Coursework", course=course)
    resp = auth_client(teacher).get(f"{courseworks_url(course.pk)}{cw.pk}/files/submission/1/essay.pdf/")
    assert resp.status_code == 404


def test_features_visible_to_course_members(teacher, student, course, enrol):
    enrol(course, student)
    cw = baker.make("coursework.Coursework", course=course)
    resp = auth_client(student).get(f"{courseworks_url(course.pk)}{cw.pk}/features/")
    assert resp.status_code == 200
    assert resp.data["supports"]["plagiarism"] is True
    assert resp.data["supports"]["grade_outcomes"] is False
    assert resp.data["view_actions"] == ["view"]
    assert resp.data["post_actions"] == ["upload"]
    assert resp.data["grading_areas"] == {"submissions": "Submission"}


def test_markers_menu_for_teachers_only(teacher, student, course, enrol):
    enrol(course, student)
    cw = baker.make("coursework.Coursework", course=course)
    url = f"{courseworks_url(course.pk)}{cw.pk}/markers/"
    resp = auth_client(teacher).get(url)
    assert resp.status_code == 200
    assert resp.data == {teacher.pk: teacher.email}
    assert auth_client(student).get(url).status_code == 403
