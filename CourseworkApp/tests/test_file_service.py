from datetime import timedelta

import pytest
from django.core.exceptions import ValidationError
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils import timezone
from model_bakery import baker
from rest_framework.exceptions import PermissionDenied

from CourseworkApp.core.validators import validate_file_size, validate_submission_mime
from CourseworkApp.domain.services import file_service

pytestmark = pytest.mark.django_db

PDF = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n"
PNG = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00\x1f\x15\xc4\x89"


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path)
    return tmp_path


@pytest.fixture
def coursework(course):
    return baker.make("coursework.Coursework", course=course, individual_feedback=timezone.now() + timedelta(days=5))


@pytest.fixture
def submission(coursework, student, enrol):
    enrol(coursework.course, student)
    return baker.make(
        "coursework.Submission",
        coursework=coursework,
        student=student,
        attachment=SimpleUploadedFile("essay.pdf", PDF, content_type="application/pdf"),
    )


@pytest.fixture
def feedback(submission, teacher):
    return baker.make(
        "coursework.Feedback",
        submission=submission,
        assessor=teacher,
        attachment=SimpleUploadedFile("notes.pdf", PDF, content_type="application/pdf"),
    )


def read(response):
    try:
        return b"".join(response.streaming_content)
    finally:
        response.close()


def test_file_areas_for_students_only(teacher, student, coursework, enrol):
    enrol(coursework.course, student)
    assert file_service.file_areas(student, coursework) == {"submission": "Submission files"}
    assert file_service.file_areas(teacher, coursework) == {}


def test_author_downloads_submission_as_attachment(student, coursework, submission):
    response = file_service.serve_file(student, coursework, "submission", [str(submission.pk), "essay.pdf"])
    assert response["Content-Disposition"].startswith("attachment")
    assert 'filename="essay.pdf"' in response["Content-Disposition"]
    assert read(response) == PDF


def test_teacher_downloads_submission(teacher, coursework, submission):
    response = file_service.serve_file(teacher, coursework, "submission", [str(submission.pk), "essay.pdf"])
    assert read(response) == PDF


@pytest.mark.parametrize(
    "args",
    [[], ["abc", "essay.pdf"], ["999999", "essay.pdf"], None],
)
def test_bad_submission_paths_are_not_found(student, coursework, submission, args):
    if args is None:
        args = [str(submission.pk), "other.pdf"]
    assert file_service.serve_file(student, coursework, "submission", args) is None


def test_other_students_cannot_see_submission(coursework, submission, enrol):
    classmate = baker.make("users.User")
    enrol(coursework.course, classmate)
    assert file_service.serve_file(classmate, coursework, "submission", [str(submission.pk), "essay.pdf"]) is None


def test_unknown_area(student, coursework, submission):
    assert file_service.serve_file(student, coursework, "intro", [str(submission.pk), "essay.pdf"]) is None


def test_feedback_hidden_from_student_until_released(student, coursework, feedback):
    args = [str(feedback.pk), "notes.pdf"]
    with pytest.raises(PermissionDenied):
        file_service.serve_file(student, coursework, "feedback", args)

    coursework.individual_feedback = timezone.now() - timedelta(minutes=1)
    coursework.save()
    assert read(file_service.serve_file(student, coursework, "feedback", args)) == PDF


def test_moderation_feedback_never_shown_to_student(student, coursework, feedback):
    coursework.individual_feedback = timezone.now() - timedelta(minutes=1)
    coursework.save()
    feedback.is_moderation = True
    feedback.save()
    with pytest.raises(PermissionDenied):
        file_service.serve_file(student, coursework, "feedback", [str(feedback.pk), "notes.pdf"])


def test_assessor_downloads_feedback(teacher, coursework, feedback):
    response = file_service.serve_file(teacher, coursework, "feedback", [str(feedback.pk), "notes.pdf"])
    assert read(response) == PDF


def test_upload_validators(settings):
    validate_submission_mime(SimpleUploadedFile("essay.pdf", PDF))
    with pytest.raises(ValidationError):
        validate_submission_mime(SimpleUploadedFile("pixel.png", PNG))

    settings.COURSEWORK_MAX_UPLOAD_MB = 1
    validate_file_size(SimpleUploadedFile("small.txt", b"x" * 1024))
    with pytest.raises(ValidationError):
        validate_file_size(SimpleUploadedFile("big.txt", b"x" * (1024 * 1024 + 1)))
