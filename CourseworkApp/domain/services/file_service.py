"""Serving of submission and feedback files.

Files are addressed as `<filearea>/<item id>/<file name>` inside a
coursework. Downloads are always forced (`Content-Disposition: attachment`)
so uploaded content is never rendered inline by the browser.
"""

import logging
from collections.abc import Sequence

from django.db.models.fields.files import FieldFile
from django.http import FileResponse
from rest_framework.exceptions import PermissionDenied

from CourseworkApp.core.access import can_show_feedback, can_show_submission, can_submit
from CourseworkApp.core.choices import FileArea
from CourseworkApp.coursework.models import Coursework, Feedback, Submission

logger = logging.getLogger(__name__)


def file_areas(user, coursework: Coursework) -> dict[str, str]:
    """File areas the user may browse."""
    areas = {}
    if can_submit(user, coursework):
        areas[FileArea.SUBMISSION.value] = str(FileArea.SUBMISSION.label)
    return areas


def _item_id(args: Sequence[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0])
    except (TypeError, ValueError):
        return None


def _send(field_file: FieldFile, path: Sequence[str]) -> FileResponse | None:
    relative_path = "/".join(path)
    if not field_file or not relative_path:
        return None
    if field_file.name.rsplit("/", 1)[-1] != relative_path:
        return None
    if not field_file.storage.exists(field_file.name):
        return None
    return FileResponse(field_file.open("rb"), as_attachment=True, filename=relative_path)


def serve_file(user, coursework: Coursework, filearea: str, args: Sequence[str]) -> FileResponse | None:
    """Return a download response for a coursework file, or None if it cannot be served.

    Submissions the user may not see are reported as missing; feedback the
    user may not see raises PermissionDenied.
    """
    item_id = _item_id(args)
    if filearea == FileArea.SUBMISSION:
        submission = Submission.objects.select_related("coursework").filter(pk=item_id, coursework=coursework).first()
        if submission is None or not can_show_submission(user, submission):
            return None
        return _send(submission.attachment, args[1:])

    if filearea == FileArea.FEEDBACK:
        feedback = (
            Feedback.objects.select_related("submission__coursework")
            .filter(pk=item_id, submission__coursework=coursework)
            .first()
        )
        if feedback is None:
            return None
        if not can_show_feedback(user, feedback):
            logger.warning("User %s denied feedback file %s", user.pk, feedback.pk)
            raise PermissionDenied("You may not view this feedback.")
        return _send(feedback.attachment, args[1:])

    return None
