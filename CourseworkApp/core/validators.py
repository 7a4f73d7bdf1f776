"""Validation helpers for uploaded submission and feedback files."""

from django.core.exceptions import ValidationError
from typing import Any

import magic

from CourseworkApp.core.conf import coursework_settings

ALLOWED_SUBMISSION_MIME: set[str] = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/zip",
    "text/plain",
}
ALLOWED_FEEDBACK_MIME: set[str] = ALLOWED_SUBMISSION_MIME | {
    "image/png",
    "image/jpeg",
}

def validate_file_size(file_obj: Any) -> None:
    """Ensure file size does not exceed the configured upload limit."""
    max_mb = coursework_settings().max_upload_mb
    if file_obj and file_obj.size > max_mb * 1024 * 1024:
        raise ValidationError(f"File exceeds {max_mb} MB limit.")

def _probe_mime(file_obj: Any) -> str | None:
    """Read initial bytes to detect MIME type using libmagic."""
    if not file_obj:
        return None
    header = file_obj.read(4096)
    file_obj.seek(0)
    return magic.from_buffer(header, mime=True)

def validate_submission_mime(file_obj: Any) -> None:
    """Validate that a submitted file has an allowed MIME type."""
    mime = _probe_mime(file_obj)
    if mime and mime not in ALLOWED_SUBMISSION_MIME:
        raise ValidationError(f"Unsupported submission mime: {mime}")

def validate_feedback_mime(file_obj: Any) -> None:
    """Validate that a feedback attachment has an allowed MIME type."""
    mime = _probe_mime(file_obj)
    if mime and mime not in ALLOWED_FEEDBACK_MIME:
        raise ValidationError(f"Unsupported feedback mime: {mime}")
