"""Coursework-specific settings with defaults, read from Django settings."""

from dataclasses import dataclass

from django.conf import settings


@dataclass(frozen=True)
class CourseworkSettings:
    allocator: str | None
    date_format: str
    max_upload_mb: int
    teachers_cache_timeout: int


def coursework_settings() -> CourseworkSettings:
    """Return the current coursework settings (re-read on each call so overrides apply)."""
    return CourseworkSettings(
        allocator=getattr(settings, "COURSEWORK_ALLOCATOR", None),
        date_format=getattr(settings, "COURSEWORK_DATE_FORMAT", "D, d M Y, H:i"),
        max_upload_mb=int(getattr(settings, "COURSEWORK_MAX_UPLOAD_MB", 5)),
        teachers_cache_timeout=int(getattr(settings, "COURSEWORK_TEACHERS_CACHE_TIMEOUT", 3600)),
    )
