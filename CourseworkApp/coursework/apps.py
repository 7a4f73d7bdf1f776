"""Coursework app configuration (registers signal handlers)."""

from django.apps import AppConfig

class CourseworkConfig(AppConfig):
    """AppConfig for coursework activities (submissions, feedback, deadlines, gradebook)."""
    default_auto_field = "django.db.models.BigAutoField"
    name = "CourseworkApp.coursework"

    def ready(self):
        """Import signal handlers to connect Django model signals."""
        from CourseworkApp.coursework import signals
