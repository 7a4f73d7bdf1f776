"""Core app configuration and startup checks for upload sniffing and coursework settings."""

import magic
from django.apps import AppConfig
from django.core.checks import register, Error, Warning as CheckWarning
from django.utils.module_loading import import_string


class CoreConfig(AppConfig):
    """Registers system checks for libmagic and the `COURSEWORK_*` settings."""
    default_auto_field = "django.db.models.BigAutoField"
    name = "CourseworkApp.core"

    def ready(self):
        from CourseworkApp.core.conf import coursework_settings

        @register()
        def libmagic_check(app_configs, **kwargs):
            """Uploads are MIME-sniffed, so libmagic must be usable."""
            try:
                magic.from_buffer(b"%PDF-1.4\n", mime=True)
            except Exception as exc:
                return [Error(f"libmagic not available: {exc}", id="core.E001")]
            return []

        @register()
        def coursework_settings_check(app_configs, **kwargs):
            conf = coursework_settings()
            messages = []
            if conf.max_upload_mb <= 0:
                messages.append(Error("COURSEWORK_MAX_UPLOAD_MB must be positive.", id="core.E002"))
            if conf.allocator:
                try:
                    import_string(conf.allocator)
                except ImportError as exc:
                    messages.append(Error(f"COURSEWORK_ALLOCATOR cannot be imported: {exc}", id="core.E003"))
            else:
                messages.append(CheckWarning(
                    "COURSEWORK_ALLOCATOR is not set; marker allocation will not run.",
                    id="core.W001",
                ))
            return messages
