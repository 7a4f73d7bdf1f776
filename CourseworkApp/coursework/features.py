"""Capabilities a coursework activity advertises to the platform."""

from django.utils.translation import gettext_lazy as _

from CourseworkApp.core.choices import Feature

VIEW_ACTIONS: tuple[str, ...] = ("view",)
POST_ACTIONS: tuple[str, ...] = ("upload",)
EXTRA_CAPABILITIES: tuple[str, ...] = ("site:accessallgroups", "site:viewfullnames")
GRADING_AREAS = {"submissions": _("Submission")}

SUPPORTED_FEATURES: dict[str, bool] = {
    Feature.GROUPS: True,
    Feature.GROUPINGS: True,
    Feature.GROUPMEMBERSONLY: False,
    Feature.MOD_INTRO: True,
    Feature.COMPLETION_TRACKS_VIEWS: False,
    Feature.COMPLETION_HAS_RULES: False,
    Feature.GRADE_HAS_GRADE: True,
    Feature.GRADE_OUTCOMES: False,
    Feature.BACKUP: True,
    Feature.SHOW_DESCRIPTION: True,
    Feature.ADVANCED_GRADING: True,
    Feature.PLAGIARISM: True,
}


def supports(feature: str) -> bool | None:
    """True/False for known features, None when the feature is unknown."""
    return SUPPORTED_FEATURES.get(feature)


def feature_summary() -> dict:
    """Everything the activity advertises, in a JSON-friendly shape."""
    return {
        "supports": {str(feature): supported for feature, supported in SUPPORTED_FEATURES.items()},
        "view_actions": list(VIEW_ACTIONS),
        "post_actions": list(POST_ACTIONS),
        "extra_capabilities": list(EXTRA_CAPABILITIES),
        "grading_areas": {area: str(label) for area, label in GRADING_AREAS.items()},
    }
