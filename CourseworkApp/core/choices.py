"""Typed enumerations (TextChoices) for roles, grade types, file areas and activity features."""
from django.db import models

class UserRole(models.TextChoices):
    """System-level role assigned to a user account."""
    TEACHER = "TEACHER", "Teacher"
    STUDENT = "STUDENT", "Student"

class MemberRole(models.TextChoices):
    """Role of a user within a specific course context."""
    TEACHER = "TEACHER", "Teacher"
    STUDENT = "STUDENT", "Student"

class GradeType(models.TextChoices):
    """How a coursework is graded in the gradebook (selected by the sign of `Coursework.grade`)."""
    VALUE = "VALUE", "Numeric value"
    SCALE = "SCALE", "Scale"
    TEXT = "TEXT", "Text only"

class FileArea(models.TextChoices):
    """Areas under which coursework files are stored and served."""
    SUBMISSION = "submission", "Submission files"
    FEEDBACK = "feedback", "Feedback files"

class CalendarEventType(models.TextChoices):
    DUE = "due", "Due"

class Feature(models.TextChoices):
    """Optional activity features the platform may ask a coursework about."""
    GROUPS = "groups", "Groups"
    GROUPINGS = "groupings", "Groupings"
    GROUPMEMBERSONLY = "groupmembersonly", "Group members only"
    MOD_INTRO = "mod_intro", "Intro"
    COMPLETION_TRACKS_VIEWS = "completion_tracks_views", "Completion tracks views"
    COMPLETION_HAS_RULES = "completion_has_rules", "Completion has rules"
    GRADE_HAS_GRADE = "grade_has_grade", "Has grade"
    GRADE_OUTCOMES = "grade_outcomes", "Outcomes"
    BACKUP = "backup", "Backup"
    SHOW_DESCRIPTION = "show_description", "Show description"
    ADVANCED_GRADING = "advanced_grading", "Advanced grading"
    PLAGIARISM = "plagiarism", "Plagiarism"
