from django.contrib.auth.models import AbstractUser
from django.db import models

from CourseworkApp.core.choices import UserRole


class User(AbstractUser):
    """Account that logs in by email; course roles live on CourseMembership.

    The email address is also where deadline change notices are mailed.
    """
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=16, choices=UserRole.choices, default=UserRole.STUDENT)
    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    def __str__(self) -> str:
        return self.get_full_name() or self.email
