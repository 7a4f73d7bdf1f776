"""Messaging gateway: stores a notification and emails it to the recipient."""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail
from django.db import transaction

from CourseworkApp.domain.deadlines.interfaces import NotificationPayload
from CourseworkApp.messaging.models import Notification

logger = logging.getLogger(__name__)


class NotificationGateway:
    """Delivers payloads as `Notification` rows plus an email when the user has an address.

    The row and the mail succeed or fail together; mail errors propagate
    to the caller and leave no notification behind.
    """

    def __init__(self, component: str = "coursework") -> None:
        self.component = component

    @transaction.atomic
    def send(self, payload: NotificationPayload) -> bool:
        recipient = get_user_model().objects.get(pk=payload.recipient_id)
        notification = Notification.objects.create(
            component=self.component,
            name=payload.name,
            sender_id=payload.sender_id,
            recipient=recipient,
            subject=payload.subject,
            body=payload.body,
            course_id=payload.course_id,
            is_notification=payload.notification,
        )
        if recipient.email:
            send_mail(
                payload.subject,
                payload.body,
                getattr(settings, "DEFAULT_FROM_EMAIL", None),
                [recipient.email],
                fail_silently=False,
            )
        logger.debug("Notification %s delivered to user %s", notification.pk, recipient.pk)
        return True
