# services/notification_service.py
"""Notification log service. Every reader sees every notification."""

import logging

from sqlalchemy.orm import joinedload

from ceps.errors import ValidationError
from ceps.extensions import db
from ceps.models.notification import Notification, DEFAULT_RECIPIENTS
from ceps.models.user import RoleType
from ceps.utils.validation import is_blank


class NotificationService:
    """Service class for broadcast notifications."""

    @staticmethod
    def _normalize_recipients(recipients):
        if not recipients:
            return list(DEFAULT_RECIPIENTS)
        if isinstance(recipients, str):
            recipients = [recipients]
        if not isinstance(recipients, (list, tuple)):
            raise ValidationError('Recipients must be a list of roles')

        normalized = []
        for role in recipients:
            role = str(role).strip().lower()
            if role not in RoleType.ALL:
                raise ValidationError(f"Invalid recipient role: {role}")
            if role not in normalized:
                normalized.append(role)
        return normalized or list(DEFAULT_RECIPIENTS)

    @staticmethod
    def send_notification(sender, title, message, recipients=None):
        logger = logging.getLogger('notification_service')

        if is_blank(title) or is_blank(message):
            raise ValidationError('Title and message are required.')

        notification = Notification(
            sender_id=sender.id,
            title=str(title).strip(),
            message=str(message).strip()
        )
        notification.set_recipients(NotificationService._normalize_recipients(recipients))

        db.session.add(notification)
        db.session.commit()

        logger.info(f"Notification sent by {sender.id} to {notification.get_recipients()}: {notification.title}")
        return notification

    @staticmethod
    def list_notifications():
        return (
            db.session.query(Notification)
            .options(joinedload(Notification.sender))
            .order_by(Notification.created_at.desc())
            .all()
        )
