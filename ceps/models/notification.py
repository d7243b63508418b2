# models/notification.py
import json

from ceps.extensions import db
from .base import BaseModel
from .user import RoleType

DEFAULT_RECIPIENTS = [RoleType.STUDENT]


class Notification(BaseModel):
    __tablename__ = 'notifications'

    sender_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    recipients = db.Column(db.Text, nullable=False, default=json.dumps(DEFAULT_RECIPIENTS))  # JSON list of roles

    sender = db.relationship('User')

    def get_recipients(self):
        """Get list of recipient roles for this notification."""
        if not self.recipients:
            return list(DEFAULT_RECIPIENTS)
        try:
            return json.loads(self.recipients)
        except ValueError:
            return list(DEFAULT_RECIPIENTS)

    def set_recipients(self, recipients):
        self.recipients = json.dumps(list(recipients or DEFAULT_RECIPIENTS))

    def to_dict(self):
        return {
            'id': self.id,
            'sender': self.sender.to_summary() if self.sender else self.sender_id,
            'title': self.title,
            'message': self.message,
            'recipients': self.get_recipients(),
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f'<Notification {self.title}>'
