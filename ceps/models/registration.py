# models/registration.py
from sqlalchemy import Index, UniqueConstraint

from ceps.extensions import db
from .base import BaseModel


class RegistrationStatus:
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'

    ALL = (PENDING, APPROVED, REJECTED)


class EventRegistration(BaseModel):
    __tablename__ = 'event_registrations'

    event_id = db.Column(db.String(36), db.ForeignKey('events.id'), nullable=False, index=True)
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    user_name = db.Column(db.String(120), nullable=False)  # Name at registration time
    status = db.Column(db.String(10), nullable=False, default=RegistrationStatus.PENDING)

    # Relationships
    event = db.relationship('Event', back_populates='registrations')
    user = db.relationship('User', back_populates='registrations')

    __table_args__ = (
        # One registration per account per event
        UniqueConstraint('event_id', 'user_id', name='uq_registration_event_user'),
        Index('idx_registration_user_status', 'user_id', 'status'),
        Index('idx_registration_event_status', 'event_id', 'status'),
    )

    def set_status(self, status):
        """Move to any of the known statuses; every transition is allowed."""
        if status not in RegistrationStatus.ALL:
            raise ValueError(f"Unknown registration status: {status}")
        self.status = status
        return self

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'userName': self.user_name,
            'status': self.status,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f'<EventRegistration {self.event_id}/{self.user_id} - {self.status}>'
