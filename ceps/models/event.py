# models/event.py
from sqlalchemy import Index

from ceps.extensions import db
from .base import BaseModel


class EventStatus:
    """Conventional event statuses. The column accepts free text."""
    UPCOMING = 'upcoming'
    ONGOING = 'ongoing'
    COMPLETED = 'completed'

    ALL = (UPCOMING, ONGOING, COMPLETED)


class Event(BaseModel):
    __tablename__ = 'events'

    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    date = db.Column(db.DateTime, nullable=False)
    venue = db.Column(db.String(200), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=EventStatus.UPCOMING)
    created_by_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)

    # Relationships
    creator = db.relationship('User', back_populates='created_events')
    registrations = db.relationship(
        'EventRegistration',
        back_populates='event',
        cascade='all, delete-orphan',
        order_by='EventRegistration.created_at'
    )
    attendance_records = db.relationship('Attendance', back_populates='event', cascade='all, delete-orphan')
    trainers = db.relationship('Trainer', back_populates='event')
    feedback = db.relationship('Feedback', back_populates='event')

    __table_args__ = (
        Index('idx_event_status', 'status'),
        Index('idx_event_date', 'date'),
    )

    def __repr__(self):
        return f'<Event {self.title}>'

    def registration_for(self, user_id):
        """Return the caller's registration on this event, if any."""
        return next((r for r in self.registrations if r.user_id == user_id), None)

    def to_dict(self, include_registrations=True):
        result = {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'date': self.date.isoformat() if self.date else None,
            'venue': self.venue,
            'status': self.status,
            'createdBy': self.creator.to_summary() if self.creator else self.created_by_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_registrations:
            result['registeredUsers'] = [r.to_dict() for r in self.registrations]
        return result

    def to_summary(self):
        """Short form used when an event is joined into another record."""
        return {
            'id': self.id,
            'title': self.title,
            'date': self.date.isoformat() if self.date else None,
            'venue': self.venue,
            'status': self.status
        }
