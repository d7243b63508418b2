# models/feedback.py
from ceps.extensions import db
from .base import BaseModel


class Feedback(BaseModel):
    __tablename__ = 'feedback'

    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    event_id = db.Column(db.String(36), db.ForeignKey('events.id'), nullable=True, index=True)
    message = db.Column(db.Text, nullable=False)
    rating = db.Column(db.Integer, nullable=False)

    # Relationships
    user = db.relationship('User')
    event = db.relationship('Event', back_populates='feedback')

    def to_dict(self):
        return {
            'id': self.id,
            'userId': {'id': self.user.id, 'name': self.user.name, 'role': self.user.role}
            if self.user else self.user_id,
            'eventId': {'id': self.event.id, 'title': self.event.title} if self.event else None,
            'message': self.message,
            'rating': self.rating,
            'createdAt': self.created_at.isoformat() if self.created_at else None
        }

    def __repr__(self):
        return f'<Feedback {self.rating}>'
