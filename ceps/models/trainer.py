# models/trainer.py
from ceps.extensions import db
from .base import BaseModel


class Trainer(BaseModel):
    __tablename__ = 'trainers'

    name = db.Column(db.String(120), nullable=False)
    expertise = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    event_id = db.Column(db.String(36), db.ForeignKey('events.id'), nullable=True, index=True)
    room = db.Column(db.String(100), default='', nullable=False)
    date = db.Column(db.String(20), default='', nullable=False)
    time = db.Column(db.String(20), default='', nullable=False)
    created_by_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    average_rating = db.Column(db.Float, default=0, nullable=False)  # 0..5, not computed yet

    # Relationships
    event = db.relationship('Event', back_populates='trainers')
    creator = db.relationship('User')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'expertise': self.expertise,
            'email': self.email,
            'eventId': self.event.to_summary() if self.event else None,
            'room': self.room,
            'date': self.date,
            'time': self.time,
            'createdBy': self.creator.to_summary() if self.creator else self.created_by_id,
            'averageRating': self.average_rating,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None
        }

    def __repr__(self):
        return f'<Trainer {self.name}>'
