# models/attendance.py
from sqlalchemy import Index

from ceps.extensions import db
from .base import BaseModel, utcnow


class AttendanceStatus:
    PRESENT = 'present'
    ABSENT = 'absent'

    ALL = (PRESENT, ABSENT)


class Attendance(BaseModel):
    __tablename__ = 'attendance'

    event_id = db.Column(db.String(36), db.ForeignKey('events.id'), nullable=False, index=True)
    student_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    student_name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    status = db.Column(db.String(10), nullable=False)
    marked_by_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=True)
    date = db.Column(db.DateTime, default=utcnow, nullable=False)

    # Relationships
    event = db.relationship('Event', back_populates='attendance_records')
    student = db.relationship('User', foreign_keys=[student_id])
    marked_by = db.relationship('User', foreign_keys=[marked_by_id])

    __table_args__ = (
        Index('idx_attendance_event_student', 'event_id', 'student_id'),
        Index('idx_attendance_student_date', 'student_id', 'date'),
    )

    def to_dict(self, include_event=False):
        result = {
            'id': self.id,
            'eventId': self.event.to_summary() if include_event and self.event else self.event_id,
            'studentId': self.student_id,
            'studentName': self.student_name,
            'email': self.email,
            'status': self.status,
            'markedBy': self.marked_by_id,
            'date': self.date.isoformat() if self.date else None
        }
        return result

    def __repr__(self):
        return f'<Attendance {self.student_name} - {self.status}>'
