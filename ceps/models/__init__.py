# models/__init__.py
from .base import BaseModel
from .user import User, RoleType
from .registration import EventRegistration, RegistrationStatus
from .event import Event, EventStatus
from .attendance import Attendance, AttendanceStatus
from .trainer import Trainer
from .feedback import Feedback
from .notification import Notification

__all__ = [
    'BaseModel',
    'User',
    'RoleType',
    'Event',
    'EventStatus',
    'EventRegistration',
    'RegistrationStatus',
    'Attendance',
    'AttendanceStatus',
    'Trainer',
    'Feedback',
    'Notification'
]
