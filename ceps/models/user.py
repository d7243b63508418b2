# models/user.py
from sqlalchemy import Index
from werkzeug.security import generate_password_hash, check_password_hash

from ceps.extensions import db
from .base import BaseModel, utcnow


class RoleType:
    """Define role types as constants."""
    STUDENT = 'student'
    FACULTY = 'faculty'
    ADMIN = 'admin'

    ALL = (STUDENT, FACULTY, ADMIN)
    STAFF = (FACULTY, ADMIN)


class User(BaseModel):
    """Account that can sign in to the portal."""

    __tablename__ = 'users'

    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(20), nullable=False, default=RoleType.STUDENT)
    password_changed_at = db.Column(db.DateTime, default=utcnow)

    created_events = db.relationship('Event', back_populates='creator')
    registrations = db.relationship('EventRegistration', back_populates='user',
                                    cascade='all, delete-orphan')

    __hidden_fields__ = ('password_hash', 'password_changed_at')

    __table_args__ = (
        Index('uq_user_email', 'email', unique=True),
        Index('idx_user_role', 'role'),
    )

    def __repr__(self):
        return f'<User {self.email}>'

    def set_password(self, password):
        """Set password hash."""
        self.password_hash = generate_password_hash(password)
        self.password_changed_at = utcnow()

    def check_password(self, password):
        """Check password against hash."""
        return check_password_hash(self.password_hash, password)

    def has_role(self, role_name):
        return self.role == role_name

    def has_any_role(self, role_names):
        """Check if user has any of the specified roles."""
        return self.role in role_names

    def is_student(self):
        return self.role == RoleType.STUDENT

    def to_summary(self):
        """Public identity used when an account is embedded in another record."""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role
        }
