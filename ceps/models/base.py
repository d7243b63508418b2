# models/base.py
from datetime import datetime, timezone
import uuid

from ceps.extensions import db


def utcnow():
    """Current time as a naive UTC datetime, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_camel_case(name):
    """Convert a snake_case column name to the camelCase key used on the wire."""
    head, *tail = name.split('_')
    return head + ''.join(part.title() for part in tail)


class BaseModel(db.Model):
    """Base model class with common functionality."""

    __abstract__ = True

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Columns never rendered by to_dict
    __hidden_fields__ = ()

    def to_dict(self):
        """Convert model instance to a camelCase dictionary."""
        result = {}

        for column in self.__table__.columns:
            if column.name in self.__hidden_fields__:
                continue
            value = getattr(self, column.name)
            if isinstance(value, datetime):
                value = value.isoformat()
            result[to_camel_case(column.name)] = value

        return result
