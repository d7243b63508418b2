# utils/validation.py
"""Request payload helpers shared by the controllers and services."""

import re
import uuid
from datetime import datetime, timezone

from flask import request

from ceps.errors import ValidationError

EMAIL_PATTERN = re.compile(r'^\S+@\S+\.\S+$')


def get_json_body():
    """
    Return the request JSON object, or an empty dict for an empty body.

    Raises:
        ValidationError: if the body is not a JSON object
    """
    if not request.get_data(cache=True):
        return {}

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def require_text(value, field, strip=True):
    """
    Return a request value as a string, stripped unless strip is False; None passes through.

    Raises:
        ValidationError: if the value is present but not a string
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f'{field} must be a string')
    return value.strip() if strip else value


def require_fields(data, *fields, message='Missing required fields'):
    """Raise ValidationError naming every field that is absent or blank."""
    missing = [field for field in fields if is_blank(data.get(field))]
    if missing:
        raise ValidationError(f"{message}: {', '.join(missing)}")


def is_valid_id(value):
    """Check that a value is a UUID string as used for every primary key."""
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def is_valid_email(value):
    return isinstance(value, str) and bool(EMAIL_PATTERN.match(value.strip()))


def normalize_email(value):
    return value.strip().lower()


def parse_datetime(value, field='date'):
    """
    Parse an ISO 8601 date or datetime string into a naive UTC datetime.

    Accepts 'YYYY-MM-DD', 'YYYY-MM-DDTHH:MM[:SS]' and a trailing 'Z' or offset.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"Invalid {field}: expected an ISO 8601 date")
    else:
        raise ValidationError(f"Invalid {field}: expected an ISO 8601 date")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
