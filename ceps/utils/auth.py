# utils/auth.py
from functools import wraps

from flask import g, request

from ceps.errors import Unauthenticated, Forbidden
from ceps.models import RoleType
from ceps.services.auth_service import AuthService


def get_bearer_token():
    """Extract the token from an 'Authorization: Bearer <token>' header."""
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme != 'Bearer' or not token.strip():
        return None
    return token.strip()


def authenticate_request():
    """Resolve the bearer token to an account and attach it to the request context."""
    token = get_bearer_token()
    if not token:
        raise Unauthenticated('No token provided')

    user = AuthService.resolve_token(token)
    g.current_user = user
    return user


def current_user():
    """Account resolved by the access gate for this request."""
    return g.get('current_user')


def token_required(f):
    """Decorator to require a valid bearer token."""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        authenticate_request()
        return f(*args, **kwargs)

    return decorated_function


def role_required(*roles):
    """Decorator to require a valid bearer token from an account holding one of the roles."""

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            user = authenticate_request()

            if not user.has_any_role(roles):
                raise Forbidden(f'Access denied. Role required: {", ".join(roles)}')

            return f(*args, **kwargs)

        return decorated_function

    return decorator


def staff_required(f):
    """Decorator to require faculty or admin role."""
    return role_required(*RoleType.STAFF)(f)
