# services/auth_service.py
"""
Authentication service for sign-up, login and bearer token handling.
Tokens are signed JWTs carrying the account id; nothing is stored server side.
"""

import logging
from datetime import datetime, timezone

from flask import current_app
from jose import JWTError, jwt

from ceps.errors import NotFound, Unauthenticated, ValidationError
from ceps.extensions import db
from ceps.models.user import User, RoleType
from ceps.services.user_service import UserService
from ceps.utils.validation import is_blank, normalize_email, require_text


class AuthService:
    """Service class for authentication operations."""

    @staticmethod
    def create_access_token(user, expires_delta=None):
        """
        Create a signed access token for an account.

        Args:
            user: Account the token identifies
            expires_delta: Lifetime override, defaults to JWT_ACCESS_TOKEN_EXPIRES

        Returns:
            str: encoded JWT
        """
        now = datetime.now(timezone.utc)
        expires_delta = expires_delta or current_app.config['JWT_ACCESS_TOKEN_EXPIRES']
        claims = {
            'sub': user.id,
            'role': user.role,
            'iat': now,
            'exp': now + expires_delta
        }
        return jwt.encode(
            claims,
            current_app.config['JWT_SECRET_KEY'],
            algorithm=current_app.config['JWT_ALGORITHM']
        )

    @staticmethod
    def decode_access_token(token):
        """Verify signature and expiry and return the token claims."""
        try:
            return jwt.decode(
                token,
                current_app.config['JWT_SECRET_KEY'],
                algorithms=[current_app.config['JWT_ALGORITHM']]
            )
        except JWTError as e:
            logging.getLogger('auth_service').warning(f"Rejected bearer token: {e}")
            raise Unauthenticated('Not authorized, invalid token')

    @staticmethod
    def resolve_token(token):
        """
        Resolve a bearer token to its account.

        Raises:
            Unauthenticated: if the token cannot be verified
            NotFound: if the token is valid but the account no longer exists
        """
        payload = AuthService.decode_access_token(token)
        user_id = payload.get('sub')
        if not user_id:
            raise Unauthenticated('Not authorized, invalid token')

        user = db.session.get(User, user_id)
        if not user:
            raise NotFound('User not found')
        return user

    @staticmethod
    def register_user(name, email, password, role=None):
        """
        Public sign-up.

        Returns:
            User: the created account
        """
        role = (require_text(role, 'role') or RoleType.STUDENT).lower()
        allowed_roles = current_app.config.get('SELF_REGISTRATION_ROLES', (RoleType.STUDENT,))
        if role not in allowed_roles:
            raise ValidationError(f"Role '{role}' cannot be chosen at sign-up")

        return UserService.create_user(name=name, email=email, password=password, role=role)

    @staticmethod
    def authenticate_user(email, password):
        """
        Authenticate user with email and password.

        Returns:
            tuple: (user: User, token: str)
        """
        logger = logging.getLogger('auth_service')

        email = require_text(email, 'email')
        password = require_text(password, 'password', strip=False)

        if is_blank(email) or not password:
            raise ValidationError('Email and password are required')

        user = db.session.query(User).filter_by(email=normalize_email(email)).first()

        if not user or not user.check_password(password):
            logger.warning(f"Failed login attempt for: {email}")
            raise Unauthenticated('Invalid email or password')

        token = AuthService.create_access_token(user)
        logger.info(f"Successful login for user: {user.email}")
        return user, token
