# services/user_service.py
"""
User service for account management operations.
Handles account creation, profile updates, password changes and account lookups.
"""

import logging

from flask import current_app
from sqlalchemy.exc import IntegrityError

from ceps.errors import Conflict, Forbidden, ValidationError
from ceps.extensions import db
from ceps.models.user import User, RoleType
from ceps.utils.validation import is_blank, is_valid_email, normalize_email, require_text


class UserService:
    """Service class for account management operations."""

    @staticmethod
    def _validate_password(password):
        min_length = current_app.config.get('PASSWORD_MIN_LENGTH', 6)
        if not isinstance(password, str) or len(password) < min_length:
            raise ValidationError(f'Password must be at least {min_length} characters long')

    @staticmethod
    def _email_taken(email, exclude_user_id=None):
        query = db.session.query(User.id).filter(User.email == email)
        if exclude_user_id:
            query = query.filter(User.id != exclude_user_id)
        return db.session.query(query.exists()).scalar()

    @staticmethod
    def create_user(name, email, password, role=RoleType.STUDENT):
        """
        Create a new account.

        Args:
            name: Display name
            email: Email address, stored lower-cased
            password: Plain text password, stored hashed
            role: One of RoleType.ALL

        Returns:
            User: the created account

        Raises:
            ValidationError: on missing or malformed input
            Conflict: if the email is already registered
        """
        logger = logging.getLogger('user_service')

        name = require_text(name, 'name')
        email = require_text(email, 'email')
        password = require_text(password, 'password', strip=False)

        if is_blank(name) or is_blank(email) or not password:
            raise ValidationError('Name, email and password are required')
        if not is_valid_email(email):
            raise ValidationError('Please enter a valid email address')
        if role not in RoleType.ALL:
            raise ValidationError(f"Invalid role. Must be one of: {', '.join(RoleType.ALL)}")
        UserService._validate_password(password)

        email = normalize_email(email)
        if UserService._email_taken(email):
            raise Conflict('User already exists with this email')

        user = User(name=name, email=email, role=role)
        user.set_password(password)

        try:
            db.session.add(user)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            logger.warning(f"Integrity error creating user {email}")
            raise Conflict('User already exists with this email')

        logger.info(f"User created successfully: {user.email} with role: {user.role}")
        return user

    @staticmethod
    def list_users(role=None):
        query = db.session.query(User)
        if role:
            query = query.filter(User.role == role)
        return query.order_by(User.created_at.desc()).all()

    @staticmethod
    def update_profile(user, data, acting_user=None):
        """
        Update name, email and (for admins) role of an account.

        Args:
            user: Account being updated
            data: dict with optional 'name', 'email', 'role'
            acting_user: Account performing the change, defaults to the account itself

        Returns:
            User: the updated account
        """
        logger = logging.getLogger('user_service')
        acting_user = acting_user or user

        name = require_text(data.get('name'), 'name')
        email = require_text(data.get('email'), 'email')
        role = require_text(data.get('role'), 'role')

        if name is not None:
            if is_blank(name):
                raise ValidationError('Name cannot be empty')
            user.name = name

        if email is not None:
            if not is_valid_email(email):
                raise ValidationError('Please enter a valid email address')
            email = normalize_email(email)
            if UserService._email_taken(email, exclude_user_id=user.id):
                raise Conflict('Email is already in use by another account')
            user.email = email

        if role is not None and role != user.role:
            if role not in RoleType.ALL:
                raise ValidationError(f"Invalid role. Must be one of: {', '.join(RoleType.ALL)}")
            if not acting_user.has_role(RoleType.ADMIN):
                raise Forbidden('Only an admin can change account roles')
            user.role = role

        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise Conflict('Email is already in use by another account')

        logger.info(f"Profile updated for user: {user.email}")
        return user

    @staticmethod
    def change_password(user, old_password, new_password):
        """Replace the password after checking the current one."""
        logger = logging.getLogger('user_service')

        old_password = require_text(old_password, 'oldPassword', strip=False)
        new_password = require_text(new_password, 'newPassword', strip=False)

        if not old_password or not new_password:
            raise ValidationError('Both old and new passwords are required')

        if not user.check_password(old_password):
            logger.warning(f"Password change with wrong old password for user: {user.email}")
            raise ValidationError('Invalid old password')

        UserService._validate_password(new_password)

        user.set_password(new_password)
        db.session.commit()

        logger.info(f"Password changed for user: {user.email}")
        return user
