# controllers/auth.py
"""
Authentication routes: sign-up, login and the current account.
"""

from flask import Blueprint, jsonify

from ceps.services.auth_service import AuthService
from ceps.utils.auth import token_required, current_user
from ceps.utils.validation import get_json_body

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create an account."""
    data = get_json_body()

    user = AuthService.register_user(
        name=data.get('name'),
        email=data.get('email'),
        password=data.get('password'),
        role=data.get('role')
    )

    return jsonify({
        'success': True,
        'message': 'User registered successfully',
        'user': user.to_dict()
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """Exchange email and password for a bearer token."""
    data = get_json_body()

    user, token = AuthService.authenticate_user(
        email=data.get('email'),
        password=data.get('password')
    )

    return jsonify({
        'success': True,
        'message': 'Login successful',
        'token': token,
        'user': user.to_dict()
    })


@auth_bp.route('/me', methods=['GET'])
@token_required
def me():
    return jsonify({'success': True, 'user': current_user().to_dict()})
