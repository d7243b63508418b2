# controllers/users.py
"""Profile routes for the signed-in account."""

from flask import Blueprint, jsonify

from ceps.services.user_service import UserService
from ceps.utils.auth import token_required, current_user
from ceps.utils.validation import get_json_body

users_bp = Blueprint('users', __name__)


@users_bp.route('/update', methods=['PUT'])
@token_required
def update_profile():
    """Update name, email and (admins only) role of the signed-in account."""
    user = current_user()
    updated = UserService.update_profile(user, get_json_body(), acting_user=user)

    return jsonify({
        'success': True,
        'message': 'Profile updated successfully',
        'user': updated.to_dict()
    })


@users_bp.route('/change-password', methods=['PUT'])
@token_required
def change_password():
    data = get_json_body()
    UserService.change_password(
        current_user(),
        old_password=data.get('oldPassword'),
        new_password=data.get('newPassword')
    )

    return jsonify({'success': True, 'message': 'Password changed successfully'})
