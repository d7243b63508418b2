# controllers/notifications.py
from flask import Blueprint, jsonify

from ceps.services.notification_service import NotificationService
from ceps.utils.auth import token_required, staff_required, current_user
from ceps.utils.validation import get_json_body

notifications_bp = Blueprint('notifications', __name__)


@notifications_bp.route('', methods=['POST'])
@staff_required
def send_notification():
    data = get_json_body()
    notification = NotificationService.send_notification(
        current_user(),
        title=data.get('title'),
        message=data.get('message'),
        recipients=data.get('recipients')
    )

    return jsonify({
        'success': True,
        'message': 'Notification sent successfully!',
        'notification': notification.to_dict()
    }), 201


@notifications_bp.route('', methods=['GET'])
@token_required
def list_notifications():
    """Every notification, newest first. Recipients are not used to filter."""
    notifications = NotificationService.list_notifications()
    return jsonify({'success': True, 'notifications': [n.to_dict() for n in notifications]})
