# controllers/feedback.py
from flask import Blueprint, jsonify

from ceps.services.feedback_service import FeedbackService
from ceps.utils.auth import token_required, staff_required, current_user
from ceps.utils.validation import get_json_body

feedback_bp = Blueprint('feedback', __name__)


@feedback_bp.route('', methods=['POST'])
@token_required
def add_feedback():
    data = get_json_body()
    feedback = FeedbackService.add_feedback(
        current_user(),
        message=data.get('message'),
        rating=data.get('rating'),
        event_id=data.get('eventId')
    )

    return jsonify({
        'success': True,
        'message': 'Feedback stored successfully',
        'feedback': feedback.to_dict()
    }), 201


@feedback_bp.route('', methods=['GET'])
@staff_required
def list_feedback():
    feedback = FeedbackService.list_feedback()
    return jsonify({'success': True, 'all': [item.to_dict() for item in feedback]})


@feedback_bp.route('/analytics', methods=['GET'])
@staff_required
def feedback_analytics():
    """Average rating per event, unlinked feedback grouped as General."""
    return jsonify({'success': True, 'analytics': FeedbackService.get_feedback_analytics()})
