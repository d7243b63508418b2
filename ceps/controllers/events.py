# controllers/events.py
"""
Event routes.
Public listing, staff-only event management and the student registration workflow.
"""

import logging

from flask import Blueprint, jsonify

from ceps.services.event_service import EventService
from ceps.utils.auth import token_required, staff_required, current_user
from ceps.utils.validation import get_json_body

events_bp = Blueprint('events', __name__)

logger = logging.getLogger('events')


@events_bp.route('', methods=['GET'])
def list_events():
    """All events, newest first. No authentication required."""
    events = EventService.list_events()
    logger.debug(f"{len(events)} events fetched")
    return jsonify({'success': True, 'events': [event.to_dict() for event in events]})


@events_bp.route('', methods=['POST'])
@staff_required
def create_event():
    event = EventService.create_event(get_json_body(), created_by=current_user())

    return jsonify({
        'success': True,
        'message': 'Event created successfully',
        'event': event.to_dict()
    }), 201


@events_bp.route('/update-status', methods=['PUT'])
@staff_required
def update_registration_status():
    """Approve, reject or reset a student's registration."""
    data = get_json_body()
    registration = EventService.update_registration_status(
        event_id=data.get('eventId'),
        user_id=data.get('userId'),
        status=data.get('status')
    )
    event = EventService.get_event(registration.event_id)

    return jsonify({
        'success': True,
        'message': f'Registration {registration.status} successfully',
        'event': event.to_dict()
    })


@events_bp.route('/approved/student', methods=['GET'])
@token_required
def approved_events_for_student():
    events = EventService.get_approved_events_for_user(current_user())

    response = {
        'success': True,
        'events': [event.to_dict(include_registrations=False) for event in events]
    }
    if not events:
        response['message'] = 'No approved events found for this student.'
    return jsonify(response)


@events_bp.route('/registrations/me', methods=['GET'])
@token_required
def my_registrations():
    """Every registration of the signed-in account with its status."""
    registrations = EventService.get_registrations_for_user(current_user())

    return jsonify({
        'success': True,
        'registrations': [
            dict(registration.to_dict(), event=registration.event.to_summary())
            for registration in registrations
        ]
    })


@events_bp.route('/<event_id>', methods=['GET'])
def get_event(event_id):
    return jsonify({'success': True, 'event': EventService.get_event(event_id).to_dict()})


@events_bp.route('/<event_id>', methods=['PUT'])
@staff_required
def update_event(event_id):
    event = EventService.update_event(event_id, get_json_body())

    return jsonify({
        'success': True,
        'message': 'Event updated successfully',
        'event': event.to_dict()
    })


@events_bp.route('/<event_id>', methods=['DELETE'])
@staff_required
def delete_event(event_id):
    EventService.delete_event(event_id)
    return jsonify({'success': True, 'message': 'Event deleted successfully'})


@events_bp.route('/<event_id>/register', methods=['POST'])
@token_required
def register_for_event(event_id):
    registration = EventService.register_for_event(event_id, current_user())

    return jsonify({
        'success': True,
        'message': 'Registered successfully! Waiting for approval.',
        'registration': registration.to_dict()
    })
