# controllers/attendance.py
"""
Attendance routes: approved roster, saving a batch and the student's own attendance.
"""

from flask import Blueprint, jsonify

from ceps.services.attendance_service import AttendanceService
from ceps.utils.auth import token_required, staff_required, current_user
from ceps.utils.validation import get_json_body

attendance_bp = Blueprint('attendance', __name__)


@attendance_bp.route('/event/<event_id>/students', methods=['GET'])
@staff_required
def event_students(event_id):
    """Approved students of an event, ready to be marked."""
    students = AttendanceService.get_event_students(event_id)
    return jsonify({'success': True, 'students': students})


@attendance_bp.route('/event/<event_id>', methods=['GET'])
@staff_required
def event_attendance(event_id):
    records = AttendanceService.get_event_attendance(event_id)
    return jsonify({'success': True, 'attendance': [record.to_dict() for record in records]})


@attendance_bp.route('/save', methods=['POST'])
@staff_required
def save_attendance():
    """Replace the attendance of an event with the submitted records."""
    data = get_json_body()
    saved = AttendanceService.save_attendance(
        event_id=data.get('eventId'),
        records=data.get('records'),
        marked_by=current_user()
    )

    return jsonify({
        'success': True,
        'message': 'Attendance saved successfully',
        'count': len(saved)
    })


@attendance_bp.route('/student', methods=['GET'])
@token_required
def student_attendance():
    records = AttendanceService.get_student_attendance(current_user())
    return jsonify({
        'success': True,
        'attendance': [record.to_dict(include_event=True) for record in records]
    })
