# services/attendance_service.py
"""
Attendance ledger service.
Lists the approved roster of an event, saves attendance batches and reports attendance per student.
"""

import logging
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import joinedload

from ceps.errors import ValidationError
from ceps.extensions import db
from ceps.models.attendance import Attendance, AttendanceStatus
from ceps.models.base import utcnow
from ceps.models.registration import EventRegistration, RegistrationStatus
from ceps.models.user import User
from ceps.services.event_service import EventService
from ceps.utils.validation import is_blank

RECORD_FIELDS = ('studentId', 'studentName', 'email', 'status')


class AttendanceService:
    """Service class for attendance management operations."""

    @staticmethod
    def get_event_students(event_id):
        """
        Approved registrations of an event joined to the account name and email.

        Returns:
            list: dicts with studentId, studentName, email
        """
        event = EventService.get_event(event_id)

        rows = (
            db.session.query(EventRegistration, User)
            .outerjoin(User, User.id == EventRegistration.user_id)
            .filter(
                EventRegistration.event_id == event.id,
                EventRegistration.status == RegistrationStatus.APPROVED
            )
            .order_by(EventRegistration.created_at)
            .all()
        )

        return [
            {
                'studentId': registration.user_id,
                'studentName': user.name if user else 'Unknown Student',
                'email': user.email if user else 'N/A'
            }
            for registration, user in rows
        ]

    @staticmethod
    def _is_valid_record(record):
        if not isinstance(record, dict):
            return False
        if any(is_blank(record.get(field)) for field in RECORD_FIELDS):
            return False
        return str(record['status']).strip().lower() in AttendanceStatus.ALL

    @staticmethod
    def save_attendance(event_id, records, marked_by):
        """
        Replace every attendance record of an event with a new batch.

        Records missing studentId, studentName, email or a present/absent status are dropped.
        The delete and the insert are committed together, so a failure keeps the previous roster.

        Returns:
            list: the saved Attendance rows
        """
        logger = logging.getLogger('attendance_service')

        if is_blank(event_id) or not isinstance(records, list) or not records:
            raise ValidationError('Missing eventId or records')

        valid_records = [r for r in records if AttendanceService._is_valid_record(r)]
        if not valid_records:
            raise ValidationError('No valid student records found.')

        event = EventService.get_event(event_id)
        now = utcnow()

        try:
            deleted = (
                db.session.query(Attendance)
                .filter(Attendance.event_id == event.id)
                .delete(synchronize_session=False)
            )

            saved = [
                Attendance(
                    event_id=event.id,
                    student_id=record['studentId'],
                    student_name=str(record['studentName']).strip(),
                    email=str(record['email']).strip(),
                    status=str(record['status']).strip().lower(),
                    marked_by_id=marked_by.id if marked_by else None,
                    date=now
                )
                for record in valid_records
            ]
            db.session.add_all(saved)
            db.session.commit()

        except IntegrityError:
            db.session.rollback()
            logger.warning(f"Attendance batch for event {event_id} references unknown accounts")
            raise ValidationError('Attendance records reference unknown students')
        except SQLAlchemyError:
            db.session.rollback()
            logger.error(f"Error saving attendance for event {event_id}", exc_info=True)
            raise

        skipped = len(records) - len(valid_records)
        logger.info(
            f"Attendance saved for event {event.id}: {len(saved)} records "
            f"({deleted} replaced, {skipped} skipped)"
        )
        return saved

    @staticmethod
    def get_student_attendance(user):
        """Attendance records of an account with the event loaded."""
        return (
            db.session.query(Attendance)
            .options(joinedload(Attendance.event))
            .filter(Attendance.student_id == user.id)
            .order_by(Attendance.date.desc())
            .all()
        )

    @staticmethod
    def get_event_attendance(event_id):
        """Saved attendance records of one event."""
        event = EventService.get_event(event_id)
        return (
            db.session.query(Attendance)
            .filter(Attendance.event_id == event.id)
            .order_by(Attendance.student_name)
            .all()
        )
