# services/dashboard_service.py
"""
Dashboard and analytics aggregates.
Counts are shaped by the caller's role: students see their own registrations, staff see totals.
"""

from sqlalchemy import func

from ceps.extensions import db
from ceps.models.event import Event, EventStatus
from ceps.models.feedback import Feedback
from ceps.models.registration import EventRegistration, RegistrationStatus
from ceps.models.trainer import Trainer
from ceps.models.user import User, RoleType
from ceps.services.event_service import EventService
from ceps.services.feedback_service import FeedbackService


class DashboardService:
    """Service class for dashboard and analytics aggregates."""

    @staticmethod
    def _count_registrations(user_id=None, status=None):
        query = db.session.query(func.count(EventRegistration.id))
        if user_id:
            query = query.filter(EventRegistration.user_id == user_id)
        if status:
            query = query.filter(EventRegistration.status == status)
        return query.scalar() or 0

    @staticmethod
    def get_dashboard_data(user):
        """
        Role-shaped dashboard counts.

        Returns:
            dict: role, totalEvents, activeParticipants, approvedRegistrations,
                  trainersInvited and the event list
        """
        events = EventService.list_events()

        if user.is_student():
            return {
                'role': user.role,
                'totalEvents': len(events),
                'activeParticipants': DashboardService._count_registrations(user_id=user.id),
                'approvedRegistrations': DashboardService._count_registrations(
                    user_id=user.id, status=RegistrationStatus.APPROVED
                ),
                'trainersInvited': 0,
                'events': [event.to_dict() for event in events]
            }

        return {
            'role': user.role,
            'totalEvents': len(events),
            'activeParticipants': DashboardService._count_registrations(),
            'approvedRegistrations': DashboardService._count_registrations(status=RegistrationStatus.APPROVED),
            'trainersInvited': db.session.query(func.count(Trainer.id)).scalar() or 0,
            'events': [event.to_dict() for event in events]
        }

    @staticmethod
    def get_analytics_overview():
        """System-wide totals for the analytics page."""
        status_counts = dict(
            db.session.query(Event.status, func.count(Event.id))
            .group_by(Event.status)
            .all()
        )

        def count_users(role):
            return db.session.query(func.count(User.id)).filter(User.role == role).scalar() or 0

        return {
            'totalEvents': sum(status_counts.values()),
            'upcoming': status_counts.get(EventStatus.UPCOMING, 0),
            'ongoing': status_counts.get(EventStatus.ONGOING, 0),
            'completed': status_counts.get(EventStatus.COMPLETED, 0),
            'totalStudents': count_users(RoleType.STUDENT),
            'totalFaculty': count_users(RoleType.FACULTY),
            'totalTrainers': db.session.query(func.count(Trainer.id)).scalar() or 0,
            'totalFeedbacks': db.session.query(func.count(Feedback.id)).scalar() or 0,
            'approvedRegistrations': DashboardService._count_registrations(status=RegistrationStatus.APPROVED),
            'pendingRegistrations': DashboardService._count_registrations(status=RegistrationStatus.PENDING),
            'avgRating': FeedbackService.get_average_rating()
        }
