# services/event_service.py
"""
Event registry service.
Handles event CRUD and the registration workflow (register, approve/reject, approved listings).
"""

import logging

from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import joinedload, selectinload

from ceps.errors import Conflict, NotFound, ValidationError
from ceps.extensions import db
from ceps.models.event import Event, EventStatus
from ceps.models.registration import EventRegistration, RegistrationStatus
from ceps.models.user import User
from ceps.utils.validation import is_blank, is_valid_id, parse_datetime, require_fields

EDITABLE_FIELDS = ('title', 'description', 'date', 'venue', 'status')


class EventService:
    """Service class for events and their registrations."""

    @staticmethod
    def _normalize_status(status):
        if is_blank(status):
            return EventStatus.UPCOMING
        return str(status).strip().lower()

    @staticmethod
    def get_event(event_id):
        """Return one event with creator and registrations loaded, or raise NotFound."""
        event = None
        if is_valid_id(event_id):
            event = (
                db.session.query(Event)
                .options(
                    joinedload(Event.creator),
                    selectinload(Event.registrations)
                )
                .filter_by(id=event_id)
                .first()
            )
        if not event:
            raise NotFound('Event not found')
        return event

    @staticmethod
    def create_event(data, created_by=None):
        """
        Create an event.

        Args:
            data: dict with title, description, date, venue, optional status and createdBy
            created_by: Account creating the event, used when data has no createdBy

        Returns:
            Event: the new event
        """
        logger = logging.getLogger('event_service')

        creator_id = data.get('createdBy') or (created_by.id if created_by else None)
        payload = dict(data, createdBy=creator_id)
        require_fields(payload, 'title', 'description', 'date', 'venue', 'createdBy')

        if not is_valid_id(creator_id):
            raise ValidationError('Invalid creator ID')
        if not db.session.get(User, creator_id):
            raise ValidationError('Invalid creator ID')

        event = Event(
            title=str(data['title']).strip(),
            description=str(data['description']).strip(),
            date=parse_datetime(data['date']),
            venue=str(data['venue']).strip(),
            status=EventService._normalize_status(data.get('status')),
            created_by_id=creator_id
        )

        try:
            db.session.add(event)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.error("Error creating event", exc_info=True)
            raise

        logger.info(f"New event created: {event.title} ({event.id})")
        return event

    @staticmethod
    def list_events():
        """All events, newest created first, with creator and registrations."""
        return (
            db.session.query(Event)
            .options(
                joinedload(Event.creator),
                selectinload(Event.registrations)
            )
            .order_by(Event.created_at.desc())
            .all()
        )

    @staticmethod
    def update_event(event_id, data):
        """Apply a partial update of the editable fields."""
        logger = logging.getLogger('event_service')
        event = EventService.get_event(event_id)

        for field in EDITABLE_FIELDS:
            if field not in data:
                continue
            value = data[field]
            if field == 'date':
                event.date = parse_datetime(value)
            elif field == 'status':
                event.status = EventService._normalize_status(value)
            else:
                if is_blank(value):
                    raise ValidationError(f'{field} cannot be empty')
                setattr(event, field, str(value).strip())

        db.session.commit()
        logger.info(f"Event updated: {event.id}")
        return event

    @staticmethod
    def delete_event(event_id):
        """Delete an event together with its registrations and attendance."""
        logger = logging.getLogger('event_service')
        event = EventService.get_event(event_id)
        title = event.title

        db.session.delete(event)
        db.session.commit()

        logger.info(f"Event deleted: {title} ({event_id})")
        return title

    @staticmethod
    def register_for_event(event_id, user):
        """
        Add a pending registration for the account.

        Raises:
            NotFound: unknown event
            Conflict: the account already has a registration on this event
        """
        logger = logging.getLogger('event_service')
        event = EventService.get_event(event_id)

        if event.registration_for(user.id):
            logger.info(f"Duplicate registration attempt: {user.id} on {event.id}")
            raise Conflict('Already registered for this event')

        registration = EventRegistration(
            event_id=event.id,
            user_id=user.id,
            user_name=user.name or 'Student',
            status=RegistrationStatus.PENDING
        )

        try:
            db.session.add(registration)
            db.session.commit()
        except IntegrityError:
            # A concurrent request inserted the same pair first
            db.session.rollback()
            logger.warning(f"Registration race lost: {user.id} on {event.id}")
            raise Conflict('Already registered for this event')

        logger.info(f"{user.name} registered for event {event.id}")
        return registration

    @staticmethod
    def update_registration_status(event_id, user_id, status):
        """
        Set the status of the (event, account) registration.

        Any status may follow any other; approved, rejected and pending are all accepted.
        """
        logger = logging.getLogger('event_service')

        if is_blank(event_id) or is_blank(user_id) or is_blank(status):
            raise ValidationError('Missing required fields')

        status = str(status).strip().lower()
        if status not in RegistrationStatus.ALL:
            raise ValidationError('Invalid status value')

        registration = None
        if is_valid_id(event_id) and is_valid_id(user_id):
            registration = (
                db.session.query(EventRegistration)
                .filter(
                    and_(
                        EventRegistration.event_id == event_id,
                        EventRegistration.user_id == user_id
                    )
                )
                .first()
            )

        if not registration:
            raise NotFound('Event or user not found')

        registration.set_status(status)
        db.session.commit()

        logger.info(f"Registration status updated: user {user_id} on {event_id} -> {status}")
        return registration

    @staticmethod
    def get_approved_events_for_user(user):
        """Events on which the account holds an approved registration."""
        return (
            db.session.query(Event)
            .join(EventRegistration, EventRegistration.event_id == Event.id)
            .filter(
                and_(
                    EventRegistration.user_id == user.id,
                    EventRegistration.status == RegistrationStatus.APPROVED
                )
            )
            .order_by(Event.date)
            .all()
        )

    @staticmethod
    def get_registrations_for_user(user):
        """Every registration of the account with its event loaded."""
        return (
            db.session.query(EventRegistration)
            .options(joinedload(EventRegistration.event))
            .filter(EventRegistration.user_id == user.id)
            .order_by(EventRegistration.created_at.desc())
            .all()
        )
