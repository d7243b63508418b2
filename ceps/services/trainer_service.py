# services/trainer_service.py
"""Trainer directory service: CRUD over trainer profiles and their event allocation."""

import logging

from sqlalchemy.orm import joinedload

from ceps.errors import NotFound, ValidationError
from ceps.extensions import db
from ceps.models.event import Event
from ceps.models.trainer import Trainer
from ceps.utils.validation import is_blank, is_valid_email, is_valid_id, normalize_email, require_fields

SCHEDULE_FIELDS = ('room', 'date', 'time')


class TrainerService:
    """Service class for trainer directory operations."""

    @staticmethod
    def _resolve_event_id(event_id):
        """Return a validated event id, or None when no event is linked."""
        if is_blank(event_id):
            return None
        if not is_valid_id(event_id) or not db.session.get(Event, event_id):
            raise NotFound('Event not found. Please select a valid event.')
        return event_id

    @staticmethod
    def get_trainer(trainer_id):
        trainer = db.session.get(Trainer, trainer_id) if is_valid_id(trainer_id) else None
        if not trainer:
            raise NotFound('Trainer not found')
        return trainer

    @staticmethod
    def create_trainer(data, created_by):
        logger = logging.getLogger('trainer_service')

        require_fields(data, 'name', 'expertise', 'email',
                       message='Name, expertise, and email are required')
        if not is_valid_email(data['email']):
            raise ValidationError('Please enter a valid email address')

        trainer = Trainer(
            name=str(data['name']).strip(),
            expertise=str(data['expertise']).strip(),
            email=normalize_email(data['email']),
            event_id=TrainerService._resolve_event_id(data.get('eventId')),
            created_by_id=created_by.id
        )
        for field in SCHEDULE_FIELDS:
            setattr(trainer, field, str(data.get(field) or '').strip())

        db.session.add(trainer)
        db.session.commit()

        logger.info(f"Trainer created: {trainer.name} ({trainer.id})")
        return trainer

    @staticmethod
    def list_trainers():
        return (
            db.session.query(Trainer)
            .options(joinedload(Trainer.event), joinedload(Trainer.creator))
            .order_by(Trainer.created_at.desc())
            .all()
        )

    @staticmethod
    def update_trainer(trainer_id, data):
        logger = logging.getLogger('trainer_service')
        trainer = TrainerService.get_trainer(trainer_id)

        for field in ('name', 'expertise'):
            if field in data:
                if is_blank(data[field]):
                    raise ValidationError(f'{field} cannot be empty')
                setattr(trainer, field, str(data[field]).strip())

        if 'email' in data:
            if not is_valid_email(data['email']):
                raise ValidationError('Please enter a valid email address')
            trainer.email = normalize_email(data['email'])

        if 'eventId' in data:
            trainer.event_id = TrainerService._resolve_event_id(data['eventId'])

        for field in SCHEDULE_FIELDS:
            if field in data:
                setattr(trainer, field, str(data[field] or '').strip())

        db.session.commit()
        logger.info(f"Trainer updated: {trainer.id}")
        return trainer

    @staticmethod
    def delete_trainer(trainer_id):
        logger = logging.getLogger('trainer_service')
        trainer = TrainerService.get_trainer(trainer_id)
        name = trainer.name

        db.session.delete(trainer)
        db.session.commit()

        logger.info(f"Trainer deleted: {name} ({trainer_id})")
        return name
