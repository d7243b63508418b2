# services/feedback_service.py
"""Feedback log service: append, list and average ratings per event."""

import logging

from sqlalchemy.orm import joinedload

from ceps.errors import NotFound, ValidationError
from ceps.extensions import db
from ceps.models.event import Event
from ceps.models.feedback import Feedback
from ceps.utils.validation import is_blank, is_valid_id

GENERAL_BUCKET = 'General'
MIN_RATING = 1
MAX_RATING = 5


class FeedbackService:
    """Service class for feedback operations."""

    @staticmethod
    def _parse_rating(value):
        if isinstance(value, bool):
            raise ValidationError(f'Rating must be a number between {MIN_RATING} and {MAX_RATING}')
        try:
            rating = int(value)
        except (TypeError, ValueError):
            raise ValidationError(f'Rating must be a number between {MIN_RATING} and {MAX_RATING}')
        if rating != float(value) or not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(f'Rating must be a number between {MIN_RATING} and {MAX_RATING}')
        return rating

    @staticmethod
    def add_feedback(user, message, rating, event_id=None):
        logger = logging.getLogger('feedback_service')

        if is_blank(message) or rating in (None, '', 0):
            raise ValidationError('Please provide both message and rating')

        rating = FeedbackService._parse_rating(rating)

        if not is_blank(event_id):
            if not is_valid_id(event_id) or not db.session.get(Event, event_id):
                raise NotFound('Event not found')
        else:
            event_id = None

        feedback = Feedback(user_id=user.id, event_id=event_id, message=str(message).strip(), rating=rating)
        db.session.add(feedback)
        db.session.commit()

        logger.info(f"Feedback stored from {user.id} (rating {rating})")
        return feedback

    @staticmethod
    def list_feedback():
        return (
            db.session.query(Feedback)
            .options(joinedload(Feedback.user), joinedload(Feedback.event))
            .order_by(Feedback.created_at.desc())
            .all()
        )

    @staticmethod
    def get_feedback_analytics(feedback=None):
        """
        Average rating per linked event title, with unlinked feedback in one General bucket.

        Returns:
            list: dicts with event, average (2 decimals) and count, in first-seen order
        """
        feedback = FeedbackService.list_feedback() if feedback is None else feedback

        grouped = {}
        for item in feedback:
            bucket = item.event.title if item.event else GENERAL_BUCKET
            totals = grouped.setdefault(bucket, {'total': 0, 'count': 0})
            totals['total'] += item.rating or 0
            totals['count'] += 1

        return [
            {
                'event': bucket,
                'average': round(totals['total'] / totals['count'], 2),
                'count': totals['count']
            }
            for bucket, totals in grouped.items()
        ]

    @staticmethod
    def get_average_rating():
        """Mean rating over all feedback, 0 when there is none."""
        average = db.session.query(db.func.avg(Feedback.rating)).scalar()
        return round(float(average), 2) if average is not None else 0
