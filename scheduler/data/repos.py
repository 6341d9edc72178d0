from django.contrib.auth import get_user_model
from django.db.models import Count, Q

from ..config import (
    DEFAULT_INTERVALS,
    DEFAULT_SCHEDULE_DESCRIPTION,
    DEFAULT_SCHEDULE_NAME,
)
from ..domain.enums import ReviewStatus
from .models import Card, Review, ReviewSchedule, WordList


def user_exists(user_id):
    return get_user_model().objects.filter(pk=user_id).exists()


def get_schedule(user_id):
    return ReviewSchedule.objects.filter(user_id=user_id).first()


def get_or_create_schedule(user_id, **values):
    schedule, created = ReviewSchedule.objects.get_or_create(
        user_id=user_id,
        defaults={
            "intervals": values.get("intervals") or list(DEFAULT_INTERVALS),
            "name": values.get("name") or DEFAULT_SCHEDULE_NAME,
            "description": values.get("description") or DEFAULT_SCHEDULE_DESCRIPTION,
            "is_default": values["is_default"] if values.get("is_default") is not None else True,
        },
    )
    return schedule, created


def user_cards(user_id):
    return Card.objects.filter(user_id=user_id).select_related("word_details", "word_list")


def get_card(user_id, card_id):
    return user_cards(user_id).filter(pk=card_id).first()


def get_card_for_update(user_id, card_id):
    """
    Fetch a card owned by ``user_id`` and lock its row.
    Must run inside ``transaction.atomic()``.
    """
    return (Card.objects
            .select_for_update()
            .filter(pk=card_id, user_id=user_id)
            .first())


def active_cards(user_id):
    return user_cards(user_id).filter(review_status=ReviewStatus.ACTIVE.value)


def reviewed_card_ids_between(start, end):
    return Review.objects.filter(created_at__gte=start, created_at__lt=end).values("card_id")


def persist_review(card, is_success, created_at):
    return Review.objects.create(card=card, is_success=is_success, created_at=created_at)


def visible_word_lists(user_id):
    return (WordList.objects
            .filter(Q(user_id=user_id) | Q(is_public=True))
            .annotate(card_count=Count("cards")))


def get_owned_word_list(user_id, word_list_id):
    return WordList.objects.filter(pk=word_list_id, user_id=user_id).first()
