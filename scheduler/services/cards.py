from datetime import timedelta

import structlog
from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from ..data import repos
from ..data.models import Card, WordDetails
from ..domain.logic import interval_at
from ..errors import ConflictFailure, NotFound
from .schedules import get_or_create_schedule

logger = structlog.get_logger()

DETAIL_FIELDS = ("synonyms", "antonyms", "examples", "notes")


def _resolve_word_list(user_id, word_list_id):
    if word_list_id is None:
        return None
    word_list = repos.get_owned_word_list(user_id, word_list_id)
    if word_list is None:
        logger.warning("word_list_not_found", user_id=str(user_id), word_list_id=str(word_list_id))
        raise NotFound("Word list not found")
    return word_list


def create_card(user_id, word, definition, word_list_id=None, word_details=None, now=None):
    now = now or timezone.now()
    logger.debug("card_create_received",
        user_id=str(user_id),
        word=word,
        word_list_id=str(word_list_id) if word_list_id else None,
        has_word_details=bool(word_details),
    )

    schedule = get_or_create_schedule(user_id)
    first_interval = interval_at(schedule.intervals, 0)
    word_list = _resolve_word_list(user_id, word_list_id)

    try:
        with transaction.atomic():
            card = Card.objects.create(
                user_id=user_id,
                word_list=word_list,
                word=word,
                definition=definition,
                review_step=0,
                next_review=now + timedelta(days=first_interval),
                created_at=now,
            )
            if word_details:
                WordDetails.objects.create(
                    card=card, **{k: v for k, v in word_details.items() if k in DETAIL_FIELDS}
                )
    except IntegrityError as exc:
        logger.warning("card_conflict", user_id=str(user_id), word=word)
        raise ConflictFailure(f'A card with the word "{word}" already exists in this list') from exc

    logger.info("card_created",
        user_id=str(user_id),
        card_id=str(card.id),
        next_review=card.next_review.isoformat(),
    )
    return repos.get_card(user_id, card.id)


def list_cards(user_id, word_list_id=None):
    qs = repos.user_cards(user_id)
    if word_list_id:
        qs = qs.filter(word_list_id=word_list_id)
    return list(qs.order_by("-created_at"))


def list_available_cards(user_id, word_list_id):
    """Cards of the user that are not in ``word_list_id`` yet."""
    qs = repos.user_cards(user_id).filter(Q(word_list__isnull=True) | ~Q(word_list_id=word_list_id))
    return list(qs.order_by("-created_at"))


def get_card(user_id, card_id):
    card = repos.get_card(user_id, card_id)
    if card is None:
        logger.warning("card_not_found", user_id=str(user_id), card_id=str(card_id))
        raise NotFound("Card not found")
    return card


def update_card(user_id, card_id, word=None, definition=None, word_details=None):
    card = get_card(user_id, card_id)

    changed = []
    if word is not None:
        card.word = word
        changed.append("word")
    if definition is not None:
        card.definition = definition
        changed.append("definition")

    try:
        with transaction.atomic():
            if changed:
                card.save(update_fields=[*changed, "updated_at"])
            if word_details is not None:
                WordDetails.objects.update_or_create(
                    card=card,
                    defaults={k: v for k, v in word_details.items() if k in DETAIL_FIELDS},
                )
    except IntegrityError as exc:
        raise ConflictFailure(f'A card with the word "{card.word}" already exists in this list') from exc

    logger.info("card_updated", user_id=str(user_id), card_id=str(card_id), fields=changed)
    return repos.get_card(user_id, card_id)


def delete_card(user_id, card_id):
    card = get_card(user_id, card_id)
    card.delete()
    logger.info("card_deleted", user_id=str(user_id), card_id=str(card_id), word=card.word)
