from datetime import timedelta

import structlog
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from ..config import REVIEW_FALLBACK_INTERVALS
from ..data import repos
from ..data.models import Card
from ..domain.enums import ReviewStatus
from ..domain.logic import next_review_state
from ..errors import NotFound
from ..utils.time import to_local_iso
from .schedules import intervals_for_review

logger = structlog.get_logger()


def _counter_updates(is_success):
    if is_success:
        return {"success_count": F("success_count") + 1}
    return {"failure_count": F("failure_count") + 1}


def review_card(user_id, card_id, is_success: bool, now=None):
    logger.info("review_received",
        user_id=str(user_id),
        card_id=str(card_id),
        is_success=is_success,
    )
    now = now or timezone.now()

    # Serialize step advancement per card
    with transaction.atomic():
        card = repos.get_card_for_update(user_id, card_id)
        if card is None:
            logger.warning("review_card_not_found", user_id=str(user_id), card_id=str(card_id))
            raise NotFound("Card not found")

        intervals = intervals_for_review(user_id, REVIEW_FALLBACK_INTERVALS)
        transition = next_review_state(intervals, card.review_step, is_success)

        updates = {
            "review_step": transition.step,
            "next_review": now + timedelta(days=transition.interval_days),
            "last_reviewed": now,
            "view_count": F("view_count") + 1,
            "updated_at": now,
            **_counter_updates(is_success),
        }
        if transition.completed:
            updates["review_status"] = ReviewStatus.COMPLETED.value
        Card.objects.filter(pk=card.pk).update(**updates)

        repos.persist_review(card, is_success, now)

    logger.info("review_scheduled",
        user_id=str(user_id),
        card_id=str(card_id),
        previous_step=card.review_step,
        step=transition.step,
        interval_days=transition.interval_days,
        completed=transition.completed,
        next_review=to_local_iso(updates["next_review"]),
    )
    return repos.get_card(user_id, card_id)


def update_card_progress(user_id, card_id, is_success: bool, now=None):
    """
    Count a practice answer without touching the review clock:
    no step change, no next_review change, no Review row.
    """
    now = now or timezone.now()
    updated = (Card.objects
               .filter(pk=card_id, user_id=user_id)
               .update(view_count=F("view_count") + 1,
                       last_reviewed=now,
                       updated_at=now,
                       **_counter_updates(is_success)))
    if not updated:
        logger.warning("progress_card_not_found", user_id=str(user_id), card_id=str(card_id))
        raise NotFound("Card not found")

    logger.debug("progress_updated", user_id=str(user_id), card_id=str(card_id), is_success=is_success)
    return repos.get_card(user_id, card_id)


def add_to_review(user_id, card_ids, now=None) -> int:
    now = now or timezone.now()
    updated = (Card.objects
               .filter(pk__in=list(card_ids), user_id=user_id)
               .update(review_status=ReviewStatus.ACTIVE.value,
                       next_review=now,
                       last_reviewed=None,
                       success_count=0,
                       failure_count=0,
                       updated_at=now))

    logger.info("cards_added_to_review",
        user_id=str(user_id),
        requested=len(card_ids),
        updated=updated,
    )
    return updated
