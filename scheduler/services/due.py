import structlog
from django.utils import timezone

from ..data import repos
from ..utils.time import day_bounds

logger = structlog.get_logger()


def _priority(card, now):
    answered = card.success_count + card.failure_count
    return {
        "is_overdue": card.next_review < now,
        "failure_rate": card.failure_count / max(1, answered),
        "days_since_created": (now - card.created_at).days,
    }


def get_today_cards(user_id, now=None, limit=None):
    """
    Active cards due by the end of today, overdue ones included, minus any
    card that already has a review recorded today.
    """
    now = now or timezone.now()
    start, end = day_bounds(now)

    qs = (repos.active_cards(user_id)
          .filter(next_review__lte=end)
          .exclude(pk__in=repos.reviewed_card_ids_between(start, end))
          .order_by("next_review", "-failure_count", "created_at"))
    if limit:
        qs = qs[:limit]

    cards = list(qs)
    for card in cards:
        card.priority = _priority(card, now)

    logger.debug("today_cards_selected",
        user_id=str(user_id),
        total=len(cards),
        overdue=sum(1 for c in cards if c.priority["is_overdue"]),
        limit=limit,
    )
    return {
        "cards": cards,
        "total": len(cards),
        "has_more": bool(limit) and len(cards) == limit,
    }
