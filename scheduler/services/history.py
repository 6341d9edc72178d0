from datetime import timedelta

import structlog
from django.utils import timezone

from ..config import HISTORY_DAYS
from ..data import repos
from ..data.models import Review
from ..domain.stats import round_half_up, success_rate, summarize_cards
from ..utils.time import date_key, day_bounds, start_of_local_date

logger = structlog.get_logger()


def get_stats(user_id, now=None):
    now = now or timezone.now()
    start, end = day_bounds(now)

    cards = list(repos.user_cards(user_id))
    stats = summarize_cards(cards)
    stats["reviews_today"] = Review.objects.filter(
        card__user_id=user_id, created_at__gte=start, created_at__lt=end
    ).count()

    logger.debug("stats_computed", user_id=str(user_id), **stats)
    return stats


def get_review_history(user_id, start_date=None, end_date=None, days=HISTORY_DAYS, now=None):
    """
    Cards last reviewed in a window, newest first, with review totals and
    a per-date grouping.

    With both ``start_date`` and ``end_date`` (dates) the window covers
    those local calendar days inclusively; otherwise it is the trailing
    ``days`` days ending at ``now``.
    """
    if start_date and end_date:
        window = {
            "last_reviewed__gte": start_of_local_date(start_date),
            "last_reviewed__lt": start_of_local_date(end_date + timedelta(days=1)),
        }
    else:
        now = now or timezone.now()
        window = {
            "last_reviewed__gte": now - timedelta(days=days),
            "last_reviewed__lte": now,
        }

    cards = list(repos.user_cards(user_id).filter(**window).order_by("-last_reviewed"))

    total_success = sum(c.success_count for c in cards)
    total_failures = sum(c.failure_count for c in cards)
    total_reviews = total_success + total_failures

    reviews_by_date = {}
    for card in cards:
        if card.last_reviewed is None:
            continue
        reviews_by_date.setdefault(date_key(card.last_reviewed), []).append(card)

    statistics = {
        "total_reviews": total_reviews,
        "total_success": total_success,
        "total_failures": total_failures,
        "average_success_rate": round_half_up(success_rate(total_success, total_reviews), 2),
    }
    logger.debug("review_history_computed",
        user_id=str(user_id),
        cards=len(cards),
        average_success_rate=statistics["average_success_rate"],
    )
    return {"cards": cards, "statistics": statistics, "reviews_by_date": reviews_by_date}
