from collections import defaultdict
from datetime import timedelta

import structlog
from django.utils import timezone

from ..config import DEFAULT_INTERVALS, UPCOMING_DAYS, UPCOMING_START_DAYS
from ..data import repos
from ..data.models import Review
from ..domain.projection import group_by_date, project_card
from ..errors import NotFound
from ..utils.time import date_key, day_bounds

logger = structlog.get_logger()


def _review_dates_by_card(card_ids):
    dates = defaultdict(set)
    rows = Review.objects.filter(card_id__in=card_ids).values_list("card_id", "created_at")
    for card_id, created_at in rows:
        dates[card_id].add(date_key(created_at))
    return dates


def get_upcoming_cards(user_id, days=UPCOMING_DAYS, start_days=UPCOMING_START_DAYS, now=None):
    """
    Project which active cards fall due on each date of the window
    ``[today + start_days, today + days)``.

    Returns ``{"cards": {date: bucket}, "total": int, "intervals": list}``
    where each bucket lists ``ProjectedReview`` entries next to the
    ``Card`` objects they refer to.
    """
    if not repos.user_exists(user_id):
        logger.warning("upcoming_user_not_found", user_id=str(user_id))
        raise NotFound("User not found")

    now = now or timezone.now()
    start_of_today, _ = day_bounds(now)
    window_start = start_of_today + timedelta(days=start_days)
    window_end = start_of_today + timedelta(days=days)

    schedule = repos.get_schedule(user_id)
    intervals = list(schedule.intervals) if schedule and schedule.intervals else list(DEFAULT_INTERVALS)

    cards = {card.pk: card for card in repos.active_cards(user_id)}
    reviewed = _review_dates_by_card(list(cards))

    entries = []
    for card in cards.values():
        entries.extend(project_card(
            card_id=card.pk,
            base_date=card.last_reviewed or card.created_at,
            review_step=card.review_step,
            failure_count=card.failure_count,
            reviewed_dates=reviewed.get(card.pk, set()),
            intervals=intervals,
            window_start=window_start,
            window_end=window_end,
        ))

    buckets = group_by_date(entries)
    for bucket in buckets.values():
        bucket["cards"] = [(cards[entry.card_id], entry) for entry in bucket.pop("entries")]

    total = sum(bucket["total"] for bucket in buckets.values())
    logger.debug("upcoming_projected",
        user_id=str(user_id),
        days=days,
        start_days=start_days,
        total=total,
        dates=len(buckets),
    )
    return {"cards": dict(sorted(buckets.items())), "total": total, "intervals": intervals}
