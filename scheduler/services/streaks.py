import structlog
from django.contrib.auth import get_user_model
from django.utils import timezone

from ..errors import NotFound

logger = structlog.get_logger()


def _get_user(user_id):
    user = get_user_model().objects.filter(pk=user_id).first()
    if user is None:
        logger.warning("streak_user_not_found", user_id=str(user_id))
        raise NotFound("User not found")
    return user


def _as_dict(user):
    return {
        "current_streak": user.current_streak,
        "longest_streak": user.longest_streak,
        "last_review_date": user.last_review_date,
    }


def get_streak(user_id):
    return _as_dict(_get_user(user_id))


def update_streak(user_id, now=None):
    """
    Same local day keeps the streak, the next day extends it, anything
    longer (or no previous review) starts over at 1.
    """
    now = now or timezone.now()
    user = _get_user(user_id)

    last = user.last_review_date
    gap = None
    if last is not None:
        gap = abs((timezone.localtime(now).date() - timezone.localtime(last).date()).days)

    if gap is None or gap > 1:
        user.current_streak = 1
    elif gap == 1:
        user.current_streak += 1

    previous_longest = user.longest_streak
    user.longest_streak = max(user.current_streak, user.longest_streak)
    user.last_review_date = now
    user.streak_updated_at = now
    user.save(update_fields=["current_streak", "longest_streak", "last_review_date", "streak_updated_at"])

    logger.info("streak_updated",
        user_id=str(user_id),
        gap_days=gap,
        current_streak=user.current_streak,
        new_longest=user.longest_streak > previous_longest,
    )
    return _as_dict(user)
