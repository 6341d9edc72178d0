from datetime import timedelta

import structlog
from django.db.models import Count, Q
from django.utils import timezone

from ..config import (
    DASHBOARD_DIFFICULT_LIMIT,
    DASHBOARD_TODAY_LIMIT,
    DASHBOARD_VELOCITY_DAYS,
    DIFFICULT_CARDS_LIMIT,
    INSIGHT_VELOCITY_DAYS,
    OPTIMAL_TIMES_DAYS,
    SESSION_STATS_DAYS,
    VELOCITY_DAYS,
)
from ..data import repos
from ..data.models import Review, ReviewSession
from ..domain.analytics import (
    accuracy_by_hour,
    learning_insights,
    learning_velocity,
    rank_difficult_cards,
)
from .due import get_today_cards
from .history import get_review_history, get_stats
from .streaks import get_streak

logger = structlog.get_logger()


def get_learning_velocity(user_id, period="daily", days=VELOCITY_DAYS, now=None):
    history = get_review_history(user_id, days=days, now=now)
    velocity = learning_velocity(history["reviews_by_date"], period)
    logger.debug("learning_velocity_computed",
        user_id=str(user_id),
        period=period,
        days=days,
        data_points=len(velocity),
    )
    return velocity


def get_difficult_cards(user_id, limit=DIFFICULT_CARDS_LIMIT):
    """
    Cards with at least three answers and a failure rate above 30%,
    hardest first, each with a suggested action.
    """
    ranked = rank_difficult_cards(repos.user_cards(user_id), limit)
    logger.debug("difficult_cards_ranked", user_id=str(user_id), limit=limit, found=len(ranked))
    return [
        {
            "id": card.pk,
            "word": card.word,
            "definition": card.definition,
            "failure_rate": difficulty.failure_rate,
            "consecutive_failures": difficulty.consecutive_failures,
            "last_reviewed": card.last_reviewed,
            "suggested_action": difficulty.suggested_action,
        }
        for card, difficulty in ranked
    ]


def get_optimal_review_times(user_id, days=OPTIMAL_TIMES_DAYS, now=None):
    """Accuracy of recorded reviews per local hour of day, best hours first."""
    now = now or timezone.now()
    rows = (Review.objects
            .filter(card__user_id=user_id, created_at__gte=now - timedelta(days=days), created_at__lte=now)
            .values_list("created_at", "is_success"))
    hours = accuracy_by_hour(
        (timezone.localtime(created_at).hour, is_success) for created_at, is_success in rows
    )
    logger.debug("optimal_times_computed", user_id=str(user_id), days=days, hours=len(hours))
    return hours


def session_completion_rate(user_id, days=SESSION_STATS_DAYS, now=None):
    now = now or timezone.now()
    counts = ReviewSession.objects.filter(
        user_id=user_id, started_at__gte=now - timedelta(days=days)
    ).aggregate(
        total=Count("id"),
        completed=Count("id", filter=Q(completed_at__isnull=False)),
    )
    if not counts["total"]:
        return None
    return counts["completed"] / counts["total"] * 100


def get_learning_insights(user_id, now=None):
    difficult = get_difficult_cards(user_id, DASHBOARD_DIFFICULT_LIMIT)
    velocity = get_learning_velocity(user_id, "daily", INSIGHT_VELOCITY_DAYS, now=now)
    completion_rate = session_completion_rate(user_id, now=now)

    insights = learning_insights(len(difficult), velocity, completion_rate)
    logger.debug("learning_insights_generated",
        user_id=str(user_id),
        insights=len(insights),
        high=sum(1 for i in insights if i["severity"] == "high"),
    )
    return insights


def get_learning_dashboard(user_id, now=None):
    now = now or timezone.now()
    stats = get_stats(user_id, now=now)
    today = get_today_cards(user_id, now=now, limit=DASHBOARD_TODAY_LIMIT)

    dashboard = {
        "velocity": get_learning_velocity(user_id, "daily", DASHBOARD_VELOCITY_DAYS, now=now),
        "difficult_cards": get_difficult_cards(user_id, DASHBOARD_DIFFICULT_LIMIT),
        "optimal_times": get_optimal_review_times(user_id, now=now),
        "insights": get_learning_insights(user_id, now=now),
        "summary": {
            "total_cards": stats["total_cards"],
            "average_accuracy": stats["success_rate"],
            "streak_days": get_streak(user_id)["current_streak"],
            "next_review_count": today["total"],
        },
    }
    logger.info("learning_dashboard_built", user_id=str(user_id), **dashboard["summary"])
    return dashboard
