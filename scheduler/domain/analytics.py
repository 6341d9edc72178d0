"""
Pure aggregations behind the learning analytics endpoints.

Inputs are plain card-like objects (``success_count``, ``failure_count``)
and the ``reviews_by_date`` mapping produced by review history; nothing
here touches the database.
"""
from datetime import date, timedelta
from typing import NamedTuple

from ..config import DIFFICULT_MIN_FAILURE_RATE, DIFFICULT_MIN_REVIEWS
from .stats import round_half_up, success_rate


class Difficulty(NamedTuple):
    failure_rate: float
    consecutive_failures: int
    suggested_action: str


def period_key(day: date, period: str) -> str:
    """Weeks start on Sunday; months are ``YYYY-MM``."""
    if period == "weekly":
        return (day - timedelta(days=(day.weekday() + 1) % 7)).isoformat()
    if period == "monthly":
        return f"{day.year}-{day.month:02d}"
    return day.isoformat()


def learning_velocity(reviews_by_date: dict, period: str = "daily") -> list:
    buckets = {}
    for key, cards in reviews_by_date.items():
        bucket = buckets.setdefault(period_key(date.fromisoformat(key), period), {
            "cards_learned": 0,
            "reviews_completed": 0,
            "successful_reviews": 0,
        })
        bucket["cards_learned"] += len(cards)
        bucket["reviews_completed"] += sum(c.success_count + c.failure_count for c in cards)
        bucket["successful_reviews"] += sum(c.success_count for c in cards)

    return [
        {
            "period": key,
            "cards_learned": bucket["cards_learned"],
            "reviews_completed": bucket["reviews_completed"],
            "average_accuracy": round_half_up(
                success_rate(bucket["successful_reviews"], bucket["reviews_completed"]), 2
            ),
        }
        for key, bucket in sorted(buckets.items())
    ]


def assess_difficulty(card):
    """None when the card has too few answers to judge."""
    total = card.success_count + card.failure_count
    if total < DIFFICULT_MIN_REVIEWS:
        return None

    failure_rate = card.failure_count / total
    # approximated from the counters, no per-answer sequence is stored
    consecutive = min(card.failure_count, 3) if card.failure_count > card.success_count else 0

    if failure_rate > 0.7:
        action = "break_down"
    elif failure_rate > 0.5 and consecutive >= 2:
        action = "add_examples"
    elif failure_rate > 0.4:
        action = "practice_more"
    else:
        action = "review_again"
    return Difficulty(round_half_up(failure_rate, 2), consecutive, action)


def rank_difficult_cards(cards, limit: int) -> list:
    """(card, Difficulty) pairs above the failure threshold, hardest first."""
    assessed = []
    for card in cards:
        difficulty = assess_difficulty(card)
        if difficulty and difficulty.failure_rate > DIFFICULT_MIN_FAILURE_RATE:
            assessed.append((card, difficulty))
    assessed.sort(key=lambda pair: pair[1].failure_rate, reverse=True)
    return assessed[:limit]


def accuracy_by_hour(answers) -> list:
    """``answers`` is an iterable of (local_hour, is_success) pairs."""
    hours = {}
    for hour, is_success in answers:
        counts = hours.setdefault(hour, [0, 0])
        counts[0] += 1
        counts[1] += 1 if is_success else 0

    rows = [
        {
            "hour": hour,
            "accuracy": round_half_up(success_rate(correct, total), 2),
            "review_count": total,
        }
        for hour, (total, correct) in hours.items()
    ]
    rows.sort(key=lambda row: (-row["accuracy"], -row["review_count"], row["hour"]))
    return rows


def learning_insights(difficult_count, velocity, completion_rate) -> list:
    """
    Rule-based suggestions from the difficult card count, a daily velocity
    series and the session completion rate (None without sessions).
    """
    insights = []

    if difficult_count >= 3:
        insights.append({
            "type": "difficulty_pattern",
            "title": "Multiple Challenging Cards Detected",
            "description": (
                f"You have {difficult_count} cards with high failure rates. Consider reviewing "
                "these more frequently or breaking them down into smaller concepts."
            ),
            "severity": "medium",
            "actionable": True,
            "suggestions": [
                "Create additional example sentences for difficult words",
                "Reset difficult cards with add-to-review",
                "Consider breaking complex definitions into simpler parts",
            ],
        })

    last = velocity[-3:]
    if last:
        accuracy = sum(v["average_accuracy"] for v in last) / len(last)
        if accuracy < 70:
            insights.append({
                "type": "difficulty_pattern",
                "title": "Accuracy Below Optimal Range",
                "description": (
                    f"Your recent accuracy is {round_half_up(accuracy)}%. Consider slowing down "
                    "or reviewing cards more frequently."
                ),
                "severity": "high",
                "actionable": True,
                "suggestions": [
                    "Take more time to think before answering",
                    "Review challenging cards more frequently",
                    "Shorten your review schedule intervals",
                ],
            })

    if completion_rate is not None and completion_rate < 80:
        insights.append({
            "type": "streak_breaking",
            "title": "Low Session Completion Rate",
            "description": (
                f"You're completing only {round_half_up(completion_rate)}% of your review "
                "sessions. Consider shorter sessions or reviewing fewer cards at once."
            ),
            "severity": "medium",
            "actionable": True,
            "suggestions": [
                "Limit review sessions to 10-15 cards",
                "Take breaks between difficult cards",
                "Set a timer for focused review periods",
            ],
        })

    if len(velocity) >= 7:
        early = sum(v["cards_learned"] for v in velocity[:3]) / 3
        late = sum(v["cards_learned"] for v in velocity[-3:]) / 3
        if late <= early * 0.8:
            insights.append({
                "type": "progress_plateau",
                "title": "Learning Progress Plateau",
                "description": (
                    "Your learning velocity has slowed down recently. This might be a good "
                    "time to add new cards or review your study strategy."
                ),
                "severity": "low",
                "actionable": True,
                "suggestions": [
                    "Add new cards to your collection",
                    "Review your study schedule and adjust timing",
                    "Try a different review session mode",
                ],
            })

    return insights
