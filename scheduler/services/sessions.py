import structlog
from django.db import transaction
from django.db.models import Avg, Count, Q
from django.utils import timezone

from ..data.models import ReviewSession, TestResult, TestSession
from ..domain.stats import round_half_up
from ..errors import NotFound
from .reviews import update_card_progress

logger = structlog.get_logger()


# Review sessions

def create_review_session(user_id, mode, is_repeat=False, cards=()):
    session = ReviewSession.objects.create(
        user_id=user_id, mode=mode, is_repeat=is_repeat, cards=list(cards)
    )
    logger.info("review_session_created",
        user_id=str(user_id),
        session_id=str(session.pk),
        mode=mode,
        card_count=len(session.cards),
    )
    return session


def list_review_sessions(user_id):
    return list(ReviewSession.objects.filter(user_id=user_id).order_by("-started_at"))


def complete_review_session(user_id, session_id, now=None):
    session = ReviewSession.objects.filter(pk=session_id, user_id=user_id).first()
    if session is None:
        logger.warning("review_session_not_found", user_id=str(user_id), session_id=str(session_id))
        raise NotFound("Review session not found")
    session.completed_at = now or timezone.now()
    session.save(update_fields=["completed_at"])
    logger.info("review_session_completed", user_id=str(user_id), session_id=str(session_id))
    return session


# Test sessions

def _test_sessions(user_id):
    return (TestSession.objects
            .filter(user_id=user_id)
            .prefetch_related("results__card")
            .order_by("-created_at"))


def create_test_session(user_id):
    session = TestSession.objects.create(user_id=user_id)
    logger.info("test_session_created", user_id=str(user_id), session_id=str(session.pk))
    return session


def list_test_sessions(user_id):
    return list(_test_sessions(user_id))


def get_test_session(user_id, session_id):
    session = _test_sessions(user_id).filter(pk=session_id).first()
    if session is None:
        logger.warning("test_session_not_found", user_id=str(user_id), session_id=str(session_id))
        raise NotFound("Test session not found")
    return session


def submit_test_result(user_id, session_id, card_id, is_correct, time_spent, now=None):
    """Record a test answer; counts toward card progress but not the review clock."""
    logger.info("test_result_received",
        user_id=str(user_id),
        session_id=str(session_id),
        card_id=str(card_id),
        is_correct=is_correct,
        time_spent=time_spent,
    )
    if not TestSession.objects.filter(pk=session_id, user_id=user_id).exists():
        raise NotFound("Test session not found")

    with transaction.atomic():
        update_card_progress(user_id, card_id, is_correct, now=now)
        return TestResult.objects.create(
            session_id=session_id,
            card_id=card_id,
            is_correct=is_correct,
            time_spent=time_spent,
        )


def get_test_history(user_id):
    sessions = list_test_sessions(user_id)
    totals = TestResult.objects.filter(session__user_id=user_id).aggregate(
        total=Count("id"),
        correct=Count("id", filter=Q(is_correct=True)),
        average_time=Avg("time_spent"),
    )
    total_tests = totals["total"]
    accuracy = totals["correct"] / total_tests * 100 if total_tests else 0
    return {
        "sessions": sessions,
        "statistics": {
            "total_sessions": len(sessions),
            "total_tests": total_tests,
            "correct_answers": totals["correct"],
            "accuracy": round_half_up(accuracy, 2),
            "average_time_spent": round_half_up(totals["average_time"] or 0, 2),
        },
    }
