from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from scheduler.domain.enums import ReviewStatus
from scheduler.domain.stats import round_half_up, success_rate, summarize_cards
from scheduler.services.history import get_review_history, get_stats


def card(success=0, failure=0, status=ReviewStatus.ACTIVE.value):
    return SimpleNamespace(success_count=success, failure_count=failure, review_status=status)


def test_success_rate_without_reviews_is_zero():
    assert success_rate(0, 0) == 0
    assert summarize_cards([])["success_rate"] == 0


def test_summary_counts_and_rounding():
    stats = summarize_cards([
        card(success=2, failure=1),
        card(success=0, failure=2),
        card(success=1, failure=2, status=ReviewStatus.COMPLETED.value),
    ])

    assert stats["total_cards"] == 3
    assert stats["active_cards"] == 2
    assert stats["completed_cards"] == 1
    # completed cards never count as challenging
    assert stats["challenging_cards"] == 1
    assert (stats["total_reviews"], stats["total_success"], stats["total_failures"]) == (8, 3, 5)
    assert stats["success_rate"] == 38


def test_success_rate_rounds_halves_up():
    assert summarize_cards([card(success=5, failure=3)])["success_rate"] == 63
    assert summarize_cards([card(success=1, failure=7)])["success_rate"] == 13
    assert summarize_cards([card(success=1, failure=1)])["success_rate"] == 50


def test_round_half_up_with_decimals():
    assert round_half_up(66.66666666666666, 2) == 66.67
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(2.5) == 3
    assert round_half_up(0, 2) == 0


@pytest.mark.django_db
def test_stats_counts_reviews_recorded_today(user, other_user, now, make_card, add_review):
    mine = make_card("mine", success_count=3, failure_count=1)
    theirs = make_card("theirs", owner=other_user)
    add_review(mine, now - timedelta(hours=3))
    add_review(mine, now - timedelta(days=1))
    add_review(theirs, now)

    stats = get_stats(user.pk, now=now)

    assert stats["total_cards"] == 1
    assert stats["success_rate"] == 75
    assert stats["reviews_today"] == 1


@pytest.mark.django_db
def test_history_trailing_window(user, now, make_card):
    make_card("recent", last_reviewed=now - timedelta(days=1), success_count=1, failure_count=1)
    make_card("newest", last_reviewed=now - timedelta(hours=1), success_count=2)
    make_card("old", last_reviewed=now - timedelta(days=40), success_count=5)
    make_card("never")

    result = get_review_history(user.pk, days=30, now=now)

    assert [c.word for c in result["cards"]] == ["newest", "recent"]
    assert result["statistics"] == {
        "total_reviews": 4,
        "total_success": 3,
        "total_failures": 1,
        "average_success_rate": 75.0,
    }
    assert sorted(result["reviews_by_date"]) == ["2024-03-09", "2024-03-10"]


@pytest.mark.django_db
def test_history_explicit_dates_are_inclusive(user, now, make_card):
    make_card("first", last_reviewed=now.replace(day=1, hour=0, minute=0))
    make_card("last", last_reviewed=now.replace(day=5, hour=23, minute=59))
    make_card("after", last_reviewed=now.replace(day=6, hour=0, minute=0))

    result = get_review_history(user.pk, start_date=date(2024, 3, 1), end_date=date(2024, 3, 5))

    assert [c.word for c in result["cards"]] == ["last", "first"]
    assert result["statistics"]["average_success_rate"] == 0


@pytest.mark.django_db
def test_history_empty(user, now):
    result = get_review_history(user.pk, now=now)

    assert result["cards"] == []
    assert result["reviews_by_date"] == {}
    assert result["statistics"]["total_reviews"] == 0


@pytest.mark.django_db
def test_history_average_rounded_to_two_decimals(user, now, make_card):
    make_card("thirds", last_reviewed=now - timedelta(hours=2), success_count=2, failure_count=1)

    result = get_review_history(user.pk, days=7, now=now)

    assert result["statistics"]["average_success_rate"] == 66.67
