import logging
from datetime import timedelta

import pytest

from scheduler.domain.enums import ReviewStatus
from scheduler.errors import NotFound
from scheduler.services.due import get_today_cards
from scheduler.services.schedules import upsert_schedule
from scheduler.services.upcoming import get_upcoming_cards

logger = logging.getLogger(__name__)


# Today

@pytest.mark.django_db
def test_today_cards_include_overdue_and_skip_reviewed_today(user, other_user, now, make_card, add_review):
    due_today = make_card("due", next_review=now - timedelta(hours=2))
    overdue = make_card("overdue", next_review=now - timedelta(days=3), failure_count=2)
    make_card("later", next_review=now + timedelta(days=2))
    make_card("done", next_review=now - timedelta(hours=1), review_status=ReviewStatus.COMPLETED.value)
    make_card("theirs", owner=other_user, next_review=now - timedelta(hours=1))
    reviewed = make_card("reviewed", next_review=now - timedelta(hours=1))
    add_review(reviewed, now - timedelta(hours=1))

    result = get_today_cards(user.pk, now=now)

    assert [c.word for c in result["cards"]] == [overdue.word, due_today.word]
    assert result["total"] == 2
    assert result["has_more"] is False
    logger.info("✓ Passed: overdue first, reviewed-today card excluded")


@pytest.mark.django_db
def test_today_cards_due_later_today_are_included(user, now, make_card):
    make_card("tonight", next_review=now + timedelta(hours=11))
    make_card("tomorrow", next_review=now + timedelta(hours=13))

    result = get_today_cards(user.pk, now=now)

    assert [c.word for c in result["cards"]] == ["tonight"]


@pytest.mark.django_db
def test_review_from_yesterday_does_not_hide_card(user, now, make_card, add_review):
    card = make_card(next_review=now - timedelta(hours=1))
    add_review(card, now - timedelta(days=1))

    assert get_today_cards(user.pk, now=now)["total"] == 1


@pytest.mark.django_db
def test_today_cards_priority_hints(user, now, make_card):
    make_card(
        "tricky",
        next_review=now - timedelta(days=1),
        success_count=1,
        failure_count=3,
        created_at=now - timedelta(days=5),
    )

    card = get_today_cards(user.pk, now=now)["cards"][0]

    assert card.priority == {"is_overdue": True, "failure_rate": 0.75, "days_since_created": 5}


@pytest.mark.django_db
def test_today_cards_limit_reports_has_more(user, now, make_card):
    for word in ("a", "b", "c"):
        make_card(word, next_review=now - timedelta(hours=1))

    result = get_today_cards(user.pk, now=now, limit=2)

    assert result["total"] == 2
    assert result["has_more"] is True


# Upcoming

@pytest.mark.django_db
def test_upcoming_unknown_user_is_not_found():
    with pytest.raises(NotFound):
        get_upcoming_cards(987654)


@pytest.mark.django_db
def test_upcoming_with_no_cards(user, now):
    result = get_upcoming_cards(user.pk, now=now)

    assert result == {"cards": {}, "total": 0, "intervals": [1, 2, 7, 30, 365]}


@pytest.mark.django_db
def test_upcoming_projects_current_and_future_steps(user, now, make_card, add_review):
    fresh = make_card("fresh", created_at=now - timedelta(days=1))
    failed = make_card("failed", created_at=now - timedelta(days=1), failure_count=1)
    add_review(failed, now - timedelta(hours=1), is_success=False)
    make_card("done", created_at=now - timedelta(days=1), review_status=ReviewStatus.COMPLETED.value)

    result = get_upcoming_cards(user.pk, days=7, start_days=-14, now=now)

    assert list(result["cards"]) == ["2024-03-10", "2024-03-11", "2024-03-16"]
    assert result["total"] == 6

    today = result["cards"]["2024-03-10"]
    assert (today["total"], today["reviewed"], today["not_reviewed"], today["from_failure"]) == (2, 1, 1, 0)
    assert {card.word for card, _ in today["cards"]} == {fresh.word, failed.word}
    assert all(not entry.is_future_review and entry.step == 0 for _, entry in today["cards"])

    later = result["cards"]["2024-03-16"]
    assert all(entry.is_future_review and entry.step == 2 for _, entry in later["cards"])
    logger.info("✓ Passed: upcoming buckets %s", list(result["cards"]))


@pytest.mark.django_db
def test_upcoming_narrow_window(user, now, make_card):
    make_card("fresh", created_at=now - timedelta(days=1))

    result = get_upcoming_cards(user.pk, days=1, start_days=0, now=now)

    assert list(result["cards"]) == ["2024-03-10"]
    assert result["total"] == 1


@pytest.mark.django_db
def test_upcoming_uses_last_review_as_base(user, now, make_card):
    make_card(
        "stepped",
        created_at=now - timedelta(days=20),
        last_reviewed=now - timedelta(days=1),
        review_step=1,
    )

    result = get_upcoming_cards(user.pk, now=now)

    # step 1 lands two days after the last review, step 2 seven days after
    assert list(result["cards"]) == ["2024-03-11", "2024-03-16"]


@pytest.mark.django_db
def test_upcoming_never_lists_card_twice_per_date(user, now, make_card):
    upsert_schedule(user.pk, intervals=[2, 2, 2, 5])
    make_card("repeat", created_at=now)

    result = get_upcoming_cards(user.pk, now=now)

    for bucket in result["cards"].values():
        ids = [card.pk for card, _ in bucket["cards"]]
        assert len(ids) == len(set(ids))
    assert result["total"] == 2
