import uuid
from datetime import timedelta

import pytest

from scheduler.data.models import Card, Review
from scheduler.errors import NotFound
from scheduler.services import sessions, streaks, word_lists
from scheduler.services.cards import create_card, list_available_cards


# Word lists

@pytest.mark.django_db
def test_word_list_visibility(user, other_user):
    mine = word_lists.create_word_list(user.pk, "Mine")
    public = word_lists.create_word_list(other_user.pk, "Shared", is_public=True)
    private = word_lists.create_word_list(other_user.pk, "Hidden")
    create_card(user.pk, "apt", "fitting", word_list_id=mine.pk)

    listed = {wl.name: wl.card_count for wl in word_lists.list_word_lists(user.pk)}

    assert listed == {"Mine": 1, "Shared": 0}
    assert word_lists.get_word_list(user.pk, public.pk).name == "Shared"
    with pytest.raises(NotFound):
        word_lists.get_word_list(user.pk, private.pk)


@pytest.mark.django_db
def test_only_owner_changes_word_list(user, other_user):
    public = word_lists.create_word_list(other_user.pk, "Shared", is_public=True)

    with pytest.raises(NotFound):
        word_lists.update_word_list(user.pk, public.pk, name="Taken")
    with pytest.raises(NotFound):
        word_lists.delete_word_list(user.pk, public.pk)

    updated = word_lists.update_word_list(other_user.pk, public.pk, name="Renamed")
    assert updated.name == "Renamed"
    assert updated.is_public is True


@pytest.mark.django_db
def test_deleting_word_list_keeps_cards(user):
    word_list = word_lists.create_word_list(user.pk, "Temp")
    card = create_card(user.pk, "ebb", "recede", word_list_id=word_list.pk)

    word_lists.delete_word_list(user.pk, word_list.pk)

    card.refresh_from_db()
    assert card.word_list_id is None


@pytest.mark.django_db
def test_card_in_foreign_word_list_is_not_found(user, other_user):
    theirs = word_lists.create_word_list(other_user.pk, "Theirs", is_public=True)

    with pytest.raises(NotFound):
        create_card(user.pk, "moot", "debatable", word_list_id=theirs.pk)


@pytest.mark.django_db
def test_same_word_allowed_in_different_lists(user):
    first = word_lists.create_word_list(user.pk, "One")
    second = word_lists.create_word_list(user.pk, "Two")

    create_card(user.pk, "quell", "suppress", word_list_id=first.pk)
    create_card(user.pk, "quell", "suppress", word_list_id=second.pk)
    create_card(user.pk, "quell", "suppress")

    assert Card.objects.filter(user=user, word="quell").count() == 3


@pytest.mark.django_db
def test_available_cards_exclude_target_list(user):
    target = word_lists.create_word_list(user.pk, "Target")
    other = word_lists.create_word_list(user.pk, "Other")
    create_card(user.pk, "in", "inside", word_list_id=target.pk)
    create_card(user.pk, "out", "outside", word_list_id=other.pk)
    create_card(user.pk, "loose", "free")

    words = {c.word for c in list_available_cards(user.pk, target.pk)}

    assert words == {"out", "loose"}


# Review sessions

@pytest.mark.django_db
def test_review_session_lifecycle(user, other_user, now):
    session = sessions.create_review_session(user.pk, "flashcards", cards=[{"id": "x"}])
    assert session.completed_at is None

    with pytest.raises(NotFound):
        sessions.complete_review_session(other_user.pk, session.pk)

    done = sessions.complete_review_session(user.pk, session.pk, now=now)
    assert done.completed_at == now
    assert [s.pk for s in sessions.list_review_sessions(user.pk)] == [session.pk]
    assert sessions.list_review_sessions(other_user.pk) == []


# Test sessions

@pytest.mark.django_db
def test_test_results_update_progress_only(user, now, make_card):
    card = make_card("gist", "essence")
    next_review = card.next_review
    session = sessions.create_test_session(user.pk)

    sessions.submit_test_result(user.pk, session.pk, card.pk, True, 12, now=now)
    sessions.submit_test_result(user.pk, session.pk, card.pk, False, 20, now=now)

    card.refresh_from_db()
    assert (card.success_count, card.failure_count, card.view_count) == (1, 1, 2)
    assert card.next_review == next_review
    assert card.review_step == 0
    assert not Review.objects.exists()

    history = sessions.get_test_history(user.pk)
    assert history["statistics"] == {
        "total_sessions": 1,
        "total_tests": 2,
        "correct_answers": 1,
        "accuracy": 50.0,
        "average_time_spent": 16.0,
    }
    assert len(sessions.get_test_session(user.pk, session.pk).results.all()) == 2


@pytest.mark.django_db
def test_test_result_requires_own_session_and_card(user, other_user, make_card):
    card = make_card()
    foreign_session = sessions.create_test_session(other_user.pk)
    session = sessions.create_test_session(user.pk)

    with pytest.raises(NotFound):
        sessions.submit_test_result(user.pk, foreign_session.pk, card.pk, True, 5)
    with pytest.raises(NotFound):
        sessions.submit_test_result(user.pk, session.pk, uuid.uuid4(), True, 5)
    with pytest.raises(NotFound):
        sessions.get_test_session(user.pk, foreign_session.pk)


@pytest.mark.django_db
def test_empty_test_history(user):
    history = sessions.get_test_history(user.pk)

    assert history["sessions"] == []
    assert history["statistics"]["accuracy"] == 0
    assert history["statistics"]["average_time_spent"] == 0


# Streaks

@pytest.mark.django_db
def test_streak_progression(user, now):
    assert streaks.get_streak(user.pk) == {
        "current_streak": 0,
        "longest_streak": 0,
        "last_review_date": None,
    }

    assert streaks.update_streak(user.pk, now=now)["current_streak"] == 1
    # same day again
    assert streaks.update_streak(user.pk, now=now + timedelta(hours=2))["current_streak"] == 1
    assert streaks.update_streak(user.pk, now=now + timedelta(days=1))["current_streak"] == 2
    assert streaks.update_streak(user.pk, now=now + timedelta(days=2))["current_streak"] == 3

    streak = streaks.update_streak(user.pk, now=now + timedelta(days=5))
    assert streak["current_streak"] == 1
    assert streak["longest_streak"] == 3
    assert streak["last_review_date"] == now + timedelta(days=5)


@pytest.mark.django_db
def test_streak_unknown_user():
    with pytest.raises(NotFound):
        streaks.update_streak(424242)
