from datetime import datetime, timezone as dt_tz

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from scheduler.data.models import Card, Review
from scheduler.services.cards import create_card
from scheduler.services.schedules import upsert_schedule

User = get_user_model()

NOW = datetime(2024, 3, 10, 12, 0, tzinfo=dt_tz.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def user(db):
    return User.objects.create_user(username="alice")


@pytest.fixture
def other_user(db):
    return User.objects.create_user(username="bob")


@pytest.fixture
def api(user):
    client = APIClient()
    client.credentials(HTTP_X_USER_NAME=user.username)
    return client


@pytest.fixture
def make_card(user, now):
    def _make(word="word", definition="definition", owner=None, created_at=None, **fields):
        owner = owner or user
        card = create_card(owner.pk, word, definition, now=created_at or now)
        if fields:
            Card.objects.filter(pk=card.pk).update(**fields)
            card.refresh_from_db()
        return card

    return _make


@pytest.fixture
def add_review():
    def _add(card, created_at, is_success=True):
        return Review.objects.create(card=card, is_success=is_success, created_at=created_at)

    return _add


@pytest.fixture
def schedule(user):
    return upsert_schedule(user.pk, intervals=[1, 2, 7, 30, 365])


