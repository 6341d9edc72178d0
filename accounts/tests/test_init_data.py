import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from scheduler.data.models import Card, ReviewSchedule, WordDetails

User = get_user_model()


@pytest.mark.django_db
class TestInitDataCommand:
    def test_seeds_users_schedules_and_cards(self):
        User.objects.create_user(username="stale")

        call_command("init_data")

        assert not User.objects.filter(username="stale").exists()
        assert User.objects.count() == 6
        assert ReviewSchedule.objects.count() == 6
        assert Card.objects.count() == 30
        assert WordDetails.objects.filter(card__word="ephemeral").count() == 6

    def test_missing_file_still_creates_users(self):
        call_command("init_data", file="does-not-exist.json")

        assert User.objects.filter(username="testuser").exists()
        assert Card.objects.count() == 0
