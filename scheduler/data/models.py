import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from ..config import DEFAULT_INTERVALS, DEFAULT_SCHEDULE_NAME
from ..domain.enums import REVIEW_STATUS_CHOICES, ReviewStatus


def default_intervals():
    return list(DEFAULT_INTERVALS)


class ReviewSchedule(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="review_schedule"
    )
    intervals = models.JSONField(default=default_intervals)  # days
    is_default = models.BooleanField(default=True)
    name = models.CharField(max_length=255, default=DEFAULT_SCHEDULE_NAME)
    description = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)


class WordList(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="word_lists"
    )
    name = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    is_public = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)


class Card(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="cards"
    )
    word_list = models.ForeignKey(
        WordList, null=True, blank=True, on_delete=models.SET_NULL, related_name="cards"
    )
    word = models.CharField(max_length=255)
    definition = models.TextField()
    view_count = models.PositiveIntegerField(default=0)
    success_count = models.PositiveIntegerField(default=0)
    failure_count = models.PositiveIntegerField(default=0)
    last_reviewed = models.DateTimeField(null=True, blank=True)
    next_review = models.DateTimeField(default=timezone.now)
    review_status = models.CharField(
        max_length=16, choices=REVIEW_STATUS_CHOICES, default=ReviewStatus.ACTIVE.value
    )
    review_step = models.IntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "word_list", "word"], name="uniq_card_word_per_list"
            ),
            models.UniqueConstraint(
                fields=["user", "word"],
                condition=Q(word_list__isnull=True),
                name="uniq_card_word_without_list",
            ),
        ]
        indexes = [
            models.Index(fields=["user", "review_status", "next_review"], name="scheduler_c_user_id_6c1e2b_idx"),
            models.Index(fields=["user", "last_reviewed"], name="scheduler_c_user_id_0f4d8a_idx"),
        ]


class WordDetails(models.Model):
    card = models.OneToOneField(Card, on_delete=models.CASCADE, related_name="word_details")
    synonyms = models.JSONField(default=list)
    antonyms = models.JSONField(default=list)
    examples = models.JSONField(default=list)
    notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)


class Review(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    card = models.ForeignKey(Card, on_delete=models.CASCADE, related_name="reviews")
    is_success = models.BooleanField()
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(fields=["card", "created_at"], name="scheduler_r_card_id_3b9f51_idx"),
        ]


class ReviewSession(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="review_sessions"
    )
    mode = models.CharField(max_length=32)
    is_repeat = models.BooleanField(default=False)
    cards = models.JSONField(default=list)
    started_at = models.DateTimeField(default=timezone.now)
    completed_at = models.DateTimeField(null=True, blank=True)


class TestSession(models.Model):
    __test__ = False

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="test_sessions"
    )
    created_at = models.DateTimeField(default=timezone.now)


class TestResult(models.Model):
    __test__ = False

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    session = models.ForeignKey(TestSession, on_delete=models.CASCADE, related_name="results")
    card = models.ForeignKey(Card, on_delete=models.CASCADE, related_name="test_results")
    is_correct = models.BooleanField()
    time_spent = models.PositiveIntegerField(default=0)  # seconds
    created_at = models.DateTimeField(default=timezone.now)
