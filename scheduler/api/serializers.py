from rest_framework import serializers

from ..config import (
    DIFFICULT_CARDS_LIMIT,
    HISTORY_DAYS,
    MAX_WINDOW_DAYS,
    OPTIMAL_TIMES_DAYS,
    UPCOMING_DAYS,
    UPCOMING_START_DAYS,
    VELOCITY_DAYS,
    VELOCITY_PERIODS,
)
from ..data.models import (
    Card,
    ReviewSchedule,
    ReviewSession,
    TestResult,
    TestSession,
    WordDetails,
    WordList,
)
from ..utils.time import to_local_iso


class StrictBooleanField(serializers.BooleanField):
    """Only JSON true/false; no "yes", 1 or "true" coercion."""

    default_error_messages = {"invalid": "Must be a boolean."}

    def to_internal_value(self, data):
        if not isinstance(data, bool):
            self.fail("invalid")
        return data


# Cards

class WordDetailsSerializer(serializers.ModelSerializer):
    synonyms = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    antonyms = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    examples = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True, default=None)

    class Meta:
        model = WordDetails
        fields = ["synonyms", "antonyms", "examples", "notes"]


class CardSerializer(serializers.ModelSerializer):
    word_details = serializers.SerializerMethodField()
    word_list_name = serializers.SerializerMethodField()

    class Meta:
        model = Card
        fields = [
            "id", "word", "definition", "word_list_id", "word_list_name", "word_details",
            "review_step", "review_status", "next_review", "last_reviewed",
            "view_count", "success_count", "failure_count", "created_at",
        ]

    def get_word_details(self, card):
        details = getattr(card, "word_details", None)
        return WordDetailsSerializer(details).data if details else None

    def get_word_list_name(self, card):
        return card.word_list.name if card.word_list_id else None


class TodayCardSerializer(CardSerializer):
    priority = serializers.DictField(read_only=True)

    class Meta(CardSerializer.Meta):
        fields = CardSerializer.Meta.fields + ["priority"]


class CardInSerializer(serializers.Serializer):
    word = serializers.CharField(max_length=255)
    definition = serializers.CharField()
    word_list_id = serializers.UUIDField(required=False, allow_null=True)
    word_details = WordDetailsSerializer(required=False, allow_null=True)


class CardUpdateSerializer(serializers.Serializer):
    word = serializers.CharField(max_length=255, required=False)
    definition = serializers.CharField(required=False)
    word_details = WordDetailsSerializer(required=False, allow_null=True)


class CardListQuerySerializer(serializers.Serializer):
    word_list_id = serializers.UUIDField(required=False)


class AvailableQuerySerializer(serializers.Serializer):
    word_list_id = serializers.UUIDField()


# Reviews

class ReviewInSerializer(serializers.Serializer):
    card_id = serializers.UUIDField()
    is_success = StrictBooleanField()


class ProgressInSerializer(serializers.Serializer):
    is_success = StrictBooleanField()


class AddToReviewSerializer(serializers.Serializer):
    card_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=True)


class UpcomingQuerySerializer(serializers.Serializer):
    days = serializers.IntegerField(
        required=False, default=UPCOMING_DAYS, min_value=1, max_value=MAX_WINDOW_DAYS
    )
    start_days = serializers.IntegerField(
        required=False, default=UPCOMING_START_DAYS, min_value=-MAX_WINDOW_DAYS, max_value=MAX_WINDOW_DAYS
    )


class HistoryQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    days = serializers.IntegerField(
        required=False, default=HISTORY_DAYS, min_value=1, max_value=MAX_WINDOW_DAYS
    )


class HistoryCardSerializer(serializers.ModelSerializer):
    word_list_name = serializers.SerializerMethodField()

    class Meta:
        model = Card
        fields = [
            "id", "word", "last_reviewed", "next_review", "success_count",
            "failure_count", "review_status", "word_list_id", "word_list_name",
        ]

    def get_word_list_name(self, card):
        return card.word_list.name if card.word_list_id else None


# Analytics

class VelocityQuerySerializer(serializers.Serializer):
    period = serializers.ChoiceField(choices=VELOCITY_PERIODS, required=False, default="daily")
    days = serializers.IntegerField(
        required=False, default=VELOCITY_DAYS, min_value=1, max_value=MAX_WINDOW_DAYS
    )


class DifficultCardsQuerySerializer(serializers.Serializer):
    limit = serializers.IntegerField(
        required=False, default=DIFFICULT_CARDS_LIMIT, min_value=1, max_value=100
    )


class OptimalTimesQuerySerializer(serializers.Serializer):
    days = serializers.IntegerField(
        required=False, default=OPTIMAL_TIMES_DAYS, min_value=1, max_value=MAX_WINDOW_DAYS
    )


class DifficultCardSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    word = serializers.CharField()
    definition = serializers.CharField()
    failure_rate = serializers.FloatField()
    consecutive_failures = serializers.IntegerField()
    last_reviewed = serializers.DateTimeField(allow_null=True)
    suggested_action = serializers.CharField()


# Import

class ImportInSerializer(serializers.Serializer):
    headers = serializers.ListField(child=serializers.CharField(), required=False)
    rows = serializers.ListField(child=serializers.DictField(), allow_empty=False)
    word_list_id = serializers.UUIDField(required=False, allow_null=True)


# Review schedule

class ReviewScheduleSerializer(serializers.ModelSerializer):
    class Meta:
        model = ReviewSchedule
        fields = ["intervals", "name", "description", "is_default", "created_at", "updated_at"]


class ReviewScheduleInSerializer(serializers.Serializer):
    # Stricter than the service: reject empty or non-positive interval lists
    intervals = serializers.ListField(
        child=serializers.IntegerField(min_value=1), min_length=1, required=False
    )
    name = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    is_default = serializers.BooleanField(required=False)


# Word lists

class WordListSerializer(serializers.ModelSerializer):
    card_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = WordList
        fields = ["id", "name", "description", "is_public", "card_count", "created_at", "updated_at"]


class WordListDetailSerializer(WordListSerializer):
    cards = CardSerializer(many=True, read_only=True)

    class Meta(WordListSerializer.Meta):
        fields = WordListSerializer.Meta.fields + ["cards"]


class WordListInSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    is_public = serializers.BooleanField(required=False, default=False)


class WordListUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    is_public = serializers.BooleanField(required=False)


# Sessions

class ReviewSessionSerializer(serializers.ModelSerializer):
    class Meta:
        model = ReviewSession
        fields = ["id", "mode", "is_repeat", "cards", "started_at", "completed_at"]


class ReviewSessionInSerializer(serializers.Serializer):
    mode = serializers.CharField(max_length=32)
    is_repeat = serializers.BooleanField(required=False, default=False)
    cards = serializers.ListField(child=serializers.JSONField(), required=False, default=list)


class TestResultSerializer(serializers.ModelSerializer):
    card = CardSerializer(read_only=True)

    class Meta:
        model = TestResult
        fields = ["id", "card", "is_correct", "time_spent", "created_at"]


class TestSessionSerializer(serializers.ModelSerializer):
    results = TestResultSerializer(many=True, read_only=True)

    class Meta:
        model = TestSession
        fields = ["id", "created_at", "results"]


class TestResultInSerializer(serializers.Serializer):
    card_id = serializers.UUIDField()
    is_correct = StrictBooleanField()
    time_spent = serializers.IntegerField(min_value=0)


class StreakSerializer(serializers.Serializer):
    current_streak = serializers.IntegerField()
    longest_streak = serializers.IntegerField()
    last_review_date = serializers.SerializerMethodField()

    def get_last_review_date(self, streak):
        return to_local_iso(streak["last_review_date"])
