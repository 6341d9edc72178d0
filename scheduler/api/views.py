import uuid

import structlog
from rest_framework import status, views
from rest_framework.response import Response

from ..services import cards as card_service
from ..services import analytics, due, history, reviews, schedules, sessions, streaks, upcoming, word_lists
from ..services.importer import CardImporter
from ..utils.time import to_local_iso
from .serializers import (
    AddToReviewSerializer,
    AvailableQuerySerializer,
    CardInSerializer,
    CardListQuerySerializer,
    CardSerializer,
    CardUpdateSerializer,
    DifficultCardSerializer,
    DifficultCardsQuerySerializer,
    HistoryCardSerializer,
    HistoryQuerySerializer,
    ImportInSerializer,
    OptimalTimesQuerySerializer,
    ProgressInSerializer,
    ReviewInSerializer,
    ReviewScheduleInSerializer,
    ReviewScheduleSerializer,
    ReviewSessionInSerializer,
    ReviewSessionSerializer,
    StreakSerializer,
    TestResultInSerializer,
    TestResultSerializer,
    TestSessionSerializer,
    TodayCardSerializer,
    UpcomingQuerySerializer,
    VelocityQuerySerializer,
    WordListDetailSerializer,
    WordListInSerializer,
    WordListSerializer,
    WordListUpdateSerializer,
)

base_logger = structlog.get_logger()


def request_logger(request):
    # Create a unique request_id
    return base_logger.bind(request_id=str(uuid.uuid4()), user_id=str(request.user.pk))


def validated(serializer_class, data):
    s = serializer_class(data=data)
    s.is_valid(raise_exception=True)
    return s.validated_data


# Cards

class CardListView(views.APIView):
    def get(self, request):
        query = validated(CardListQuerySerializer, request.query_params)
        cards = card_service.list_cards(request.user.pk, query.get("word_list_id"))
        return Response(CardSerializer(cards, many=True).data)

    def post(self, request):
        logger = request_logger(request)
        data = validated(CardInSerializer, request.data)

        card = card_service.create_card(
            request.user.pk,
            data["word"],
            data["definition"],
            word_list_id=data.get("word_list_id"),
            word_details=data.get("word_details"),
        )
        logger.info("card_api_created", card_id=str(card.pk), status=status.HTTP_201_CREATED)
        return Response(CardSerializer(card).data, status=status.HTTP_201_CREATED)


class CardDetailView(views.APIView):
    def get(self, request, card_id):
        card = card_service.get_card(request.user.pk, card_id)
        return Response(CardSerializer(card).data)

    def put(self, request, card_id):
        data = validated(CardUpdateSerializer, request.data)
        card = card_service.update_card(request.user.pk, card_id, **data)
        return Response(CardSerializer(card).data)

    def delete(self, request, card_id):
        card_service.delete_card(request.user.pk, card_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AvailableCardsView(views.APIView):
    def get(self, request):
        query = validated(AvailableQuerySerializer, request.query_params)
        cards = card_service.list_available_cards(request.user.pk, query["word_list_id"])
        return Response(CardSerializer(cards, many=True).data)


# Reviews

class ReviewView(views.APIView):
    def post(self, request):
        logger = request_logger(request)
        data = validated(ReviewInSerializer, request.data)

        card = reviews.review_card(request.user.pk, data["card_id"], data["is_success"])

        logger.info(
            "review_api_response",
            card_id=str(card.pk),
            is_success=data["is_success"],
            review_step=card.review_step,
            review_status=card.review_status,
            next_review=to_local_iso(card.next_review),
        )
        return Response(CardSerializer(card).data)


class CardProgressView(views.APIView):
    def post(self, request, card_id):
        data = validated(ProgressInSerializer, request.data)
        card = reviews.update_card_progress(request.user.pk, card_id, data["is_success"])
        return Response(CardSerializer(card).data)


class AddToReviewView(views.APIView):
    def post(self, request):
        logger = request_logger(request)
        data = validated(AddToReviewSerializer, request.data)

        updated = reviews.add_to_review(request.user.pk, data["card_ids"])

        logger.info("add_to_review_api_response", requested=len(data["card_ids"]), updated=updated)
        return Response({
            "updated_count": updated,
            "message": f"Successfully added {updated} cards to review",
        })


class TodayCardsView(views.APIView):
    def get(self, request):
        result = due.get_today_cards(request.user.pk)
        return Response({
            "cards": TodayCardSerializer(result["cards"], many=True).data,
            "total": result["total"],
            "has_more": result["has_more"],
        })


class UpcomingCardsView(views.APIView):
    def get(self, request):
        logger = request_logger(request)
        query = validated(UpcomingQuerySerializer, request.query_params)

        result = upcoming.get_upcoming_cards(request.user.pk, query["days"], query["start_days"])

        buckets = {}
        for date, bucket in result["cards"].items():
            buckets[date] = {
                "total": bucket["total"],
                "reviewed": bucket["reviewed"],
                "not_reviewed": bucket["not_reviewed"],
                "from_failure": bucket["from_failure"],
                "cards": [
                    {
                        **CardSerializer(card).data,
                        "review_step": entry.step,
                        "is_from_failure": entry.is_from_failure,
                        "is_future_review": entry.is_future_review,
                    }
                    for card, entry in bucket["cards"]
                ],
            }

        logger.info("upcoming_api_response", dates=len(buckets), total=result["total"], **query)
        return Response({"cards": buckets, "total": result["total"], "intervals": result["intervals"]})


class CardStatsView(views.APIView):
    def get(self, request):
        return Response(history.get_stats(request.user.pk))


class ReviewHistoryView(views.APIView):
    def get(self, request):
        query = validated(HistoryQuerySerializer, request.query_params)
        result = history.get_review_history(
            request.user.pk, query.get("start_date"), query.get("end_date"), query["days"]
        )
        return Response({
            "cards": HistoryCardSerializer(result["cards"], many=True).data,
            "statistics": result["statistics"],
            "reviews_by_date": {
                date: HistoryCardSerializer(cards, many=True).data
                for date, cards in result["reviews_by_date"].items()
            },
        })


# Analytics

class VelocityView(views.APIView):
    def get(self, request):
        query = validated(VelocityQuerySerializer, request.query_params)
        return Response(analytics.get_learning_velocity(request.user.pk, query["period"], query["days"]))


class DifficultCardsView(views.APIView):
    def get(self, request):
        query = validated(DifficultCardsQuerySerializer, request.query_params)
        cards = analytics.get_difficult_cards(request.user.pk, query["limit"])
        return Response(DifficultCardSerializer(cards, many=True).data)


class OptimalTimesView(views.APIView):
    def get(self, request):
        query = validated(OptimalTimesQuerySerializer, request.query_params)
        return Response(analytics.get_optimal_review_times(request.user.pk, query["days"]))


class InsightsView(views.APIView):
    def get(self, request):
        return Response(analytics.get_learning_insights(request.user.pk))


class DashboardView(views.APIView):
    def get(self, request):
        logger = request_logger(request)
        dashboard = analytics.get_learning_dashboard(request.user.pk)

        logger.info("dashboard_api_response", insights=len(dashboard["insights"]), **dashboard["summary"])
        return Response({
            **dashboard,
            "difficult_cards": DifficultCardSerializer(dashboard["difficult_cards"], many=True).data,
        })


class ImportCardsView(views.APIView):
    def post(self, request):
        logger = request_logger(request)
        data = validated(ImportInSerializer, request.data)

        result = CardImporter(logger=logger).run(
            request.user.pk,
            data["rows"],
            headers=data.get("headers"),
            word_list_id=data.get("word_list_id"),
        )

        if result.failed:
            body = {"message": "Import completed with some errors", **vars(result)}
            return Response(body, status=status.HTTP_207_MULTI_STATUS)
        return Response({"message": "Import completed successfully", **vars(result)})


# Review schedule

class ReviewScheduleView(views.APIView):
    def get(self, request):
        schedule = schedules.get_or_create_schedule(request.user.pk)
        return Response(ReviewScheduleSerializer(schedule).data)

    def put(self, request):
        data = validated(ReviewScheduleInSerializer, request.data)
        schedule = schedules.upsert_schedule(request.user.pk, **data)
        return Response(ReviewScheduleSerializer(schedule).data)


# Word lists

class WordListListView(views.APIView):
    def get(self, request):
        return Response(WordListSerializer(word_lists.list_word_lists(request.user.pk), many=True).data)

    def post(self, request):
        data = validated(WordListInSerializer, request.data)
        word_list = word_lists.create_word_list(request.user.pk, **data)
        return Response(WordListSerializer(word_list).data, status=status.HTTP_201_CREATED)


class WordListDetailView(views.APIView):
    def get(self, request, word_list_id):
        word_list = word_lists.get_word_list(request.user.pk, word_list_id)
        return Response(WordListDetailSerializer(word_list).data)

    def put(self, request, word_list_id):
        data = validated(WordListUpdateSerializer, request.data)
        word_list = word_lists.update_word_list(request.user.pk, word_list_id, **data)
        return Response(WordListSerializer(word_list).data)

    def delete(self, request, word_list_id):
        word_lists.delete_word_list(request.user.pk, word_list_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


# Sessions

class ReviewSessionListView(views.APIView):
    def get(self, request):
        return Response(ReviewSessionSerializer(sessions.list_review_sessions(request.user.pk), many=True).data)

    def post(self, request):
        data = validated(ReviewSessionInSerializer, request.data)
        session = sessions.create_review_session(request.user.pk, **data)
        return Response(ReviewSessionSerializer(session).data, status=status.HTTP_201_CREATED)


class ReviewSessionCompleteView(views.APIView):
    def post(self, request, session_id):
        session = sessions.complete_review_session(request.user.pk, session_id)
        return Response(ReviewSessionSerializer(session).data)


class TestSessionListView(views.APIView):
    def get(self, request):
        return Response(TestSessionSerializer(sessions.list_test_sessions(request.user.pk), many=True).data)

    def post(self, request):
        session = sessions.create_test_session(request.user.pk)
        return Response(TestSessionSerializer(session).data, status=status.HTTP_201_CREATED)


class TestSessionDetailView(views.APIView):
    def get(self, request, session_id):
        session = sessions.get_test_session(request.user.pk, session_id)
        return Response(TestSessionSerializer(session).data)


class TestResultView(views.APIView):
    def post(self, request, session_id):
        logger = request_logger(request)
        data = validated(TestResultInSerializer, request.data)

        result = sessions.submit_test_result(request.user.pk, session_id, **data)

        logger.info("test_result_api_response", session_id=str(session_id), is_correct=result.is_correct)
        return Response(TestResultSerializer(result).data, status=status.HTTP_201_CREATED)


class TestHistoryView(views.APIView):
    def get(self, request):
        result = sessions.get_test_history(request.user.pk)
        return Response({
            "sessions": TestSessionSerializer(result["sessions"], many=True).data,
            "statistics": result["statistics"],
        })


class StreakView(views.APIView):
    def get(self, request):
        return Response(StreakSerializer(streaks.get_streak(request.user.pk)).data)

    def post(self, request):
        return Response(StreakSerializer(streaks.update_streak(request.user.pk)).data)
