from django.urls import path

from . import views

urlpatterns = [
    path("cards", views.CardListView.as_view(), name="cards"),
    path("cards/today", views.TodayCardsView.as_view(), name="today-cards"),
    path("cards/stats", views.CardStatsView.as_view(), name="card-stats"),
    path("cards/upcoming", views.UpcomingCardsView.as_view(), name="upcoming-cards"),
    path("cards/history", views.ReviewHistoryView.as_view(), name="review-history"),
    path("cards/available", views.AvailableCardsView.as_view(), name="available-cards"),
    path("cards/add-to-review", views.AddToReviewView.as_view(), name="add-to-review"),
    path("cards/review", views.ReviewView.as_view(), name="review"),
    path("cards/import", views.ImportCardsView.as_view(), name="import-cards"),
    path("cards/<uuid:card_id>", views.CardDetailView.as_view(), name="card-detail"),
    path("cards/<uuid:card_id>/progress", views.CardProgressView.as_view(), name="card-progress"),
    path("analytics/velocity", views.VelocityView.as_view(), name="analytics-velocity"),
    path("analytics/difficult-cards", views.DifficultCardsView.as_view(), name="analytics-difficult-cards"),
    path("analytics/optimal-times", views.OptimalTimesView.as_view(), name="analytics-optimal-times"),
    path("analytics/insights", views.InsightsView.as_view(), name="analytics-insights"),
    path("analytics/dashboard", views.DashboardView.as_view(), name="analytics-dashboard"),
    path("review-schedule", views.ReviewScheduleView.as_view(), name="review-schedule"),
    path("word-lists", views.WordListListView.as_view(), name="word-lists"),
    path("word-lists/<uuid:word_list_id>", views.WordListDetailView.as_view(), name="word-list-detail"),
    path("review-sessions", views.ReviewSessionListView.as_view(), name="review-sessions"),
    path("review-sessions/<uuid:session_id>/complete", views.ReviewSessionCompleteView.as_view(), name="review-session-complete"),
    path("test-sessions", views.TestSessionListView.as_view(), name="test-sessions"),
    path("test-sessions/<uuid:session_id>", views.TestSessionDetailView.as_view(), name="test-session-detail"),
    path("test-sessions/<uuid:session_id>/results", views.TestResultView.as_view(), name="test-results"),
    path("test-history", views.TestHistoryView.as_view(), name="test-history"),
    path("streak", views.StreakView.as_view(), name="streak"),
]
