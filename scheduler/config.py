DEFAULT_INTERVALS = [1, 2, 7, 30, 365]        # days, new schedules and projection
REVIEW_FALLBACK_INTERVALS = [1, 7, 30, 365]   # days, review without a schedule
FALLBACK_INTERVAL_DAYS = 1

DEFAULT_SCHEDULE_NAME = "Default Schedule"
DEFAULT_SCHEDULE_DESCRIPTION = "Default spaced repetition schedule"

UPCOMING_DAYS = 7
UPCOMING_START_DAYS = -14
HISTORY_DAYS = 30

IMPORT_BATCH_SIZE = 10
IMPORT_SAMPLE_ROWS = 3

VELOCITY_PERIODS = ("daily", "weekly", "monthly")
VELOCITY_DAYS = 30
DASHBOARD_VELOCITY_DAYS = 14
INSIGHT_VELOCITY_DAYS = 7
SESSION_STATS_DAYS = 14
OPTIMAL_TIMES_DAYS = 30
DIFFICULT_CARDS_LIMIT = 10
DASHBOARD_DIFFICULT_LIMIT = 5
DIFFICULT_MIN_REVIEWS = 3
DIFFICULT_MIN_FAILURE_RATE = 0.3
DASHBOARD_TODAY_LIMIT = 50
MAX_WINDOW_DAYS = 365
