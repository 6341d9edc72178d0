from .data.models import (  # noqa: F401
    Card,
    Review,
    ReviewSchedule,
    ReviewSession,
    TestResult,
    TestSession,
    WordDetails,
    WordList,
)
