from typing import NamedTuple, Sequence

from ..config import FALLBACK_INTERVAL_DAYS


class ReviewTransition(NamedTuple):
    step: int
    interval_days: int
    completed: bool


def clamp_step(step: int, intervals: Sequence[int]) -> int:
    if not intervals:
        return 0
    return min(max(0, step), len(intervals) - 1)


def interval_at(intervals: Sequence[int], step: int) -> int:
    """Interval for ``step``, or the first interval when out of range."""
    if 0 <= step < len(intervals):
        return intervals[step]
    return intervals[0] if intervals else FALLBACK_INTERVAL_DAYS


def next_review_state(intervals: Sequence[int], step: int, is_success: bool) -> ReviewTransition:
    step = clamp_step(step, intervals)
    interval = interval_at(intervals, step)
    last_step = len(intervals) - 1

    # Failure keeps the step; it never regresses
    if is_success and step < last_step:
        step += 1
        interval = intervals[step]

    completed = is_success and step == last_step
    return ReviewTransition(step, interval, completed)
