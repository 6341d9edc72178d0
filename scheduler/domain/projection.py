"""
Forward projection of review dates.

Enumeration and grouping are kept apart: ``project_card`` yields one flat
``ProjectedReview`` per (date, card) pair that lands in the window and
``group_by_date`` folds them into per-date buckets.
"""
from datetime import timedelta
from typing import Iterable, NamedTuple

from ..utils.time import date_key
from .logic import interval_at


class ProjectedReview(NamedTuple):
    date: str
    card_id: object
    step: int
    is_future_review: bool
    is_from_failure: bool
    has_been_reviewed: bool


def project_card(card_id, base_date, review_step, failure_count, reviewed_dates,
                 intervals, window_start, window_end):
    """
    Yield the immediate due date for the card's current step, then one
    speculative entry per step it has not reached yet. A card never
    appears twice on the same date.
    """
    if base_date is None:
        return

    seen = set()
    current_interval = interval_at(intervals, review_step)
    immediate = base_date + timedelta(days=current_interval)
    if window_start <= immediate < window_end:
        key = date_key(immediate)
        seen.add(key)
        yield ProjectedReview(
            date=key,
            card_id=card_id,
            step=review_step,
            is_future_review=False,
            is_from_failure=failure_count > 0,
            has_been_reviewed=key in reviewed_dates,
        )

    for step, interval in enumerate(intervals):
        if step <= review_step:
            continue
        future = base_date + timedelta(days=interval)
        key = date_key(future)
        if window_start <= future < window_end and key not in seen:
            seen.add(key)
            yield ProjectedReview(
                date=key,
                card_id=card_id,
                step=step,
                is_future_review=True,
                is_from_failure=False,
                has_been_reviewed=False,
            )


def group_by_date(entries: Iterable[ProjectedReview]) -> dict:
    buckets = {}
    for entry in entries:
        bucket = buckets.setdefault(entry.date, {
            "total": 0,
            "reviewed": 0,
            "not_reviewed": 0,
            "from_failure": 0,
            "entries": [],
        })
        bucket["entries"].append(entry)
        bucket["total"] += 1
        if entry.has_been_reviewed:
            bucket["reviewed"] += 1
        else:
            bucket["not_reviewed"] += 1
            if entry.is_from_failure:
                bucket["from_failure"] += 1
    return buckets
