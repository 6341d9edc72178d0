from datetime import datetime, timedelta, timezone as dt_tz

from scheduler.domain.projection import group_by_date, project_card

INTERVALS = [1, 2, 7, 30, 365]
TODAY = datetime(2024, 3, 10, tzinfo=dt_tz.utc)
WINDOW = (TODAY - timedelta(days=14), TODAY + timedelta(days=7))


def project(base_date, review_step=0, failure_count=0, reviewed_dates=(), intervals=INTERVALS):
    return list(project_card(
        card_id="c1",
        base_date=base_date,
        review_step=review_step,
        failure_count=failure_count,
        reviewed_dates=set(reviewed_dates),
        intervals=intervals,
        window_start=WINDOW[0],
        window_end=WINDOW[1],
    ))


def test_immediate_and_future_entries():
    base = TODAY - timedelta(days=1, hours=-9)  # 2024-03-09 09:00
    entries = project(base)

    assert [(e.date, e.step, e.is_future_review) for e in entries] == [
        ("2024-03-10", 0, False),
        ("2024-03-11", 1, True),
        ("2024-03-16", 2, True),
    ]


def test_future_entries_only_for_unreached_steps():
    base = TODAY - timedelta(days=3)
    entries = project(base, review_step=2)

    # step 2 lands at +7 (2024-03-14); steps 3 and 4 fall outside the window
    assert [(e.date, e.step, e.is_future_review) for e in entries] == [("2024-03-14", 2, False)]


def test_never_twice_on_same_date():
    entries = project(TODAY, review_step=0, intervals=[2, 2, 2, 5])

    dates = [e.date for e in entries]
    assert len(dates) == len(set(dates))
    assert [(e.date, e.is_future_review) for e in entries] == [
        ("2024-03-12", False),
        ("2024-03-15", True),
    ]


def test_failure_and_reviewed_flags_only_on_immediate_entry():
    entries = project(TODAY, review_step=0, failure_count=2, reviewed_dates={"2024-03-11"})

    immediate, future = entries[0], entries[1]
    assert immediate.is_from_failure and immediate.has_been_reviewed
    assert not future.is_from_failure and not future.has_been_reviewed


def test_outside_window_yields_nothing():
    assert project(TODAY - timedelta(days=400)) == []
    assert project(None) == []


def test_group_by_date_counts():
    entries = (
        project(TODAY, failure_count=1)
        + project(TODAY, failure_count=0, reviewed_dates={"2024-03-11"})
    )
    buckets = group_by_date(entries)

    day = buckets["2024-03-11"]
    assert day["total"] == 2
    assert day["reviewed"] == 1
    assert day["not_reviewed"] == 1
    assert day["from_failure"] == 1
    assert buckets["2024-03-12"]["not_reviewed"] == 2
    assert sum(b["total"] for b in buckets.values()) == len(entries)


def test_group_by_date_empty():
    assert group_by_date([]) == {}
