import structlog

from ..data import repos

logger = structlog.get_logger()

SCHEDULE_FIELDS = ("intervals", "name", "description", "is_default")


def get_schedule(user_id):
    schedule = repos.get_schedule(user_id)
    logger.debug("schedule_lookup", user_id=str(user_id), found=schedule is not None)
    return schedule


def get_or_create_schedule(user_id):
    schedule, created = repos.get_or_create_schedule(user_id)
    if created:
        logger.info("schedule_created",
            user_id=str(user_id),
            intervals=schedule.intervals,
        )
    return schedule


def upsert_schedule(user_id, intervals=None, name=None, description=None, is_default=None):
    """
    Create the user's schedule from the supplied values (defaults for the
    rest) or update only the supplied fields. Interval values are taken
    as given.
    """
    supplied = {
        key: value
        for key, value in zip(SCHEDULE_FIELDS, (intervals, name, description, is_default))
        if value is not None
    }
    logger.info("schedule_upsert_received", user_id=str(user_id), fields=sorted(supplied))

    schedule, created = repos.get_or_create_schedule(user_id, **supplied)
    if not created and supplied:
        for key, value in supplied.items():
            setattr(schedule, key, value)
        schedule.save(update_fields=[*supplied, "updated_at"])

    logger.info("schedule_upserted",
        user_id=str(user_id),
        created=created,
        intervals=schedule.intervals,
        is_default=schedule.is_default,
    )
    return schedule


def intervals_for_review(user_id, fallback):
    schedule = repos.get_schedule(user_id)
    if schedule is None:
        return list(fallback)
    return list(schedule.intervals)
