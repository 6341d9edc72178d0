from datetime import datetime, time, timedelta

from django.utils import timezone


def day_bounds(now):
    """Start and end of the local calendar day containing ``now``."""
    start = timezone.localtime(now).replace(hour=0, minute=0, second=0, microsecond=0)
    return start, start + timedelta(days=1)


def start_of_local_date(day):
    return timezone.make_aware(datetime.combine(day, time.min))


def date_key(dt):
    return timezone.localtime(dt).date().isoformat()


def to_local_iso(dt):
    return timezone.localtime(dt).isoformat() if dt else None
