from datetime import date, datetime, time

from django.utils import timezone


def as_local_datetime(value):
    """Aware datetime in the project zone; bare dates become local midnight."""
    if not isinstance(value, datetime) and isinstance(value, date):
        value = datetime.combine(value, time.min)
    if timezone.is_naive(value):
        value = timezone.make_aware(value)
    return timezone.localtime(value)


def end_of_day(now):
    return as_local_datetime(now).replace(
        hour=23, minute=59, second=59, microsecond=999999
    )


def to_local_iso(dt):
    return timezone.localtime(dt).isoformat()
