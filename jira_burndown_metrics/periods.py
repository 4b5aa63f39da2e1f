"""Period lengths and calendar helpers for Jira Burndown Metrics."""

import datetime
import time

DAY_IN_MSECS = 24 * 60 * 60 * 1000
WEEK_IN_MSECS = 7 * DAY_IN_MSECS

PERIOD_LENGTHS = {
    "day": DAY_IN_MSECS,
    "week": WEEK_IN_MSECS,
}

# ISO weekdays, Monday is 1 and Sunday is 7
DEFAULT_WORK_DAYS = [1, 2, 3, 4, 5]

EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)


def now_in_msecs():
    """Return the current instant as epoch milliseconds."""
    return int(time.time() * 1000)


def to_msecs(value):
    """Convert a datetime to epoch milliseconds. Naive datetimes are UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    return int((value - EPOCH).total_seconds() * 1000)


def from_msecs(value):
    """Convert epoch milliseconds to a UTC datetime."""
    return EPOCH + datetime.timedelta(milliseconds=value)


def format_date(d):
    """Format a date as YYYY-MM-DD."""
    return d.strftime("%Y-%m-%d")


def get_previous_work_day(d, work_days=None):
    """Return the closest date before `d` that falls on one of `work_days`."""
    work_days = set(DEFAULT_WORK_DAYS if work_days is None else work_days)
    if not work_days:
        raise ValueError("At least one work day is required")

    previous = d - datetime.timedelta(days=1)
    while previous.isoweekday() not in work_days:
        previous -= datetime.timedelta(days=1)
    return previous


def get_comparison_date(today, period, work_days=None):
    """Return the date of the snapshot to compare `today` against."""
    if period == "day":
        return get_previous_work_day(today, work_days)
    if period == "week":
        return today - datetime.timedelta(days=7)
    raise ValueError(f"Unsupported period `{period}`")


def get_today(now=None):
    """Return the UTC date of `now` (epoch ms), or of the current instant."""
    if now is None:
        now = now_in_msecs()
    return from_msecs(now).date()
