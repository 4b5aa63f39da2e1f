"""Shared test utilities for Jira Burndown Metrics tests."""

from .items import STAGES, Item
from .periods import DAY_IN_MSECS, WEEK_IN_MSECS

HOUR_IN_MSECS = 60 * 60 * 1000

# Monday 2024-03-04 00:00 UTC
BASE_DAY = 19786 * DAY_IN_MSECS

# Start of an epoch-aligned week bucket
BASE_WEEK = 2827 * WEEK_IN_MSECS


def at_day(day, hours=0):
    """Epoch ms `hours` into day number `day` counted from BASE_DAY."""
    return BASE_DAY + day * DAY_IN_MSECS + hours * HOUR_IN_MSECS


def at_week(week, days=0):
    """Epoch ms `days` into week number `week` counted from BASE_WEEK."""
    return BASE_WEEK + week * WEEK_IN_MSECS + days * DAY_IN_MSECS


def make_item(key, points, status="In Progress", **kwargs):
    return Item(key=key, points=points, status=status, **kwargs)


def assert_monotonic(buckets):
    """Assert the stage ordering and non-decreasing invariants hold."""
    for i in range(buckets.max_bucket_index + 1):
        assert buckets.started[i] >= buckets.to_review[i]
        assert buckets.to_review[i] >= buckets.developed[i]
        assert buckets.developed[i] >= buckets.done[i]
        assert buckets.done[i] >= 0

    for stage in STAGES:
        values = list(buckets.cumulative(stage))
        assert values == sorted(values)
        assert len(values) == buckets.max_bucket_index + 1
