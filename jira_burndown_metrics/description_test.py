"""Tests for the text summaries in Jira Burndown Metrics."""

import numpy as np
import pytest

from .calculators.changes import IssueChange
from .calculators.velocity import PointBucketVelocities
from .description import (
    HEADING_WIDTH,
    describe_changes,
    describe_issue_changes,
    describe_velocity,
    format_points,
)
from .periods import DAY_IN_MSECS
from .test_utils import at_day, make_item


@pytest.fixture(name="day_items")
def fixture_day_items():
    """One item started before the last day, finished during it; one started
    during it and one not started at all. 10 points in total.
    """
    return [
        make_item("A-1", 3, started_time=at_day(0), end_time=at_day(10, 2)),
        make_item("A-2", 5, started_time=at_day(10, 1)),
        make_item("A-3", 2, status="To Do"),
    ]


def _line(label, rest):
    return "> `" + (label + ":").ljust(HEADING_WIDTH) + " " + rest + "`"


def test_format_points():
    assert format_points(3) == "3"
    assert format_points(3.0) == "3"
    assert format_points(2.5) == "2.5"
    assert format_points(None) == "0"


def test_describe_changes(day_items):
    description = describe_changes(
        "Since yesterday", day_items, DAY_IN_MSECS, now=at_day(10, 12)
    )

    assert description.split("\n") == [
        "> Since yesterday",
        _line("To Do", " 7 [ 70%] ->  2 [ 20%] (5 [ 50%])"),
        _line("Not Yet In Review", "10 [100%] -> 10 [100%] (0 [  0%])"),
        _line("Not Yet Ready for QA", "10 [100%] -> 10 [100%] (0 [  0%])"),
        _line("Unfinished", "10 [100%] ->  7 [ 70%] (3 [ 30%])"),
    ]


def test_describe_changes_no_points():
    description = describe_changes(
        "Since yesterday", [make_item("A-1", 0)], DAY_IN_MSECS, now=at_day(1)
    )

    assert description.split("\n")[1] == _line(
        "To Do", "0 [  0%] -> 0 [  0%] (0 [  0%])"
    )


def test_describe_changes_with_velocity(day_items):
    velocities = PointBucketVelocities(
        started=np.array([2, 4, 6, 5, 1]),
        to_review=np.array([]),
        developed=np.array([1, 2]),
        done=np.array([0, 3, 3]),
    )

    description = describe_changes(
        "Since last week",
        day_items,
        DAY_IN_MSECS,
        now=at_day(10, 12),
        velocities=velocities,
    )

    assert description.split("\n")[-2:] == [
        "> `Mean velocity (In Progress): 5.0`",
        "> `Mean velocity (Done): 3.0`",
    ]


def test_describe_velocity_too_few_periods():
    velocities = PointBucketVelocities(
        started=np.array([2, 4]),
        to_review=np.array([]),
        developed=np.array([]),
        done=np.array([]),
    )

    assert describe_velocity(velocities) == []


def test_describe_issue_changes():
    changes = [
        IssueChange(
            "A-1", points=3, former_points=2, status="Done", former_status="In Progress"
        ),
        IssueChange("A-2", former_points=1, former_status="To Do"),
        IssueChange("A-3", points=2.5, status="To Do"),
    ]

    assert describe_issue_changes(changes, "day") == "\n".join(
        [
            "Work item changes since previous day",
            "  A-1 In Progress: 2 -> Done: 3",
            "  A-2 To Do: 1 -> Not Existing: 0",
            "  A-3 Not Existing: 0 -> To Do: 2.5",
        ]
    )


def test_describe_no_issue_changes():
    assert describe_issue_changes([], "week") is None
    assert describe_issue_changes(None, "week") is None
