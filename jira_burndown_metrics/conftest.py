"""Test configuration and fixtures for Jira Burndown Metrics."""

import pytest

from .test_utils import at_day, make_item


@pytest.fixture(name="base_settings")
def minimal_settings():
    """Settings with every output switched off and a fixed `now`."""
    return {
        "items_file": None,
        "now": at_day(10, 12),
        "data_path": None,
        "work_days": [1, 2, 3, 4, 5],
        "daily_window": 7,
        "daily_buckets_data": None,
        "weekly_buckets_data": None,
        "velocity_data": None,
        "points_by_status_data": None,
        "developer_velocity_data": None,
        "daily_changes_data": None,
        "weekly_changes_data": None,
        "open_items_data": None,
        "in_review_status": "in review",
        "ready_for_qa_status": "ready for qa",
        "summary": None,
        "daily_description": None,
        "weekly_description": None,
        "summary_file": None,
    }


@pytest.fixture(name="sprint_items")
def sprint_items():
    """A handful of items spread over two weeks, in every stage."""
    return [
        make_item(
            "A-1",
            3,
            status="Done",
            started_time=at_day(0, 9),
            ready_for_review_time=at_day(1, 9),
            dev_complete_time=at_day(2, 9),
            end_time=at_day(3, 9),
            developer="alice",
        ),
        make_item(
            "A-2",
            5,
            status="Ready for QA",
            started_time=at_day(1, 10),
            ready_for_review_time=at_day(4, 10),
            dev_complete_time=at_day(8, 10),
            developer="bob",
        ),
        make_item(
            "A-3",
            2,
            status="In Review",
            started_time=at_day(6, 11),
            ready_for_review_time=at_day(9, 11),
            developer="alice",
        ),
        make_item("A-4", 1, status="In Progress", started_time=at_day(10, 8)),
        make_item("A-5", 8, status="To Do"),
    ]
