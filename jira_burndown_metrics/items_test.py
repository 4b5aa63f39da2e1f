"""Tests for the work item model in Jira Burndown Metrics."""

import datetime
import json

import pytest

from .items import (
    STAGES,
    Item,
    Stage,
    dump_items,
    item_from_dict,
    item_to_dict,
    items_from_json,
    load_items,
    parse_timestamp,
)
from .test_utils import at_day, make_item


def test_stage_order_and_labels():
    assert STAGES == (Stage.STARTED, Stage.TO_REVIEW, Stage.DEVELOPED, Stage.DONE)
    assert [stage.label for stage in STAGES] == [
        "In Progress",
        "In Review",
        "Ready for QA",
        "Done",
    ]


def test_stage_times():
    item = make_item("A-1", 3, started_time=at_day(0), end_time=at_day(2))

    assert item.stage_time(Stage.STARTED) == at_day(0)
    assert item.stage_time(Stage.TO_REVIEW) is None
    assert item.stage_times() == {Stage.STARTED: at_day(0), Stage.DONE: at_day(2)}
    assert list(item.stage_times()) == [Stage.STARTED, Stage.DONE]


def test_items_are_immutable():
    item = make_item("A-1", 3)

    with pytest.raises(AttributeError):
        item.points = 5


def test_parse_timestamp():
    assert parse_timestamp(None) is None
    assert parse_timestamp("") is None
    assert parse_timestamp(0) is None
    assert parse_timestamp(0.0) is None
    assert parse_timestamp(1709510400000) == 1709510400000
    assert parse_timestamp(1709510400000.0) == 1709510400000
    assert parse_timestamp("2024-03-04T00:00:00Z") == 1709510400000
    assert parse_timestamp("2024-03-04T01:00:00+01:00") == 1709510400000
    assert parse_timestamp("2024-03-04") == 1709510400000
    assert parse_timestamp(datetime.datetime(2024, 3, 4)) == 1709510400000

    with pytest.raises(ValueError):
        parse_timestamp(True)
    with pytest.raises(ValueError):
        parse_timestamp("yesterday")


def test_item_from_dict():
    item = item_from_dict(
        {
            "key": "A-1",
            "storyPoints": 3,
            "status": "Done",
            "startedTime": "2024-03-04T00:00:00Z",
            "readyForReviewTime": at_day(1),
            "devCompleteTime": at_day(2),
            "resolutionTime": at_day(3),
            "type": "Story",
            "developer": "alice",
        }
    )

    assert item == Item(
        key="A-1",
        points=3,
        status="Done",
        started_time=at_day(0),
        ready_for_review_time=at_day(1),
        dev_complete_time=at_day(2),
        end_time=at_day(3),
        type="Story",
        developer="alice",
    )


def test_item_from_dict_missing_fields():
    with pytest.raises(ValueError):
        item_from_dict({"points": 3})
    with pytest.raises(ValueError):
        item_from_dict({"key": "A-1"})

    item = item_from_dict({"key": "A-1", "points": 0})
    assert item.status == ""
    assert item.stage_times() == {}


def test_item_to_dict_round_trip():
    item = make_item("A-1", 2.5, started_time=at_day(0), developer="bob")

    assert item_from_dict(item_to_dict(item)) == item


def test_items_from_json():
    items = items_from_json('[{"key": "A-1", "points": 1}, {"key": "A-2", "points": 2}]')

    assert [item.key for item in items] == ["A-1", "A-2"]

    with pytest.raises(ValueError):
        items_from_json('{"key": "A-1", "points": 1}')


def test_load_and_dump_items(tmp_path, sprint_items):
    path = str(tmp_path / "items.json")

    dump_items(sprint_items, path)

    with open(path, encoding="utf-8") as items_file:
        assert len(json.load(items_file)) == len(sprint_items)
    assert load_items(path) == sprint_items


def test_zero_timestamps_are_missing():
    item = item_from_dict(
        {"key": "A-1", "points": 3, "started_time": 0, "endTime": at_day(2)}
    )

    assert item.started_time is None
    assert item.stage_times() == {Stage.DONE: at_day(2)}
