"""Tests for dated item snapshots in Jira Burndown Metrics."""

import datetime
import os

from .snapshots import read_snapshot, snapshot_path, write_snapshot
from .test_utils import make_item


def test_snapshot_path():
    assert snapshot_path("history", datetime.date(2024, 3, 4)) == os.path.join(
        "history", "2024-03-04", "items.json"
    )


def test_missing_snapshot(tmp_path):
    assert read_snapshot(str(tmp_path), datetime.date(2024, 3, 4)) is None


def test_write_and_read_snapshot(tmp_path):
    items = [make_item("A-1", 3, status="Done"), make_item("A-2", 1)]
    day = datetime.date(2024, 3, 4)

    path = write_snapshot(items, str(tmp_path / "history"), day)

    assert path == os.path.join(str(tmp_path / "history"), "2024-03-04", "items.json")
    assert read_snapshot(str(tmp_path / "history"), day) == items
    assert read_snapshot(str(tmp_path / "history"), datetime.date(2024, 3, 5)) is None


def test_overwrite_snapshot(tmp_path):
    day = datetime.date(2024, 3, 4)

    write_snapshot([make_item("A-1", 3)], str(tmp_path), day)
    write_snapshot([make_item("A-1", 5)], str(tmp_path), day)

    assert read_snapshot(str(tmp_path), day) == [make_item("A-1", 5)]
