"""Work item model for Jira Burndown Metrics.

This module provides the immutable `Item` record consumed by the calculators,
the ordered pipeline `Stage` enumeration and JSON (de)serialisation helpers.
"""

import datetime
import enum
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from dateutil import parser as date_parser

from .periods import to_msecs

logger = logging.getLogger(__name__)


class Stage(enum.Enum):
    """Pipeline positions an item passes through, least advanced first."""

    STARTED = "started"
    TO_REVIEW = "to_review"
    DEVELOPED = "developed"
    DONE = "done"

    @property
    def label(self) -> str:
        return STAGE_LABELS[self]


# Least advanced first. An item that has reached a stage also counts
# towards every stage before it.
STAGES = (Stage.STARTED, Stage.TO_REVIEW, Stage.DEVELOPED, Stage.DONE)

STAGE_LABELS = {
    Stage.STARTED: "In Progress",
    Stage.TO_REVIEW: "In Review",
    Stage.DEVELOPED: "Ready for QA",
    Stage.DONE: "Done",
}

STAGE_TIME_FIELDS = {
    Stage.STARTED: "started_time",
    Stage.TO_REVIEW: "ready_for_review_time",
    Stage.DEVELOPED: "dev_complete_time",
    Stage.DONE: "end_time",
}

# Alternative record keys, as written by the upstream fetcher
FIELD_ALIASES = {
    "points": ["points", "storyPoints", "story_points"],
    "created_time": ["created_time", "createdTime"],
    "started_time": ["started_time", "startedTime"],
    "ready_for_review_time": ["ready_for_review_time", "readyForReviewTime"],
    "dev_complete_time": ["dev_complete_time", "devCompleteTime"],
    "end_time": ["end_time", "endTime", "resolutionTime"],
}


@dataclass(frozen=True)
class Item:
    """One unit of tracked work. Timestamps are epoch milliseconds."""

    key: str
    points: float
    status: str = ""
    created_time: Optional[int] = None
    started_time: Optional[int] = None
    ready_for_review_time: Optional[int] = None
    dev_complete_time: Optional[int] = None
    end_time: Optional[int] = None
    type: Optional[str] = None
    developer: Optional[str] = None

    def stage_time(self, stage: Stage) -> Optional[int]:
        """Return the timestamp at which the item reached `stage`, if any."""
        return getattr(self, STAGE_TIME_FIELDS[stage])

    def stage_times(self) -> Dict[Stage, int]:
        """Return the present stage timestamps, least advanced stage first."""
        times = {}
        for stage in STAGES:
            value = self.stage_time(stage)
            if value is not None:
                times[stage] = value
        return times


def parse_timestamp(value) -> Optional[int]:
    """Convert a JSON timestamp (epoch ms or ISO-8601 string) to epoch ms.

    Empty values and 0 mean the item never reached the stage.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp `{value}`")
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)):
        return int(value) or None
    if isinstance(value, datetime.datetime):
        return to_msecs(value)
    return to_msecs(date_parser.isoparse(str(value)))


def _lookup(record: Dict[str, Any], field: str):
    for alias in FIELD_ALIASES.get(field, [field]):
        if alias in record:
            return record[alias]
    return None


def item_from_dict(record: Dict[str, Any]) -> Item:
    """Build an `Item` from a JSON record."""
    if "key" not in record:
        raise ValueError(f"Item record is missing a key: {record!r}")

    points = _lookup(record, "points")
    if points is None:
        raise ValueError(f"Item {record['key']} has no points")

    return Item(
        key=str(record["key"]),
        points=points,
        status=record.get("status") or "",
        created_time=parse_timestamp(_lookup(record, "created_time")),
        started_time=parse_timestamp(_lookup(record, "started_time")),
        ready_for_review_time=parse_timestamp(
            _lookup(record, "ready_for_review_time")
        ),
        dev_complete_time=parse_timestamp(_lookup(record, "dev_complete_time")),
        end_time=parse_timestamp(_lookup(record, "end_time")),
        type=record.get("type"),
        developer=record.get("developer"),
    )


def item_to_dict(item: Item) -> Dict[str, Any]:
    """Convert an `Item` to a JSON-serialisable record."""
    return {
        "key": item.key,
        "points": item.points,
        "status": item.status,
        "created_time": item.created_time,
        "started_time": item.started_time,
        "ready_for_review_time": item.ready_for_review_time,
        "dev_complete_time": item.dev_complete_time,
        "end_time": item.end_time,
        "type": item.type,
        "developer": item.developer,
    }


def items_from_json(data: str) -> List[Item]:
    """Parse a JSON array of item records."""
    records = json.loads(data)
    if not isinstance(records, list):
        raise ValueError("Expected a JSON array of items")
    return [item_from_dict(record) for record in records]


def load_items(path) -> List[Item]:
    """Read items from a JSON file."""
    logger.debug("Loading items from %s", path)
    with open(path, encoding="utf-8") as items_file:
        return items_from_json(items_file.read())


def dump_items(items: Iterable[Item], path):
    """Write items to a JSON file."""
    with open(path, "w", encoding="utf-8") as items_file:
        json.dump([item_to_dict(item) for item in items], items_file, indent=2)
