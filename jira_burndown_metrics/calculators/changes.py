"""Work item change calculator for Jira Burndown Metrics.

This module compares the current items with a stored snapshot from a previous
day or week and lists the items that were added, removed, re-estimated or
moved to another status.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import pandas as pd

from ..calculator import Calculator
from ..periods import DEFAULT_WORK_DAYS, get_comparison_date, get_today
from ..snapshots import read_snapshot
from ..utils import write_data_frame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssueChange:
    """A change to one item between two snapshots.

    `points` and `status` are None when the item no longer exists; the
    `former_` fields are None when it did not exist in the earlier snapshot.
    """

    key: str
    points: Optional[float] = None
    former_points: Optional[float] = None
    status: Optional[str] = None
    former_status: Optional[str] = None

    @property
    def is_added(self):
        return self.former_status is None and self.former_points is None

    @property
    def is_removed(self):
        return self.status is None and self.points is None


def _same_status(status, former_status):
    return (status or "").casefold() == (former_status or "").casefold()


def diff_snapshots(current, comparison) -> List[IssueChange]:
    """List the differences between `current` and an earlier `comparison`.

    Changes to current items come first, in current order, followed by the
    removed items in comparison order.
    """
    former_items = {item.key: item for item in comparison}
    current_keys = set()
    changes = []

    for item in current:
        current_keys.add(item.key)
        former = former_items.get(item.key)
        if former is None:
            changes.append(IssueChange(item.key, points=item.points, status=item.status))
        elif item.points != former.points or not _same_status(
            item.status, former.status
        ):
            changes.append(
                IssueChange(
                    item.key,
                    points=item.points,
                    former_points=former.points,
                    status=item.status,
                    former_status=former.status,
                )
            )

    for former in comparison:
        if former.key not in current_keys:
            changes.append(
                IssueChange(
                    former.key,
                    former_points=former.points,
                    former_status=former.status,
                )
            )

    return changes


def changes_to_data_frame(changes) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "key": change.key,
                "former_status": change.former_status,
                "former_points": change.former_points,
                "status": change.status,
                "points": change.points,
            }
            for change in changes
        ],
        columns=["key", "former_status", "former_points", "status", "points"],
    )


class ChangesCalculator(Calculator):
    """Diff the current items against the snapshot from a previous period.

    Returns None when no history is configured or no snapshot exists for the
    comparison date.
    """

    period = None
    data_setting = None

    def run(self):
        data_path = self.settings.get("data_path")
        if not data_path:
            logger.debug("No data path configured, skipping %s changes", self.period)
            return None

        today = get_today(self.settings.get("now"))
        comparison_date = get_comparison_date(
            today, self.period, self.settings.get("work_days") or DEFAULT_WORK_DAYS
        )
        comparison = read_snapshot(data_path, comparison_date)
        if comparison is None:
            logger.info(
                "No snapshot for %s, cannot list changes since the previous %s",
                comparison_date,
                self.period,
            )
            return None

        changes = diff_snapshots(self.items, comparison)
        logger.debug("Found %d changes since %s", len(changes), comparison_date)
        return changes

    def write(self):
        output_files = self.settings.get(self.data_setting)
        if not output_files:
            logger.debug("No output file specified for %s changes", self.period)
            return

        changes = self.get_result()
        if changes is None:
            logger.warning("Cannot write %s changes without a snapshot", self.period)
            return

        data = changes_to_data_frame(changes).set_index("key")
        write_data_frame(data, output_files, f"Changes by {self.period}", "key")


class DailyChangesCalculator(ChangesCalculator):
    period = "day"
    data_setting = "daily_changes_data"


class WeeklyChangesCalculator(ChangesCalculator):
    period = "week"
    data_setting = "weekly_changes_data"
