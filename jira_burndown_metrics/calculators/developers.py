"""Developer velocity calculator for Jira Burndown Metrics.

This module attributes dev-complete story points to the developer of each
item, both for a recent window (this week, last week) and as an average over
all complete weeks.
"""

import logging

import pandas as pd

from ..calculator import Calculator
from ..periods import WEEK_IN_MSECS, now_in_msecs
from ..utils import write_data_frame

logger = logging.getLogger(__name__)


def velocity_by_developer(items, periods_ago, period_length, period_count=1, now=None):
    """Points completed per developer within a window of whole periods.

    The window ends `periods_ago` periods before `now` and spans
    `period_count` periods; both ends are exclusive. Returns None when no
    developer completed anything in the window.
    """
    if now is None:
        now = now_in_msecs()
    end_time = now - periods_ago * period_length
    start_time = end_time - period_count * period_length

    completed = pd.DataFrame(
        [
            (item.developer, item.points)
            for item in items
            if item.points
            and item.developer
            and item.dev_complete_time is not None
            and start_time < item.dev_complete_time < end_time
        ],
        columns=["developer", "points"],
    )
    if len(completed.index) == 0:
        return None

    return (
        completed.groupby("developer", sort=False)["points"]
        .sum()
        .sort_values(ascending=False, kind="stable")
    )


def average_velocity_by_developer(items, period_length=WEEK_IN_MSECS):
    """Mean points completed per period by each developer.

    Periods count from the earliest start time of any item. A developer's
    first period may be partial (they joined mid-period), as may the latest
    period, so both are excluded. Returns None with fewer than three periods
    of completed work.
    """
    started_times = [
        item.started_time
        for item in items
        if item.points and item.started_time is not None
    ]
    if not started_times:
        return None
    first_started_time = min(started_times)

    start_periods = {}
    records = []
    for item in items:
        if not item.points or not item.developer:
            continue

        if item.started_time is not None:
            period = max((item.started_time - first_started_time) // period_length, 0)
            if period < start_periods.get(item.developer, period + 1):
                start_periods[item.developer] = period

        if item.dev_complete_time is not None:
            period = (item.dev_complete_time - first_started_time) // period_length
            records.append((item.developer, period, item.points))

    completed = pd.DataFrame(records, columns=["developer", "period", "points"])
    if completed["period"].nunique() < 3:
        return None

    last_period = completed["period"].max()
    first_periods = completed["developer"].map(start_periods).fillna(0)
    interior = completed[
        (completed["period"] >= 1)
        & (completed["period"] < last_period)
        & (completed["period"] > first_periods)
    ]
    if len(interior.index) == 0:
        return None

    period_counts = last_period - (interior["developer"].map(start_periods).fillna(0) + 1)
    velocities = (interior["points"] / period_counts).groupby(
        interior["developer"], sort=False
    ).sum()
    return velocities.rename("points").sort_values(ascending=False, kind="stable")


class DeveloperVelocityCalculator(Calculator):
    """Build a data frame of average, this week's and last week's velocity
    per developer. Returns None if there is nothing to attribute.
    """

    def run(self):
        now = self.settings.get("now")
        columns = {
            "average": average_velocity_by_developer(self.items, WEEK_IN_MSECS),
            "this week": velocity_by_developer(self.items, 0, WEEK_IN_MSECS, now=now),
            "last week": velocity_by_developer(self.items, 1, WEEK_IN_MSECS, now=now),
        }
        columns = {name: data for name, data in columns.items() if data is not None}
        if not columns:
            return None

        return pd.DataFrame(columns).fillna(0).rename_axis("developer")

    def write(self):
        output_files = self.settings.get("developer_velocity_data")
        if not output_files:
            logger.debug("No output file specified for developer velocity")
            return

        data = self.get_result()
        if data is None:
            logger.warning("Cannot write developer velocity with no completed items")
            return

        write_data_frame(data, output_files, "Developer velocity", "developer")
