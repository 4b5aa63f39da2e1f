"""Point bucket calculator for Jira Burndown Metrics.

This module folds items into dense, per-period cumulative story point counts
for each pipeline stage. These series back the remaining-points (burn-down)
data and the velocity calculations.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from ..calculator import Calculator
from ..items import STAGES, Item, Stage
from ..periods import PERIOD_LENGTHS, now_in_msecs
from ..utils import write_data_frame

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PointBuckets:
    """Cumulative completed points per stage, indexed by bucket.

    Every array has `max_bucket_index + 1` entries and is read only. A stage
    whose `has_<stage>_events` flag is false received no events of its own;
    its values are derived purely from the more advanced stages.
    """

    started: np.ndarray
    has_started_events: bool
    to_review: np.ndarray
    has_to_review_events: bool
    developed: np.ndarray
    has_developed_events: bool
    done: np.ndarray
    has_done_events: bool
    total_story_points: float
    max_bucket_index: int
    bucket_count: Optional[int] = None

    def __eq__(self, other):
        if not isinstance(other, PointBuckets):
            return NotImplemented
        return (
            self.total_story_points == other.total_story_points
            and self.max_bucket_index == other.max_bucket_index
            and self.bucket_count == other.bucket_count
            and all(
                self.has_events(stage) == other.has_events(stage)
                and np.array_equal(self.cumulative(stage), other.cumulative(stage))
                for stage in STAGES
            )
        )

    def cumulative(self, stage: Stage) -> np.ndarray:
        return getattr(self, stage.value)

    def has_events(self, stage: Stage) -> bool:
        return getattr(self, f"has_{stage.value}_events")

    def remaining(self, stage: Stage) -> np.ndarray:
        """Points not yet through `stage` at the end of each bucket."""
        return self.total_story_points - self.cumulative(stage)

    def window(self, values):
        """Trim `values` to the trailing window, keeping one leading bucket."""
        if self.bucket_count:
            return values[-(self.bucket_count + 1) :]
        return values

    def to_data_frame(self, remaining=True) -> pd.DataFrame:
        """Build a data frame with a column per stage that has events."""
        columns = {}
        for stage in STAGES:
            if not self.has_events(stage):
                continue
            values = self.remaining(stage) if remaining else self.cumulative(stage)
            columns[stage.label] = self.window(values)

        index = self.window(np.arange(self.max_bucket_index + 1))
        return pd.DataFrame(columns, index=pd.Index(index, name="Period"))


def _normalised_stage_times(item: Item):
    """Pull each present stage time back to the earliest of itself and the
    more advanced stages, so an item counts as started once it is done.
    """
    times = item.stage_times()
    normalised = {}
    earliest = None
    for stage in reversed(STAGES):
        if stage not in times:
            continue
        earliest = times[stage] if earliest is None else min(earliest, times[stage])
        normalised[stage] = earliest
    return normalised


def _accumulate(tally, floor=None):
    """Running total of `tally`, never allowed to drop below `floor`."""
    result = np.zeros(len(tally), dtype=tally.dtype)
    running = 0
    for i, value in enumerate(tally):
        running += value
        if floor is not None and floor[i] > running:
            running = floor[i]
        result[i] = running
    result.setflags(write=False)
    return result


def make_point_buckets(
    items: Iterable[Item],
    period_length: int,
    bucket_count: Optional[int] = None,
    now: Optional[int] = None,
) -> Optional[PointBuckets]:
    """Aggregate items into cumulative points per stage per period.

    Events are tallied by whole period, `floor(timestamp / period_length)`,
    so bucket edges fall on UTC calendar boundaries counted from the epoch
    (midnight UTC for days, Thursday midnight UTC for weeks), not on `now`.
    Without `bucket_count` bucket 0 is the period of the earliest event and
    the last bucket the period of the latest one.

    With `bucket_count` the series is a trailing window: the last bucket is
    the calendar period containing `now` and bucket 0 is the empty period
    before the earliest event, so the series starts from a zero baseline.
    An instant falling exactly on a period boundary opens the new period.
    Events later than `now` are counted in the last bucket.

    Returns None if no item has any stage timestamp.
    """
    items = list(items)
    total_story_points = sum(item.points for item in items)

    records = [
        (stage.value, int(timestamp // period_length), item.points)
        for item in items
        for stage, timestamp in _normalised_stage_times(item).items()
    ]
    if not records:
        logger.debug("No stage events found in %d items", len(items))
        return None

    events = pd.DataFrame.from_records(records, columns=["stage", "period", "points"])
    first_period = int(events["period"].min())

    if bucket_count:
        if now is None:
            now = now_in_msecs()
        offset = 1
        max_bucket_index = max(int(now // period_length) - first_period + 1, 0)
    else:
        offset = 0
        max_bucket_index = int(events["period"].max()) - first_period

    events["bucket"] = events["period"] - first_period + offset
    future_events = events["bucket"] > max_bucket_index
    if future_events.any():
        logger.debug(
            "Counting %d events after the current period in the last bucket",
            future_events.sum(),
        )
        events["bucket"] = events["bucket"].clip(upper=max_bucket_index)

    tallies = events.pivot_table(
        index="bucket", columns="stage", values="points", aggfunc="sum", fill_value=0
    ).reindex(
        index=range(max_bucket_index + 1),
        columns=[stage.value for stage in STAGES],
        fill_value=0,
    )
    stages_with_events = set(events["stage"])

    # Most advanced stage first: each stage is clamped to at least the
    # cumulative count of the stage after it.
    cumulative = {}
    floor = None
    for stage in reversed(STAGES):
        cumulative[stage] = _accumulate(tallies[stage.value].to_numpy(), floor)
        floor = cumulative[stage]

    return PointBuckets(
        started=cumulative[Stage.STARTED],
        has_started_events=Stage.STARTED.value in stages_with_events,
        to_review=cumulative[Stage.TO_REVIEW],
        has_to_review_events=Stage.TO_REVIEW.value in stages_with_events,
        developed=cumulative[Stage.DEVELOPED],
        has_developed_events=Stage.DEVELOPED.value in stages_with_events,
        done=cumulative[Stage.DONE],
        has_done_events=Stage.DONE.value in stages_with_events,
        total_story_points=total_story_points,
        max_bucket_index=max_bucket_index,
        bucket_count=bucket_count or None,
    )


class PointBucketsCalculator(Calculator):
    """Build the cumulative points per stage for one period length.

    Subclasses set `period` and the name of the setting that lists the
    output data files.
    """

    period = None
    data_setting = None

    def get_bucket_count(self):
        return None

    def run(self):
        logger.debug("Calculating point buckets by %s", self.period)
        return make_point_buckets(
            self.items,
            PERIOD_LENGTHS[self.period],
            self.get_bucket_count(),
            now=self.settings.get("now"),
        )

    def write(self):
        output_files = self.settings.get(self.data_setting)
        if not output_files:
            logger.debug("No output file specified for remaining points by %s", self.period)
            return

        buckets = self.get_result()
        if buckets is None:
            logger.warning(
                "Cannot write remaining points by %s with no stage events", self.period
            )
            return

        write_data_frame(
            buckets.to_data_frame(),
            output_files,
            f"Remaining by {self.period}",
            "Period",
        )


class WeeklyPointBucketsCalculator(PointBucketsCalculator):
    """Remaining points by week, from the earliest event to the latest."""

    period = "week"
    data_setting = "weekly_buckets_data"


class DailyPointBucketsCalculator(PointBucketsCalculator):
    """Remaining points by day over a trailing window ending today."""

    period = "day"
    data_setting = "daily_buckets_data"

    def get_bucket_count(self):
        return self.settings.get("daily_window") or 7
