"""Velocity calculator for Jira Burndown Metrics.

This module differences cumulative point buckets into per-period throughput.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from ..calculator import Calculator
from ..items import STAGES, Stage
from ..utils import write_data_frame
from .buckets import PointBuckets, WeeklyPointBucketsCalculator

logger = logging.getLogger(__name__)

# The first and last periods may be partial, so a mean needs at least one
# period in between.
MIN_VELOCITY_PERIODS = 3


def mean_interior_velocity(values) -> Optional[float]:
    """Mean of `values` excluding the first and last period.

    Returns None when there are fewer than three values.
    """
    if len(values) < MIN_VELOCITY_PERIODS:
        return None
    return float(np.mean(values[1:-1]))


@dataclass(frozen=True, eq=False)
class PointBucketVelocities:
    """Points moved through each stage per period.

    Stages without events of their own have an empty array.
    """

    started: np.ndarray
    to_review: np.ndarray
    developed: np.ndarray
    done: np.ndarray

    def velocity(self, stage: Stage) -> np.ndarray:
        return getattr(self, stage.value)

    def interior(self, stage: Stage) -> np.ndarray:
        """Velocities without the possibly partial first and last periods."""
        return self.velocity(stage)[1:-1]

    def mean(self, stage: Stage) -> Optional[float]:
        return mean_interior_velocity(self.velocity(stage))

    def to_data_frame(self) -> pd.DataFrame:
        columns = {
            stage.label: self.velocity(stage)
            for stage in STAGES
            if len(self.velocity(stage))
        }
        return pd.DataFrame(columns).rename_axis("Period")


def _differences(cumulative):
    result = np.diff(cumulative, prepend=0)
    result.setflags(write=False)
    return result


def make_point_bucket_velocities(buckets: PointBuckets) -> PointBucketVelocities:
    """Difference each stage's cumulative series.

    Index 0 is the cumulative value of the first bucket, as there is no
    earlier bucket to difference against.
    """
    velocities = {}
    for stage in STAGES:
        if buckets.has_events(stage):
            velocities[stage.value] = _differences(buckets.cumulative(stage))
        else:
            velocities[stage.value] = np.array(
                [], dtype=buckets.cumulative(stage).dtype
            )
    return PointBucketVelocities(**velocities)


class VelocityCalculator(Calculator):
    """Weekly velocity per stage, derived from the weekly point buckets."""

    def run(self):
        buckets = self.get_result(WeeklyPointBucketsCalculator)
        if buckets is None:
            logger.debug("No weekly point buckets, skipping velocity")
            return None

        velocities = make_point_bucket_velocities(buckets)
        for stage in STAGES:
            mean = velocities.mean(stage)
            if mean is not None:
                logger.debug("Mean weekly %s velocity: %.1f", stage.value, mean)
        return velocities

    def write(self):
        output_files = self.settings.get("velocity_data")
        if not output_files:
            logger.debug("No output file specified for velocity data")
            return

        velocities = self.get_result()
        if velocities is None:
            logger.warning("Cannot write velocity data with no stage events")
            return

        write_data_frame(velocities.to_data_frame(), output_files, "Velocity", "Period")
