"""Points by status calculator for Jira Burndown Metrics."""

import logging

import pandas as pd

from ..calculator import Calculator
from ..utils import write_data_frame

logger = logging.getLogger(__name__)


def points_by_status(items):
    """Sum points per status label, in the order statuses are first seen."""
    data = pd.DataFrame(
        [(item.status, item.points) for item in items], columns=["status", "points"]
    )
    return data.groupby("status", sort=False)["points"].sum()


class PointsByStatusCalculator(Calculator):
    """Build a series of total points in each status."""

    def run(self):
        return points_by_status(self.items)

    def write(self):
        output_files = self.settings.get("points_by_status_data")
        if not output_files:
            logger.debug("No output file specified for points by status")
            return

        data = self.get_result()
        if len(data.index) == 0:
            logger.warning("Cannot write points by status with no items")
            return

        write_data_frame(data.to_frame(), output_files, "Points by status", "status")
