"""Snapshot calculator for Jira Burndown Metrics.

Stores the current items under today's date so that later runs can list the
changes since a previous day or week.
"""

import logging

from ..calculator import Calculator
from ..periods import get_today
from ..snapshots import snapshot_path, write_snapshot

logger = logging.getLogger(__name__)


class SnapshotCalculator(Calculator):
    """Work out where today's snapshot goes; `write()` stores it."""

    def run(self):
        data_path = self.settings.get("data_path")
        if not data_path:
            return None
        return snapshot_path(data_path, get_today(self.settings.get("now")))

    def write(self):
        if self.get_result() is None:
            logger.debug("No data path specified for item snapshots")
            return

        write_snapshot(
            self.items,
            self.settings["data_path"],
            get_today(self.settings.get("now")),
        )
