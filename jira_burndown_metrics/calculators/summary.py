"""Summary calculator for Jira Burndown Metrics.

Combines the configured summary text with the daily and weekly change
descriptions into a single message.
"""

import logging

from ..calculator import Calculator
from ..description import describe_changes, describe_issue_changes
from ..periods import DAY_IN_MSECS, WEEK_IN_MSECS
from .changes import DailyChangesCalculator, WeeklyChangesCalculator
from .velocity import VelocityCalculator

logger = logging.getLogger(__name__)


class SummaryCalculator(Calculator):
    """Build the summary text. Returns None if no section is configured."""

    def run(self):
        now = self.settings.get("now")
        sections = [self.settings.get("summary")]

        daily_description = self.settings.get("daily_description")
        if daily_description:
            sections.append(
                describe_changes(daily_description, self.items, DAY_IN_MSECS, now=now)
            )

        weekly_description = self.settings.get("weekly_description")
        if weekly_description:
            sections.append(
                describe_changes(
                    weekly_description,
                    self.items,
                    WEEK_IN_MSECS,
                    now=now,
                    velocities=self.get_result(VelocityCalculator),
                )
            )

        sections.append(
            describe_issue_changes(self.get_result(DailyChangesCalculator), "day")
        )
        sections.append(
            describe_issue_changes(self.get_result(WeeklyChangesCalculator), "week")
        )

        sections = [section for section in sections if section]
        if not sections:
            return None
        return "\n".join(sections)

    def write(self):
        output_file = self.settings.get("summary_file")
        if not output_file:
            logger.debug("No output file specified for summary")
            return

        summary = self.get_result()
        if summary is None:
            logger.warning("Cannot write an empty summary")
            return

        logger.info("Writing summary to %s", output_file)
        with open(output_file, "w", encoding="utf-8") as summary_file:
            summary_file.write(summary + "\n")
