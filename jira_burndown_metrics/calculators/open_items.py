"""Open items calculator for Jira Burndown Metrics.

Lists the items waiting in review or ready for QA, with the number of days
spent in each state.
"""

import logging

import pandas as pd

from ..calculator import Calculator
from ..periods import DAY_IN_MSECS, now_in_msecs
from ..utils import write_data_frame

logger = logging.getLogger(__name__)

DEFAULT_IN_REVIEW_STATUS = "in review"
DEFAULT_READY_FOR_QA_STATUS = "ready for qa"


def open_items(
    items,
    in_review_status=DEFAULT_IN_REVIEW_STATUS,
    ready_for_qa_status=DEFAULT_READY_FOR_QA_STATUS,
    now=None,
):
    """Days each dev complete item has been in review and ready for QA.

    Only items whose status (ignoring case) is `in_review_status` or
    `ready_for_qa_status` are counted. Time ready for QA is taken off the
    time in review, which never goes below zero. Items with neither are
    left out. Rows are sorted by days ready for QA, longest first.

    Returns None if no item qualifies.
    """
    if now is None:
        now = now_in_msecs()
    in_review_status = in_review_status.casefold()
    ready_for_qa_status = ready_for_qa_status.casefold()

    records = []
    for item in items:
        if item.dev_complete_time is None:
            continue

        status = (item.status or "").casefold()
        ready_for_qa = status == ready_for_qa_status

        days_ready_for_qa = 0
        if ready_for_qa:
            days_ready_for_qa = (now - item.dev_complete_time) / DAY_IN_MSECS

        days_in_review = 0
        if item.ready_for_review_time is not None and (
            ready_for_qa or status == in_review_status
        ):
            days_in_review = (now - item.ready_for_review_time) / DAY_IN_MSECS

        # Days ready for QA are not counted as days in review as well
        if days_in_review >= days_ready_for_qa:
            days_in_review = max(0, days_in_review - days_ready_for_qa)

        if days_ready_for_qa or days_in_review:
            records.append((item.key, days_in_review, days_ready_for_qa))

    if not records:
        return None

    data = pd.DataFrame.from_records(
        records, columns=["key", "days in review", "days ready for qa"]
    ).set_index("key")
    return data.sort_values("days ready for qa", ascending=False, kind="stable")


class OpenItemsCalculator(Calculator):
    """Build a data frame of days in review and ready for QA per item."""

    def run(self):
        return open_items(
            self.items,
            self.settings.get("in_review_status") or DEFAULT_IN_REVIEW_STATUS,
            self.settings.get("ready_for_qa_status") or DEFAULT_READY_FOR_QA_STATUS,
            now=self.settings.get("now"),
        )

    def write(self):
        output_files = self.settings.get("open_items_data")
        if not output_files:
            logger.debug("No output file specified for open items")
            return

        data = self.get_result()
        if data is None:
            logger.warning("Cannot write open items with none in review or ready for QA")
            return

        write_data_frame(data, output_files, "Open items", "key")
