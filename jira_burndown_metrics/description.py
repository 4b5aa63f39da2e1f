"""Text summaries for Jira Burndown Metrics.

Renders the remaining points per stage at the start and end of the most
recent period, the mean velocity and the list of work item changes, in the
quoted-code style used for chat messages.
"""

import logging

from .items import Stage
from .periods import now_in_msecs

logger = logging.getLogger(__name__)

REMAINING_LABELS = [
    (Stage.STARTED, "To Do"),
    (Stage.TO_REVIEW, "Not Yet In Review"),
    (Stage.DEVELOPED, "Not Yet Ready for QA"),
    (Stage.DONE, "Unfinished"),
]

HEADING_WIDTH = max(len(label) for _, label in REMAINING_LABELS) + 2

NOT_EXISTING = "Not Existing"


def format_points(value):
    """Format a point value without a trailing `.0` for whole numbers."""
    if value is None:
        return "0"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def _percentage(value, total):
    if not total:
        return "  0%"
    return f"{round(value / total * 100):>3}%"


def describe_changes(header, items, period_length, now=None, velocities=None):
    """Describe how the remaining points per stage moved over the last period.

    Each line shows the points remaining at the start of the period, at the
    end, and the difference, with percentages of the total.
    """
    if now is None:
        now = now_in_msecs()
    period_start = now - period_length

    total_story_points = 0
    start = {stage: 0 for stage, _ in REMAINING_LABELS}
    end = {stage: 0 for stage, _ in REMAINING_LABELS}
    for item in items:
        total_story_points += item.points
        for stage, _ in REMAINING_LABELS:
            stage_time = item.stage_time(stage)
            if stage_time is None:
                continue
            end[stage] += item.points
            if stage_time < period_start:
                start[stage] += item.points

    rows = []
    for stage, label in REMAINING_LABELS:
        start_remaining = total_story_points - start[stage]
        end_remaining = total_story_points - end[stage]
        rows.append(
            (
                label,
                format_points(start_remaining),
                _percentage(start_remaining, total_story_points),
                format_points(end_remaining),
                _percentage(end_remaining, total_story_points),
                format_points(start_remaining - end_remaining),
                _percentage(start_remaining - end_remaining, total_story_points),
            )
        )

    value_width = max(max(len(row[1]), len(row[3])) for row in rows)
    diff_width = max(len(row[5]) for row in rows)

    lines = [f"> {header}"]
    for label, start_value, start_pct, end_value, end_pct, diff, diff_pct in rows:
        lines.append(
            f"> `{label + ':':<{HEADING_WIDTH}} "
            f"{start_value:>{value_width}} [{start_pct}] -> "
            f"{end_value:>{value_width}} [{end_pct}] "
            f"({diff:>{diff_width}} [{diff_pct}])`"
        )

    if velocities is not None:
        lines.extend(describe_velocity(velocities))

    return "\n".join(lines)


def describe_velocity(velocities):
    """Return a line per stage with enough periods for a mean velocity."""
    lines = []
    for stage, _ in REMAINING_LABELS:
        mean = velocities.mean(stage)
        if mean is None:
            continue
        lines.append(f"> `Mean velocity ({stage.label}): {mean:.1f}`")
    return lines


def describe_issue_changes(changes, period):
    """Describe each work item change, or return None if there are none."""
    if not changes:
        return None

    lines = [f"Work item changes since previous {period}"]
    for change in changes:
        lines.append(
            f"  {change.key} "
            f"{change.former_status or NOT_EXISTING}: {format_points(change.former_points)}"
            f" -> {change.status or NOT_EXISTING}: {format_points(change.points)}"
        )
    return "\n".join(lines)
