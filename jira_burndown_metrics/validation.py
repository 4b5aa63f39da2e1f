"""Consistency checks for item stage timestamps.

The calculators tolerate out-of-order and missing stage timestamps, but they
usually point at a workflow problem worth fixing in the tracker.
"""

import logging

logger = logging.getLogger(__name__)


def _check_order(key, later, later_name, earlier, earlier_name):
    if later is None:
        return None
    if earlier is None:
        return f"{key} was {later_name} but not {earlier_name}"
    if later < earlier:
        return f"{key} was {later_name} before it was {earlier_name}"
    return None


def find_inconsistencies(items):
    """Return a warning message for each inconsistent item timestamp."""
    problems = []
    for item in items:
        checks = [
            (item.end_time, "resolved", item.started_time, "started"),
            (item.end_time, "resolved", item.dev_complete_time, "dev complete"),
            (item.dev_complete_time, "dev complete", item.started_time, "started"),
        ]
        for later, later_name, earlier, earlier_name in checks:
            problem = _check_order(item.key, later, later_name, earlier, earlier_name)
            if problem:
                logger.warning("Item %s", problem)
                problems.append(problem)
    return problems
