"""Dated item snapshots for Jira Burndown Metrics.

Snapshots are stored as `<data path>/<YYYY-MM-DD>/items.json`. A missing
snapshot is a normal condition (e.g. the first run of a new report) and is
reported as None rather than an error.
"""

import logging
import os

from .items import dump_items, load_items
from .periods import format_date

logger = logging.getLogger(__name__)

SNAPSHOT_FILENAME = "items.json"


def snapshot_path(data_path, d):
    """Return the path of the snapshot taken on date `d`."""
    return os.path.join(data_path, format_date(d), SNAPSHOT_FILENAME)


def write_snapshot(items, data_path, d):
    """Store `items` as the snapshot for date `d` and return its path."""
    path = snapshot_path(data_path, d)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    logger.info("Writing item snapshot to %s", path)
    dump_items(items, path)
    return path


def read_snapshot(data_path, d):
    """Return the items stored for date `d`, or None if there is no snapshot."""
    path = snapshot_path(data_path, d)
    if not os.path.exists(path):
        logger.info("No item snapshot found at %s", path)
        return None
    return load_items(path)
