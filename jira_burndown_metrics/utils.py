"""Utility functions for Jira Burndown Metrics."""

import logging
import os.path

logger = logging.getLogger(__name__)


def extend_dict(d, e):
    """Extend dictionary d with entries from e, returning a new dictionary."""
    r = d.copy()
    r.update(e)
    return r


def get_extension(filename):
    """Get file extension from filename."""
    return os.path.splitext(filename)[1].lower()


def write_data_frame(data, output_files, sheet_name, index_label):
    """Write a data frame to each output file, choosing the format by extension."""
    for output_file in output_files:
        output_extension = get_extension(output_file)

        logger.info("Writing %s data to %s", sheet_name.lower(), output_file)
        if output_extension == ".json":
            data.to_json(output_file, orient="index")
        elif output_extension == ".xlsx":
            data.to_excel(
                output_file, sheet_name=sheet_name, index_label=index_label
            )
        else:
            data.to_csv(output_file, header=True, index_label=index_label)
