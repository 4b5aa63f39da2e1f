"""Configuration loader for Jira Burndown Metrics."""

import logging
import os.path

import yaml

from ..periods import DEFAULT_WORK_DAYS
from .exceptions import ConfigError
from .type_utils import expand_key, force_int, force_list, force_work_days
from .yaml_utils import ordered_load

logger = logging.getLogger(__name__)

DATA_FILENAME_KEYS = [
    "daily_buckets_data",
    "weekly_buckets_data",
    "velocity_data",
    "points_by_status_data",
    "developer_velocity_data",
    "daily_changes_data",
    "weekly_changes_data",
    "open_items_data",
]

STATUS_KEYS = [
    "in_review_status",
    "ready_for_qa_status",
]

STRING_KEYS = [
    "summary",
    "daily_description",
    "weekly_description",
]


def _create_default_options():
    """Create default options dictionary."""
    return {
        "settings": {
            "items_file": None,
            "now": None,
            "data_path": None,
            "work_days": list(DEFAULT_WORK_DAYS),
            "daily_window": 7,
            "daily_buckets_data": None,
            "weekly_buckets_data": None,
            "velocity_data": None,
            "points_by_status_data": None,
            "developer_velocity_data": None,
            "daily_changes_data": None,
            "weekly_changes_data": None,
            "open_items_data": None,
            "in_review_status": "in review",
            "ready_for_qa_status": "ready for qa",
            "summary": None,
            "daily_description": None,
            "weekly_description": None,
            "summary_file": None,
        },
    }


def _resolve_path(path, cwd):
    if cwd is None or os.path.isabs(path):
        return path
    return os.path.normpath(os.path.join(cwd, path))


def _parse_input_config(config, options, cwd):
    """Parse the location of the items file."""
    if expand_key("items_file") in config:
        options["settings"]["items_file"] = _resolve_path(
            str(config[expand_key("items_file")]), cwd
        )


def _parse_status_config(config, options):
    """Parse the status names used by the open items report."""
    for key in STATUS_KEYS:
        if expand_key(key) in config:
            options["settings"][key] = str(config[expand_key(key)]).lower()


def _parse_history_config(config, options, cwd):
    """Parse snapshot history configuration."""
    if "history" not in config:
        return

    history_config = config["history"] or {}
    settings = options["settings"]

    if expand_key("data_path") in history_config:
        settings["data_path"] = _resolve_path(
            str(history_config[expand_key("data_path")]), cwd
        )

    if expand_key("work_days") in history_config:
        settings["work_days"] = force_work_days(
            "work_days", history_config[expand_key("work_days")]
        )


def _parse_output_config(config, options):
    """Parse output configuration."""
    if "output" not in config:
        return

    output_config = config["output"] or {}
    settings = options["settings"]

    if expand_key("output_directory") in output_config:
        options["output_directory"] = output_config[expand_key("output_directory")]

    if expand_key("daily_window") in output_config:
        daily_window = force_int("daily_window", output_config[expand_key("daily_window")])
        if daily_window < 1:
            raise ConfigError("`Daily window` must be at least 1")
        settings["daily_window"] = daily_window

    for key in DATA_FILENAME_KEYS:
        if expand_key(key) in output_config:
            settings[key] = list(
                map(os.path.basename, force_list(output_config[expand_key(key)]))
            )

    if expand_key("summary_file") in output_config:
        settings["summary_file"] = os.path.basename(
            output_config[expand_key("summary_file")]
        )

    for key in STRING_KEYS:
        if expand_key(key) in output_config:
            settings[key] = str(output_config[expand_key(key)])


def config_to_options(data, cwd=None, _visited_files=None):
    """
    Parse YAML config data and return options dict.
    """
    if _visited_files is None:
        _visited_files = set()

    try:
        config = ordered_load(data, yaml.SafeLoader)
    except yaml.YAMLError as e:
        raise ConfigError("Unable to parse YAML configuration file.") from e

    if config is None:
        raise ConfigError("Configuration file is empty") from None

    options = _create_default_options()

    if "extends" in config:
        if cwd is None:
            raise ConfigError("`extends` is not supported here.")

        extends_filename = os.path.abspath(
            os.path.normpath(
                os.path.join(cwd, config["extends"].replace("/", os.path.sep))
            )
        )

        if not os.path.exists(extends_filename):
            raise ConfigError(
                f"File `{extends_filename}` referenced in `extends` not found."
            ) from None

        if extends_filename in _visited_files:
            raise ConfigError(
                f"Circular extends reference detected: {extends_filename}"
            ) from None

        _visited_files.add(extends_filename)

        logger.debug("Extending file %s", extends_filename)
        with open(extends_filename, encoding="utf-8") as extends_file:
            options = config_to_options(
                extends_file.read(),
                cwd=os.path.dirname(extends_filename),
                _visited_files=_visited_files,
            )

    _parse_input_config(config, options, cwd)
    _parse_status_config(config, options)
    _parse_history_config(config, options, cwd)
    _parse_output_config(config, options)

    if options["settings"]["items_file"] is None:
        logger.debug("No `Items file` configured; it must be given on the command line")

    return options
