"""Type utilities for configuration processing."""

from .exceptions import ConfigError


def force_list(val) -> list:
    """
    Ensure the value is a list.
    """
    return list(val) if isinstance(val, (list, tuple)) else [val]


def force_int(key, value) -> int:
    """
    Convert value to int, raise ConfigError on failure.
    """
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(
            f"Could not convert value `{value}` for key `{expand_key(key)}` to integer"
        ) from None


def force_work_days(key, value) -> list:
    """
    Convert a list of ISO weekdays, or a string such as `12345`, to a list
    of ints between 1 (Monday) and 7 (Sunday).
    """
    if isinstance(value, (str, int)):
        value = list(str(value))

    work_days = [force_int(key, day) for day in force_list(value)]
    if not work_days or any(day < 1 or day > 7 for day in work_days):
        raise ConfigError(
            f"Value `{value}` for key `{expand_key(key)}` must list weekdays "
            f"between 1 (Monday) and 7 (Sunday)"
        )
    return sorted(set(work_days))


def expand_key(key) -> str:
    """
    Expand config key for display.
    """
    return str(key).replace("_", " ").lower()
