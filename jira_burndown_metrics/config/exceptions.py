"""Configuration exceptions for Jira Burndown Metrics."""


class ConfigError(Exception):
    """
    Exception raised for errors in the configuration.
    """
