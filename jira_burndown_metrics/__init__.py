"""Jira Burndown Metrics - burn-down, burn-up and velocity series from JIRA items.

This package turns snapshots of work items with optional stage timestamps into
dense per-period series, velocity figures and day-over-day change records.
"""
