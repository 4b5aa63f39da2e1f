"""Calculator base class and runner for Jira Burndown Metrics."""

import logging

logger = logging.getLogger(__name__)


class Calculator:
    """Base class for calculators.

    A calculator is given the list of items, the settings dict and a shared
    results dict. `run()` returns the calculated result, which is stored in
    the results dict keyed by calculator class so later calculators can reuse
    it through `get_result()` without recomputing it. `write()` is called
    once all calculators have run.
    """

    def __init__(self, items, settings, results):
        self.items = items
        self.settings = settings
        self._results = results

    def get_result(self, calculator=None, default=None):
        """Return the result of `calculator`, or of this calculator."""
        return self._results.get(calculator or self.__class__, default)

    def run(self):
        """Calculate and return the result."""
        raise NotImplementedError()

    def write(self):
        """Write output files, if any are configured."""


def run_calculators(calculators, items, settings):
    """Run each calculator in order, then write all outputs.

    Returns a dict of results keyed by calculator class.
    """
    results = {}
    instances = []

    for c in calculators:
        logger.info("%s running...", c.__name__)
        instance = c(items, settings, results)
        results[c] = instance.run()
        instances.append(instance)
        logger.info("%s completed\n", c.__name__)

    for instance in instances:
        logger.info("Writing file for %s...", instance.__class__.__name__)
        instance.write()

    return results
