"""Summary statistics over the tests a suite has executed."""

import logging

from isotest.models.stats import SuiteStats, TestOutcome
from isotest.suite import Suite

STATUS_SYMBOLS = {
    True: "✓",
    False: "✗",
}


def suite_stats(suite: Suite | None) -> SuiteStats | None:
    """Summarize the executed prefix of ``suite``.

    Returns:
        Statistics, or None if there is no suite or it has been closed

    """
    if suite is None or suite.closed:
        return None

    executed = list(zip(suite.tests, suite.results, strict=False))
    n_ran = len(executed)
    n_clean = sum(1 for _, record in executed if record.passed)

    return SuiteStats(
        n_tests=len(suite.tests),
        n_ran=n_ran,
        n_error=sum(1 for _, record in executed if record.error_messages),
        n_fail=sum(1 for _, record in executed if record.failed),
        success_rate=n_clean / n_ran if n_ran else 0.0,
        fatal_failures=suite.fatal_failures,
        crash_count=suite.crash_count,
        tests_run=[
            TestOutcome(name=test.name, ok=record.passed) for test, record in executed
        ],
    )


def log_stats_summary(log: logging.Logger, stats: SuiteStats) -> None:
    """Log a formatted summary of suite statistics."""
    log.info("=" * 80)
    log.info("Suite Summary:")
    log.info("=" * 80)
    log.info("Ran %d of %d tests", stats.n_ran, stats.n_tests)
    log.info(
        "Failed: %d, with errors: %d, crashed: %d",
        stats.n_fail,
        stats.n_error,
        stats.crash_count,
    )
    log.info("Success rate: %.2f", stats.success_rate)

    for outcome in stats.tests_run:
        log.info("%s %s", STATUS_SYMBOLS[outcome.ok], outcome.name)
