"""Tests for the stats aggregator."""

import logging

import pytest

from isotest.models.descriptor import new_test
from isotest.models.stats import SuiteStats, TestOutcome
from isotest.stats import log_stats_summary, suite_stats
from isotest.suite import Suite
from isotest.testing import bodies
from isotest.testing.factories import TestDescriptorFactory


def test_returns_none_without_suite() -> None:
    """An absent suite has no statistics."""
    assert suite_stats(None) is None


def test_returns_none_for_closed_suite(suite: Suite) -> None:
    """A closed suite has no statistics."""
    suite.close()

    assert suite_stats(suite) is None


def test_counts_registered_tests_before_running(suite: Suite) -> None:
    """Stats on an unrun suite report only the registered total."""
    suite.add(TestDescriptorFactory.batch(4))

    stats = suite_stats(suite)

    assert stats == SuiteStats(
        n_tests=4, n_ran=0, n_error=0, n_fail=0, success_rate=0.0, tests_run=[]
    )


def test_summarizes_executed_tests(suite: Suite) -> None:
    """Counts failures and errors separately and computes the rate."""
    suite.add(
        [
            new_test(bodies.passes, "passes"),
            new_test(bodies.errors_twice, "errors"),
            new_test(bodies.fails, "fails"),
            new_test(bodies.fails_with_errors, "both"),
        ]
    )
    suite.run()

    stats = suite_stats(suite)

    assert stats is not None
    assert stats.n_tests == 4
    assert stats.n_ran == 4
    assert stats.n_error == 2
    assert stats.n_fail == 2
    assert stats.success_rate == pytest.approx(0.25)
    assert stats.tests_run == [
        TestOutcome(name="passes", ok=True),
        TestOutcome(name="errors", ok=False),
        TestOutcome(name="fails", ok=False),
        TestOutcome(name="both", ok=False),
    ]


def test_reflects_partial_run(suite: Suite) -> None:
    """Only the executed prefix is summarized."""
    suite.add([new_test(bodies.passes, "first"), new_test(bodies.passes, "second")])
    suite.run_next()

    stats = suite_stats(suite)

    assert stats is not None
    assert stats.n_tests == 2
    assert stats.n_ran == 1
    assert stats.success_rate == 1.0
    assert [o.name for o in stats.tests_run] == ["first"]


def test_records_fatal_failure_policy(suite: Suite) -> None:
    """Stats remember whether the run treated failures as fatal."""
    suite.add_test(new_test(bodies.fails, "fails"))
    suite.run(fatal_failures=True)

    stats = suite_stats(suite)

    assert stats is not None
    assert stats.fatal_failures is True


def test_does_not_mutate_suite(suite: Suite) -> None:
    """Computing stats leaves the suite as it was."""
    suite.add([new_test(bodies.passes, "first"), new_test(bodies.passes, "second")])
    suite.run_next()
    results = suite.results

    suite_stats(suite)

    assert suite.cursor == 1
    assert suite.results == results
    assert suite.state == "running"


def test_log_stats_summary(caplog: pytest.LogCaptureFixture) -> None:
    """Logs totals and one symbol-prefixed line per test."""
    stats = SuiteStats(
        n_tests=2,
        n_ran=2,
        n_error=0,
        n_fail=1,
        success_rate=0.5,
        crash_count=1,
        tests_run=[
            TestOutcome(name="passes", ok=True),
            TestOutcome(name="crashes", ok=False),
        ],
    )

    with caplog.at_level(logging.INFO):
        log_stats_summary(logging.getLogger(), stats)

    assert "Suite Summary:" in caplog.text
    assert "Ran 2 of 2 tests" in caplog.text
    assert "Failed: 1, with errors: 0, crashed: 1" in caplog.text
    assert "Success rate: 0.50" in caplog.text
    assert "✓ passes" in caplog.text
    assert "✗ crashes" in caplog.text
