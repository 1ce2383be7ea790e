"""Data structures shared by the suite engine and its workers."""

from isotest.models.descriptor import Runnable, TestDescriptor, new_test
from isotest.models.record import ResultRecord, TestAborted
from isotest.models.stats import SuiteStats, TestOutcome

__all__ = [
    "ResultRecord",
    "Runnable",
    "SuiteStats",
    "TestAborted",
    "TestDescriptor",
    "TestOutcome",
    "new_test",
]
