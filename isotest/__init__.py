"""Isolated test execution harness."""

from isotest.config import SuiteConfig
from isotest.faults import FaultDetector, FaultHandlerError, fault_detector
from isotest.models.descriptor import Runnable, TestDescriptor, new_test
from isotest.models.record import ResultRecord, TestAborted
from isotest.models.stats import SuiteStats, TestOutcome
from isotest.reporter import Reporter, StreamReporter
from isotest.stats import log_stats_summary, suite_stats
from isotest.suite import Suite, SuiteStateError

__all__ = [
    "FaultDetector",
    "FaultHandlerError",
    "ResultRecord",
    "Reporter",
    "Runnable",
    "StreamReporter",
    "Suite",
    "SuiteConfig",
    "SuiteStateError",
    "SuiteStats",
    "TestAborted",
    "TestDescriptor",
    "TestOutcome",
    "fault_detector",
    "log_stats_summary",
    "new_test",
    "suite_stats",
]
