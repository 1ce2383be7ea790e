"""Abstract base class for isolated test workers."""

import logging
import traceback
from abc import ABC, abstractmethod
from dataclasses import dataclass

from isotest.faults import FaultDetector
from isotest.models.descriptor import Runnable
from isotest.models.record import ResultRecord, TestAborted

log = logging.getLogger(__name__)


class WorkerSetupError(Exception):
    """Raised when a worker cannot be started for a test."""


@dataclass(frozen=True, kw_only=True)
class WorkerOutcome:
    """What the engine learns once a worker has been joined.

    ``crash_reason`` is set when the worker observed an abnormal termination
    it could describe better than the generic memory-violation message.
    """

    record: ResultRecord
    crash_reason: str | None = None


@dataclass(frozen=True, kw_only=True)
class TestWorker(ABC):
    """Runs one test body at a time behind an isolation boundary."""

    __test__ = False

    detector: FaultDetector

    @abstractmethod
    def execute(self, test: Runnable, record: ResultRecord) -> WorkerOutcome:
        """Run ``test`` against ``record`` and wait for it to finish.

        Args:
            test: Test to execute
            record: Fresh record, possibly with its timer already started

        Returns:
            Outcome holding the record as left by the test body

        Raises:
            WorkerSetupError: If the isolation boundary cannot be created

        """


def run_body(test: Runnable, record: ResultRecord) -> ResultRecord:
    """Run a test body inside a worker, turning exceptions into failures."""
    try:
        test.run(record)
    except TestAborted:
        log.debug("Test %s aborted itself", test.name)
    except SystemExit as e:
        log.debug("Test %s called exit with %r", test.name, e.code)
        record.fail(f"unhandled SystemExit: {e.code}")
    except Exception as e:
        log.debug("Test %s raised:\n%s", test.name, traceback.format_exc())
        record.fail(f"unhandled {type(e).__name__}: {e}")
    return record
