"""Suite engine sequencing isolated test execution."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from types import TracebackType
from typing import Literal, Self

from isotest.config import SuiteConfig
from isotest.faults import (
    MEMORY_VIOLATION_MESSAGE,
    FaultDetector,
    FaultHandlerError,
    fault_detector,
)
from isotest.models.descriptor import Runnable
from isotest.models.record import ResultRecord
from isotest.reporter import INDENT, NullReporter, Reporter, StreamReporter
from isotest.workers.base import TestWorker, WorkerSetupError
from isotest.workers.loading import load_worker_manifest

log = logging.getLogger(__name__)

SuiteState = Literal["not_started", "running", "finished", "aborted", "closed"]

NSEC_PER_SEC = 1_000_000_000


class SuiteStateError(Exception):
    """Raised when a suite operation is not allowed in its current state."""


@dataclass(kw_only=True)
class Suite:
    """Ordered tests plus the progress of running them.

    Tests run one at a time in registration order, each behind the isolation
    boundary of the configured worker. Results are kept for the executed
    prefix only, so ``len(results) == cursor`` whenever no test is in flight.
    """

    __test__ = False

    config: SuiteConfig = field(default_factory=SuiteConfig)
    reporter: Reporter | None = None
    detector: FaultDetector = fault_detector
    worker: TestWorker | None = None

    _tests: list[Runnable] = field(default_factory=list, init=False, repr=False)
    _results: list[ResultRecord] = field(
        default_factory=list, init=False, repr=False
    )
    _cursor: int = field(default=0, init=False)
    _finished: bool = field(default=False, init=False)
    _aborted: bool = field(default=False, init=False)
    _closed: bool = field(default=False, init=False)
    _crash_count: int = field(default=0, init=False)
    _fatal_failures: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        """Fill in the reporter and worker the config selects."""
        if self.reporter is None:
            self.reporter = (
                NullReporter()
                if self.config.quiet
                else StreamReporter(colour=self.config.colour)
            )
        if self.worker is None:
            manifest = load_worker_manifest(self.config.worker)
            self.worker = manifest.worker_factory(self.detector)

    def __enter__(self) -> Self:
        """Use the suite as a context manager that closes it on exit."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close the suite."""
        self.close()

    @property
    def tests(self) -> Sequence[Runnable]:
        """Registered tests in execution order."""
        return tuple(self._tests)

    @property
    def results(self) -> Sequence[ResultRecord]:
        """Records of the tests executed so far, in execution order."""
        return tuple(self._results)

    @property
    def cursor(self) -> int:
        """Index of the next test to run."""
        return self._cursor

    @property
    def finished(self) -> bool:
        """Whether every test ran without a fatal-failure abort."""
        return self._finished

    @property
    def aborted(self) -> bool:
        """Whether the last run stopped on a fatal failure."""
        return self._aborted

    @property
    def closed(self) -> bool:
        """Whether close() has released the suite."""
        return self._closed

    @property
    def crash_count(self) -> int:
        """Crashes observed since the suite was created or last reset."""
        return self._crash_count

    @property
    def fatal_failures(self) -> bool:
        """Failure policy used by the most recent run."""
        return self._fatal_failures

    @property
    def state(self) -> SuiteState:
        """Lifecycle state derived from the progress flags."""
        if self._closed:
            return "closed"
        if self._aborted:
            return "aborted"
        if self._finished:
            return "finished"
        if self._cursor == 0:
            return "not_started"
        return "running"

    def add(self, tests: Iterable[Runnable]) -> None:
        """Append tests in order.

        The batch is validated before anything is stored, so a bad item or an
        allocation failure leaves the suite exactly as it was.

        Raises:
            TypeError: If an item cannot be run by the engine
            SuiteStateError: If the suite has been closed

        """
        self._check_open()
        batch = list(tests)
        for test in batch:
            if not isinstance(test, Runnable):
                raise TypeError(f"Cannot register {test!r}: not a runnable test")

        self._tests = [*self._tests, *batch]
        if batch:
            self._finished = False
        log.debug("Registered %d test(s), %d total", len(batch), len(self._tests))

    def add_test(self, test: Runnable) -> None:
        """Append a single test."""
        self.add([test])

    def run(self, fatal_failures: bool = False) -> bool:
        """Run every remaining test.

        Args:
            fatal_failures: Stop at the first failed test

        Returns:
            True if the suite finished, False if it aborted on a failure or
            a test could not be started

        Raises:
            SuiteStateError: If the suite is finished, aborted or closed

        """
        self._check_runnable()
        self._fatal_failures = fatal_failures
        log.info(
            "Running %d test(s) (fatal failures: %s)",
            len(self._tests) - self._cursor,
            fatal_failures,
        )

        while self._cursor < len(self._tests):
            if not self.run_next(fatal_failures):
                return False

        self._finished = True
        log.info("Suite finished: %d test(s) ran", self._cursor)
        return True

    def run_next(self, fatal_failures: bool = False) -> bool:
        """Run the test at the cursor.

        Returns:
            False if the suite must stop, either because the test failed with
            fatal failures enabled or because it could not be started

        Raises:
            SuiteStateError: If no test is left to run or the suite is
                finished, aborted or closed

        """
        self._check_runnable()
        if self._cursor >= len(self._tests):
            raise SuiteStateError("No tests left to run")
        self._fatal_failures = fatal_failures

        test = self._tests[self._cursor]
        benchmark = test.name.startswith(self.config.benchmark_prefix)
        record = ResultRecord(name=test.name)
        log.debug(
            "Starting test %d/%d: %s", self._cursor + 1, len(self._tests), test.name
        )

        crashes_before = self.detector.snapshot()
        try:
            with self.detector.installed():
                if benchmark:
                    record.begin()
                outcome = self._worker.execute(test, record)
        except (FaultHandlerError, WorkerSetupError) as e:
            log.error("Could not run test %s: %s", test.name, e, exc_info=e)
            return False

        record = outcome.record
        if benchmark and record.end_time is None:
            record.mark_done()

        if self.detector.snapshot() != crashes_before:
            record.fail(outcome.crash_reason or MEMORY_VIOLATION_MESSAGE)
            self._crash_count += 1
            log.warning("Test %s crashed: %s", test.name, record.fail_message)

        self._results.append(record)
        self._cursor += 1

        abort = record.failed and fatal_failures
        self._report(test, record, benchmark=benchmark, abort=abort)
        if abort:
            self._aborted = True
            log.info(
                "Aborted after %s with %d test(s) remaining",
                test.name,
                len(self._tests) - self._cursor,
            )
            return False

        if self._cursor == len(self._tests):
            self._finished = True
        return True

    def reset(self) -> None:
        """Forget all results so the same tests can be run again."""
        self._check_open()
        self._results = []
        self._cursor = 0
        self._finished = False
        self._aborted = False
        self._crash_count = 0
        log.debug("Suite reset with %d test(s)", len(self._tests))

    def close(self) -> None:
        """Release all tests and results; the suite cannot be used again."""
        self._tests = []
        self._results = []
        self._closed = True

    @property
    def _worker(self) -> TestWorker:
        if self.worker is None:
            raise SuiteStateError("Suite has no worker")
        return self.worker

    def _check_open(self) -> None:
        if self._closed:
            raise SuiteStateError("Suite is closed")

    def _check_runnable(self) -> None:
        self._check_open()
        if self._aborted or self._finished:
            raise SuiteStateError(f"Suite is {self.state}; reset it first")

    def _report(
        self,
        test: Runnable,
        record: ResultRecord,
        *,
        benchmark: bool,
        abort: bool,
    ) -> None:
        reporter = self.reporter if self.reporter is not None else NullReporter()
        header = f"test {self._cursor}/{len(self._tests)} ({test.name}): "
        description = f"{getattr(test, 'description', '')}\n"

        if record.failed:
            reporter.report("failure", f"fail: {header}")
            reporter.report("describe", description)
            reporter.report("describe", f"{INDENT}{record.fail_message}\n")
            for i, message in enumerate(record.error_messages, start=1):
                reporter.report("describe", f"{INDENT}{i}. {message}\n")
        elif record.error_messages:
            reporter.report("warning", f"err:  {header}")
            reporter.report("describe", description)
            reporter.report(
                "warning", f"{INDENT}encountered {record.error_count} errors.\n"
            )
            for i, message in enumerate(record.error_messages, start=1):
                reporter.report("describe", f"{INDENT}{i}. {message}\n")
        else:
            reporter.report("success", f"okay: {header}")
            reporter.report("describe", description)

        if benchmark and record.elapsed_ns is not None:
            seconds, nanoseconds = divmod(record.elapsed_ns, NSEC_PER_SEC)
            reporter.report("describe", f"{INDENT}bench: test ({test.name}) took ")
            reporter.report("highlight", f"{seconds}s {nanoseconds}ns\n")

        if abort:
            remaining = len(self._tests) - self._cursor
            reporter.report("failure", f"aborted with {remaining} tests remaining.\n")
