"""Detection of memory-access violations raised while a test runs."""

import faulthandler
import logging
import signal
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from types import FrameType
from typing import Any

log = logging.getLogger(__name__)

MEMORY_VIOLATION_MESSAGE = "encountered a memory access violation"

MEMORY_FAULT_SIGNALS: tuple[signal.Signals, ...] = tuple(
    getattr(signal, name) for name in ("SIGSEGV", "SIGBUS") if hasattr(signal, name)
)


class FaultHandlerError(Exception):
    """Raised when the crash handler cannot be installed."""


class FaultDetector:
    """Counts memory-access violations observed during test execution.

    The counter is only ever incremented, by the signal handler for
    in-process faults or by record_exit() for worker processes that died.
    Callers compare snapshot() values taken around a test to tell whether
    that test crashed.
    """

    def __init__(self) -> None:
        """Create a detector with a zeroed crash counter."""
        self._count = 0
        self._previous: dict[signal.Signals, Any] = {}

    def snapshot(self) -> int:
        """Return the current crash count."""
        return self._count

    def install(self) -> None:
        """Register the crash handler for every memory-fault signal.

        Raises:
            FaultHandlerError: If the platform refuses the registration, e.g.
                when called outside the main thread.

        """
        for signum in MEMORY_FAULT_SIGNALS:
            try:
                previous = signal.signal(signum, self._handle)
            except (OSError, ValueError) as e:
                self.restore()
                raise FaultHandlerError(
                    f"Cannot install handler for {signum.name}: {e}"
                ) from e
            self._previous.setdefault(signum, previous)

    def restore(self) -> None:
        """Put back whatever handlers were active before install()."""
        for signum, previous in self._previous.items():
            # None means the previous handler was not installed from Python
            signal.signal(signum, signal.SIG_DFL if previous is None else previous)
        self._previous.clear()

    @contextmanager
    def installed(self) -> Iterator["FaultDetector"]:
        """Keep the crash handler installed for the duration of the block."""
        self.install()
        try:
            yield self
        finally:
            self.restore()

    def record_exit(self, exitcode: int | None) -> str:
        """Count an abnormal worker-process exit as a crash.

        Args:
            exitcode: Exit code reported by multiprocessing; negative values
                are the number of the signal that killed the process.

        Returns:
            Reason to record on the test.

        """
        self._count += 1
        reason = describe_exit(exitcode)
        log.warning("Worker process crashed: %s", reason)
        return reason

    def _handle(self, signum: int, frame: FrameType | None) -> None:
        self._count += 1
        log.debug("Caught signal %d during test execution", signum)


def describe_exit(exitcode: int | None) -> str:
    """Human-readable reason for an abnormal worker exit."""
    if exitcode is None:
        return "worker did not report an exit status"
    if exitcode < 0:
        signum = -exitcode
        if signum in MEMORY_FAULT_SIGNALS:
            return MEMORY_VIOLATION_MESSAGE
        try:
            return f"terminated by {signal.Signals(signum).name}"
        except ValueError:
            return f"terminated by signal {signum}"
    if exitcode == 0:
        return "exited before reporting a result"
    return f"exited abnormally with status {exitcode}"


def prepare_worker_process() -> None:
    """Arm a freshly forked worker so memory faults terminate it.

    The child inherits the parent's Python-level crash handler, which would
    let a real fault re-execute forever. The default disposition is restored
    and faulthandler dumps the Python traceback before the process dies.
    """
    faulthandler.disable()
    for signum in MEMORY_FAULT_SIGNALS:
        signal.signal(signum, signal.SIG_DFL)

    stream = sys.__stderr__
    if stream is None:
        return
    try:
        faulthandler.enable(file=stream)
    except (AttributeError, OSError, ValueError):
        log.debug("Traceback dumps unavailable in worker process")


fault_detector = FaultDetector()
