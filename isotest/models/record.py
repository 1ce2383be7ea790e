"""Mutable outcome of a single test execution."""

import time
from dataclasses import dataclass, field


class TestAborted(Exception):
    """Raised by ResultRecord.fatal() to stop the running test body."""

    __test__ = False


@dataclass(kw_only=True)
class ResultRecord:
    """Outcome and timing of one test run.

    A fresh record is handed to every test body. The body reports through
    fail(), error() and the timer methods; the engine reads the record once
    the worker running the body has been joined.

    Timestamps are monotonic nanoseconds and stay None until marked.
    """

    __test__ = False

    name: str = ""
    failed: bool = False
    fail_message: str | None = None
    error_messages: list[str] = field(default_factory=list)
    start_time: int | None = None
    end_time: int | None = None
    failed_at: int | None = None
    error_at: int | None = None

    @property
    def error_count(self) -> int:
        """Number of error() calls recorded so far."""
        return len(self.error_messages)

    @property
    def passed(self) -> bool:
        """Whether the test neither failed nor recorded an error."""
        return not self.failed and not self.error_messages

    @property
    def elapsed_ns(self) -> int | None:
        """Measured interval, if both timer endpoints have been marked."""
        if self.start_time is None or self.end_time is None:
            return None
        return self.end_time - self.start_time

    def begin(self) -> None:
        """Start the benchmark timer; should follow any setup code."""
        self.start_time = time.monotonic_ns()

    def mark_done(self) -> None:
        """Stop the benchmark timer; should precede any teardown code."""
        self.end_time = time.monotonic_ns()

    def fail(self, message: str) -> None:
        """Mark the test as failed.

        Failures are critical: the body is expected to return right after
        calling this. Use fatal() to have the worker stop the body instead.
        """
        self.failed = True
        self.fail_message = message
        self.failed_at = time.monotonic_ns()

    def error(self, message: str) -> None:
        """Record a non-critical error; the body keeps running."""
        self.error_messages.append(message)
        self.error_at = time.monotonic_ns()

    def fatal(self, message: str) -> None:
        """Fail the test and end the body immediately."""
        self.fail(message)
        raise TestAborted(message)
