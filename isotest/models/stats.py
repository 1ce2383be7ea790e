"""Models for suite summary statistics."""

from collections.abc import Sequence

from pydantic import Field

from isotest.models.base import Model


class TestOutcome(Model):
    """At-a-glance result of one executed test."""

    __test__ = False

    name: str = Field(..., description="Test name")
    ok: bool = Field(..., description="Passed without failure or errors")


class SuiteStats(Model):
    """Summary of the tests a suite has executed so far."""

    n_tests: int = Field(..., ge=0, description="Registered tests")
    n_ran: int = Field(..., ge=0, description="Tests executed")
    n_error: int = Field(..., ge=0, description="Tests with at least one error")
    n_fail: int = Field(..., ge=0, description="Failed tests")
    success_rate: float = Field(..., ge=0.0, le=1.0)
    fatal_failures: bool = Field(
        default=False, description="Whether the last run aborted on failure"
    )
    crash_count: int = Field(default=0, ge=0, description="Crashes observed")
    tests_run: Sequence[TestOutcome] = Field(default_factory=list)

    def format(self) -> str:
        """Render the plain-text summary printed at the end of a run."""
        lines = [
            f"Ran {self.n_ran} of {self.n_tests} tests.",
            f"Failed {self.n_fail} of {self.n_tests} tests. "
            f"(Fatal failures: {'true' if self.fatal_failures else 'false'})",
            f"Errors during testing: {self.n_error}",
            f"Success rate: {self.success_rate:0.2f}",
            "",
        ]
        lines.extend(
            f"{outcome.name}: {'okay' if outcome.ok else 'not okay'}"
            for outcome in self.tests_run
        )
        return "\n".join(lines) + "\n"
