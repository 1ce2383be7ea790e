"""Models describing runnable tests."""

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from pydantic import Field, field_validator

from isotest.models.base import Model
from isotest.models.record import ResultRecord

TestFunction = Callable[[ResultRecord], object]


@runtime_checkable
class Runnable(Protocol):
    """Anything the engine can run against a result record."""

    name: str

    def run(self, record: ResultRecord) -> object:
        """Execute the test body, reporting into ``record``."""
        ...


class TestDescriptor(Model):
    """Immutable name, description and body of one test."""

    __test__ = False

    name: str = Field(..., min_length=1, description="Test identifier")
    description: str = Field(default="", description="Human-readable summary")
    function: TestFunction = Field(..., description="Test body")

    @field_validator("description", mode="before")
    @classmethod
    def _empty_description(cls, value: object) -> object:
        return "" if value is None else value

    def run(self, record: ResultRecord) -> object:
        """Call the test body; the return value is ignored by the engine."""
        return self.function(record)


def new_test(
    function: TestFunction, name: str, description: str | None = None
) -> TestDescriptor:
    """Create a descriptor.

    Raises:
        pydantic.ValidationError: If the name is empty or the function is
            missing or not callable.

    """
    return TestDescriptor(name=name, description=description, function=function)
