"""Configuration for test suites."""

from pydantic import BaseModel, Field


class SuiteConfig(BaseModel):
    """Configuration for a suite run."""

    worker: str = Field(
        default="process", description="Entry-point key of the isolation worker"
    )
    benchmark_prefix: str = Field(
        default="bench_", min_length=1, description="Name prefix of timed tests"
    )
    quiet: bool = Field(default=False, description="Suppress per-test output")
    colour: bool = Field(default=False, description="Colourize per-test output")
