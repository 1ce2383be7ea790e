"""Fixtures for unit tests."""

import io
from unittest.mock import Mock

import pytest

from isotest.config import SuiteConfig
from isotest.faults import FaultDetector
from isotest.models.descriptor import Runnable
from isotest.models.record import ResultRecord
from isotest.reporter import StreamReporter
from isotest.suite import Suite
from isotest.workers.base import TestWorker, WorkerOutcome, run_body


@pytest.fixture
def detector() -> FaultDetector:
    """Create a detector with its own crash counter."""
    return FaultDetector()


@pytest.fixture
def worker_mock(detector: FaultDetector) -> Mock:
    """Create a worker that runs bodies inline in the calling thread."""

    def execute(test: Runnable, record: ResultRecord) -> WorkerOutcome:
        return WorkerOutcome(record=run_body(test, record))

    worker = Mock(spec=TestWorker)
    worker.detector = detector
    worker.execute.side_effect = execute
    return worker


@pytest.fixture
def output() -> io.StringIO:
    """Capture reporter output."""
    return io.StringIO()


@pytest.fixture
def suite(detector: FaultDetector, worker_mock: Mock, output: io.StringIO) -> Suite:
    """Create an empty suite around the inline worker."""
    return Suite(
        config=SuiteConfig(),
        reporter=StreamReporter(stream=output),
        detector=detector,
        worker=worker_mock,
    )
