"""Worker manifest definition for the plugin system."""

from collections.abc import Callable
from dataclasses import dataclass

from isotest.faults import FaultDetector
from isotest.workers.base import TestWorker


@dataclass(frozen=True, kw_only=True)
class WorkerManifest:
    """Manifest describing a worker plugin.

    The manifest lets suites pick their isolation strategy by key without
    importing worker implementations up front.
    """

    worker_factory: Callable[[FaultDetector], TestWorker]
    survives_crashes: bool
