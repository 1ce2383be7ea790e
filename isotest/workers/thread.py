"""Worker running each test body in a dedicated thread."""

import logging
import threading
from dataclasses import dataclass

from isotest.models.descriptor import Runnable
from isotest.models.record import ResultRecord
from isotest.workers.base import (
    TestWorker,
    WorkerOutcome,
    WorkerSetupError,
    run_body,
)
from isotest.workers.manifest import WorkerManifest

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class ThreadWorker(TestWorker):
    """Runs the body in a fresh thread and joins it.

    Crashes are observed through the in-process signal handler only, so a
    genuine memory fault cannot be survived here; use ProcessWorker for that.
    """

    def execute(self, test: Runnable, record: ResultRecord) -> WorkerOutcome:
        """Start a thread for the body and block until it returns."""
        thread = threading.Thread(
            target=run_body,
            args=(test, record),
            name=f"isotest-{test.name}",
            daemon=True,
        )
        try:
            thread.start()
        except RuntimeError as e:
            raise WorkerSetupError(f"Could not create thread: {e}") from e

        log.debug("Waiting for thread %s", thread.name)
        thread.join()
        return WorkerOutcome(record=record)


thread_worker_manifest = WorkerManifest(
    worker_factory=lambda detector: ThreadWorker(detector=detector),
    survives_crashes=False,
)
