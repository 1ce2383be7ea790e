"""Worker running each test body in a forked child process."""

import logging
import multiprocessing
import pickle
from dataclasses import dataclass, replace
from multiprocessing.connection import Connection

from isotest.faults import prepare_worker_process
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
class ProcessWorker(TestWorker):
    """Runs the body in a child process and pipes the record back.

    A child that dies before sending its record, or exits with a non-zero
    status, is reported to the fault detector as a crash. The parent keeps
    its own copy of the record so timing started before the fork survives.
    """

    start_method: str = "fork"

    def execute(self, test: Runnable, record: ResultRecord) -> WorkerOutcome:
        """Fork a child for the body and wait for its record."""
        try:
            context = multiprocessing.get_context(self.start_method)
        except ValueError as e:
            raise WorkerSetupError(
                f"Start method '{self.start_method}' is unavailable: {e}"
            ) from e

        receiver, sender = context.Pipe(duplex=False)
        process = context.Process(
            target=_child_main,
            args=(test, record, sender),
            name=f"isotest-{test.name}",
        )
        try:
            process.start()
        except OSError as e:
            receiver.close()
            sender.close()
            raise WorkerSetupError(f"Could not start worker process: {e}") from e
        sender.close()

        log.debug("Waiting for worker process %s (pid %s)", process.name, process.pid)
        try:
            reported: ResultRecord | None = receiver.recv()
        except EOFError:
            reported = None
        finally:
            receiver.close()
        process.join()

        if reported is not None and process.exitcode == 0:
            return WorkerOutcome(record=reported)

        reason = self.detector.record_exit(process.exitcode)
        return WorkerOutcome(
            record=record if reported is None else reported, crash_reason=reason
        )


def _child_main(test: Runnable, record: ResultRecord, sender: Connection) -> None:
    prepare_worker_process()
    try:
        result = run_body(test, record)
        try:
            sender.send(result)
        except (pickle.PicklingError, TypeError, AttributeError) as e:
            # Connection.send pickles before writing, so nothing reached the pipe.
            log.debug("Record of %s is not picklable: %s", test.name, e)
            sender.send(_as_text(result))
    finally:
        sender.close()


def _as_text(record: ResultRecord) -> ResultRecord:
    """Copy of ``record`` with every message converted to a string."""
    return replace(
        record,
        fail_message=None if record.fail_message is None else str(record.fail_message),
        error_messages=[str(message) for message in record.error_messages],
    )


process_worker_manifest = WorkerManifest(
    worker_factory=lambda detector: ProcessWorker(detector=detector),
    survives_crashes=True,
)
