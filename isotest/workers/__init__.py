"""Isolation strategies for running one test body at a time."""

from isotest.workers.base import TestWorker, WorkerOutcome, WorkerSetupError
from isotest.workers.loading import WorkerNotFoundError, load_worker_manifest
from isotest.workers.manifest import WorkerManifest
from isotest.workers.process import ProcessWorker, process_worker_manifest
from isotest.workers.thread import ThreadWorker, thread_worker_manifest

__all__ = [
    "ProcessWorker",
    "TestWorker",
    "ThreadWorker",
    "WorkerManifest",
    "WorkerNotFoundError",
    "WorkerOutcome",
    "WorkerSetupError",
    "load_worker_manifest",
    "process_worker_manifest",
    "thread_worker_manifest",
]
