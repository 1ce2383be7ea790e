"""Resolution of worker keys to worker manifests.

The ``process`` and ``thread`` workers ship with the package and resolve
without installed metadata. Any other key is looked up in the
``isotest.workers`` entry-point group, so third-party isolation strategies
can be plugged in from their own distributions.
"""

import logging
from collections.abc import Mapping
from importlib.metadata import entry_points

from isotest.workers.manifest import WorkerManifest
from isotest.workers.process import process_worker_manifest
from isotest.workers.thread import thread_worker_manifest

log = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "isotest.workers"

BUILTIN_WORKERS: Mapping[str, WorkerManifest] = {
    "process": process_worker_manifest,
    "thread": thread_worker_manifest,
}


class WorkerNotFoundError(Exception):
    """Raised when no built-in or plugin worker matches a key."""


def load_worker_manifest(key: str) -> WorkerManifest:
    """Resolve a worker key.

    Built-in workers take precedence over plugins registered under the same
    key.

    Raises:
        WorkerNotFoundError: If the key is neither built in nor registered

    """
    if key in BUILTIN_WORKERS:
        return BUILTIN_WORKERS[key]

    plugins = entry_points(group=ENTRY_POINT_GROUP)
    for plugin in plugins:
        if plugin.name == key:
            log.debug("Loading worker %s from %s", key, plugin.value)
            manifest: WorkerManifest = plugin.load()
            return manifest

    available = sorted({*BUILTIN_WORKERS, *(p.name for p in plugins)})
    raise WorkerNotFoundError(
        f"Worker '{key}' not found. Available workers: {available}"
    )
