# threaded_runner.py - run functions off the interaction path.

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

logger = logging.getLogger(__name__)


class BackgroundRunner:
    """
    Single-worker thread pool. Tasks run one at a time in submission order,
    so a load and later flushes never overlap.
    """

    def __init__(self, name: str = "predictive-keyboard"):
        self._pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)

    def submit(self, task: Callable, *args, **kwargs) -> Future:
        fut = self._pool.submit(task, *args, **kwargs)
        fut.add_done_callback(_log_failure)
        return fut

    def shutdown(self, wait: bool = True) -> None:
        self._pool.shutdown(wait=wait)


def _log_failure(fut: Future) -> None:
    if fut.cancelled():
        return
    exc = fut.exception()
    if exc is not None:
        logger.error("background task failed: %s", exc, exc_info=exc)
