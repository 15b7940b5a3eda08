import logging
import queue
import threading
from typing import Callable

from app.config import settings

logger = logging.getLogger(__name__)


class JobQueue:
    """Bounded fire-and-forget job queue drained by one daemon worker thread.

    In sync mode jobs run inline at dispatch time. Either way a failing job
    is logged and never raises into the caller.
    """

    def __init__(self, maxsize: int = 1000, sync: bool = False):
        self.sync = sync
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self._worker: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def dispatch(self, func: Callable, *args, **kwargs) -> bool:
        """Schedule ``func(*args, **kwargs)``. Returns False if the job was dropped."""
        if self.sync:
            self._run(func, args, kwargs)
            return True

        self._ensure_worker()
        try:
            self._queue.put_nowait((func, args, kwargs))
        except queue.Full:
            logger.error(
                "Job queue full, dropping job",
                extra={"job": _job_name(func), "maxsize": self._queue.maxsize},
            )
            return False
        return True

    def join(self) -> None:
        """Block until every queued job has finished."""
        self._queue.join()

    def _ensure_worker(self) -> None:
        with self._lock:
            if self._worker is None or not self._worker.is_alive():
                self._worker = threading.Thread(
                    target=self._work, name="job-queue-worker", daemon=True
                )
                self._worker.start()

    def _work(self) -> None:
        while True:
            func, args, kwargs = self._queue.get()
            try:
                self._run(func, args, kwargs)
            finally:
                self._queue.task_done()

    @staticmethod
    def _run(func: Callable, args: tuple, kwargs: dict) -> None:
        try:
            func(*args, **kwargs)
        except Exception:
            logger.exception("Job failed", extra={"job": _job_name(func)})


def _job_name(func: Callable) -> str:
    return getattr(func, "__qualname__", repr(func))


job_queue = JobQueue(
    maxsize=settings.JOB_QUEUE_MAXSIZE, sync=settings.QUEUE_CONNECTION == "sync"
)
