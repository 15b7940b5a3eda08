import logging
import threading

from app.services.job_queue import JobQueue


def test_thread_queue_runs_jobs_in_the_background():
    jobs = JobQueue(maxsize=10)
    seen = []

    assert jobs.dispatch(seen.append, 1) is True
    assert jobs.dispatch(seen.append, 2) is True
    jobs.join()

    assert seen == [1, 2]
    assert jobs.pending == 0


def test_thread_queue_does_not_run_jobs_on_the_caller_thread():
    jobs = JobQueue(maxsize=10)
    threads = []

    jobs.dispatch(lambda: threads.append(threading.current_thread().name))
    jobs.join()

    assert threads == ["job-queue-worker"]


def test_full_queue_drops_the_job(caplog):
    jobs = JobQueue(maxsize=1)
    release = threading.Event()
    started = threading.Event()

    def _blocker():
        started.set()
        release.wait(timeout=5)

    jobs.dispatch(_blocker)
    started.wait(timeout=5)  # worker is busy, queue is empty again
    assert jobs.dispatch(lambda: None) is True

    with caplog.at_level(logging.ERROR, logger="app.services.job_queue"):
        assert jobs.dispatch(lambda: None) is False
    assert "Job queue full" in caplog.text

    release.set()
    jobs.join()


def test_failing_job_is_logged_and_the_worker_keeps_going(caplog):
    jobs = JobQueue(maxsize=10)
    seen = []

    def _boom():
        raise RuntimeError("boom")

    with caplog.at_level(logging.ERROR, logger="app.services.job_queue"):
        jobs.dispatch(_boom)
        jobs.dispatch(seen.append, "after")
        jobs.join()

    assert seen == ["after"]
    assert "Job failed" in caplog.text


def test_sync_queue_runs_inline_and_swallows_failures(caplog):
    jobs = JobQueue(sync=True)
    seen = []

    def _boom():
        raise ValueError("nope")

    with caplog.at_level(logging.ERROR, logger="app.services.job_queue"):
        assert jobs.dispatch(_boom) is True
    assert jobs.dispatch(seen.append, "now") is True

    assert seen == ["now"]
    assert "Job failed" in caplog.text
