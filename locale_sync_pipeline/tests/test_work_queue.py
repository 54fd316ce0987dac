from __future__ import annotations

from locale_sync.work_queue import SingleWorkerQueue


def test_jobs_run_one_at_a_time_in_submission_order() -> None:
    active = []
    seen = []

    def worker(job: int) -> int:
        active.append(job)
        assert len(active) == 1
        seen.append(job)
        active.pop()
        return job * 10

    queue = SingleWorkerQueue(worker)
    queue.extend([3, 1, 2])
    assert len(queue) == 3
    assert queue.run() == [(3, 30), (1, 10), (2, 20)]
    assert seen == [3, 1, 2]
    assert len(queue) == 0


def test_jobs_added_while_draining_are_processed() -> None:
    queue: SingleWorkerQueue[int, int] = SingleWorkerQueue(lambda j: j)
    queue.put(1)
    out = []
    for job, _ in queue.drain():
        out.append(job)
        if job == 1:
            queue.put(2)
    assert out == [1, 2]
