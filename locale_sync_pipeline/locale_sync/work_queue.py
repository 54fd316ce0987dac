# locale_sync/work_queue.py
from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Generic, Iterator, List, Tuple, TypeVar

from .reconciler import PendingEntry
from .translator_base import TranslationResult

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class TranslationJob:
    locale: str
    entry: PendingEntry


class SingleWorkerQueue(Generic[T, R]):
    """
    FIFO drained by exactly one worker. Jobs run one after another in submission
    order, so no two provider calls ever overlap. Do not replace with a pool
    unless real rate limiting comes with it.
    """

    def __init__(self, worker: Callable[[T], R]) -> None:
        self._worker = worker
        self._jobs: Deque[T] = deque()

    def __len__(self) -> int:
        return len(self._jobs)

    def put(self, job: T) -> None:
        self._jobs.append(job)

    def extend(self, jobs) -> None:
        for job in jobs:
            self.put(job)

    def drain(self) -> Iterator[Tuple[T, R]]:
        while self._jobs:
            job = self._jobs.popleft()
            yield job, self._worker(job)

    def run(self) -> List[Tuple[T, R]]:
        return list(self.drain())


TranslationQueue = SingleWorkerQueue[TranslationJob, TranslationResult]
