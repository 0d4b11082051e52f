"""
TTL 캐시 (읽기 다수 / 쓰기 1 잠금). 크기 제한 없음.
"""

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Generic, Iterator, TypeVar

V = TypeVar("V")


class ReadWriteLock:
    """여러 reader 동시 진입, writer는 단독. writer 대기 중이면 새 reader는 기다린다."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            while self._writer or self._readers:
                self._cond.wait()
            self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


@dataclass
class _Entry(Generic[V]):
    value: V
    cached_at: float


class TTLCache(Generic[V]):
    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, _Entry[V]] = {}
        self._lock = ReadWriteLock()

    def get(self, key: str) -> V | None:
        """만료된 항목은 없는 것으로 본다 (삭제는 다음 set 때 덮어씀)."""
        with self._lock.read():
            entry = self._entries.get(key)
            if entry is None or self._clock() - entry.cached_at >= self._ttl:
                return None
            return entry.value

    def set(self, key: str, value: V) -> None:
        with self._lock.write():
            self._entries[key] = _Entry(value=value, cached_at=self._clock())

    def clear(self) -> None:
        with self._lock.write():
            self._entries = {}

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)
