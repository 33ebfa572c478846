from __future__ import annotations

import json
import threading
import time

from contextlib import contextmanager
from typing import Any, Dict, Iterator


class Metrics:
    """
    In-process counters, gauges and stage timings for one pipeline run.
    Thread-safe; `to_json` emits a compact snapshot for the run summary.
    """

    def __init__(self, namespace: str = "") -> None:
        self.ns = f"{namespace}." if namespace else ""
        self._lock = threading.Lock()
        self._counters: Dict[str, float] = {}
        self._gauges: Dict[str, float] = {}
        self._timings: Dict[str, Dict[str, float]] = {}

    def _key(self, name: str) -> str:
        return self.ns + name

    def inc(self, name: str, value: float = 1) -> None:
        with self._lock:
            k = self._key(name)
            self._counters[k] = self._counters.get(k, 0) + value

    def set_gauge(self, name: str, value: float) -> None:
        with self._lock:
            self._gauges[self._key(name)] = value

    def observe(self, name: str, seconds: float) -> None:
        with self._lock:
            t = self._timings.setdefault(
                self._key(name), {"count": 0, "total": 0.0, "max": 0.0}
            )
            t["count"] += 1
            t["total"] += seconds
            t["max"] = max(t["max"], seconds)

    @contextmanager
    def time(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.observe(name, time.perf_counter() - start)

    def counter(self, name: str) -> float:
        with self._lock:
            return self._counters.get(self._key(name), 0)

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "counters": dict(self._counters),
                "gauges": dict(self._gauges),
                "timings": {k: dict(v) for k, v in self._timings.items()},
            }

    def to_json(self) -> str:
        return json.dumps(self.snapshot(), separators=(",", ":"), ensure_ascii=False)
