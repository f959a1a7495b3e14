"""Telemetry collection for query executions."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class QueryMetrics:
    """Aggregate metrics for queries sorted by a single key."""

    sort_by: str
    total_queries: int = 0
    failures: int = 0
    total_latency_ms: float = 0.0
    total_matched: int = 0
    last_error: Optional[str] = None
    last_updated: Optional[str] = None

    @property
    def failure_rate(self) -> float:
        if self.total_queries == 0:
            return 0.0
        return self.failures / self.total_queries

    @property
    def average_latency_ms(self) -> float:
        if self.total_queries == 0:
            return 0.0
        return self.total_latency_ms / self.total_queries


class TelemetryStore:
    """In-process query telemetry, safe to update from concurrent requests."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._metrics: Dict[str, QueryMetrics] = {}

    def _load(self, sort_by: str) -> QueryMetrics:
        metrics = self._metrics.get(sort_by)
        if metrics is None:
            metrics = QueryMetrics(sort_by=sort_by)
            self._metrics[sort_by] = metrics
        return metrics

    def record_success(self, sort_by: str, latency_ms: float, matched: int) -> QueryMetrics:
        with self._lock:
            metrics = self._load(sort_by)
            metrics.total_queries += 1
            metrics.total_latency_ms += latency_ms
            metrics.total_matched += matched
            metrics.last_updated = datetime.now(timezone.utc).isoformat()
            return replace(metrics)

    def record_failure(self, sort_by: str, latency_ms: float, error: str) -> QueryMetrics:
        with self._lock:
            metrics = self._load(sort_by)
            metrics.total_queries += 1
            metrics.failures += 1
            metrics.total_latency_ms += latency_ms
            metrics.last_error = error
            metrics.last_updated = datetime.now(timezone.utc).isoformat()
            return replace(metrics)

    def get_metrics(self, sort_by: str) -> QueryMetrics:
        with self._lock:
            return replace(self._metrics.get(sort_by) or QueryMetrics(sort_by=sort_by))

    def get_all_metrics(self) -> Dict[str, QueryMetrics]:
        with self._lock:
            return {name: replace(metrics) for name, metrics in self._metrics.items()}

    def reset(self) -> None:
        with self._lock:
            self._metrics.clear()


_default_store: Optional[TelemetryStore] = None
_default_store_lock = threading.Lock()


def get_telemetry_store() -> TelemetryStore:
    """Return global telemetry store singleton."""

    global _default_store
    with _default_store_lock:
        if _default_store is None:
            _default_store = TelemetryStore()
            logger.debug("Created query telemetry store")
        return _default_store


__all__ = [
    "QueryMetrics",
    "TelemetryStore",
    "get_telemetry_store",
]
