"""Stats endpoints for query telemetry."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import APIRouter

from article_query.models.filter_spec import SORTABLE_FIELDS
from article_query.services.telemetry import QueryMetrics, get_telemetry_store

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("/queries")
async def get_query_metrics() -> Dict[str, Any]:
    """Expose per-sort-key query telemetry for dashboards and tooling."""

    metrics_map = get_telemetry_store().get_all_metrics()

    sort_keys: List[Dict[str, Any]] = []
    for name in SORTABLE_FIELDS:
        metrics: QueryMetrics = metrics_map.get(name, QueryMetrics(sort_by=name))
        sort_keys.append({
            "sort_by": name,
            "total_queries": metrics.total_queries,
            "failures": metrics.failures,
            "failure_rate": metrics.failure_rate,
            "average_latency_ms": metrics.average_latency_ms,
            "total_matched": metrics.total_matched,
            "last_error": metrics.last_error,
            "last_updated": metrics.last_updated,
        })

    return {
        "sort_keys": sort_keys,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
