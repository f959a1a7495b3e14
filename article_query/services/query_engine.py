"""
Query Engine - Filter, sort and paginate articles from one snapshot

Pipeline per request:
snapshot → single predicate pass → count → sort → slice → page metadata

The count and the slice always come from the same snapshot, so the metadata
of one response cannot disagree with its content even while the source is
being written to.
"""

import logging
import time
from typing import List, Mapping, Optional

from article_query.models.article import Article
from article_query.models.filter_spec import FilterSpec
from article_query.models.page import PageResult
from article_query.services.comparators import ComparatorRegistry, load_comparator_registry
from article_query.services.parameter_parser import ParameterParser
from article_query.services.predicates import PredicateCompiler, matches
from article_query.services.record_source import RecordSource
from article_query.services.telemetry import TelemetryStore, get_telemetry_store

logger = logging.getLogger(__name__)


class QueryEngine:
    """
    Main article query engine.

    Holds only immutable collaborators, so one instance can serve concurrent
    requests without locking. Every execute() call is independent.
    """

    def __init__(
        self,
        compiler: Optional[PredicateCompiler] = None,
        registry: Optional[ComparatorRegistry] = None,
        parser: Optional[ParameterParser] = None,
        telemetry_store: Optional[TelemetryStore] = None,
    ):
        """Initialize query engine; the comparator registry is validated up front."""
        self.compiler = compiler or PredicateCompiler()
        self.registry = registry or load_comparator_registry()
        self.registry.validate()
        self.parser = parser or ParameterParser()
        self.telemetry = telemetry_store or get_telemetry_store()

    def execute(self, spec: FilterSpec, source: RecordSource) -> PageResult[Article]:
        """
        Run a validated query against a record source.

        Args:
            spec: Validated query intent
            source: Collaborator providing the snapshot read

        Returns:
            PageResult for the requested page; pages past the end are empty

        Raises:
            Whatever the source raises from snapshot(), unchanged
        """
        start = time.perf_counter()

        predicates = self.compiler.compile(spec)
        comparator = self.registry.resolve(spec.sort_by, spec.sort_order)

        try:
            snapshot = source.snapshot()
        except Exception as error:
            latency_ms = (time.perf_counter() - start) * 1000
            self.telemetry.record_failure(spec.sort_by, latency_ms, str(error))
            logger.error(f"Record source snapshot failed: {error}")
            raise

        filtered: List[Article] = [article for article in snapshot if matches(predicates, article)]
        total_elements = len(filtered)

        ordered = comparator.sort(filtered)
        content = ordered[spec.offset:spec.offset + spec.size]

        result = PageResult[Article].build(
            content=content,
            page=spec.page,
            size=spec.size,
            total_elements=total_elements,
        )

        latency_ms = (time.perf_counter() - start) * 1000
        self.telemetry.record_success(spec.sort_by, latency_ms, total_elements)
        logger.debug(
            "Query matched %d of %d articles (%d active filters, sort=%s %s, page %d/%d) in %.2fms",
            total_elements,
            len(snapshot),
            len(predicates),
            spec.sort_by,
            spec.sort_order.value,
            spec.page,
            result.total_pages,
            latency_ms,
        )
        return result

    def query(self, raw: Mapping[str, str], source: RecordSource) -> PageResult[Article]:
        """Parse raw query parameters and execute them."""
        spec = self.parser.parse(raw)
        return self.execute(spec, source)


__all__ = ["QueryEngine"]
