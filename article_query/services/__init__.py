"""Article query services package."""

from .comparators import (  # noqa: F401
    ArticleComparator,
    ComparatorNotFoundError,
    ComparatorRegistry,
    ConfigurationError,
    SortKey,
    load_comparator_registry,
)
from .parameter_parser import (  # noqa: F401
    ParameterParser,
    ParseError,
)
from .predicates import (  # noqa: F401
    Predicate,
    PredicateCompiler,
    matches,
)
from .query_engine import QueryEngine  # noqa: F401
from .record_source import (  # noqa: F401
    InMemoryArticleSource,
    RecordSource,
    SourceUnavailableError,
    load_articles,
)
from .telemetry import (  # noqa: F401
    QueryMetrics,
    TelemetryStore,
    get_telemetry_store,
)

__all__ = [
    "ArticleComparator",
    "ComparatorNotFoundError",
    "ComparatorRegistry",
    "ConfigurationError",
    "SortKey",
    "load_comparator_registry",
    "ParameterParser",
    "ParseError",
    "Predicate",
    "PredicateCompiler",
    "matches",
    "QueryEngine",
    "InMemoryArticleSource",
    "RecordSource",
    "SourceUnavailableError",
    "load_articles",
    "QueryMetrics",
    "TelemetryStore",
    "get_telemetry_store",
]
