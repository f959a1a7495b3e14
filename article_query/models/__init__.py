"""
Article Query Models
Records, validated query intent and paged results
"""

from .article import Article, ArticleStatus
from .filter_spec import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_BY,
    MAX_PAGE_SIZE,
    SORTABLE_FIELDS,
    FilterSpec,
    SortOrder,
)
from .page import PageResult

__all__ = [
    # Records
    "Article",
    "ArticleStatus",
    # Query intent
    "FilterSpec",
    "SortOrder",
    "SORTABLE_FIELDS",
    "DEFAULT_SORT_BY",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    # Results
    "PageResult",
]
