"""
Article API Routes - Filtered, sorted, paginated article listing
GET /api/articles
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Request, status

from article_query.config.settings import settings
from article_query.services.parameter_parser import ParameterParser, ParseError
from article_query.services.query_engine import QueryEngine
from article_query.services.record_source import (
    InMemoryArticleSource,
    SourceUnavailableError,
    load_articles,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["articles"])

# Lazy initialization so importing the module never touches the seed file
_query_engine: Optional[QueryEngine] = None
_article_source: Optional[InMemoryArticleSource] = None


def get_query_engine() -> QueryEngine:
    """Get or create the query engine instance."""
    global _query_engine
    if _query_engine is None:
        parser = ParameterParser(
            default_size=settings.DEFAULT_PAGE_SIZE,
            max_size=settings.MAX_PAGE_SIZE,
            default_sort_by=settings.DEFAULT_SORT_BY,
            default_sort_order=settings.DEFAULT_SORT_ORDER,
        )
        _query_engine = QueryEngine(parser=parser)
    return _query_engine


def get_article_source() -> InMemoryArticleSource:
    """Get or create the article source, seeded from ARTICLES_FILE when set."""
    global _article_source
    if _article_source is None:
        articles = load_articles(settings.ARTICLES_FILE) if settings.ARTICLES_FILE else []
        _article_source = InMemoryArticleSource(articles)
    return _article_source


@router.get("/articles", status_code=status.HTTP_200_OK)
def list_articles(request: Request) -> Dict[str, Any]:
    """
    List articles matching the query-string filters.

    Query parameters: title, author, category, tags (comma-separated),
    status, minReadTime, maxReadTime, publishedAfter, publishedBefore,
    sortBy, sortOrder, page, size.

    Raises:
        400: Invalid query parameter (structured error body)
        503: Article source unavailable
    """
    raw = dict(request.query_params)

    try:
        page = get_query_engine().query(raw, get_article_source())
    except ParseError as e:
        logger.warning(f"Invalid article query: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.to_dict())
    except SourceUnavailableError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

    return page.model_dump(mode="json", by_alias=True)
