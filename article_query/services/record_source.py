"""
Record Source - Snapshot-read contract consumed by the query engine

The engine only needs `snapshot()`: one call returning a point-in-time,
internally consistent view of the collection. InMemoryArticleSource is the
reference collaborator used by the HTTP adapter and the test-suite; real
storage backends live outside this package.
"""

import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterable, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

import yaml
from pydantic import ValidationError

from article_query.models.article import Article, ArticleStatus

logger = logging.getLogger(__name__)


class SourceUnavailableError(Exception):
    """Raised when a record source cannot produce a snapshot."""


@runtime_checkable
class RecordSource(Protocol):
    """Protocol for article collections the engine can query."""

    def snapshot(self) -> Sequence[Article]:  # pragma: no cover - interface
        """Return a consistent point-in-time view of every article."""


class InMemoryArticleSource:
    """
    Thread-safe in-memory article collection.

    Articles are immutable, so updates swap the stored instance for a copy.
    `snapshot()` copies the current instances into a tuple under the lock;
    later writes never show up in a snapshot already handed out.
    """

    def __init__(self, articles: Optional[Iterable[Article]] = None) -> None:
        self._lock = threading.Lock()
        self._articles: Dict[int, Article] = {}
        for article in articles or ():
            self.add(article)

    def __len__(self) -> int:
        with self._lock:
            return len(self._articles)

    def snapshot(self) -> Tuple[Article, ...]:
        with self._lock:
            return tuple(self._articles.values())

    def add(self, article: Article) -> Article:
        with self._lock:
            if article.id in self._articles:
                raise ValueError(f"Article {article.id} already exists")
            self._articles[article.id] = article
        return article

    def get(self, article_id: int) -> Optional[Article]:
        with self._lock:
            return self._articles.get(article_id)

    def remove(self, article_id: int) -> Article:
        with self._lock:
            try:
                return self._articles.pop(article_id)
            except KeyError:
                raise KeyError(f"Article {article_id} not found") from None

    def increment_views(self, article_id: int, amount: int = 1) -> Article:
        return self._update_counter(article_id, "view_count", amount)

    def increment_likes(self, article_id: int, amount: int = 1) -> Article:
        return self._update_counter(article_id, "like_count", amount)

    def publish(self, article_id: int, published_at: Optional[datetime] = None) -> Article:
        """Mark an article published; id and created_at are preserved."""
        with self._lock:
            current = self._require(article_id)
            updated = current.model_copy(
                update={
                    "status": ArticleStatus.PUBLISHED,
                    "published_at": published_at or datetime.now(timezone.utc),
                }
            )
            self._articles[article_id] = updated
        return updated

    def _update_counter(self, article_id: int, field: str, amount: int) -> Article:
        if amount < 0:
            raise ValueError("Counters only increase")
        with self._lock:
            current = self._require(article_id)
            updated = current.model_copy(update={field: getattr(current, field) + amount})
            self._articles[article_id] = updated
        return updated

    def _require(self, article_id: int) -> Article:
        article = self._articles.get(article_id)
        if article is None:
            raise KeyError(f"Article {article_id} not found")
        return article


def load_articles(path: Union[str, Path]) -> list[Article]:
    """
    Load articles from a YAML document of the form ``articles: [...]``.

    Raises:
        SourceUnavailableError: if the file cannot be read, has the wrong
            shape, or an entry is invalid
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise SourceUnavailableError(f"Cannot read articles from {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise SourceUnavailableError(f"Expected a mapping with an 'articles' list in {path}")
    entries = data.get("articles") or []
    if not isinstance(entries, list):
        raise SourceUnavailableError(f"'articles' in {path} must be a list")

    articles: list[Article] = []
    for index, item in enumerate(entries):
        try:
            articles.append(Article.model_validate(item))
        except ValidationError as exc:
            raise SourceUnavailableError(f"Invalid article #{index} in {path}: {exc}") from exc

    logger.info(f"Loaded {len(articles)} articles from {path}")
    return articles


__all__ = [
    "InMemoryArticleSource",
    "RecordSource",
    "SourceUnavailableError",
    "load_articles",
]
