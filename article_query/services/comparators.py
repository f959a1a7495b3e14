"""Sort-key registry mapping allow-listed sort keys to total-order comparators."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable, Dict, Iterable, List, Optional

from article_query.models.article import Article
from article_query.models.filter_spec import SORTABLE_FIELDS, SortOrder


class ConfigurationError(RuntimeError):
    """Raised when an allow-listed sort key has no registered comparator."""


class ComparatorNotFoundError(KeyError):
    """Raised when a requested sort key is not present in the registry."""


@dataclass(frozen=True)
class SortKey:
    """Primary ordering key for one sortable field."""

    name: str
    extract: Callable[[Article], Any]


def _compare_values(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


@dataclass(frozen=True)
class ArticleComparator:
    """
    Total order over articles for one sort key and direction.

    Nulls sort last in both directions; the direction only flips the
    comparison of two concrete values. Ties fall back to id ascending.
    """

    key: SortKey
    order: SortOrder = SortOrder.ASC

    def __call__(self, left: Article, right: Article) -> int:
        left_value = self.key.extract(left)
        right_value = self.key.extract(right)

        if left_value is None or right_value is None:
            primary = (left_value is None) - (right_value is None)
        else:
            primary = _compare_values(left_value, right_value)
            if self.order is SortOrder.DESC:
                primary = -primary

        if primary:
            return primary
        return _compare_values(left.id, right.id)

    def sort(self, articles: Iterable[Article]) -> List[Article]:
        """Return a new list ordered by this comparator."""
        return sorted(articles, key=cmp_to_key(self))


class ComparatorRegistry:
    """Closed mapping of sort-key name to SortKey."""

    def __init__(self, keys: Optional[Iterable[SortKey]] = None) -> None:
        self._keys: Dict[str, SortKey] = {}
        for key in keys or ():
            self.register(key)

    def register(self, key: SortKey) -> None:
        self._keys[key.name] = key

    def names(self) -> List[str]:
        return list(self._keys)

    def resolve(self, sort_by: str, sort_order: SortOrder = SortOrder.ASC) -> ArticleComparator:
        key = self._keys.get(sort_by)
        if key is None:
            raise ComparatorNotFoundError(sort_by)
        return ArticleComparator(key=key, order=sort_order)

    def validate(self, allowed: Iterable[str] = SORTABLE_FIELDS) -> None:
        """Fail fast when the allow-list and the registry drift apart."""
        missing = [name for name in allowed if name not in self._keys]
        if missing:
            raise ConfigurationError(f"No comparator registered for sort keys: {', '.join(missing)}")


_BASE_KEYS: List[SortKey] = [
    SortKey("title", lambda article: article.title.casefold()),
    SortKey("author", lambda article: article.author.casefold()),
    SortKey("publishedAt", lambda article: article.published_at),
    SortKey("createdAt", lambda article: article.created_at),
    SortKey("viewCount", lambda article: article.view_count),
    SortKey("likeCount", lambda article: article.like_count),
    SortKey("readTimeMinutes", lambda article: article.read_time_minutes),
]


def load_comparator_registry() -> ComparatorRegistry:
    """Return a fresh registry of the built-in sort keys, validated."""
    registry = ComparatorRegistry(_BASE_KEYS)
    registry.validate()
    return registry


_default_registry = load_comparator_registry()


def resolve(sort_by: str, sort_order: SortOrder = SortOrder.ASC) -> ArticleComparator:
    """Resolve a comparator from the default registry."""
    return _default_registry.resolve(sort_by, sort_order)


__all__ = [
    "ArticleComparator",
    "ComparatorNotFoundError",
    "ComparatorRegistry",
    "ConfigurationError",
    "SortKey",
    "load_comparator_registry",
    "resolve",
]
