"""Compiles a FilterSpec into an ordered list of record predicates."""

from __future__ import annotations

from datetime import datetime
from typing import Callable, FrozenSet, Iterable, List

from article_query.models.article import Article, ArticleStatus
from article_query.models.filter_spec import FilterSpec

Predicate = Callable[[Article], bool]


def title_contains(text: str) -> Predicate:
    needle = text.casefold()

    def predicate(article: Article) -> bool:
        return needle in article.title.casefold()

    return predicate


def author_equals(author: str) -> Predicate:
    def predicate(article: Article) -> bool:
        return article.author == author

    return predicate


def category_equals(category: str) -> Predicate:
    def predicate(article: Article) -> bool:
        return article.category == category

    return predicate


def has_any_tag(tags: FrozenSet[str]) -> Predicate:
    """Match-any: the article needs at least one of the requested tags."""

    def predicate(article: Article) -> bool:
        return not tags.isdisjoint(article.tags)

    return predicate


def status_equals(status: ArticleStatus) -> Predicate:
    def predicate(article: Article) -> bool:
        return article.status == status

    return predicate


def read_time_at_least(minimum: int) -> Predicate:
    def predicate(article: Article) -> bool:
        return article.read_time_minutes >= minimum

    return predicate


def read_time_at_most(maximum: int) -> Predicate:
    def predicate(article: Article) -> bool:
        return article.read_time_minutes <= maximum

    return predicate


def published_on_or_after(after: datetime) -> Predicate:
    """Unpublished articles never match a published-date bound."""

    def predicate(article: Article) -> bool:
        return article.published_at is not None and article.published_at >= after

    return predicate


def published_on_or_before(before: datetime) -> Predicate:
    def predicate(article: Article) -> bool:
        return article.published_at is not None and article.published_at <= before

    return predicate


class PredicateCompiler:
    """Builds one predicate per populated filter field, in field order."""

    def compile(self, spec: FilterSpec) -> List[Predicate]:
        predicates: List[Predicate] = []

        if spec.title is not None:
            predicates.append(title_contains(spec.title))
        if spec.author is not None:
            predicates.append(author_equals(spec.author))
        if spec.category is not None:
            predicates.append(category_equals(spec.category))
        if spec.tags is not None:
            predicates.append(has_any_tag(spec.tags))
        if spec.status is not None:
            predicates.append(status_equals(spec.status))
        if spec.min_read_time is not None:
            predicates.append(read_time_at_least(spec.min_read_time))
        if spec.max_read_time is not None:
            predicates.append(read_time_at_most(spec.max_read_time))
        if spec.published_after is not None:
            predicates.append(published_on_or_after(spec.published_after))
        if spec.published_before is not None:
            predicates.append(published_on_or_before(spec.published_before))

        return predicates


def matches(predicates: Iterable[Predicate], article: Article) -> bool:
    """Conjunction of all predicates; stops at the first False."""
    return all(predicate(article) for predicate in predicates)


__all__ = [
    "Predicate",
    "PredicateCompiler",
    "matches",
]
