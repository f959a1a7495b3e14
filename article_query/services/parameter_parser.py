"""
Parameter Parser - Untrusted query-string map to a validated FilterSpec

Two phases: field-level checks in declared field order, then cross-field
range checks. The first violation wins and is raised as a single ParseError.
Defaults apply only when a key is absent; an explicit invalid value is never
replaced by a default.
"""

import logging
import re
from datetime import datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional, Sequence, Type, TypeVar, Union

from article_query.models.article import ArticleStatus
from article_query.models.filter_spec import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_BY,
    MAX_PAGE_SIZE,
    SORTABLE_FIELDS,
    FilterSpec,
    SortOrder,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

_INTEGER = re.compile(r"-?[0-9]+")


class ParseError(ValueError):
    """Raised when a query parameter is malformed or out of its domain."""

    def __init__(
        self,
        field: str,
        rejected_value: Any,
        reason: str,
        allowed_values: Optional[Sequence[str]] = None,
    ) -> None:
        self.field = field
        self.rejected_value = rejected_value
        self.reason = reason
        self.allowed_values = tuple(allowed_values) if allowed_values is not None else None
        message = f"Invalid value {rejected_value!r} for '{field}': {reason}"
        if self.allowed_values:
            message += f" (allowed: {', '.join(self.allowed_values)})"
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Structured error body returned to API callers."""
        return {
            "field": self.field,
            "rejectedValue": self.rejected_value,
            "reason": self.reason,
            "allowedValues": list(self.allowed_values) if self.allowed_values is not None else None,
        }


class ParameterParser:
    """Parses raw query parameters into FilterSpec values."""

    def __init__(
        self,
        default_size: int = DEFAULT_PAGE_SIZE,
        max_size: int = MAX_PAGE_SIZE,
        default_sort_by: str = DEFAULT_SORT_BY,
        default_sort_order: Union[SortOrder, str] = SortOrder.DESC,
    ) -> None:
        if not 1 <= max_size <= MAX_PAGE_SIZE:
            raise ValueError(f"max_size must be between 1 and {MAX_PAGE_SIZE}")
        if not 1 <= default_size <= max_size:
            raise ValueError(f"default_size must be between 1 and {max_size}")
        if default_sort_by not in SORTABLE_FIELDS:
            raise ValueError(f"default_sort_by must be one of {', '.join(SORTABLE_FIELDS)}")

        self.default_size = default_size
        self.max_size = max_size
        self.default_sort_by = default_sort_by
        self.default_sort_order = SortOrder(default_sort_order.lower())

    def parse(self, raw: Mapping[str, str]) -> FilterSpec:
        """
        Parse a query-parameter map.

        Args:
            raw: Query parameters keyed by their wire names (case-sensitive).
                Unknown keys are ignored.

        Returns:
            A fully validated FilterSpec

        Raises:
            ParseError: for the first violation found
        """
        try:
            spec = self._parse(raw)
        except ParseError as error:
            logger.debug("Rejected query parameters: %s", error)
            raise
        return spec

    def _parse(self, raw: Mapping[str, str]) -> FilterSpec:
        # Field-level checks, in declared field order
        title = raw.get("title")
        author = raw.get("author")
        category = raw.get("category")
        tags = self._parse_tags(raw.get("tags"))
        status = self._parse_enum("status", raw.get("status"), ArticleStatus)
        min_read_time = self._parse_int("minReadTime", raw.get("minReadTime"), minimum=0)
        max_read_time = self._parse_int("maxReadTime", raw.get("maxReadTime"), minimum=0)
        published_after = self._parse_instant("publishedAfter", raw.get("publishedAfter"))
        published_before = self._parse_instant("publishedBefore", raw.get("publishedBefore"))
        sort_by = self._parse_sort_by(raw.get("sortBy"))
        sort_order = self._parse_enum("sortOrder", raw.get("sortOrder"), SortOrder)
        page = self._parse_int("page", raw.get("page"), minimum=0)
        size = self._parse_int("size", raw.get("size"), minimum=1, maximum=self.max_size)

        # Cross-field checks
        if min_read_time is not None and max_read_time is not None and min_read_time > max_read_time:
            raise ParseError(
                "minReadTime,maxReadTime",
                f"{raw['minReadTime']},{raw['maxReadTime']}",
                "minReadTime must be less than or equal to maxReadTime",
            )
        if published_after is not None and published_before is not None and published_after > published_before:
            raise ParseError(
                "publishedAfter,publishedBefore",
                f"{raw['publishedAfter']},{raw['publishedBefore']}",
                "publishedAfter must not be later than publishedBefore",
            )

        return FilterSpec(
            title=title,
            author=author,
            category=category,
            tags=tags,
            status=status,
            min_read_time=min_read_time,
            max_read_time=max_read_time,
            published_after=published_after,
            published_before=published_before,
            sort_by=sort_by if sort_by is not None else self.default_sort_by,
            sort_order=sort_order if sort_order is not None else self.default_sort_order,
            page=page if page is not None else 0,
            size=size if size is not None else self.default_size,
        )

    @staticmethod
    def _parse_tags(value: Optional[str]) -> Optional[FrozenSet[str]]:
        if value is None:
            return None
        tags = frozenset(segment.strip() for segment in value.split(",") if segment.strip())
        return tags or None

    @staticmethod
    def _parse_enum(field: str, value: Optional[str], enum_type: Type[E]) -> Optional[E]:
        if value is None:
            return None
        allowed = [member.value for member in enum_type]
        normalized = value.strip().lower()
        if normalized not in allowed:
            raise ParseError(field, value, "unrecognized value", allowed)
        return enum_type(normalized)

    @staticmethod
    def _parse_int(
        field: str,
        value: Optional[str],
        minimum: Optional[int] = None,
        maximum: Optional[int] = None,
    ) -> Optional[int]:
        if value is None:
            return None
        if not _INTEGER.fullmatch(value):
            raise ParseError(field, value, "must be an integer")
        try:
            number = int(value)
        except ValueError:
            # digit strings past the interpreter's int conversion limit
            raise ParseError(field, value, "must be an integer") from None
        if minimum is not None and number < minimum:
            if minimum == 0:
                raise ParseError(field, value, "must not be negative")
            raise ParseError(field, value, f"must be at least {minimum}")
        if maximum is not None and number > maximum:
            raise ParseError(field, value, f"must be at most {maximum}")
        return number

    @staticmethod
    def _parse_instant(field: str, value: Optional[str]) -> Optional[datetime]:
        if value is None:
            return None
        try:
            instant = datetime.fromisoformat(value)
        except ValueError:
            raise ParseError(field, value, "must be an ISO-8601 date-time with offset") from None
        if instant.tzinfo is None:
            raise ParseError(field, value, "must include a UTC offset, e.g. 2024-01-31T12:00:00Z")
        return instant

    @staticmethod
    def _parse_sort_by(value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        if value not in SORTABLE_FIELDS:
            raise ParseError("sortBy", value, "unsupported sort key", SORTABLE_FIELDS)
        return value


_default_parser = ParameterParser()


def parse(raw: Mapping[str, str]) -> FilterSpec:
    """Parse with the default page-size and sort settings."""
    return _default_parser.parse(raw)


__all__ = [
    "ParseError",
    "ParameterParser",
    "parse",
]
