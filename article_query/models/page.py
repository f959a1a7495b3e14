"""
Page Model - Bounded slice of query results plus pagination metadata
"""

from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class PageResult(BaseModel, Generic[T]):
    """
    One page of matching, sorted records.

    Created fresh for every query and never mutated afterwards. Field names
    serialize in camelCase (totalElements, hasNext, ...) when dumped with
    by_alias=True.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    content: List[T] = Field(default_factory=list, description="Records on this page")
    page: int = Field(..., ge=0, description="Zero-based page index")
    size: int = Field(..., ge=1, description="Requested page size")
    total_elements: int = Field(..., ge=0, description="Matching records across all pages")
    total_pages: int = Field(..., ge=0)
    has_next: bool
    has_previous: bool

    @classmethod
    def build(cls, content: List[T], page: int, size: int, total_elements: int) -> "PageResult[T]":
        """Derive total_pages / has_next / has_previous from the counts."""
        total_pages = -(-total_elements // size)
        return cls(
            content=content,
            page=page,
            size=size,
            total_elements=total_elements,
            total_pages=total_pages,
            has_next=page + 1 < total_pages,
            has_previous=total_elements > 0 and page > 0,
        )
