"""
Article Model - Content record queried by the engine

Articles are immutable values. Counters such as view_count are changed by the
owning record source replacing the whole record, so a snapshot handed to the
query engine never changes underneath it.
"""

from datetime import datetime
from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class ArticleStatus(str, Enum):
    """Publication lifecycle of an article"""
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class Article(BaseModel):
    """
    Single content record.

    Fields referenced by filters and sort keys are typed; everything else
    about an article (body, attachments) lives outside the query engine.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Kotlin Basics",
                "author": "jdoe",
                "category": "programming",
                "tags": ["kotlin", "jvm"],
                "status": "published",
                "readTimeMinutes": 5,
                "publishedAt": "2024-03-01T09:00:00Z",
                "createdAt": "2024-02-28T17:12:00Z",
                "viewCount": 120,
                "likeCount": 14,
            }
        },
    )

    id: int = Field(..., description="Unique, stable identifier within a record source")
    title: str = Field(..., description="Article title")
    author: str = Field(..., description="Author identity string")
    category: str = Field(..., description="Category name")
    tags: FrozenSet[str] = Field(default_factory=frozenset, description="Tag set")
    status: ArticleStatus = Field(default=ArticleStatus.DRAFT, description="Lifecycle status")
    read_time_minutes: int = Field(default=0, ge=0, description="Estimated reading time")
    published_at: Optional[datetime] = Field(default=None, description="Publication instant")
    created_at: datetime = Field(..., description="Creation instant, never changes")
    view_count: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)

    @field_validator("published_at", "created_at")
    @classmethod
    def validate_timezone_aware(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Instants must carry an offset so they compare across sources"""
        if v is not None and v.tzinfo is None:
            raise ValueError("timestamp must include a UTC offset")
        return v

    @field_serializer("tags")
    def serialize_tags(self, tags: FrozenSet[str]) -> list[str]:
        return sorted(tags)
