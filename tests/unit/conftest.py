import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from article_query.models.article import Article, ArticleStatus  # noqa: E402
from article_query.services.telemetry import TelemetryStore  # noqa: E402

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_article(article_id: int, **overrides) -> Article:
    fields = {
        "id": article_id,
        "title": f"Article {article_id}",
        "author": "author",
        "category": "general",
        "tags": frozenset(),
        "status": ArticleStatus.PUBLISHED,
        "read_time_minutes": 5,
        "published_at": BASE_TIME + timedelta(days=article_id),
        "created_at": BASE_TIME + timedelta(hours=article_id),
        "view_count": 0,
        "like_count": 0,
    }
    fields.update(overrides)
    return Article(**fields)


@pytest.fixture
def basics_articles():
    return [
        make_article(
            1,
            title="Kotlin Basics",
            tags=frozenset({"kotlin"}),
            status=ArticleStatus.PUBLISHED,
            read_time_minutes=5,
        ),
        make_article(
            2,
            title="Go Basics",
            tags=frozenset({"go"}),
            status=ArticleStatus.DRAFT,
            read_time_minutes=12,
            published_at=None,
        ),
    ]


@pytest.fixture
def catalog():
    """Twenty articles with deliberately colliding sort values."""
    statuses = [ArticleStatus.PUBLISHED, ArticleStatus.DRAFT, ArticleStatus.ARCHIVED]
    tag_pool = ["python", "go", "kotlin", "rust"]
    articles = []
    for i in range(1, 21):
        articles.append(
            make_article(
                i,
                title=f"{'Intro' if i % 2 else 'Deep dive'} {i % 5}",
                author=f"author-{i % 3}",
                category="backend" if i % 4 else "frontend",
                tags=frozenset({tag_pool[i % 4], tag_pool[(i + 1) % 4]}),
                status=statuses[i % 3],
                read_time_minutes=i % 7,
                published_at=None if i % 5 == 0 else BASE_TIME + timedelta(days=i % 6),
                view_count=(i * 7) % 4,
                like_count=i % 2,
            )
        )
    # Reverse so insertion order never matches any sort order by accident
    return list(reversed(articles))


@pytest.fixture
def telemetry():
    return TelemetryStore()
