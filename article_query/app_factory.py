"""
Article Query Service
HTTP surface over the article filter/sort/pagination engine

Architecture:
- Parameter Parser: query string → validated FilterSpec
- Query Engine: snapshot → filter → count → sort → slice
- Record Source: in-memory article collection (optional YAML seed)
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from article_query.config.settings import configure_logging, get_cors_config, settings

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the article query application."""

    configure_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Filter, sort and paginate article collections",
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # CORS
    cors_config = get_cors_config()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_config["allow_origins"],
        allow_credentials=cors_config["allow_credentials"],
        allow_methods=cors_config["allow_methods"],
        allow_headers=cors_config["allow_headers"],
    )

    # Import routes (deferred to avoid circular imports)
    from article_query.api.routes import articles, stats

    app.include_router(articles.router)
    app.include_router(stats.router)

    @app.get("/")
    async def root():
        """Root endpoint - service information"""
        return {
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "operational",
            "endpoints": {
                "articles": "/api/articles",
                "stats": "/api/stats/queries",
                "health": "/health",
                "docs": "/docs"
            }
        }

    @app.get("/health")
    async def health():
        """Health check endpoint"""
        return {
            "status": "ok",
            "service": "article-query",
            "version": settings.APP_VERSION
        }

    logger.info(f"{settings.APP_NAME} initialized on port {settings.PORT}")
    return app


# Create app instance
app = create_app()
