"""
Article Query CLI
Command-line interface for starting the article query service
"""

import argparse
import logging

import uvicorn

from article_query.config.settings import configure_logging, settings

logger = logging.getLogger(__name__)


def main():
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(description="Article Query - filter, sort and paginate articles")
    parser.add_argument("--host", default=settings.HOST, help=f"Host to bind (default: {settings.HOST})")
    parser.add_argument("--port", type=int, default=settings.PORT, help=f"Port to bind (default: {settings.PORT})")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--log-level", default="info", choices=["debug", "info", "warning", "error"], help="Log level")

    args = parser.parse_args()

    configure_logging(args.log_level)
    logger.info(f"Starting Article Query on {args.host}:{args.port}")

    uvicorn.run(
        "article_query.app_factory:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level
    )


if __name__ == "__main__":
    main()
