"""
FastAPI Application Entry Point

Integrates:
  - QQ webhook receiver (signature-authenticated)
  - Liveness endpoint
  - Middleware for logging & error recovery

Run: python main.py
  or uvicorn main:create_app --factory --host 0.0.0.0 --port 8080
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from config import Config, ConfigError
from infra.bootstrap import WebhookContext, bootstrap
from transport.qq.errors import InvalidSecret
from transport.qq.webhook import create_router

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Setup logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(context: Optional[WebhookContext] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        context: Startup context (defaults to bootstrap() from the environment)

    Returns:
        Configured FastAPI application
    """
    if context is None:
        context = bootstrap()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan: startup and shutdown handlers.
        """
        # Startup
        logger.info("=" * 60)
        logger.info("QQ bot webhook starting up...")
        logger.info(f"App ID: {context.config.app_id}")
        logger.info(f"Listening on: {context.config.host}:{context.config.port}")
        logger.info("=" * 60)

        yield

        # Shutdown
        logger.info("QQ bot webhook shutting down...")

    app = FastAPI(
        title="QQ Bot Webhook",
        description="Ed25519-authenticated webhook receiver for QQ bot events",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Middleware for logging and recovery
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests."""
        logger.debug(f"{request.method} {request.url.path}")
        try:
            response = await call_next(request)
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                },
            )
            return response
        except Exception as e:
            logger.error(f"Request error: {str(e)}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal server error"},
            )

    app.include_router(create_router(context))

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        """Liveness check. Not authenticated."""
        return "QQ Bot Webhook Server"

    return app


def main() -> None:
    """Load configuration, bootstrap and serve."""
    import uvicorn

    try:
        config = Config.from_env()
    except ConfigError as e:
        configure_logging()
        logger.critical(f"Failed to load config: {e}")
        sys.exit(1)

    configure_logging(config.log_level)
    logger.info(f"Config loaded: app_id={config.app_id} port={config.port}")

    try:
        context = bootstrap(config)
    except InvalidSecret as e:
        logger.critical(f"Failed to create signer: {e}")
        sys.exit(1)

    uvicorn.run(
        create_app(context),
        host=config.host,
        port=config.port,
    )


if __name__ == "__main__":
    main()
