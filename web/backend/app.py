#!/usr/bin/env python3
"""
CareMatch Web API - FastAPI Application

Exposes the recommendation pipeline, the reorder engine and booking
outcome capture over HTTP.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from core.app_context import AppContext
from core.config_loader import load_config
from .exceptions import (
    ServiceException,
    service_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    general_exception_handler
)
from .routers import outcomes_router, recommendations_router

logger = logging.getLogger(__name__)


def create_app(ctx: AppContext) -> FastAPI:
    """Build the FastAPI app around an already wired AppContext."""
    app = FastAPI(
        title="CareMatch API",
        description="API for care and transport provider recommendations",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.ctx = ctx

    app.add_exception_handler(ServiceException, service_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(recommendations_router)
    app.include_router(outcomes_router)

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "service": "carematch-web"}

    return app


def main():
    """Run the web server."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    config = load_config()
    ctx = AppContext.build(config)
    app = create_app(ctx)

    logger.info(f"Starting CareMatch Web Server on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    try:
        uvicorn.run(app, host=config.web.host, port=config.web.port, log_level="info")
    finally:
        ctx.close()


if __name__ == "__main__":
    main()
