"""
FastAPI application with assembled routers.

Builds the application context in the lifespan (selecting the vector
backend once at startup) and registers routers, middleware and error
handlers.

Dependencies: fastapi, backend.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager
from typing import Callable

import uvicorn
from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from backend.api.deps.dependencies import AppContext, build_app_context
from backend.api.error_handlers import register_exception_handlers
from backend.configs import Settings, get_settings
from backend.observability.logger import configure_logging
from backend.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import chat_router, documents_router, health_router

logger = logging.getLogger(__name__)

ContextFactory = Callable[[Settings], AppContext]


def create_app(
    settings: Settings | None = None,
    context_factory: ContextFactory = build_app_context,
) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        settings: Application settings (loaded from the environment if None)
        context_factory: Builds the AppContext at startup

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.effective_log_level)
        context = context_factory(settings)
        await run_in_threadpool(context.startup)
        app.state.context = context
        logger.info(
            f"{__name__}:lifespan - Started with {context.coordinator.backend.backend_type} vector store",
            extra={"using_memory_fallback": context.coordinator.using_memory_fallback},
        )

        yield

        await run_in_threadpool(context.shutdown)
        app.state.context = None
        logger.info(f"{__name__}:lifespan - Application context closed")

    app = FastAPI(
        title=settings.app_name,
        description="Document upload, similarity search and retrieval-augmented chat",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    register_exception_handlers(app)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(chat_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "backend.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
